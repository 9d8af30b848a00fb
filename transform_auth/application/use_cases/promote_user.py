import structlog

from ...domain.entities import Role, User
from ...domain.errors import PermissionDenied, UserNotFound
from ..interfaces import IRevocationList, ITokenService, IUserRepository
from .validate_token import ValidateToken

logger = structlog.get_logger()


class RequireAdmin:
    def __init__(self, repo: IUserRepository, tokens: ITokenService, revoked: IRevocationList):
        self.validate = ValidateToken(repo, tokens, revoked)

    def execute(self, token: str | None) -> User:
        actor = self.validate.execute(token)
        if not actor.is_admin:
            raise PermissionDenied(f"user {actor.id} is not an admin")
        return actor


class PromoteToAdmin:
    def __init__(self, repo: IUserRepository, tokens: ITokenService, revoked: IRevocationList):
        self.repo = repo
        self.require_admin = RequireAdmin(repo, tokens, revoked)

    def execute(self, actor_token: str | None, target_id: str) -> User:
        actor = self.require_admin.execute(actor_token)
        target = self.repo.get_by_id(target_id)
        if target is None:
            raise UserNotFound(f"no user with id {target_id}")
        if target.is_admin:
            return target
        promoted = self.repo.set_role(target_id, Role.ADMIN)
        logger.info("user_promoted", actor_id=actor.id, target_id=target_id)
        return promoted


class ListUsers:
    def __init__(self, repo: IUserRepository, tokens: ITokenService, revoked: IRevocationList):
        self.repo = repo
        self.require_admin = RequireAdmin(repo, tokens, revoked)

    def execute(self, actor_token: str | None, limit: int = 50, offset: int = 0) -> list[User]:
        self.require_admin.execute(actor_token)
        return self.repo.list_users(limit=limit, offset=offset)
