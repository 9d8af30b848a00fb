import structlog

from ..interfaces import IRevocationList, ITokenService, IUserRepository
from .validate_token import ValidateToken

logger = structlog.get_logger()


class LogoutUser:
    def __init__(self, repo: IUserRepository, tokens: ITokenService, revoked: IRevocationList):
        self.validate = ValidateToken(repo, tokens, revoked)
        self.tokens = tokens
        self.revoked = revoked

    def execute(self, token: str | None) -> None:
        user = self.validate.execute(token)
        claims = self.tokens.decode(token)
        self.revoked.revoke(claims.jti, claims.expires_at)
        logger.info("token_revoked", user_id=user.id, jti=claims.jti)
