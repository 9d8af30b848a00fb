from ...domain.entities import User
from ...domain.errors import InvalidToken
from ..interfaces import IRevocationList, ITokenService, IUserRepository


class ValidateToken:
    """Resolve a bearer token to the user's current record.

    Role and name always come from the store; the claims only identify
    the user.
    """

    def __init__(self, repo: IUserRepository, tokens: ITokenService, revoked: IRevocationList):
        self.repo = repo
        self.tokens = tokens
        self.revoked = revoked

    def execute(self, token: str | None) -> User:
        if not token:
            raise InvalidToken("no token provided")
        claims = self.tokens.decode(token)
        if self.revoked.is_revoked(claims.jti):
            raise InvalidToken("token revoked")
        user = self.repo.get_by_id(claims.subject)
        if user is None:
            raise InvalidToken("token subject no longer exists")
        return user
