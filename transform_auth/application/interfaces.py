from datetime import datetime

from ..domain.entities import Credentials, IssuedToken, Role, TokenClaims, User


class IUserRepository:
    def get_by_email(self, email: str) -> Credentials | None: ...
    def get_by_id(self, user_id: str) -> User | None: ...
    def create(self, name: str, email: str, password_hash: str, role: Role = Role.STUDENT) -> User: ...
    def touch_last_login(self, user_id: str, when: datetime) -> User: ...
    def set_role(self, user_id: str, role: Role) -> User | None: ...
    def list_users(self, limit: int = 50, offset: int = 0) -> list[User]: ...
    def search(self, term: str) -> list[User]: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...
    def dummy_verify(self, plain: str) -> bool: ...


class ITokenService:
    def issue(self, user: User) -> IssuedToken: ...
    def decode(self, token: str) -> TokenClaims: ...


class IRevocationList:
    def revoke(self, jti: str, expires_at: datetime) -> None: ...
    def is_revoked(self, jti: str) -> bool: ...
