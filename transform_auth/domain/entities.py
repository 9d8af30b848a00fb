from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"

    @classmethod
    def normalize(cls, value: str | None) -> "Role":
        """Legacy records carry upper-case roles ("ADMIN", "STUDENT") or none at all."""
        if value and value.strip().lower() == cls.ADMIN.value:
            return cls.ADMIN
        return cls.STUDENT


@dataclass(frozen=True)
class User:
    id: str | None
    name: str
    email: str
    role: Role = Role.STUDENT
    created_at: datetime | None = None
    last_login: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class Credentials:
    """A user together with its stored hash. Never leaves the service."""
    user: User
    password_hash: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    jti: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    jti: str
    expires_at: datetime
