from dataclasses import dataclass

from ..domain.entities import IssuedToken, User


@dataclass
class RegisterUserInput:
    name: str
    email: str
    password: str


@dataclass
class LoginInput:
    email: str
    password: str


@dataclass
class LoginResult:
    user: User
    token: IssuedToken
