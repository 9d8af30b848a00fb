from datetime import datetime, timezone

import structlog

from ...domain.errors import InvalidCredentials, ValidationError
from ..dto import LoginInput, LoginResult
from ..interfaces import IPasswordHasher, ITokenService, IUserRepository
from .register_user import normalize_email

logger = structlog.get_logger()


class LoginUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher, tokens: ITokenService):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, data: LoginInput) -> LoginResult:
        if not data.password:
            raise ValidationError("password is empty")
        email = normalize_email(data.email)

        creds = self.repo.get_by_email(email)
        if creds is None:
            self.hasher.dummy_verify(data.password)
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentials("unknown email")
        if not self.hasher.verify(data.password, creds.password_hash):
            logger.info("login_failed", reason="wrong_password", user_id=creds.user.id)
            raise InvalidCredentials("wrong password")

        user = self.repo.touch_last_login(creds.user.id, datetime.now(timezone.utc))
        token = self.tokens.issue(user)
        logger.info("login_succeeded", user_id=user.id)
        return LoginResult(user=user, token=token)
