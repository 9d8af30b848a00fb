import structlog
from email_validator import EmailNotValidError, validate_email

from ...domain.entities import User
from ...domain.errors import DuplicateEmail, ValidationError
from ..dto import RegisterUserInput
from ..interfaces import IPasswordHasher, IUserRepository

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    try:
        result = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(f"invalid email: {e}") from e
    return result.normalized.lower()


class RegisterUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, data: RegisterUserInput) -> User:
        name = data.name.strip()
        if not name:
            raise ValidationError("name is empty")
        if not data.password:
            raise ValidationError("password is empty")
        email = normalize_email(data.email)

        if self.repo.get_by_email(email):
            logger.info("signup_rejected", reason="duplicate_email")
            raise DuplicateEmail(f"email already registered: {email}")
        pwd_hash = self.hasher.hash(data.password)
        user = self.repo.create(name, email, pwd_hash)
        logger.info("user_registered", user_id=user.id)
        return user
