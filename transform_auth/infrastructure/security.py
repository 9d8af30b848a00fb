import uuid
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from jose import jwt, JWTError

from ..config import settings
from ..domain.entities import IssuedToken, TokenClaims, User
from ..domain.errors import InvalidToken
from ..application.interfaces import IPasswordHasher, ITokenService


def build_context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt_sha256"],
        deprecated="auto",
        bcrypt_sha256__default_rounds=rounds,
        bcrypt_sha256__truncate_error=False,
    )


pwd = build_context(settings.BCRYPT_ROUNDS)


class PasswordHasher(IPasswordHasher):
    def __init__(self, context: CryptContext = pwd):
        self.context = context
        self._dummy_hash = context.hash(uuid.uuid4().hex)

    def hash(self, plain: str) -> str: return self.context.hash(plain)
    def verify(self, plain: str, hashed: str) -> bool: return self.context.verify(plain, hashed)

    def dummy_verify(self, plain: str) -> bool:
        """Spend the same time as a real verify when there is no stored hash.

        Keeps login latency for unknown emails in line with wrong passwords.
        Always returns False.
        """
        self.context.verify(plain, self._dummy_hash)
        return False


class TokenService(ITokenService):
    def __init__(
        self,
        secret_key: str = settings.SECRET_KEY,
        algorithm: str = settings.JWT_ALGORITHM,
        expire_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user: User, minutes: int | None = None) -> IssuedToken:
        now = datetime.now(timezone.utc)
        exp = now + timedelta(minutes=self.expire_minutes if minutes is None else minutes)
        jti = uuid.uuid4().hex
        # role is informational; validation always re-reads it from the store
        payload = {"sub": user.id, "role": user.role.value, "iat": now, "exp": exp, "jti": jti}
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, jti=jti, expires_at=exp)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken(f"token rejected: {e}") from e
        sub, jti, exp = payload.get("sub"), payload.get("jti"), payload.get("exp")
        if not sub or not jti or exp is None:
            raise InvalidToken("token is missing required claims")
        return TokenClaims(
            subject=sub,
            jti=jti,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
