import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# settings are read at import time, so this has to happen before the app is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["REVOCATION_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import datetime  # noqa: E402

from transform_auth.domain.entities import Role  # noqa: E402
from transform_auth.infrastructure.db import SessionLocal, engine  # noqa: E402
from transform_auth.infrastructure.models import Base  # noqa: E402
from transform_auth.infrastructure.repositories import UserRepository  # noqa: E402
from transform_auth.infrastructure.security import PasswordHasher, TokenService  # noqa: E402


class FakeRevocationList:
    """In-memory stand-in for the redis revocation list"""

    def __init__(self):
        self.revoked = {}

    def revoke(self, jti: str, expires_at: datetime) -> None:
        self.revoked[jti] = expires_at

    def is_revoked(self, jti: str) -> bool:
        return jti in self.revoked


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts with an empty users table"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def repo(db):
    return UserRepository(db)


@pytest.fixture
def hasher():
    return PasswordHasher()


@pytest.fixture
def tokens():
    return TokenService()


@pytest.fixture
def revoked():
    return FakeRevocationList()


@pytest.fixture
def make_user(repo, hasher):
    """Insert a user directly, bypassing the signup flow"""
    def _make(email="ada@x.com", password="secret123", name="Ada", role=Role.STUDENT):
        return repo.create(name, email, hasher.hash(password), role=role)
    return _make
