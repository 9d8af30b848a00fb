from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ...application.interfaces import IRevocationList
from ...infrastructure.db import get_db
from ...infrastructure.repositories import UserRepository
from ...infrastructure.revocation import get_revocation_list
from ...infrastructure.security import PasswordHasher, TokenService

# a missing header is answered with our own 401, not FastAPI's 403
bearer = HTTPBearer(auto_error=False)

_hasher = PasswordHasher()
_tokens = TokenService()


def get_hasher() -> PasswordHasher:
    return _hasher


def get_token_service() -> TokenService:
    return _tokens


def get_revoked() -> IRevocationList:
    return get_revocation_list()


def get_repo(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_bearer_token(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str | None:
    return creds.credentials if creds else None
