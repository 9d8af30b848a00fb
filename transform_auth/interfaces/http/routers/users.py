from fastapi import APIRouter, Depends, Query

from ....application.interfaces import IRevocationList
from ....application.use_cases.promote_user import ListUsers, PromoteToAdmin
from ....infrastructure.metrics import track_auth_event
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import TokenService
from ..authz import get_bearer_token, get_repo, get_revoked, get_token_service
from ..schemas import UserResp

router = APIRouter(prefix="/api/users", tags=["users"])

# --- Admin-only:

@router.get("", response_model=list[UserResp])
def list_users(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    token: str | None = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_repo),
    tokens: TokenService = Depends(get_token_service),
    revoked: IRevocationList = Depends(get_revoked),
):
    users = ListUsers(repo=repo, tokens=tokens, revoked=revoked).execute(token, limit=limit, offset=offset)
    return [UserResp.model_validate(u) for u in users]


@router.post("/{user_id}/promote", response_model=UserResp)
def promote_to_admin(
    user_id: str,
    token: str | None = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_repo),
    tokens: TokenService = Depends(get_token_service),
    revoked: IRevocationList = Depends(get_revoked),
):
    with track_auth_event("promote"):
        user = PromoteToAdmin(repo=repo, tokens=tokens, revoked=revoked).execute(token, user_id)
    return UserResp.model_validate(user)
