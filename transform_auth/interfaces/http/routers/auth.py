from fastapi import APIRouter, Depends, Request

from ....application.dto import LoginInput, RegisterUserInput
from ....application.interfaces import IRevocationList
from ....application.use_cases.login_user import LoginUser
from ....application.use_cases.logout_user import LogoutUser
from ....application.use_cases.register_user import RegisterUser
from ....application.use_cases.validate_token import ValidateToken
from ....infrastructure.metrics import track_auth_event
from ....infrastructure.rate_limit import limiter, LOGIN_LIMIT, SIGNUP_LIMIT
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher, TokenService
from ..authz import get_bearer_token, get_hasher, get_repo, get_revoked, get_token_service
from ..schemas import LoginReq, LoginResp, SignupReq, UserResp

router = APIRouter(prefix="/api/auth", tags=["auth"])
# the original front end posts to /api/signup and /api/login
legacy_router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/signup", response_model=UserResp)
@limiter.shared_limit(SIGNUP_LIMIT, scope="signup")
def signup(
    request: Request,
    payload: SignupReq,
    repo: UserRepository = Depends(get_repo),
    hasher: PasswordHasher = Depends(get_hasher),
):
    uc = RegisterUser(repo=repo, hasher=hasher)
    with track_auth_event("signup"):
        user = uc.execute(RegisterUserInput(name=payload.name, email=payload.email, password=payload.password))
    return UserResp.model_validate(user)


@router.post("/login", response_model=LoginResp)
@limiter.shared_limit(LOGIN_LIMIT, scope="login")
def login(
    request: Request,
    payload: LoginReq,
    repo: UserRepository = Depends(get_repo),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    uc = LoginUser(repo=repo, hasher=hasher, tokens=tokens)
    with track_auth_event("login"):
        result = uc.execute(LoginInput(email=payload.email, password=payload.password))
    return LoginResp(user=UserResp.model_validate(result.user), token=result.token.token)


def _validate_impl(
    token: str | None = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_repo),
    tokens: TokenService = Depends(get_token_service),
    revoked: IRevocationList = Depends(get_revoked),
):
    with track_auth_event("validate"):
        user = ValidateToken(repo=repo, tokens=tokens, revoked=revoked).execute(token)
    return UserResp.model_validate(user)


@router.post("/validate", response_model=UserResp)
def validate(user: UserResp = Depends(_validate_impl)):
    return user


@router.get("/me", response_model=UserResp)
def me(user: UserResp = Depends(_validate_impl)):
    return user


@router.post("/logout")
def logout(
    token: str | None = Depends(get_bearer_token),
    repo: UserRepository = Depends(get_repo),
    tokens: TokenService = Depends(get_token_service),
    revoked: IRevocationList = Depends(get_revoked),
):
    with track_auth_event("logout"):
        LogoutUser(repo=repo, tokens=tokens, revoked=revoked).execute(token)
    return {"ok": True}


legacy_router.add_api_route("/signup", signup, methods=["POST"], response_model=UserResp)
legacy_router.add_api_route("/login", login, methods=["POST"], response_model=LoginResp)
