"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from identity.api.schemas import (
    LoginRequest,
    LogoutRequest,
    SignUpRequest,
    StatusResponse,
    TokenResponse,
    UserResponse,
)
from identity.user.registration import SignUp
from identity.user.session import Login, Logout, find_token, resolve_token
from identity.user.user import User
from shared.errors import AuthenticationFailed

router = APIRouter(prefix="/users", tags=["users"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        roles=user.role_list,
        is_email_verified=bool(user.is_email_verified),
    )


@router.post("/signup", status_code=201, response_model=UserResponse)
async def sign_up(body: SignUpRequest) -> UserResponse:
    command = SignUp(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return _user_response(current_domain.repository_for(User).get(user_id))


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    value = current_domain.process(Login(email=body.email, password=body.password), asynchronous=False)
    token = find_token(value)
    return TokenResponse(value=token.value, user_id=str(token.user_id), expires_at=token.expires_at)


@router.post("/logout", response_model=StatusResponse)
async def logout(body: LogoutRequest) -> StatusResponse:
    current_domain.process(Logout(token=body.token), asynchronous=False)
    return StatusResponse()


@router.post("/validate/{token}", response_model=UserResponse)
async def validate_token(token: str) -> UserResponse:
    user = resolve_token(token)
    if user is None:
        raise AuthenticationFailed("Invalid or expired token")
    return _user_response(user)
