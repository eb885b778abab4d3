"""Auth router: register, login, me."""
from fastapi import APIRouter, status

from inkwell.domain.errors import NotFoundError
from inkwell.interfaces.http.dependencies import CurrentUserId, Facade
from inkwell.interfaces.http.schemas.identity import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, facade: Facade):
    result = await facade.register(
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return AuthResponse(access_token=result.access_token, user=UserResponse.from_user(result.user))


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, facade: Facade):
    result = await facade.login(username=body.username, password=body.password)
    return AuthResponse(access_token=result.access_token, user=UserResponse.from_user(result.user))


@router.get("/me", response_model=UserResponse)
async def me(facade: Facade, current_user_id: CurrentUserId):
    user = await facade.get_current_user(current_user_id)
    if user is None:
        raise NotFoundError("user")
    return UserResponse.from_user(user)
