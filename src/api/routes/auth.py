from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field, model_validator

from config import AuthSettings
from src.api.error import raise_for_error
from src.api.utils.cookies import (
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    set_auth_cookies,
)
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthenticatedUser,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    UserResponse,
)
from src.depends import (
    get_auth_settings,
    get_current_user,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr = Field(..., description="User email address")
    fullname: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=UserResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Registration

    Creates a user account. Username is stored lower-cased.

    Raises:
        - 409 Conflict: Username or email already taken
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        username=request.username,
        email=request.email,
        fullname=request.fullname,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, bcrypt_rounds=settings.bcrypt_rounds)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Either username or email identifies the user.
    """

    username: Optional[str] = Field(None, description="Username")
    email: Optional[EmailStr] = Field(None, description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    @model_validator(mode="after")
    def require_identifier(self):
        if not (self.username or self.email):
            raise ValueError("Username or email is required")
        return self


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Authenticates the user, starts a session and returns the token pair,
    both in the body and as HttpOnly cookies. Any previous session of the
    same user is ended.

    Raises:
        - 401 Unauthorized: Wrong password
        - 404 Not Found: No such user
        - 500 Internal Server Error: Tokens could not be persisted
    """
    use_case = LoginUseCase(uow, token_service)
    result = await use_case.execute(request.username or request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    data = result.value
    set_auth_cookies(response, settings, data.access_token, data.refresh_token)
    return data


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    Optional: the refresh token cookie takes precedence.
    """

    refresh_token: Optional[str] = Field(None, description="Refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh(
    response: Response,
    request: Optional[RefreshRequest] = None,
    refresh_cookie: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Refresh JWT Token

    Exchanges the current refresh token for a new pair (rotation). The old
    refresh token stops working immediately.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired, rotated or revoked token
        - 500 Internal Server Error: Tokens could not be persisted
    """
    presented = refresh_cookie or (request.refresh_token if request else None)

    use_case = RefreshTokenUseCase(uow, token_service)
    result = await use_case.execute(presented)

    if result.is_err():
        raise_for_error(result.error)

    data = result.value
    set_auth_cookies(response, settings, data.access_token, data.refresh_token)
    return data


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Logout

    Clears the stored refresh token and the auth cookies. Safe to repeat.

    Raises:
        - 401 Unauthorized: No valid access token
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(current_user)

    if result.is_err():
        raise_for_error(result.error)

    clear_auth_cookies(response, settings)
    return result.value
