import logging
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig, AuthSettings
from src.libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.cookies import ACCESS_TOKEN_COOKIE
from src.app.services.token_service import TokenService
from src.app.use_cases.auth import AuthenticateUseCase, AuthenticatedUser

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Header is optional: the access token may come from a cookie instead
security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings(request: Request) -> AuthSettings:
    return request.app.state.auth_settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def extract_access_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Prefer the access token cookie, fall back to the Bearer header"""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow=Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency that gates protected routes.

    Extracts the access token (cookie first, then Authorization header),
    verifies it and loads the user. Every failure, whether the token is
    missing, forged, malformed, expired or its user was deleted, surfaces
    as the same 401 UNAUTHENTICATED; the detailed code is only logged.

    Returns:
        AuthenticatedUser handed to the route as a parameter

    Raises:
        ClientError: 401 UNAUTHENTICATED
    """
    token = extract_access_token(request, credentials)

    use_case = AuthenticateUseCase(uow, token_service)
    result = await use_case.execute(token)

    if result.is_err():
        logger.warning(f"Authentication failed: {result.error.code}")
        message = "Invalid access token" if token else "Unauthorized request"
        raise ClientError(
            Error("UNAUTHENTICATED", message),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return result.value
