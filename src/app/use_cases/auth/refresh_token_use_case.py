"""
Refresh Token Use Case

Handles access token refresh with refresh token rotation.
"""

import hmac
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenKind
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Missing token -> UNAUTHENTICATED
    - Bad signature or expired -> INVALID_TOKEN (not distinguished)
    - Unknown subject -> INVALID_TOKEN
    - Token must equal the stored refresh token, else TOKEN_REUSED
    - Rotation: both tokens are reissued and the stored value swapped with a
      conditional update, so of two concurrent refreshes with the same token
      exactly one wins; the other gets TOKEN_REUSED
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, refresh_token: Optional[str]) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token presented by the client

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(
                Error("UNAUTHENTICATED", "Unauthorized request. Refresh token missing")
            )

        verified = self.token_service.verify(refresh_token, TokenKind.refresh)
        if verified.is_err():
            logger.warning(f"Refresh rejected: {verified.error.code}")
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        user_id = verified.value.user_id

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                logger.warning(f"Refresh rejected: user {user_id} not found")
                return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

            stored = user.refresh_token or ""
            if not hmac.compare_digest(refresh_token.encode(), stored.encode()):
                logger.warning(f"Refresh token reuse detected for user {user_id}")
                return Return.err(
                    Error("TOKEN_REUSED", "Refresh token is expired or used")
                )

            access_token = self.token_service.issue_access_token(
                user.id, {"username": user.username, "email": user.email}
            )
            new_refresh_token = self.token_service.issue_refresh_token(user.id)

            try:
                swapped = await self.uow.users.replace_refresh_token(
                    user.id, refresh_token, new_refresh_token
                )
                if not swapped:
                    await self.uow.rollback()
                    logger.warning(f"Refresh lost rotation race for user {user_id}")
                    return Return.err(
                        Error("TOKEN_REUSED", "Refresh token is expired or used")
                    )
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception(f"Failed to rotate refresh token for user {user_id}")
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INTERNAL_ERROR",
                        "Something went wrong while generating access and refresh token",
                    )
                )

            logger.info(f"Token refreshed: {user_id}")
            return Return.ok(
                RefreshTokenResponse(
                    access_token=access_token,
                    refresh_token=new_refresh_token,
                )
            )
