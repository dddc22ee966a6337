"""
Login Use Case

Handles user authentication and starts the user's single session.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import check_password
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LoginResponse, UserResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token pair issuance.

    Business Rules:
    - Identifier matches either username or email
    - Unknown identifier -> USER_NOT_FOUND, wrong password -> INVALID_CREDENTIALS
    - Issues a fresh access + refresh pair
    - Persists the refresh token, replacing any previous one; this ends
      any other session the user had (one session per user)
    - Tokens are only returned if persistence succeeded
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, identifier: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            identifier: Username or email
            password: Plain text password

        Returns:
            Result with LoginResponse containing sanitized user and tokens, or Error
        """
        identifier = identifier.strip().lower()

        async with self.uow:
            user = await self.uow.users.get_by_username_or_email(identifier, identifier)
            if user is None:
                logger.warning("Login failed: USER_NOT_FOUND")
                return Return.err(Error("USER_NOT_FOUND", "User does not exist"))

            if not check_password(user.password_hash, password):
                logger.warning(f"Login failed for user {user.id}: INVALID_CREDENTIALS")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid user credentials")
                )

            access_token = self.token_service.issue_access_token(
                user.id, {"username": user.username, "email": user.email}
            )
            refresh_token = self.token_service.issue_refresh_token(user.id)
            sanitized = UserResponse.from_entity(user)

            # Issuance and persistence succeed or fail together
            try:
                await self.uow.users.set_refresh_token(user.id, refresh_token)
                await self.uow.commit()
            except SQLAlchemyError:
                logger.exception(f"Failed to persist refresh token for user {user.id}")
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "INTERNAL_ERROR",
                        "Something went wrong while generating access and refresh token",
                    )
                )

            logger.info(f"Successful login: {user.id}")
            return Return.ok(
                LoginResponse(
                    user=sanitized,
                    access_token=access_token,
                    refresh_token=refresh_token,
                )
            )
