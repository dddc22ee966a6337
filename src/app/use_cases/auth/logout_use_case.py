"""
Logout Use Case

Ends the caller's session by clearing the stored refresh token.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AuthenticatedUser, LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for user logout.

    Business Rules:
    - Caller must be authenticated
    - Clearing is unconditional and idempotent
    - Outstanding access tokens stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, current_user: Optional[AuthenticatedUser]) -> Result[LogoutResponse]:
        if current_user is None:
            return Return.err(Error("UNAUTHENTICATED", "Unauthorized request"))

        async with self.uow:
            await self.uow.users.clear_refresh_token(current_user.id)
            await self.uow.commit()

        logger.info(f"User logged out: {current_user.id}")
        return Return.ok(LogoutResponse(message="User logged out successfully"))
