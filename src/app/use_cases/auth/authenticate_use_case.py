"""
Authenticate Use Case

Resolves the identity behind an access token.
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenKind
from .dtos import AuthenticatedUser


class AuthenticateUseCase:
    """
    Use case behind the auth dependency.

    Returns detailed error codes (TOKEN_INVALID, TOKEN_EXPIRED,
    USER_NOT_FOUND) for logging; the API layer collapses all of them into
    a single UNAUTHENTICATED response.
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, access_token: Optional[str]) -> Result[AuthenticatedUser]:
        if not access_token:
            return Return.err(Error("UNAUTHENTICATED", "Unauthorized request"))

        verified = self.token_service.verify(access_token, TokenKind.access)
        if verified.is_err():
            return Return.err(verified.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(verified.value.user_id)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "Token subject no longer exists")
                )

            # Build before leaving the unit of work; rollback expires the entity
            return Return.ok(AuthenticatedUser.from_entity(user))
