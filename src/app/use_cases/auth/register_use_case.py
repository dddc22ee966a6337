"""
Register Use Case

Creates a user account. Does not start a session.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import RegisterCommand, UserResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Normalize username to lower case
    2. Reject if username or email is already taken
    3. Hash password with bcrypt
    4. Create User with no refresh token (no session yet)
    5. Commit and return the sanitized user
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: RegisterCommand) -> Result[UserResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated fields

        Returns:
            Result[UserResponse], or Error(USER_ALREADY_EXISTS)
        """
        username = command.username.strip().lower()
        email = command.email.strip().lower()

        async with self.uow:
            existing_user = await self.uow.users.get_by_username_or_email(username, email)
            if existing_user:
                return Return.err(
                    Error(
                        "USER_ALREADY_EXISTS",
                        "User with email or username already exists",
                    )
                )

            user = User(
                username=username,
                email=email,
                fullname=command.fullname.strip(),
                password_hash=hash_password(command.password, self.bcrypt_rounds),
            )

            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                # Lost a race against a concurrent registration
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "USER_ALREADY_EXISTS",
                        "User with email or username already exists",
                    )
                )

            logger.info(f"User registered: {user.id}")
            return Return.ok(UserResponse.from_entity(user))
