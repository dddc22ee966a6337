from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_username_or_email(
        self, username: Optional[str], email: Optional[str]
    ) -> Optional[User]:
        """Get the user matching either the username or the email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def set_refresh_token(self, user_id: UUID, refresh_token: str) -> None:
        """Overwrite the stored refresh token unconditionally"""
        pass

    @abstractmethod
    async def replace_refresh_token(
        self, user_id: UUID, expected: str, refresh_token: str
    ) -> bool:
        """
        Atomically swap the stored refresh token if it still equals `expected`.

        Returns True if the swap happened, False if another writer got there first.
        """
        pass

    @abstractmethod
    async def clear_refresh_token(self, user_id: UUID) -> None:
        """Remove the stored refresh token (no-op if already cleared)"""
        pass
