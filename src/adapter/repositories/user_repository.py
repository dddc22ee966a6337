from typing import Optional
from uuid import UUID

from sqlmodel import or_, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, bypassing rows cached in the session"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username (stored lower-cased)"""
        stmt = select(User).where(User.username == username.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username_or_email(
        self, username: Optional[str], email: Optional[str]
    ) -> Optional[User]:
        """Get the first user matching either field"""
        conditions = []
        if username:
            conditions.append(User.username == username.lower())
        if email:
            conditions.append(User.email == email.lower())
        if not conditions:
            return None
        stmt = select(User).where(or_(*conditions))
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def set_refresh_token(self, user_id: UUID, refresh_token: str) -> None:
        """Overwrite the stored refresh token"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=refresh_token)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def replace_refresh_token(
        self, user_id: UUID, expected: str, refresh_token: str
    ) -> bool:
        """
        Compare-and-swap in a single UPDATE statement.

        The WHERE clause re-checks the stored value inside the database, so
        only one of two racing rotations can match the row.
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=refresh_token)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def clear_refresh_token(self, user_id: UUID) -> None:
        """Unset the stored refresh token"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=None)
        )
        await self.session.execute(stmt)
        await self.session.flush()
