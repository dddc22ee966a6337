import asyncio
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import bcrypt
import pytest

from src.app.repositories.user_repository import IUserRepository
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User

PASSWORD = "SecurePass123!"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_username_or_email = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.set_refresh_token = AsyncMock()
    uow.users.replace_refresh_token = AsyncMock(return_value=True)
    uow.users.clear_refresh_token = AsyncMock()
    return uow


@pytest.fixture
def token_service(auth_settings, fake_clock):
    return TokenService(auth_settings, clock=fake_clock)


def make_user(username="alice", password=PASSWORD, refresh_token=None) -> User:
    return User(
        username=username,
        email=f"{username}@example.com",
        fullname=username.title(),
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        refresh_token=refresh_token,
    )


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def user():
    return make_user()


class InMemoryUserRepository(IUserRepository):
    """
    Dict-backed store. Reads return snapshots, like rows loaded by separate
    database sessions, and yield to the event loop so concurrent callers
    interleave.
    """

    def __init__(self):
        self.users: Dict[UUID, User] = {}
        self.refresh_tokens: Dict[UUID, Optional[str]] = {}
        self._lock = asyncio.Lock()

    def _snapshot(self, user: User) -> User:
        return User(
            id=user.id,
            username=user.username,
            email=user.email,
            fullname=user.fullname,
            password_hash=user.password_hash,
            refresh_token=self.refresh_tokens.get(user.id),
            created_at=user.created_at,
        )

    async def get_by_id(self, user_id):
        await asyncio.sleep(0)
        user = self.users.get(user_id)
        return self._snapshot(user) if user else None

    async def get_by_username(self, username):
        return await self.get_by_username_or_email(username, None)

    async def get_by_email(self, email):
        return await self.get_by_username_or_email(None, email)

    async def get_by_username_or_email(self, username, email):
        await asyncio.sleep(0)
        for user in self.users.values():
            if (username and user.username == username.lower()) or (
                email and user.email == email.lower()
            ):
                return self._snapshot(user)
        return None

    async def create(self, user):
        self.users[user.id] = user
        self.refresh_tokens[user.id] = user.refresh_token
        return user

    async def set_refresh_token(self, user_id, refresh_token):
        async with self._lock:
            self.refresh_tokens[user_id] = refresh_token

    async def replace_refresh_token(self, user_id, expected, refresh_token):
        async with self._lock:
            if self.refresh_tokens.get(user_id) != expected:
                return False
            self.refresh_tokens[user_id] = refresh_token
            return True

    async def clear_refresh_token(self, user_id):
        async with self._lock:
            self.refresh_tokens[user_id] = None


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, repository: InMemoryUserRepository):
        self.users = repository
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        pass


@pytest.fixture
def memory_store():
    return InMemoryUserRepository()


@pytest.fixture
def memory_uow_factory(memory_store):
    """Each call is a fresh unit of work over the same store, like one per request"""

    def factory():
        return InMemoryUnitOfWork(memory_store)

    return factory
