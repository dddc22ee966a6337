"""
Unit tests for Logout Use Case
"""

import pytest

from src.app.use_cases.auth.dtos import AuthenticatedUser
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.app.use_cases.auth.logout_use_case import LogoutUseCase
from src.app.use_cases.auth.refresh_token_use_case import RefreshTokenUseCase


@pytest.mark.asyncio
async def test_logout_clears_refresh_token(mock_uow, user):
    current_user = AuthenticatedUser.from_entity(user)

    use_case = LogoutUseCase(mock_uow)
    result = await use_case.execute(current_user)

    assert result.is_ok()
    assert result.value.message == "User logged out successfully"
    mock_uow.users.clear_refresh_token.assert_called_once_with(user.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_requires_identity(mock_uow):
    use_case = LogoutUseCase(mock_uow)
    result = await use_case.execute(None)

    assert result.is_err()
    assert result.error.code == "UNAUTHENTICATED"
    mock_uow.users.clear_refresh_token.assert_not_called()


@pytest.mark.asyncio
async def test_logout_is_idempotent(memory_uow_factory, memory_store, token_service, user, password):
    """Twice in a row: both succeed, token stays cleared, old refresh token is dead"""
    await memory_store.create(user)
    login = await LoginUseCase(memory_uow_factory(), token_service).execute("alice", password)
    current_user = AuthenticatedUser.from_entity(user)

    first = await LogoutUseCase(memory_uow_factory()).execute(current_user)
    second = await LogoutUseCase(memory_uow_factory()).execute(current_user)

    assert first.is_ok()
    assert second.is_ok()
    assert memory_store.refresh_tokens[user.id] is None

    result = await RefreshTokenUseCase(memory_uow_factory(), token_service).execute(
        login.value.refresh_token
    )
    assert result.is_err()
    assert result.error.code == "TOKEN_REUSED"
