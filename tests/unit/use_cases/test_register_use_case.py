"""
Unit tests for Register Use Case
"""

import bcrypt
import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.auth.dtos import RegisterCommand
from src.app.use_cases.auth.register_use_case import RegisterUseCase


def _command(**overrides):
    data = {
        "username": "Alice",
        "email": "Alice@Example.com",
        "fullname": "Alice Liddell",
        "password": "SecurePass123!",
    }
    data.update(overrides)
    return RegisterCommand(**data)


@pytest.mark.asyncio
async def test_register_creates_user(mock_uow):
    mock_uow.users.get_by_username_or_email.return_value = None
    mock_uow.users.create.side_effect = lambda user: user

    use_case = RegisterUseCase(mock_uow, bcrypt_rounds=4)
    result = await use_case.execute(_command())

    assert result.is_ok()
    assert result.value.username == "alice"
    assert result.value.email == "alice@example.com"
    assert "password_hash" not in result.value.model_dump()

    created = mock_uow.users.create.call_args.args[0]
    assert created.refresh_token is None
    assert created.password_hash != "SecurePass123!"
    assert bcrypt.checkpw(b"SecurePass123!", created.password_hash.encode())
    mock_uow.users.get_by_username_or_email.assert_called_once_with("alice", "alice@example.com")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_register_duplicate_user(mock_uow, user):
    mock_uow.users.get_by_username_or_email.return_value = user

    use_case = RegisterUseCase(mock_uow, bcrypt_rounds=4)
    result = await use_case.execute(_command())

    assert result.is_err()
    assert result.error.code == "USER_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_unique_violation_race(mock_uow):
    mock_uow.users.get_by_username_or_email.return_value = None
    mock_uow.users.create.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

    use_case = RegisterUseCase(mock_uow, bcrypt_rounds=4)
    result = await use_case.execute(_command())

    assert result.is_err()
    assert result.error.code == "USER_ALREADY_EXISTS"
    mock_uow.rollback.assert_called_once()
