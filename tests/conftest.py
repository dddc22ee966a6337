from datetime import UTC, datetime, timedelta

import pytest

from config import AuthSettings


class FakeClock:
    """Controllable clock for TokenService"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta):
        self.now = self.now + delta


@pytest.fixture
def auth_settings():
    return AuthSettings(
        access_token_secret="test-access-secret",
        access_token_ttl=timedelta(minutes=15),
        refresh_token_secret="test-refresh-secret",
        refresh_token_ttl=timedelta(days=10),
        bcrypt_rounds=4,
    )


@pytest.fixture
def fake_clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))
