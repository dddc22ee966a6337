import os
from datetime import timedelta

import yaml
from pydantic import BaseModel, ConfigDict

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    # Environment variables win over env.yaml
    return os.environ.get(key, data.get(key, default))


def _get_bool(key, default):
    value = _get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = _get("API_PREFIX", "")
    API_PORT = int(_get("API_PORT", 8000))
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    ACCESS_TOKEN_SECRET = _get("ACCESS_TOKEN_SECRET")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(_get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_SECRET = _get("REFRESH_TOKEN_SECRET")
    REFRESH_TOKEN_EXPIRE_DAYS = int(_get("REFRESH_TOKEN_EXPIRE_DAYS", 10))
    JWT_ALGORITHM = _get("JWT_ALGORITHM", "HS256")

    COOKIE_SECURE = _get_bool("COOKIE_SECURE", True)
    COOKIE_SAMESITE = _get("COOKIE_SAMESITE", "strict")
    BCRYPT_ROUNDS = int(_get("BCRYPT_ROUNDS", 12))


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing or invalid"""


class AuthSettings(BaseModel):
    """
    Immutable token and cookie settings.

    Built once at startup and handed to the token service and the app
    factory. Request handlers never read secrets from ApplicationConfig.
    """

    model_config = ConfigDict(frozen=True)

    access_token_secret: str
    access_token_ttl: timedelta
    refresh_token_secret: str
    refresh_token_ttl: timedelta
    algorithm: str = "HS256"
    cookie_secure: bool = True
    cookie_samesite: str = "strict"
    bcrypt_rounds: int = 12

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        missing = [
            name
            for name in ("ACCESS_TOKEN_SECRET", "REFRESH_TOKEN_SECRET")
            if not getattr(config, name, None)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )

        access_minutes = int(config.ACCESS_TOKEN_EXPIRE_MINUTES)
        refresh_days = int(config.REFRESH_TOKEN_EXPIRE_DAYS)
        if access_minutes <= 0 or refresh_days <= 0:
            raise ConfigurationError("Token expiry settings must be positive")

        return cls(
            access_token_secret=config.ACCESS_TOKEN_SECRET,
            access_token_ttl=timedelta(minutes=access_minutes),
            refresh_token_secret=config.REFRESH_TOKEN_SECRET,
            refresh_token_ttl=timedelta(days=refresh_days),
            algorithm=getattr(config, "JWT_ALGORITHM", "HS256"),
            cookie_secure=getattr(config, "COOKIE_SECURE", True),
            cookie_samesite=getattr(config, "COOKIE_SAMESITE", "strict"),
            bcrypt_rounds=int(getattr(config, "BCRYPT_ROUNDS", 12)),
        )
