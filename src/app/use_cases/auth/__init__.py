"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .authenticate_use_case import AuthenticateUseCase
from .dtos import (
    RegisterCommand,
    UserResponse,
    AuthenticatedUser,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "AuthenticateUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "UserResponse",
    "AuthenticatedUser",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
]
