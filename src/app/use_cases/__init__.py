"""
Use Cases

Organized into domain folders:
- auth/: Registration and session lifecycle (login, refresh, logout, authenticate)
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    AuthenticateUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "AuthenticateUseCase",
]
