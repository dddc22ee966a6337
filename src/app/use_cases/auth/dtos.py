"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    username: str
    email: str
    fullname: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(BaseModel):
    """Sanitized user: never carries password hash or refresh token"""

    id: str
    username: str
    email: str
    fullname: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            fullname=user.fullname,
            created_at=user.created_at,
        )


class AuthenticatedUser(BaseModel):
    """Identity resolved from a verified access token"""

    id: UUID
    username: str
    email: str
    fullname: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "AuthenticatedUser":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            fullname=user.fullname,
            created_at=user.created_at,
        )

    def to_response(self) -> UserResponse:
        return UserResponse(
            id=str(self.id),
            username=self.username,
            email=self.email,
            fullname=self.fullname,
            created_at=self.created_at,
        )


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserResponse
    access_token: str
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str
