"""
User Entity

The credential record: password hash and the single live refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - owns the credentials checked at login and refresh.

    Business Rules:
    - Username is unique and stored lower-cased
    - Email is unique
    - Password stored as bcrypt hash, never returned to callers
    - refresh_token holds at most one live refresh token; None means no session
    - Writing a new refresh_token invalidates the previous one immediately
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    fullname: str = Field(default="", max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    refresh_token: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
