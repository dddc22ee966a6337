"""
Domain Entities

Each entity in its own file.
"""

from .enums import TokenKind
from .user import User

__all__ = [
    # Enums
    "TokenKind",
    # Entities
    "User",
]
