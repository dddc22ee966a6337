"""
Domain Enums
"""

from enum import Enum


class TokenKind(str, Enum):
    """Signed token kinds; each is verified with its own secret"""

    access = "access"
    refresh = "refresh"
