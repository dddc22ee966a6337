"""
Token Service

Issues and verifies the two signed token kinds. Access and refresh tokens
use distinct secrets and lifetimes, so a leaked access secret cannot mint
refresh tokens.
"""

import secrets
from datetime import UTC, datetime
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel

from config import AuthSettings
from src.domain.entities import TokenKind
from src.libs.result import Error, Result, Return

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenClaims(BaseModel):
    """Verified contents of a token"""

    user_id: UUID
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime
    jti: str
    extra: Dict[str, Any] = {}


class TokenService:
    """
    Signs and verifies JWTs (python-jose, HS256 by default).

    Verification only checks signature, kind and expiry. Whether the
    subject still exists is the caller's concern.
    """

    def __init__(self, settings: AuthSettings, clock: Optional[Clock] = None):
        self.settings = settings
        self.clock = clock or utc_now

    def _secret(self, kind: TokenKind) -> str:
        if kind == TokenKind.access:
            return self.settings.access_token_secret
        return self.settings.refresh_token_secret

    def _issue(
        self, user_id: UUID, kind: TokenKind, extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        now = self.clock()
        ttl = (
            self.settings.access_token_ttl
            if kind == TokenKind.access
            else self.settings.refresh_token_ttl
        )
        payload = dict(extra_claims or {})
        payload.update(
            {
                "sub": str(user_id),
                "type": kind.value,
                "jti": secrets.token_hex(16),
                "iat": int(now.timestamp()),
                "exp": int((now + ttl).timestamp()),
            }
        )
        return jwt.encode(payload, self._secret(kind), algorithm=self.settings.algorithm)

    def issue_access_token(
        self, user_id: UUID, extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """Short-lived token checked on every protected request"""
        return self._issue(user_id, TokenKind.access, extra_claims)

    def issue_refresh_token(self, user_id: UUID) -> str:
        """Long-lived token, cross-checked against the stored value on refresh"""
        return self._issue(user_id, TokenKind.refresh)

    def verify(self, token: str, kind: TokenKind) -> Result[TokenClaims]:
        """
        Verify a token of the given kind.

        Returns:
            Result with TokenClaims, or Error TOKEN_INVALID (bad signature,
            malformed, wrong kind) / TOKEN_EXPIRED (past its exp claim)
        """
        try:
            # Expiry is checked against our own clock below
            payload = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self.settings.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            return Return.err(Error("TOKEN_INVALID", f"Invalid token: {exc}"))

        if payload.get("type") != kind.value:
            return Return.err(Error("TOKEN_INVALID", "Wrong token type"))

        try:
            user_id = UUID(str(payload["sub"]))
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (KeyError, TypeError, ValueError):
            return Return.err(Error("TOKEN_INVALID", "Malformed token claims"))

        if self.clock() > expires_at:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))

        reserved = {"sub", "type", "jti", "iat", "exp"}
        return Return.ok(
            TokenClaims(
                user_id=user_id,
                kind=kind,
                issued_at=issued_at,
                expires_at=expires_at,
                jti=str(payload.get("jti", "")),
                extra={k: v for k, v in payload.items() if k not in reserved},
            )
        )
