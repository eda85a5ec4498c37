"""Explicit user session.

A Session is created by the caller (CLI command, request handler) and
passed to every repository call. Nothing is stored process-wide.
"""

import secrets
from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from visor.core.exceptions import SessionExpiredError

DEFAULT_TTL = timedelta(days=7)


def _new_token() -> str:
    return secrets.token_urlsafe(32)


class Session(BaseModel):
    """Authenticated context for one user.

    Attributes:
        user_id: Owner whose records the session may read and write.
        token: Opaque bearer token.
        created_at: When the session was opened.
        expires_at: Expiry time; None means the session never expires.
    """

    user_id: str = Field(min_length=1)
    token: str = Field(default_factory=_new_token)
    created_at: datetime = Field(default_factory=datetime.now)
    expires_at: datetime | None = None

    @classmethod
    def create(
        cls,
        user_id: str,
        ttl: timedelta | None = DEFAULT_TTL,
        now: datetime | None = None,
    ) -> "Session":
        now = now or datetime.now()
        expires_at = now + ttl if ttl is not None else None
        return cls(user_id=user_id, created_at=now, expires_at=expires_at)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now()) >= self.expires_at

    def require_active(self, now: datetime | None = None) -> "Session":
        """Return self, or raise SessionExpiredError if expired."""
        if self.is_expired(now):
            raise SessionExpiredError(
                f"Session for {self.user_id} expired at {self.expires_at:%Y-%m-%d %H:%M}"
            )
        return self
