from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class Session:
    """An issued dashboard session. Times are timezone-aware UTC."""

    token: str
    identity_id: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class SessionClaims:
    """What a verified bearer token tells the caller about its holder."""

    identity_id: str
    email: str
    role: Role
    expires_at: datetime
