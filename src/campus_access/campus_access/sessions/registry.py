from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .model import Session


class ActiveTokenRegistry(Protocol):
    """Set of tokens that have been issued and not revoked."""

    def add(self, session: Session) -> None:
        raise NotImplementedError

    def contains(self, token: str) -> bool:
        raise NotImplementedError

    def remove(self, token: str) -> None:
        raise NotImplementedError

    def purge_expired(self, now: datetime) -> int:
        """Drop sessions whose expiry is at or before `now`; return how many were dropped."""
        raise NotImplementedError
