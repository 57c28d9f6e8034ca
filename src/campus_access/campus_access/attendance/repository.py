from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AttendanceEvent, AttendancePage, AttendanceQuery


class AttendanceRepository(Protocol):
    """Append-only attendance ledger."""

    def append(self, event: AttendanceEvent) -> AttendanceEvent:
        """Store the event, assigning `event_id` when it is None. Returns the stored event."""

        raise NotImplementedError

    def query(self, query: AttendanceQuery) -> AttendancePage:
        raise NotImplementedError

    def count_verified(self, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        """Count verified events with start <= timestamp < end (open bounds when None)."""

        raise NotImplementedError
