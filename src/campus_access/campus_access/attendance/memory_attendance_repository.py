from __future__ import annotations

import dataclasses
import threading
import uuid
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import day_bounds
from .model import AttendanceEvent, AttendancePage, AttendanceQuery
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._events: List[AttendanceEvent] = []

    def append(self, event: AttendanceEvent) -> AttendanceEvent:
        if event.event_id is None:
            event = dataclasses.replace(event, event_id=str(uuid.uuid4()))
        with self._lock:
            self._events.append(event)
        return event

    def query(self, query: AttendanceQuery) -> AttendancePage:
        with self._lock:
            items = list(self._events)

        if query.date_equals is not None:
            start, end = day_bounds(query.date_equals)
            items = [e for e in items if start <= e.timestamp < end]

        items.sort(key=lambda e: e.timestamp, reverse=True)
        page = items[query.offset : query.offset + query.limit]
        return AttendancePage(records=page, total=len(items), limit=query.limit, offset=query.offset)

    def count_verified(self, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        with self._lock:
            items = list(self._events)
        return sum(
            1
            for e in items
            if e.verified and (start is None or e.timestamp >= start) and (end is None or e.timestamp < end)
        )

    def __len__(self) -> int:
        return len(self._events)
