from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("date must be formatted as YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def from_epoch_millis(value: Any) -> datetime:
    """Convert an epoch-milliseconds value (int or numeric string) to local time."""
    try:
        return datetime.fromtimestamp(int(value) / 1000)
    except (TypeError, ValueError, OverflowError, OSError):
        raise ValidationError("timestamp must be epoch milliseconds")


def resolve_timestamp(value: Any, *, now: Optional[datetime] = None) -> datetime:
    if value is None or value == "":
        return now or now_local()
    return from_epoch_millis(value)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open [start, end) range covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
