from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.enums import AttendanceAction, FailureReason
from ..core.exceptions import ValidationError
from ..identities.model import Identity


@dataclass(frozen=True)
class AttendanceEvent:
    """One verification attempt as recorded in the ledger (accepted or rejected).

    `identity_id` is None when the attempt could not be attributed.
    `failure_reason` is set exactly when `verified` is False.
    """

    event_id: Optional[str]
    identity_id: Optional[str]
    rfid_tag: str
    action: AttendanceAction
    location: str
    device_id: Optional[str]
    timestamp: datetime
    verified: bool
    failure_reason: Optional[FailureReason] = None

    def __post_init__(self):
        if self.verified == (self.failure_reason is not None):
            raise ValueError("failure_reason must be set exactly when verified is False")

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "userId": self.identity_id,
            "rfidCardUID": self.rfid_tag,
            "action": self.action.value,
            "location": self.location,
            "deviceId": self.device_id,
            "timestamp": self.timestamp.isoformat(),
            "verified": self.verified,
            "reason": self.failure_reason.value if self.failure_reason else None,
        }


@dataclass(frozen=True)
class AttendanceQuery:
    date_equals: Optional[date] = None
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0

    def __post_init__(self):
        if self.limit < 1 or self.limit > MAX_PAGE_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_LIMIT}")
        if self.offset < 0:
            raise ValidationError("offset must not be negative")


@dataclass(frozen=True)
class AttendancePage:
    records: Sequence[AttendanceEvent]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class VerificationResult:
    identity: Identity
    event: AttendanceEvent

    def to_dict(self) -> dict:
        return {
            "message": "Attendance verified successfully",
            "user": self.identity.summary(),
            "action": self.event.action.value,
            "location": self.event.location,
            "timestamp": self.event.timestamp.isoformat(),
            "verified": True,
        }
