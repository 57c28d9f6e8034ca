from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import resolve_timestamp
from ..common.validators import optional_text, require_fields, require_non_empty
from ..core.constants import DEFAULT_LOCATION, UNKNOWN_DEVICE_LOCATION, WEB_CLIENT_DEVICE_ID
from ..core.enums import AttendanceAction, FailureReason
from ..core.exceptions import FingerprintMismatchError, NotFoundError, ValidationError
from ..identities.model import Identity
from ..identities.repository import IdentityRepository
from .model import AttendanceEvent, AttendancePage, AttendanceQuery, VerificationResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_action(value: Optional[str]) -> AttendanceAction:
    if value is None or value == "":
        return AttendanceAction.ENTRY
    try:
        return AttendanceAction(str(value).upper())
    except ValueError:
        raise ValidationError("action must be ENTRY or EXIT")


class VerificationService:
    """Resolve presented credentials to an identity and record every attempt in the ledger.

    Two entry points with different trust levels:

    * ``verify_dual_factor`` (web dashboard) checks the RFID tag and the
      fingerprint token against the store.
    * ``verify_single_factor`` (embedded reader) only resolves the RFID tag. The
      reader has already matched the fingerprint locally against the token it
      fetched via ``lookup_rfid`` and cannot send it back over its session, so
      this path must not start requiring a fingerprint.
    """

    def __init__(self, identities: IdentityRepository, attendance: AttendanceRepository):
        self._identities = identities
        self._attendance = attendance

    def verify_dual_factor(
        self,
        *,
        rfid_tag: Optional[str],
        fingerprint_token: Optional[str],
        action: Optional[str] = None,
        location: Optional[str] = None,
        timestamp: Any = None,
        now: Optional[datetime] = None,
    ) -> VerificationResult:
        credentials = require_fields(
            dict(rfid_tag=rfid_tag, fingerprint_token=fingerprint_token),
            ("rfid_tag", "fingerprint_token"),
            "RFID card UID and fingerprint data are required",
        )
        rfid_tag = credentials["rfid_tag"]
        fingerprint_token = credentials["fingerprint_token"]

        parsed_action = parse_action(action)
        location = optional_text(location, "location") or DEFAULT_LOCATION
        at = resolve_timestamp(timestamp, now=now)

        identity = self._identities.get_by_rfid(rfid_tag)
        if identity is None:
            self._record_rejection(rfid_tag, parsed_action, location, at, FailureReason.RFID_NOT_REGISTERED)
            logger.warning("Rejected attendance: RFID %s is not registered", rfid_tag)
            raise NotFoundError("RFID card not registered")

        if not identity.fingerprint_matches(fingerprint_token):
            # The card owner is not attributed: the person holding the card may not be them.
            self._record_rejection(rfid_tag, parsed_action, location, at, FailureReason.FINGERPRINT_MISMATCH)
            logger.warning("Unauthorized access attempt: RFID %s with mismatched fingerprint", rfid_tag)
            raise FingerprintMismatchError("Fingerprint does not match RFID card owner")

        event = self._attendance.append(
            AttendanceEvent(
                event_id=None,
                identity_id=identity.identity_id,
                rfid_tag=rfid_tag,
                action=parsed_action,
                location=location,
                device_id=WEB_CLIENT_DEVICE_ID,
                timestamp=at,
                verified=True,
            )
        )
        logger.info("Attendance verified: %s - %s at %s", identity.full_name, parsed_action.value, location)
        return VerificationResult(identity=identity, event=event)

    def verify_single_factor(
        self,
        *,
        rfid_tag: Optional[str],
        device_id: Optional[str] = None,
        timestamp: Any = None,
        now: Optional[datetime] = None,
    ) -> VerificationResult:
        rfid_tag = require_non_empty(rfid_tag, "RFID UID")
        device_id = optional_text(device_id, "device_id")

        at = resolve_timestamp(timestamp, now=now)
        identity = self._identities.get_by_rfid(rfid_tag)
        if identity is None:
            raise NotFoundError("User not found")

        event = self._attendance.append(
            AttendanceEvent(
                event_id=None,
                identity_id=identity.identity_id,
                rfid_tag=rfid_tag,
                action=AttendanceAction.ENTRY,
                location=device_id or UNKNOWN_DEVICE_LOCATION,
                device_id=device_id,
                timestamp=at,
                verified=True,
            )
        )
        logger.info("Attendance logged from %s: %s at %s", device_id, identity.full_name, at.isoformat())
        return VerificationResult(identity=identity, event=event)

    def lookup_rfid(self, rfid_tag: Optional[str]) -> Identity:
        """Card details for a reader, including the token it matches locally."""
        rfid_tag = require_non_empty(rfid_tag, "RFID UID")
        identity = self._identities.get_by_rfid(rfid_tag)
        if identity is None:
            logger.info("RFID not found: %s", rfid_tag)
            raise NotFoundError("RFID card not registered")
        return identity

    def _record_rejection(
        self,
        rfid_tag: str,
        action: AttendanceAction,
        location: str,
        at: datetime,
        reason: FailureReason,
    ) -> AttendanceEvent:
        return self._attendance.append(
            AttendanceEvent(
                event_id=None,
                identity_id=None,
                rfid_tag=rfid_tag,
                action=action,
                location=location,
                device_id=WEB_CLIENT_DEVICE_ID,
                timestamp=at,
                verified=False,
                failure_reason=reason,
            )
        )


class AttendanceLedgerService:
    """Read side of the ledger for the dashboard."""

    def __init__(self, attendance: AttendanceRepository, identities: IdentityRepository):
        self._attendance = attendance
        self._identities = identities

    def list_events(self, query: AttendanceQuery) -> AttendancePage:
        return self._attendance.query(query)

    def list_events_ui(self, query: AttendanceQuery) -> Dict[str, Any]:
        page = self.list_events(query)
        cache: Dict[str, Optional[Identity]] = {}
        rows = []
        for event in page.records:
            row = event.to_dict()
            identity = None
            if event.identity_id:
                if event.identity_id not in cache:
                    cache[event.identity_id] = self._identities.get_by_id(event.identity_id)
                identity = cache[event.identity_id]
            row["fullName"] = identity.full_name if identity else None
            row["email"] = identity.email if identity else None
            rows.append(row)

        return {"attendance": rows, "total": page.total, "limit": page.limit, "offset": page.offset}
