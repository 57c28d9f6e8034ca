from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of a registered identity."""

    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceAction(str, Enum):
    ENTRY = "ENTRY"
    EXIT = "EXIT"


class FailureReason(str, Enum):
    """Why a verification attempt was rejected (stored on the audit event)."""

    RFID_NOT_REGISTERED = "RFID_NOT_REGISTERED"
    FINGERPRINT_MISMATCH = "FINGERPRINT_MISMATCH"
