from __future__ import annotations

from datetime import datetime

import pytest

from src.campus_access.campus_access.attendance.model import AttendanceQuery
from src.campus_access.campus_access.core.enums import AttendanceAction, FailureReason
from src.campus_access.campus_access.core.exceptions import FingerprintMismatchError, NotFoundError, ValidationError


def _all_events(attendance_repo):
    return attendance_repo.query(AttendanceQuery(limit=500)).records


def test_dual_factor_accepts_matching_fingerprint(verification_service, attendance_repo, student, fixed_now):
    result = verification_service.verify_dual_factor(
        rfid_tag="R1", fingerprint_token="F1", action="ENTRY", location="Main Gate", now=fixed_now
    )

    assert result.identity == student
    events = _all_events(attendance_repo)
    assert len(events) == 1
    assert events[0].verified is True
    assert events[0].identity_id == student.identity_id
    assert events[0].location == "Main Gate"
    assert events[0].timestamp == fixed_now
    assert events[0].failure_reason is None
    assert result.to_dict()["user"]["matricNumber"] == "X1"


def test_fingerprint_mismatch_logs_unattributed_rejection(verification_service, attendance_repo, student, fixed_now):
    with pytest.raises(FingerprintMismatchError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="WRONG", now=fixed_now)

    events = _all_events(attendance_repo)
    assert len(events) == 1
    assert events[0].verified is False
    assert events[0].identity_id is None
    assert events[0].rfid_tag == "R1"
    assert events[0].failure_reason == FailureReason.FINGERPRINT_MISMATCH


def test_unregistered_rfid_is_rejected_and_logged(verification_service, attendance_repo, fixed_now):
    with pytest.raises(NotFoundError):
        verification_service.verify_dual_factor(rfid_tag="NOPE", fingerprint_token="F1", now=fixed_now)

    events = _all_events(attendance_repo)
    assert len(events) == 1
    assert events[0].identity_id is None
    assert events[0].failure_reason == FailureReason.RFID_NOT_REGISTERED


def test_another_users_fingerprint_is_a_mismatch(verification_service, attendance_repo, student, teacher):
    with pytest.raises(FingerprintMismatchError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="TF1")

    assert _all_events(attendance_repo)[0].identity_id is None


@pytest.mark.parametrize("rfid_tag, fingerprint_token", [(None, "F1"), ("R1", ""), ("", None)])
def test_missing_credentials_are_invalid_and_not_logged(verification_service, attendance_repo, student, rfid_tag, fingerprint_token):
    with pytest.raises(ValidationError):
        verification_service.verify_dual_factor(rfid_tag=rfid_tag, fingerprint_token=fingerprint_token)

    assert len(attendance_repo) == 0


def test_unknown_action_is_invalid(verification_service, student):
    with pytest.raises(ValidationError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", action="LUNCH")


def test_exit_action_and_default_location(verification_service, attendance_repo, student):
    result = verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", action="exit")

    assert result.event.action == AttendanceAction.EXIT
    assert result.event.location == "Unknown"


def test_explicit_epoch_millis_timestamp_is_used(verification_service, student):
    millis = 1767225600000
    result = verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", timestamp=millis)

    assert result.event.timestamp == datetime.fromtimestamp(millis / 1000)


def test_non_numeric_timestamp_is_invalid(verification_service, student):
    with pytest.raises(ValidationError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", timestamp="yesterday")


def test_single_factor_accepts_known_rfid_without_fingerprint(verification_service, attendance_repo, student, fixed_now):
    result = verification_service.verify_single_factor(rfid_tag="R1", device_id="ESP32_LAB", now=fixed_now)

    event = result.event
    assert event.verified is True
    assert event.identity_id == student.identity_id
    assert event.action == AttendanceAction.ENTRY
    assert event.location == "ESP32_LAB"
    assert event.device_id == "ESP32_LAB"


def test_single_factor_without_device_uses_unknown_device(verification_service, student):
    result = verification_service.verify_single_factor(rfid_tag="R1", timestamp="1767225600000")

    assert result.event.location == "Unknown Device"
    assert result.event.device_id is None
    assert result.event.timestamp == datetime.fromtimestamp(1767225600)


def test_single_factor_unknown_rfid_appends_nothing(verification_service, attendance_repo):
    with pytest.raises(NotFoundError):
        verification_service.verify_single_factor(rfid_tag="NOPE")

    assert len(attendance_repo) == 0


def test_lookup_rfid_returns_card_owner(verification_service, student):
    assert verification_service.lookup_rfid("R1") == student

    with pytest.raises(NotFoundError):
        verification_service.lookup_rfid("R9")


@pytest.mark.parametrize(
    "rfid_tag, fingerprint_token",
    [("R1", 12345), (101, "F1"), ("R1", ["F1"])],
)
def test_non_string_credentials_are_invalid_and_not_logged(
    verification_service, attendance_repo, student, rfid_tag, fingerprint_token
):
    with pytest.raises(ValidationError, match="must be a string"):
        verification_service.verify_dual_factor(rfid_tag=rfid_tag, fingerprint_token=fingerprint_token)

    assert len(attendance_repo) == 0


def test_non_string_location_is_invalid(verification_service, student):
    with pytest.raises(ValidationError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", location=3)


def test_padded_credentials_are_trimmed_before_lookup(verification_service, attendance_repo, student):
    result = verification_service.verify_dual_factor(rfid_tag=" R1 ", fingerprint_token="F1 ")

    assert result.identity == student
    assert result.event.rfid_tag == "R1"


def test_reader_paths_reject_non_string_rfid(verification_service, attendance_repo, student):
    with pytest.raises(ValidationError):
        verification_service.verify_single_factor(rfid_tag=1)
    with pytest.raises(ValidationError):
        verification_service.verify_single_factor(rfid_tag="R1", device_id=9)
    with pytest.raises(ValidationError):
        verification_service.lookup_rfid(1)

    assert len(attendance_repo) == 0
