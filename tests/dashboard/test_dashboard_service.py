from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.campus_access.campus_access.core.enums import Role
from src.campus_access.campus_access.core.exceptions import AuthorizationError, FingerprintMismatchError
from src.campus_access.campus_access.dashboard.service import DashboardService
from src.campus_access.campus_access.sessions.model import SessionClaims

TEACHER_CLAIMS = SessionClaims(
    identity_id="t", email="t@u.edu", role=Role.TEACHER, expires_at=datetime(2030, 1, 1, tzinfo=timezone.utc)
)


@pytest.fixture
def dashboard(identities_repo, attendance_repo):
    return DashboardService(identities_repo, attendance_repo)


def test_today_excludes_yesterday_late_evening(dashboard, verification_service, student, teacher):
    verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", now=datetime(2026, 2, 1, 23, 50))
    verification_service.verify_dual_factor(rfid_tag="T1", fingerprint_token="TF1", now=datetime(2026, 2, 2, 0, 5))

    stats = dashboard.stats(TEACHER_CLAIMS, now=datetime(2026, 2, 2, 0, 10))

    assert stats.attendance_today == 1
    assert stats.attendance_total_verified == 2


def test_rejected_attempts_are_not_counted(dashboard, verification_service, student, fixed_now):
    verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="F1", now=fixed_now)
    with pytest.raises(FingerprintMismatchError):
        verification_service.verify_dual_factor(rfid_tag="R1", fingerprint_token="WRONG", now=fixed_now)

    stats = dashboard.stats(TEACHER_CLAIMS, now=fixed_now)
    assert stats.attendance_today == 1
    assert stats.attendance_total_verified == 1


def test_totals_by_role(dashboard, student, teacher, fixed_now):
    data = dashboard.stats(TEACHER_CLAIMS, now=fixed_now).to_dict()

    assert data["totalStudents"] == 1
    assert data["totalTeachers"] == 1
    assert data["systemStatus"] == "online"


def test_non_teacher_is_forbidden(dashboard):
    claims = SessionClaims(identity_id="s", email="s@u.edu", role=Role.STUDENT, expires_at=TEACHER_CLAIMS.expires_at)

    with pytest.raises(AuthorizationError):
        dashboard.stats(claims)
