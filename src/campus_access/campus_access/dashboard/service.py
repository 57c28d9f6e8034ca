from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import day_bounds, now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..identities.repository import IdentityRepository
from ..sessions.model import SessionClaims


@dataclass(frozen=True)
class DashboardStats:
    totals_by_role: Dict[Role, int]
    attendance_today: int
    attendance_total_verified: int
    system_status: str = field(default="online")

    @property
    def total_students(self) -> int:
        return self.totals_by_role.get(Role.STUDENT, 0)

    @property
    def total_teachers(self) -> int:
        return self.totals_by_role.get(Role.TEACHER, 0)

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "totalTeachers": self.total_teachers,
            "totalsByRole": {role.value: n for role, n in self.totals_by_role.items()},
            "todayAttendance": self.attendance_today,
            "totalAttendance": self.attendance_total_verified,
            "systemStatus": self.system_status,
        }


def require_teacher(claims: SessionClaims) -> None:
    if claims.role != Role.TEACHER:
        raise AuthorizationError("Access denied. Teachers only.")


class DashboardService:
    """Use case: dashboard statistics (teachers only), recomputed on every call."""

    def __init__(self, identities: IdentityRepository, attendance: AttendanceRepository):
        self._identities = identities
        self._attendance = attendance

    def stats(self, claims: SessionClaims, *, now: Optional[datetime] = None) -> DashboardStats:
        require_teacher(claims)

        start, end = day_bounds((now or now_local()).date())
        return DashboardStats(
            totals_by_role=self._identities.count_by_role(),
            attendance_today=self._attendance.count_verified(start=start, end=end),
            attendance_total_verified=self._attendance.count_verified(),
        )
