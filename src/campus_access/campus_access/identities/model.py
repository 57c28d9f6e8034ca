from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class StudentDetails:
    matric_number: str
    faculty: str
    department: str


@dataclass(frozen=True)
class TeacherDetails:
    staff_id: str
    designation: str


RoleDetails = Union[StudentDetails, TeacherDetails]

_DETAILS_BY_ROLE = {Role.STUDENT: StudentDetails, Role.TEACHER: TeacherDetails}


@dataclass(frozen=True)
class Identity:
    """A registered student or teacher.

    Created once at registration and never edited afterwards. `details` always
    matches `role`; a mismatch is rejected at construction.
    """

    identity_id: str
    full_name: str
    email: str
    role: Role
    rfid_tag: str
    fingerprint_token: str
    details: RoleDetails
    created_at: datetime

    def __post_init__(self):
        expected = _DETAILS_BY_ROLE[self.role]
        if not isinstance(self.details, expected):
            raise TypeError(f"{self.role.value} identity requires {expected.__name__}")

    def fingerprint_matches(self, presented: str) -> bool:
        if not isinstance(presented, str):
            return False
        return hmac.compare_digest(self.fingerprint_token.encode("utf-8"), presented.encode("utf-8"))

    @property
    def matric_number(self) -> Optional[str]:
        return self.details.matric_number if isinstance(self.details, StudentDetails) else None

    @property
    def staff_id(self) -> Optional[str]:
        return self.details.staff_id if isinstance(self.details, TeacherDetails) else None

    @property
    def badge_number(self) -> Optional[str]:
        """Matric number for students, staff id for teachers."""
        return self.matric_number or self.staff_id

    def summary(self) -> dict:
        return {
            "id": self.identity_id,
            "fullName": self.full_name,
            "role": self.role.value,
            "matricNumber": self.matric_number,
            "staffId": self.staff_id,
        }

    def to_public_dict(self) -> dict:
        data = {
            "id": self.identity_id,
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "rfidCardUID": self.rfid_tag,
            "createdAt": self.created_at.isoformat(),
        }
        if isinstance(self.details, StudentDetails):
            data.update(
                matricNumber=self.details.matric_number,
                faculty=self.details.faculty,
                department=self.details.department,
            )
        else:
            data.update(staffId=self.details.staff_id, designation=self.details.designation)
        return data
