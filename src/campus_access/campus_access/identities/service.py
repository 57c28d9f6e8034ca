from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_fields
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Identity, RoleDetails, StudentDetails, TeacherDetails
from .repository import IdentityRepository

logger = logging.getLogger(__name__)


class IdentityService:
    """Use case: register identities and resolve them by their unique keys."""

    def __init__(self, identities: IdentityRepository):
        self._identities = identities

    def register(
        self,
        *,
        full_name: Optional[str],
        email: Optional[str],
        role: Optional[str],
        rfid_tag: Optional[str],
        fingerprint_token: Optional[str],
        matric_number: Optional[str] = None,
        faculty: Optional[str] = None,
        department: Optional[str] = None,
        staff_id: Optional[str] = None,
        designation: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Identity:
        values = dict(
            full_name=full_name,
            email=email,
            role=role,
            rfid_tag=rfid_tag,
            fingerprint_token=fingerprint_token,
            matric_number=matric_number,
            faculty=faculty,
            department=department,
            staff_id=staff_id,
            designation=designation,
        )
        # Every stored value is the stripped text that passed validation.
        base = require_fields(
            values,
            ("full_name", "email", "role", "rfid_tag", "fingerprint_token"),
            "Missing required fields: fullName, email, role, rfidUID, fingerprintData",
        )

        try:
            parsed_role = Role(base["role"])
        except ValueError:
            raise ValidationError("role must be 'student' or 'teacher'")

        identity = Identity(
            identity_id=str(uuid.uuid4()),
            full_name=base["full_name"],
            email=base["email"],
            role=parsed_role,
            rfid_tag=base["rfid_tag"],
            fingerprint_token=base["fingerprint_token"],
            details=self._build_details(parsed_role, values),
            created_at=now or now_local(),
        )
        self._identities.add(identity)

        logger.info("Registered %s %s (%s)", identity.role.value, identity.identity_id, identity.email)
        return identity

    @staticmethod
    def _build_details(role: Role, values: dict) -> RoleDetails:
        if role == Role.STUDENT:
            student = require_fields(
                values,
                ("matric_number", "faculty", "department"),
                "Student registration requires matricNumber, faculty, and department",
            )
            return StudentDetails(**student)

        teacher = require_fields(
            values,
            ("staff_id", "designation"),
            "Teacher registration requires staffId and designation",
        )
        return TeacherDetails(**teacher)

    def find_by_rfid(self, rfid_tag: str) -> Optional[Identity]:
        return self._identities.get_by_rfid(rfid_tag)

    def find_by_fingerprint(self, fingerprint_token: str) -> Optional[Identity]:
        return self._identities.get_by_fingerprint(fingerprint_token)

    def find_by_email(self, email: str) -> Optional[Identity]:
        return self._identities.get_by_email(email)

    def find_by_id(self, identity_id: str) -> Optional[Identity]:
        return self._identities.get_by_id(identity_id)

    def list_identities(self) -> Sequence[Identity]:
        return self._identities.list_all()
