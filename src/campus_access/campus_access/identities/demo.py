"""Sample cards used for local development and reader bring-up."""

from __future__ import annotations

import logging

from ..core.exceptions import DuplicateIdentityError
from .service import IdentityService

logger = logging.getLogger(__name__)

DEMO_IDENTITIES = [
    dict(
        full_name="John Smith",
        email="prof.smith@university.edu",
        role="teacher",
        rfid_tag="RFID_TEACHER_001",
        fingerprint_token="teacher_fingerprint_1",
        staff_id="STAFF/001",
        designation="Senior Lecturer",
    ),
    dict(
        full_name="Jane Doe",
        email="dr.doe@university.edu",
        role="teacher",
        rfid_tag="RFID_TEACHER_002",
        fingerprint_token="teacher_fingerprint_2",
        staff_id="STAFF/002",
        designation="Professor",
    ),
    dict(
        full_name="Alice Johnson",
        email="student1@university.edu",
        role="student",
        rfid_tag="RFID101",
        fingerprint_token="student_fingerprint_1",
        matric_number="CSC/2024/001",
        faculty="computing",
        department="computer_science",
    ),
    dict(
        full_name="Bob Wilson",
        email="student2@university.edu",
        role="student",
        rfid_tag="RFID102",
        fingerprint_token="student_fingerprint_2",
        matric_number="ENG/2024/002",
        faculty="technology",
        department="electrical/electronics_engineering",
    ),
    dict(
        full_name="Charlie Brown",
        email="student3@university.edu",
        role="student",
        rfid_tag="04A1B2C3",
        fingerprint_token="student_fingerprint_3",
        matric_number="CSC/2024/003",
        faculty="computing",
        department="computer_science",
    ),
    dict(
        full_name="Diana Prince",
        email="student4@university.edu",
        role="student",
        rfid_tag="04D5E6F7",
        fingerprint_token="student_fingerprint_4",
        matric_number="ENG/2024/004",
        faculty="technology",
        department="mechanical_engineering",
    ),
]


def seed_demo_identities(identity_service: IdentityService) -> int:
    """Register the sample identities, skipping ones already present. Returns how many were added."""
    added = 0
    for data in DEMO_IDENTITIES:
        try:
            identity_service.register(**data)
            added += 1
        except DuplicateIdentityError:
            logger.debug("Demo identity %s already present", data["email"])
    return added
