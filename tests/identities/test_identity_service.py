from __future__ import annotations

import threading

import pytest

from src.campus_access.campus_access.core.enums import Role
from src.campus_access.campus_access.core.exceptions import DuplicateIdentityError, ValidationError
from src.campus_access.campus_access.identities.demo import DEMO_IDENTITIES, seed_demo_identities
from src.campus_access.campus_access.identities.model import StudentDetails, TeacherDetails

from tests.factories import STUDENT, TEACHER


def test_register_student_populates_student_details(identity_service):
    identity = identity_service.register(**STUDENT)

    assert identity.role == Role.STUDENT
    assert identity.details == StudentDetails(matric_number="X1", faculty="computing", department="cs")
    assert identity.staff_id is None
    assert identity_service.find_by_id(identity.identity_id) == identity


def test_register_teacher_populates_teacher_details(identity_service):
    identity = identity_service.register(**TEACHER)

    assert isinstance(identity.details, TeacherDetails)
    assert identity.badge_number == "S1"


@pytest.mark.parametrize(
    "override",
    [
        {"email": "a@u.edu"},
        {"rfid_tag": "R1"},
        {"fingerprint_token": "F1"},
    ],
)
def test_duplicate_unique_key_is_rejected_and_store_unchanged(identity_service, identities_repo, student, override):
    other = dict(STUDENT, email="b@u.edu", rfid_tag="R2", fingerprint_token="F2")
    other.update(override)

    with pytest.raises(DuplicateIdentityError):
        identity_service.register(**other)

    assert len(identities_repo) == 1


def test_unique_keys_are_case_sensitive(identity_service, student):
    identity = identity_service.register(**dict(STUDENT, email="A@u.edu", rfid_tag="r1", fingerprint_token="f1"))

    assert identity.identity_id != student.identity_id


def test_student_without_department_is_invalid(identity_service, identities_repo):
    with pytest.raises(ValidationError, match="matricNumber, faculty, and department"):
        identity_service.register(**dict(STUDENT, department=None))

    assert len(identities_repo) == 0


def test_teacher_without_designation_is_invalid(identity_service):
    with pytest.raises(ValidationError, match="staffId and designation"):
        identity_service.register(**dict(TEACHER, designation="  "))


def test_missing_base_field_is_invalid(identity_service):
    with pytest.raises(ValidationError, match="Missing required fields"):
        identity_service.register(**dict(STUDENT, fingerprint_token=None))


def test_unknown_role_is_invalid(identity_service):
    with pytest.raises(ValidationError):
        identity_service.register(**dict(STUDENT, role="admin"))


def test_lookups_are_exact_match(identity_service, student):
    assert identity_service.find_by_rfid("R1") == student
    assert identity_service.find_by_fingerprint("F1") == student
    assert identity_service.find_by_email("a@u.edu") == student
    assert identity_service.find_by_rfid("r1") is None
    assert identity_service.find_by_email("A@u.edu") is None


def test_concurrent_registrations_on_same_rfid_have_one_winner(identity_service, identities_repo):
    barrier = threading.Barrier(8)
    outcomes = []

    def attempt(i: int):
        barrier.wait()
        try:
            identity_service.register(**dict(STUDENT, email=f"s{i}@u.edu", fingerprint_token=f"F{i}"))
            outcomes.append("ok")
        except DuplicateIdentityError:
            outcomes.append("duplicate")

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == 7
    assert len(identities_repo) == 1


def test_seed_demo_identities_is_idempotent(identity_service, identities_repo):
    assert seed_demo_identities(identity_service) == len(DEMO_IDENTITIES)
    assert seed_demo_identities(identity_service) == 0
    assert len(identities_repo) == len(DEMO_IDENTITIES)


def test_count_by_role(identity_service, identities_repo, student, teacher):
    assert identities_repo.count_by_role() == {Role.STUDENT: 1, Role.TEACHER: 1}


@pytest.mark.parametrize(
    "override",
    [
        {"fingerprint_token": 12345},
        {"rfid_tag": 123},
        {"full_name": 7},
        {"email": ["a@u.edu"]},
        {"department": 42},
    ],
)
def test_non_string_fields_are_invalid(identity_service, identities_repo, override):
    with pytest.raises(ValidationError, match="must be a string"):
        identity_service.register(**dict(STUDENT, **override))

    assert len(identities_repo) == 0


def test_registered_values_are_stored_stripped(identity_service):
    identity = identity_service.register(
        **dict(STUDENT, email=" a@u.edu ", rfid_tag=" R1", fingerprint_token="F1 ", faculty=" computing ")
    )

    assert identity.email == "a@u.edu"
    assert identity.rfid_tag == "R1"
    assert identity.fingerprint_token == "F1"
    assert identity.details.faculty == "computing"
    assert identity_service.find_by_rfid("R1") == identity
