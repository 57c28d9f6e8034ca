from __future__ import annotations

from datetime import datetime

import pytest

from src.campus_access.campus_access.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.campus_access.campus_access.attendance.service import VerificationService
from src.campus_access.campus_access.identities.memory_identity_repository import InMemoryIdentityRepository
from src.campus_access.campus_access.identities.service import IdentityService
from src.campus_access.campus_access.main import create_app
from src.campus_access.campus_access.sessions.memory_session_registry import InMemoryActiveTokenRegistry
from src.campus_access.campus_access.sessions.service import SessionService

from tests.factories import JWT_SECRET, STUDENT, TEACHER


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def identities_repo() -> InMemoryIdentityRepository:
    return InMemoryIdentityRepository()


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def token_registry() -> InMemoryActiveTokenRegistry:
    return InMemoryActiveTokenRegistry()


@pytest.fixture
def identity_service(identities_repo) -> IdentityService:
    return IdentityService(identities_repo)


@pytest.fixture
def verification_service(identities_repo, attendance_repo) -> VerificationService:
    return VerificationService(identities_repo, attendance_repo)


@pytest.fixture
def session_service(identities_repo, token_registry) -> SessionService:
    return SessionService(identities_repo, token_registry, secret=JWT_SECRET)


@pytest.fixture
def student(identity_service):
    return identity_service.register(**STUDENT)


@pytest.fixture
def teacher(identity_service):
    return identity_service.register(**TEACHER)


@pytest.fixture
def app():
    return create_app("config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
