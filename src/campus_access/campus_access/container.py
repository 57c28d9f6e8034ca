from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedgerService, VerificationService
from .core.constants import SESSION_TTL_HOURS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .identities.memory_identity_repository import InMemoryIdentityRepository
from .identities.mysql_identity_repository import MySQLIdentityRepository
from .identities.repository import IdentityRepository
from .identities.service import IdentityService
from .sessions.memory_session_registry import InMemoryActiveTokenRegistry
from .sessions.mysql_session_registry import MySQLActiveTokenRegistry
from .sessions.registry import ActiveTokenRegistry
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    identities_repo: IdentityRepository
    attendance_repo: AttendanceRepository
    token_registry: ActiveTokenRegistry

    identity_service: IdentityService
    verification_service: VerificationService
    ledger_service: AttendanceLedgerService
    session_service: SessionService
    dashboard_service: DashboardService


def build_container(
    *,
    jwt_secret: str,
    storage_backend: str = "mysql",
    db_config: Optional[dict] = None,
    session_ttl_hours: int = SESSION_TTL_HOURS,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    identities_repo: Any
    attendance_repo: Any
    token_registry: Any

    if storage_backend == "memory":
        identities_repo = InMemoryIdentityRepository()
        attendance_repo = InMemoryAttendanceRepository()
        token_registry = InMemoryActiveTokenRegistry()
    elif storage_backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        identities_repo = MySQLIdentityRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        token_registry = MySQLActiveTokenRegistry(conn)
    else:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    return Container(
        conn=conn,
        identities_repo=identities_repo,
        attendance_repo=attendance_repo,
        token_registry=token_registry,
        identity_service=IdentityService(identities_repo),
        verification_service=VerificationService(identities_repo, attendance_repo),
        ledger_service=AttendanceLedgerService(attendance_repo, identities_repo),
        session_service=SessionService(
            identities_repo,
            token_registry,
            secret=jwt_secret,
            ttl_hours=session_ttl_hours,
        ),
        dashboard_service=DashboardService(identities_repo, attendance_repo),
    )
