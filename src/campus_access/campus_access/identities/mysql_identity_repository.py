from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateIdentityError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key, normalize_mysql_datetime
from .model import Identity, StudentDetails, TeacherDetails
from .repository import IdentityRepository

_COLUMNS = """
    identity_id, full_name, email, role, rfid_tag, fingerprint_token,
    matric_number, faculty, department, staff_id, designation, created_at
"""


def _row_to_identity(row: Dict[str, Any]) -> Identity:
    role = Role(row["role"])
    if role == Role.STUDENT:
        details = StudentDetails(
            matric_number=row["matric_number"],
            faculty=row["faculty"],
            department=row["department"],
        )
    else:
        details = TeacherDetails(staff_id=row["staff_id"], designation=row["designation"])
    return Identity(
        identity_id=row["identity_id"],
        full_name=row["full_name"],
        email=row["email"],
        role=role,
        rfid_tag=row["rfid_tag"],
        fingerprint_token=row["fingerprint_token"],
        details=details,
        created_at=normalize_mysql_datetime(row["created_at"]),
    )


class MySQLIdentityRepository(IdentityRepository):
    """Uniqueness is enforced by the UNIQUE keys on email, rfid_tag and fingerprint_token."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, identity: Identity) -> None:
        d = identity.details
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO identities({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                    (
                        identity.identity_id,
                        identity.full_name,
                        identity.email,
                        identity.role.value,
                        identity.rfid_tag,
                        identity.fingerprint_token,
                        getattr(d, "matric_number", None),
                        getattr(d, "faculty", None),
                        getattr(d, "department", None),
                        getattr(d, "staff_id", None),
                        getattr(d, "designation", None),
                        identity.created_at,
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateIdentityError("User with same email, RFID, or fingerprint already exists") from e
            raise

    def _get_one(self, column: str, value: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Two rows would mean a broken UNIQUE key; let the caller see it.
            cur.execute(f"SELECT {_COLUMNS} FROM identities WHERE {column}=%s LIMIT 2", (value,))
            rows = fetchall(cur)
        if len(rows) > 1:
            raise RuntimeError(f"identities.{column} is not unique for a stored value")
        return _row_to_identity(rows[0]) if rows else None

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        return self._get_one("identity_id", identity_id)

    def get_by_email(self, email: str) -> Optional[Identity]:
        return self._get_one("email", email)

    def get_by_rfid(self, rfid_tag: str) -> Optional[Identity]:
        return self._get_one("rfid_tag", rfid_tag)

    def get_by_fingerprint(self, fingerprint_token: str) -> Optional[Identity]:
        return self._get_one("fingerprint_token", fingerprint_token)

    def count_by_role(self) -> Dict[Role, int]:
        counts = {role: 0 for role in Role}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role, COUNT(*) AS n FROM identities GROUP BY role")
            for r in fetchall(cur):
                counts[Role(r["role"])] = int(r["n"])
        return counts

    def list_all(self) -> Sequence[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM identities ORDER BY created_at DESC")
            return [_row_to_identity(r) for r in fetchall(cur)]
