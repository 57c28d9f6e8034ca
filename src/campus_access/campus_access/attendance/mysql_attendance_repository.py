from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import day_bounds
from ..core.enums import AttendanceAction, FailureReason
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_datetime
from .model import AttendanceEvent, AttendancePage, AttendanceQuery
from .repository import AttendanceRepository


def _row_to_event(row: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=row["event_id"],
        identity_id=row.get("identity_id"),
        rfid_tag=row["rfid_tag"],
        action=AttendanceAction(row["action"]),
        location=row["location"],
        device_id=row.get("device_id"),
        timestamp=normalize_mysql_datetime(row["event_time"]),
        verified=bool(row["verified"]),
        failure_reason=FailureReason(row["failure_reason"]) if row.get("failure_reason") else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: AttendanceEvent) -> AttendanceEvent:
        if event.event_id is None:
            event = dataclasses.replace(event, event_id=str(uuid.uuid4()))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    event_id, identity_id, rfid_tag, action, location, device_id,
                    event_time, verified, failure_reason
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.identity_id,
                    event.rfid_tag,
                    event.action.value,
                    event.location,
                    event.device_id,
                    event.timestamp,
                    1 if event.verified else 0,
                    event.failure_reason.value if event.failure_reason else None,
                ),
            )
        return event

    def query(self, query: AttendanceQuery) -> AttendancePage:
        where = ""
        params: List[Any] = []
        if query.date_equals is not None:
            start, end = day_bounds(query.date_equals)
            where = "WHERE event_time >= %s AND event_time < %s"
            params = [start, end]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, identity_id, rfid_tag, action, location, device_id,
                       event_time, verified, failure_reason
                FROM attendance_events
                {where}
                ORDER BY event_time DESC
                LIMIT %s OFFSET %s
                """,
                (*params, query.limit, query.offset),
            )
            records = [_row_to_event(r) for r in fetchall(cur)]

            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_events {where}", tuple(params))
            total = int(fetchone(cur)["n"])

        return AttendancePage(records=records, total=total, limit=query.limit, offset=query.offset)

    def count_verified(self, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM attendance_events WHERE verified=1"
        params: List[Any] = []
        if start is not None:
            sql += " AND event_time >= %s"
            params.append(start)
        if end is not None:
            sql += " AND event_time < %s"
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(fetchone(cur)["n"])
