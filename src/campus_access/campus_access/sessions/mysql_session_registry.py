from __future__ import annotations

import hashlib
from datetime import datetime, timezone

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Session
from .registry import ActiveTokenRegistry


def _token_hash(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class MySQLActiveTokenRegistry(ActiveTokenRegistry):
    """Only a SHA-256 of each token is stored."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, session: Session) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO active_sessions(token_hash, identity_id, issued_at, expires_at)
                VALUES(%s,%s,%s,%s)
                """,
                (
                    _token_hash(session.token),
                    session.identity_id,
                    _naive_utc(session.issued_at),
                    _naive_utc(session.expires_at),
                ),
            )

    def contains(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok FROM active_sessions WHERE token_hash=%s", (_token_hash(token),))
            return fetchone(cur) is not None

    def remove(self, token: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM active_sessions WHERE token_hash=%s", (_token_hash(token),))

    def purge_expired(self, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM active_sessions WHERE expires_at <= %s", (_naive_utc(now),))
            return cur.rowcount
