from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict

from .model import Session
from .registry import ActiveTokenRegistry


class InMemoryActiveTokenRegistry(ActiveTokenRegistry):
    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def add(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.token] = session

    def contains(self, token: str) -> bool:
        return token in self._sessions

    def remove(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
