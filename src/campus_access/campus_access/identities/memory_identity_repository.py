from __future__ import annotations

import threading
from typing import Dict, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateIdentityError
from .model import Identity
from .repository import IdentityRepository


class InMemoryIdentityRepository(IdentityRepository):
    """Dict-backed store with one index per unique key.

    A single lock covers the uniqueness check and the insert.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: Dict[str, Identity] = {}
        self._by_email: Dict[str, Identity] = {}
        self._by_rfid: Dict[str, Identity] = {}
        self._by_fingerprint: Dict[str, Identity] = {}

    def add(self, identity: Identity) -> None:
        with self._lock:
            if (
                identity.identity_id in self._by_id
                or identity.email in self._by_email
                or identity.rfid_tag in self._by_rfid
                or identity.fingerprint_token in self._by_fingerprint
            ):
                raise DuplicateIdentityError("User with same email, RFID, or fingerprint already exists")

            self._by_id[identity.identity_id] = identity
            self._by_email[identity.email] = identity
            self._by_rfid[identity.rfid_tag] = identity
            self._by_fingerprint[identity.fingerprint_token] = identity

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        return self._by_id.get(identity_id)

    def get_by_email(self, email: str) -> Optional[Identity]:
        return self._by_email.get(email)

    def get_by_rfid(self, rfid_tag: str) -> Optional[Identity]:
        return self._by_rfid.get(rfid_tag)

    def get_by_fingerprint(self, fingerprint_token: str) -> Optional[Identity]:
        return self._by_fingerprint.get(fingerprint_token)

    def count_by_role(self) -> Dict[Role, int]:
        counts = {role: 0 for role in Role}
        for identity in list(self._by_id.values()):
            counts[identity.role] += 1
        return counts

    def list_all(self) -> Sequence[Identity]:
        return sorted(self._by_id.values(), key=lambda i: i.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._by_id)
