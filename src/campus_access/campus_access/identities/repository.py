from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Identity


class IdentityRepository(Protocol):
    """Storage interface for identities.

    Note: `add` must check email / RFID / fingerprint uniqueness atomically with
    the insert and raise DuplicateIdentityError on conflict.
    """

    def add(self, identity: Identity) -> None:
        raise NotImplementedError

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_rfid(self, rfid_tag: str) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_fingerprint(self, fingerprint_token: str) -> Optional[Identity]:
        raise NotImplementedError

    def count_by_role(self) -> Dict[Role, int]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Identity]:
        raise NotImplementedError
