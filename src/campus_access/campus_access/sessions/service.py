from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt

from ..common.validators import require_fields
from ..core.constants import SESSION_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..identities.model import Identity
from ..identities.repository import IdentityRepository
from .model import Session, SessionClaims
from .registry import ActiveTokenRegistry

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Access denied. Invalid or expired token."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionService:
    """Issue, verify and revoke dashboard sessions.

    A session is represented twice on purpose: the signed JWT lets a verifier
    check who the holder is and when it expires without a store lookup, and the
    active-token registry makes logout take effect before that expiry.
    """

    def __init__(
        self,
        identities: IdentityRepository,
        registry: ActiveTokenRegistry,
        *,
        secret: str,
        ttl_hours: int = SESSION_TTL_HOURS,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._identities = identities
        self._registry = registry
        self._secret = secret
        self._ttl = timedelta(hours=int(ttl_hours))
        self._algorithm = algorithm

    def login(
        self,
        email: Optional[str],
        fingerprint_token: Optional[str],
        *,
        now: Optional[datetime] = None,
    ) -> Tuple[Session, Identity]:
        credentials = require_fields(
            dict(email=email, fingerprint_token=fingerprint_token),
            ("email", "fingerprint_token"),
            "Email and fingerprint data are required",
        )

        identity = self._identities.get_by_email(credentials["email"])
        if identity is None:
            raise AuthenticationError("Invalid email or fingerprint")
        # Role first: a student never gets a session, even with matching credentials.
        if identity.role != Role.TEACHER:
            raise AuthenticationError("Only teachers can login to the dashboard")
        if not identity.fingerprint_matches(credentials["fingerprint_token"]):
            raise AuthenticationError("Invalid email or fingerprint")

        session = self.issue_session(identity, now=now)
        logger.info("Teacher %s logged in", identity.email)
        return session, identity

    def issue_session(self, identity: Identity, *, now: Optional[datetime] = None) -> Session:
        if identity.role != Role.TEACHER:
            raise AuthenticationError("Only teachers can login to the dashboard")

        issued_at = now or _utcnow()
        expires_at = issued_at + self._ttl
        payload = {
            "sub": identity.identity_id,
            "email": identity.email,
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)

        session = Session(token=token, identity_id=identity.identity_id, issued_at=issued_at, expires_at=expires_at)
        purged = self._registry.purge_expired(issued_at)
        if purged:
            logger.info("Purged %d expired session tokens", purged)
        self._registry.add(session)
        return session

    def verify(self, token: Optional[str], *, now: Optional[datetime] = None) -> SessionClaims:
        if not token or not self._registry.contains(token):
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)

        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
            )
            role = Role(payload.get("role"))
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (jwt.InvalidTokenError, ValueError, TypeError):
            self._registry.remove(token)
            logger.warning("Discarded session token with an invalid signature or payload")
            raise AuthenticationError("Invalid token")

        if (now or _utcnow()) >= expires_at:
            self._registry.remove(token)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)

        return SessionClaims(
            identity_id=str(payload["sub"]),
            email=str(payload.get("email", "")),
            role=role,
            expires_at=expires_at,
        )

    def revoke(self, token: Optional[str]) -> None:
        if token:
            self._registry.remove(token)
