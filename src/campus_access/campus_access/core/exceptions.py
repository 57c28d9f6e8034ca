class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def to_dict(self) -> dict:
        return {"error": str(self)}


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class DuplicateIdentityError(DomainError):
    """Raised when email, RFID tag or fingerprint token is already registered."""


class NotFoundError(DomainError):
    """Raised when a lookup does not resolve to a record."""

    status_code = 404


class FingerprintMismatchError(DomainError):
    """Raised when the presented fingerprint does not belong to the RFID owner."""

    status_code = 401

    def to_dict(self) -> dict:
        return {"error": str(self), "verified": False}


class AuthenticationError(DomainError):
    """Raised when credentials or the session token are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
