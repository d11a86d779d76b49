"""Service error taxonomy. Each error maps to one HTTP status and a stable error code."""


class ServiceError(Exception):
    """Base class for errors that may be shown to API clients."""

    status_code: int = 500
    code: str = "ServiceError"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed input the caller can correct."""

    status_code = 400
    code = "ValidationError"


class ConflictError(ServiceError):
    """Uniqueness violation (e.g. email already registered)."""

    status_code = 400
    code = "Conflict"


class UnauthenticatedError(ServiceError):
    """Missing, malformed, invalid or expired credentials on a protected route."""

    status_code = 401
    code = "Unauthenticated"


class TokenInvalidError(UnauthenticatedError):
    """Bearer token signature or claims do not verify."""

    code = "TokenInvalid"


class TokenExpiredError(UnauthenticatedError):
    """Bearer token is past its expiry."""

    code = "TokenExpired"


class InvalidCredentialsError(ServiceError):
    """Login failed. Same shape whether the email is unknown or the password is wrong."""

    status_code = 401
    code = "InvalidCredentials"


class AccountBlockedError(ServiceError):
    status_code = 403
    code = "AccountBlocked"


class ForbiddenError(ServiceError):
    """Authenticated identity lacks the required role."""

    status_code = 403
    code = "Forbidden"


class NotFoundError(ServiceError):
    status_code = 404
    code = "NotFound"


class StoreFailureError(ServiceError):
    """Account store unavailable or errored. Not retried."""

    status_code = 500
    code = "StoreFailure"
