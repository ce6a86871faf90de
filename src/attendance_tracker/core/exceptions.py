class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    # Safe to show the message to the caller.
    public = True


class InvalidRequest(DomainError):
    """Raised when a required field is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when the bearer token is missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when the principal lacks permission for an action."""

    status_code = 403


class SessionNotFound(DomainError):
    status_code = 404


class SessionExpired(DomainError):
    status_code = 410


class CodeGenerationExhausted(DomainError):
    """Every drawn session code collided with an existing one."""

    status_code = 500
    public = False


class StoreUnavailable(DomainError):
    """The backing store could not be reached or timed out. Safe to retry."""

    status_code = 503
    public = False
