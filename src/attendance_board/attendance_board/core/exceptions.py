class DomainError(Exception):
    """Base exception for business rule violations.

    ``code`` is the machine-readable reason returned to API clients.
    """

    status_code = 400

    def __init__(self, code: str, message: str | None = None):
        super().__init__(message or code)
        self.code = code


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when the caller lacks a valid admin session for an action."""

    status_code = 401


class NotFoundError(DomainError):
    """Raised when a referenced member does not exist or is inactive."""

    status_code = 404
