class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class RegistrationRejected(ValidationError):
    """Raised when the backend refuses to register a code (ok=false)."""


class EmptyResponseError(DomainError):
    """Raised when the backend answers a registration with no row."""
