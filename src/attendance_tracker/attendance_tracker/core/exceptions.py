class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a mutation arrives without a user context."""


class NotFoundError(DomainError):
    """Raised when the semester or a referenced holiday does not exist."""
