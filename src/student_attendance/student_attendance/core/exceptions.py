class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student, batch or record does not exist."""


class StoreError(DomainError):
    """Raised when the backing store rejects or fails an operation."""
