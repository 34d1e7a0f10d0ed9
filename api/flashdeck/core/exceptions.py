"""
Custom exceptions for the application.
"""


class FlashdeckException(Exception):
    """Base exception for all Flashdeck application exceptions."""
    pass


class ValidationError(FlashdeckException):
    """Raised when validation fails."""
    pass


class NotFoundError(FlashdeckException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(FlashdeckException):
    """Raised when there's a conflict (e.g., duplicate entry)."""
    pass


class PreconditionViolation(FlashdeckException):
    """Raised when a practice operation is called in the wrong session state."""
    pass


class EmptySessionError(FlashdeckException):
    """Raised when a practice session would start with no cards."""
    pass


class RepositoryFailure(FlashdeckException):
    """Raised when the backing store rejects a read or write."""
    pass
