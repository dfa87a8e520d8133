"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note cannot be found."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class StorageUnavailableError(ApplicationError):
    """Raised when the backing key-value store cannot be read or written."""

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(message, code="STORE_UNAVAILABLE")


class CorruptDataError(ApplicationError):
    """Raised when the stored collection blob does not parse as a list of notes."""

    def __init__(self, message: str = "Stored notes are corrupt") -> None:
        super().__init__(message, code="STORE_CORRUPT_DATA")
