"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Repositories translate driver errors (SQLAlchemy, httpx) into these;
the application shell catches ApplicationError per user action.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class StorageUnavailableError(ApplicationError):
    """Raised when the note store cannot be reached or initialized."""

    def __init__(
        self,
        message: str = "Storage unavailable",
        code: str = "STORAGE_UNAVAILABLE",
    ) -> None:
        super().__init__(message, code=code)


class AuthenticationError(StorageUnavailableError):
    """Raised when the remote backend rejects the configured credentials."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class PersistenceError(ApplicationError):
    """Raised when a write to the note store did not complete."""

    def __init__(self, message: str = "Persistence failure") -> None:
        super().__init__(message, code="PERSISTENCE_FAILURE")
