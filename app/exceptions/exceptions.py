from __future__ import annotations

from fastapi import status

from app.infrastructure.document_store.base import StoreError


class DomainError(Exception):
    """Base exception for all domain errors.
    Every domain error carries a human-readable message, a stable machine code
    and the HTTP status the error handler responds with.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "DOMAIN_ERROR"
    default_message: str = "Domain error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None, code: str | None = None):
        """Initialize domain error with message.
        Args:
            message: Error message describing what went wrong.
            status_code: Overrides the class default HTTP status.
            code: Overrides the class default machine code.
        """
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class ValidationError(DomainError):
    """Exception raised when input fails business-rule or schema checks."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class NotFoundError(DomainError):
    """Exception raised when a requested entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found"


class UnauthorizedError(DomainError):
    """Exception raised when credentials are missing or invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_message = "Unauthorized access"


class ForbiddenError(DomainError):
    """Exception raised when a caller lacks permission for an operation."""
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "Forbidden action"


# Store error code -> HTTP status. Numeric keys are the equivalent gRPC status codes.
STORE_ERROR_STATUS: dict[str | int, int] = {
    "not-found": status.HTTP_404_NOT_FOUND,
    "already-exists": status.HTTP_409_CONFLICT,
    "permission-denied": status.HTTP_403_FORBIDDEN,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "invalid-argument": status.HTTP_400_BAD_REQUEST,
    5: status.HTTP_404_NOT_FOUND,
    6: status.HTTP_409_CONFLICT,
    7: status.HTTP_403_FORBIDDEN,
    16: status.HTTP_401_UNAUTHORIZED,
    3: status.HTTP_400_BAD_REQUEST,
}


def status_for_store_code(store_code: str | int | None) -> int:
    if isinstance(store_code, str):
        store_code = store_code.strip().lower()
    return STORE_ERROR_STATUS.get(store_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


class RepositoryError(DomainError):
    """Exception raised when an underlying store operation fails."""
    code = "REPOSITORY_ERROR"
    default_message = "Database operation failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        store_code: str | int | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.store_code = store_code

    @classmethod
    def from_store_error(cls, exc: StoreError, context: str) -> "RepositoryError":
        return cls(
            f"{context}: {exc.message}",
            status_code=status_for_store_code(exc.code),
            store_code=exc.code,
        )


class ServiceError(DomainError):
    """Exception raised when a business operation fails for an unclassified reason."""
    code = "SERVICE_ERROR"
    default_message = "Service operation failed"
