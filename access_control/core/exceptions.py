"""
Custom Exceptions

Application-specific exceptions with HTTP status codes.

Write operations fail with one of four inspectable kinds:
- ValidationError: malformed or missing input, detected before any query
- DuplicateError: a unique value is already held by another live record
- NotFoundError: the target or a referenced record is missing or deleted
- TransactionError: the database rejected the write; everything was rolled back
"""

from typing import Any, Optional


class AccessControlException(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class AuthenticationError(AccessControlException):
    """Authentication failed error."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(AccessControlException):
    """Authorization failed error."""

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


class NotFoundError(AccessControlException):
    """Resource not found error."""

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        extra_details = details or {}
        extra_details["resource"] = resource
        if resource_id:
            extra_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=extra_details,
        )
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(AccessControlException):
    """Validation error."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if field:
            extra_details["field"] = field
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=extra_details,
        )
        self.field = field


class ConflictError(AccessControlException):
    """Resource conflict error."""

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateError(ConflictError):
    """A unique value is already used by another live record."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: Any,
    ) -> None:
        super().__init__(
            message=f"{resource} with {field} '{value}' already exists",
            details={"resource": resource, "field": field, "value": str(value)},
        )
        self.error_code = "DUPLICATE"
        self.resource = resource
        self.field = field
        self.value = value


class TransactionError(AccessControlException):
    """Database failure during a write; the whole write was rolled back."""

    def __init__(
        self,
        message: str = "The operation could not be completed",
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="TRANSACTION_ERROR",
        )
        self.original_error = original_error


class StorageError(AccessControlException):
    """File storage failed."""

    def __init__(
        self,
        message: str = "File storage failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="STORAGE_ERROR",
            details=details,
        )


class PersonNotFoundError(NotFoundError):
    """Person not found error."""

    def __init__(self, person_id: str) -> None:
        super().__init__(resource="Person", resource_id=person_id)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: str) -> None:
        super().__init__(resource="User", resource_id=user_id)
