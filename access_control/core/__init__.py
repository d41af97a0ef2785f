"""Core utilities module."""

from access_control.core.exceptions import (
    AccessControlException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    TransactionError,
    ValidationError,
)

__all__ = [
    "AccessControlException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DuplicateError",
    "NotFoundError",
    "TransactionError",
    "ValidationError",
]
