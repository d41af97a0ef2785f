"""
API Utilities

Shared helper functions for API endpoints.
"""

from uuid import UUID

from fastapi import HTTPException, status


def validate_uuid(value: str, field_name: str) -> UUID:
    """
    Validate and convert a path parameter to UUID.

    Raises:
        HTTPException: If value is not a valid UUID (400 Bad Request)

    Example:
        group_uuid = validate_uuid(group_id, "group_id")
    """
    try:
        return UUID(value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field_name}: must be a valid UUID",
        ) from e
