"""
Common Schemas

Shared schemas used across the application.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from access_control.core.utils import utc_now


DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class RequestSchema(BaseModel):
    """Base for request bodies: surrounding whitespace is stripped from strings."""

    model_config = ConfigDict(str_strip_whitespace=True)


class PaginationParams(BaseModel):
    """Pagination query parameters."""

    page: int = Field(default=1, ge=1, description="Page number")
    per_page: int = Field(default=10, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset for database query."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Get limit for database query."""
        return self.per_page


class PaginationMeta(BaseModel):
    """Pagination metadata in response."""

    page: int
    per_page: int
    total: int
    total_pages: int

    @classmethod
    def create(cls, page: int, per_page: int, total: int) -> "PaginationMeta":
        """Create pagination meta from parameters."""
        total_pages = (total + per_page - 1) // per_page if per_page > 0 else 0
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages,
        )


class PaginatedResponse(BaseModel, Generic[DataT]):
    """Generic paginated response."""

    data: list[DataT]
    pagination: PaginationMeta


class NamedReference(BaseSchema):
    """Minimal view of a referenced entity."""

    id: str
    name: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = "access-control-management"
    version: str = "0.1.0"
    timestamp: datetime = Field(default_factory=utc_now)
