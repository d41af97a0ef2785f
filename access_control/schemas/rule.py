"""
Access Control Rule Schemas

Request/response models for rule endpoints. group_ids omitted or null on
create/full update means "no groups"; there is no default policy for rules.
"""

from datetime import datetime

from pydantic import Field

from access_control.schemas.common import BaseSchema, NamedReference, RequestSchema


class RuleCreate(RequestSchema):
    """Schema for creating a rule."""

    name: str = Field(..., min_length=1, max_length=255)
    group_ids: list[str] | None = Field(None, description="Group UUIDs")


class RuleUpdate(RuleCreate):
    """Schema for replacing a rule (PUT)."""


class RulePatch(RequestSchema):
    """Schema for partially updating a rule (PATCH)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    group_ids: list[str] | None = None


class RuleResponse(BaseSchema):
    """Schema for rule response."""

    id: str
    name: str
    groups: list[NamedReference]
    created_at: datetime
    updated_at: datetime
