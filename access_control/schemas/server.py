"""
Access Control Server Schemas

Request/response models for server endpoints. Credentials are write-only:
responses never echo the password or tokens.
"""

from datetime import datetime

from pydantic import Field

from access_control.config.constants import EntityStatus
from access_control.schemas.common import BaseSchema, RequestSchema


class ServerCreate(RequestSchema):
    """Schema for creating a server."""

    name: str = Field(..., min_length=1, max_length=255)
    host_address: str = Field(..., min_length=1, max_length=255)
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    access_token: str | None = Field(None, max_length=1024)
    api_token: str | None = Field(None, max_length=1024)
    status: EntityStatus = EntityStatus.ACTIVE


class ServerUpdate(ServerCreate):
    """Schema for replacing a server (PUT)."""


class ServerPatch(RequestSchema):
    """Schema for partially updating a server (PATCH)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    host_address: str | None = Field(None, min_length=1, max_length=255)
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    access_token: str | None = Field(None, max_length=1024)
    api_token: str | None = Field(None, max_length=1024)
    status: EntityStatus | None = None


class ServerInfo(BaseSchema):
    """Server as shown inside a device."""

    id: str
    name: str
    host_address: str


class ServerResponse(BaseSchema):
    """Schema for server response."""

    id: str
    name: str
    host_address: str
    username: str | None
    status: EntityStatus
    last_sync_at: datetime | None
    created_at: datetime
    updated_at: datetime
