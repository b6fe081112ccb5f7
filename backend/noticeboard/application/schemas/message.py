"""Pydantic DTOs (Data Transfer Objects) for the Message feature."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from noticeboard.domain.entities import Priority


class MessageCreate(BaseModel):
    """Schema for posting a new message."""

    title: str = Field(..., examples=["Office closed on Friday"])
    content: str = Field(..., examples=["The office is closed for maintenance."])
    author: str = Field(..., examples=["Facilities"])
    priority: Priority = Field(..., examples=["high"])
    expires_at: datetime | None = None


class MessageUpdate(BaseModel):
    """Schema for a partial update: only the fields sent are changed.

    An explicit ``null`` clears ``expires_at``; ``null`` for any other field
    is treated as "not sent".
    """

    title: str | None = None
    content: str | None = None
    author: str | None = None
    priority: Priority | None = None
    expires_at: datetime | None = None
    enabled: bool | None = None

    def to_changes(self) -> dict[str, Any]:
        """Fields to apply, keyed by entity attribute name."""
        changes = {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "expires_at" in self.model_fields_set:
            changes["expires_at"] = self.expires_at
        return changes


class MessageResponse(BaseModel):
    """Schema returned to the client."""

    id: UUID
    title: str
    content: str
    author: str
    created_at: datetime
    updated_at: datetime
    priority: Priority
    expires_at: datetime | None
    enabled: bool

    model_config = {"from_attributes": True}


class PaginatedMessagesResponse(BaseModel):
    data: list[MessageResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
