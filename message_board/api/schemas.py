from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateMessageRequest(BaseModel):
    title: str | None = None
    body: str | None = None


class UpdateMessageRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = None
    body: str | None = None
    attachment_url: str | None = Field(default=None, alias="attachmentURL")

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class MessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    body: str
    attachment_url: str = Field(alias="attachmentURL")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class KeysRequest(BaseModel):
    offset: Any = None
    limit: Any = None


class MessageIdRequest(BaseModel):
    id: Any = None


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: list[str] | None = None
    request_id: str | None = None
