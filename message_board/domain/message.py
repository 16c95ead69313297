from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """A message listed on the board.

    Serialized with the camelCase names clients use (``attachmentURL``,
    ``createdAt``, ``updatedAt``); constructed with either spelling.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    body: str
    attachment_url: str = Field(default="", alias="attachmentURL")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
