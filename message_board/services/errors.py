from __future__ import annotations

from typing import ClassVar


class MessageBoardError(Exception):
    """Base for the classified failures a board operation can report.

    ``kind`` is the tag clients see on the direct-call surface and ``detail``
    is the human-readable payload that travels with it.
    """

    kind: ClassVar[str] = "Error"

    def __init__(self, detail: str, details: list[str] | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.details = details or []

    def to_variant(self) -> dict[str, str]:
        return {self.kind: self.detail}


class NotFoundError(MessageBoardError):
    kind = "NotFound"


class InvalidPayloadError(MessageBoardError):
    kind = "InvalidPayload"


class DataExistError(MessageBoardError):
    kind = "DataExist"
