from __future__ import annotations

from typing import Any

from message_board.services.errors import InvalidPayloadError

MERGEABLE_FIELDS: dict[str, str] = {
    "title": "title",
    "body": "body",
    "attachment_url": "attachment_url",
    "attachmentURL": "attachment_url",
}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def validate_id(message_id: str | None) -> str:
    if is_blank(message_id) or not isinstance(message_id, str):
        raise InvalidPayloadError("you provided wrong data", ["id must be a non-empty string"])
    return message_id


def validate_new_message(title: Any, body: Any) -> None:
    details: list[str] = []
    if is_blank(title):
        details.append("title must not be empty")
    elif not isinstance(title, str):
        details.append("title must be a string")
    if is_blank(body):
        details.append("body must not be empty")
    elif not isinstance(body, str):
        details.append("body must be a string")

    if details:
        raise InvalidPayloadError("You didnt provide all the data, try again", details)


def extract_changes(fields: dict[str, Any] | None) -> dict[str, str]:
    """Pick the mergeable fields out of an update payload.

    Keys that cannot be merged (``id``, the timestamps, anything unknown) are
    dropped. Supplied ``title``/``body`` must stay non-empty.
    """
    changes: dict[str, str] = {}
    details: list[str] = []
    for key, value in (fields or {}).items():
        target = MERGEABLE_FIELDS.get(key)
        if target is None:
            continue
        if not isinstance(value, str):
            details.append(f"{key} must be a string")
            continue
        if target in ("title", "body") and value == "":
            details.append(f"{key} must not be empty")
            continue
        changes[target] = value

    if details:
        raise InvalidPayloadError("Invalid update payload", details)
    return changes


def parse_bound(name: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidPayloadError(f"{name} must be an integer", [f"{name} must be an integer"])
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPayloadError(
            f"{name} must be an integer", [f"{name} must be an integer"]
        ) from exc
    if parsed < 0:
        raise InvalidPayloadError(f"{name} must not be negative", [f"{name} must not be negative"])
    return parsed
