from __future__ import annotations

import pytest

from message_board.services.errors import InvalidPayloadError
from message_board.services.validators import (
    extract_changes,
    parse_bound,
    validate_id,
    validate_new_message,
)


def test_validate_new_message_ok() -> None:
    validate_new_message("Hi", "World")


def test_validate_new_message_failures() -> None:
    with pytest.raises(InvalidPayloadError) as exc:
        validate_new_message("", "World")
    assert "title must not be empty" in exc.value.details
    assert exc.value.kind == "InvalidPayload"

    with pytest.raises(InvalidPayloadError) as exc2:
        validate_new_message(None, None)
    assert exc2.value.details == ["title must not be empty", "body must not be empty"]

    with pytest.raises(InvalidPayloadError) as exc3:
        validate_new_message("Hi", 42)
    assert "body must be a string" in exc3.value.details


def test_validate_id() -> None:
    assert validate_id("abc") == "abc"
    for bad in ("", None):
        with pytest.raises(InvalidPayloadError) as exc:
            validate_id(bad)
        assert exc.value.detail == "you provided wrong data"


def test_extract_changes_keeps_only_mergeable_fields() -> None:
    changes = extract_changes(
        {
            "id": "other",
            "createdAt": "2000-01-01",
            "updatedAt": "2000-01-01",
            "body": "Earth",
            "attachmentURL": "https://example.com/a.png",
            "colour": "red",
        }
    )
    assert changes == {"body": "Earth", "attachment_url": "https://example.com/a.png"}
    assert extract_changes(None) == {}


def test_extract_changes_allows_clearing_attachment() -> None:
    assert extract_changes({"attachment_url": ""}) == {"attachment_url": ""}


def test_extract_changes_rejects_empty_title() -> None:
    with pytest.raises(InvalidPayloadError) as exc:
        extract_changes({"title": "", "body": None})
    assert exc.value.details == ["title must not be empty", "body must be a string"]


def test_parse_bound() -> None:
    assert parse_bound("offset", None) is None
    assert parse_bound("offset", 3) == 3
    assert parse_bound("offset", "7") == 7
    assert parse_bound("offset", 2.0) == 2
    for bad in ("abc", -1, True, 1.5, "1.5", [1]):
        with pytest.raises(InvalidPayloadError):
            parse_bound("limit", bad)
