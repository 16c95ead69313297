from __future__ import annotations

from datetime import datetime, timezone

import pytest

from message_board.services.errors import DataExistError, InvalidPayloadError, NotFoundError
from message_board.services.messages import MessageBoard
from message_board.store.memory import InMemoryOrderedMap


def test_create_then_get_returns_equal_record(board: MessageBoard) -> None:
    created = board.create_message("Hi", "World")
    assert created.attachment_url == ""
    assert created.created_at == created.updated_at
    assert board.get_message(created.id) == created


def test_create_yields_distinct_ids(board: MessageBoard) -> None:
    ids = {board.create_message(f"title {i}", "body").id for i in range(5)}
    assert len(ids) == 5
    assert len(board.list_messages()) == 5
    assert board.count() == 5


def test_create_rejects_empty_fields(board: MessageBoard) -> None:
    for title, body in (("", "World"), ("Hi", ""), (None, "World")):
        with pytest.raises(InvalidPayloadError):
            board.create_message(title, body)
    assert board.count() == 0


def test_create_collision_reports_data_exist() -> None:
    board = MessageBoard(InMemoryOrderedMap(), id_factory=lambda: "fixed-id")
    first = board.create_message("first", "body")

    with pytest.raises(DataExistError) as exc:
        board.create_message("second", "body")
    assert "fixed-id" in exc.value.detail
    assert board.get_message("fixed-id") == first
    assert board.count() == 1


def test_get_validates_id(board: MessageBoard) -> None:
    with pytest.raises(InvalidPayloadError):
        board.get_message("")
    with pytest.raises(InvalidPayloadError):
        board.get_message(None)
    with pytest.raises(NotFoundError) as exc:
        board.get_message("nonexistent-id")
    assert exc.value.detail == "the message with id=nonexistent-id not found"


def test_list_on_empty_store_is_not_found(board: MessageBoard) -> None:
    with pytest.raises(NotFoundError):
        board.list_messages()


def test_update_merges_fields(board: MessageBoard) -> None:
    created = board.create_message("Hi", "World")
    updated = board.update_message(
        created.id, {"body": "Earth", "id": "hijack", "createdAt": "1999-01-01"}
    )

    assert updated.id == created.id
    assert updated.title == "Hi"
    assert updated.body == "Earth"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert board.get_message(created.id) == updated


def test_update_missing_id_is_not_found(board: MessageBoard) -> None:
    board.create_message("Hi", "World")
    with pytest.raises(NotFoundError):
        board.update_message("missing", {"body": "Earth"})
    assert board.count() == 1


def test_update_rejects_empty_title(board: MessageBoard) -> None:
    created = board.create_message("Hi", "World")
    with pytest.raises(InvalidPayloadError):
        board.update_message(created.id, {"title": ""})
    assert board.get_message(created.id) == created


def test_update_advances_timestamp_when_clock_is_frozen() -> None:
    frozen = datetime(2024, 5, 1, tzinfo=timezone.utc)
    board = MessageBoard(InMemoryOrderedMap(), clock=lambda: frozen)
    created = board.create_message("Hi", "World")

    first = board.update_message(created.id, {"body": "Earth"})
    second = board.update_message(created.id, {"body": "Mars"})
    assert created.updated_at < first.updated_at < second.updated_at
    assert second.created_at == frozen


def test_delete_removes_record(board: MessageBoard) -> None:
    keep = board.create_message("keep", "me")
    gone = board.create_message("drop", "me")

    assert board.delete_message(gone.id) == gone
    assert board.count() == 1
    with pytest.raises(NotFoundError):
        board.get_message(gone.id)
    with pytest.raises(NotFoundError):
        board.delete_message(gone.id)
    assert board.get_message(keep.id) == keep


def test_reset_reports_removed_count(board: MessageBoard) -> None:
    for i in range(3):
        board.create_message(f"title {i}", "body")

    assert board.reset_store() == "Removed 3 items"
    assert board.count() == 0
    with pytest.raises(NotFoundError) as exc:
        board.reset_store()
    assert exc.value.detail == "Store is empty"


def test_list_keys_bounds(board: MessageBoard) -> None:
    for i in range(4):
        board.create_message(f"title {i}", "body")
    every = board.list_keys()

    assert len(every) == board.count() == 4
    assert every == sorted(every)
    assert board.list_keys(offset=1) == every
    assert board.list_keys(1, 2) == every[1:3]
    assert board.list_keys("2", "10") == every[2:]
    assert board.list_keys(4, 2) == []
    with pytest.raises(InvalidPayloadError):
        board.list_keys(-1, 2)


def test_message_scenario(board: MessageBoard) -> None:
    created = board.create_message("Hi", "World")
    wire = created.to_wire()
    assert set(wire) == {"id", "title", "body", "attachmentURL", "createdAt", "updatedAt"}

    updated = board.update_message(created.id, {"body": "Earth"})
    assert (updated.title, updated.body, updated.attachment_url) == ("Hi", "Earth", "")

    assert board.delete_message(created.id) == updated
    with pytest.raises(NotFoundError):
        board.get_message(created.id)
