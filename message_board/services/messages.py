from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Any, Callable

from ddtrace import tracer

from message_board.core.logging import log_info
from message_board.domain.message import Message
from message_board.observability.metrics import record_operation, record_stored
from message_board.services.errors import DataExistError, MessageBoardError, NotFoundError
from message_board.services.validators import (
    extract_changes,
    parse_bound,
    validate_id,
    validate_new_message,
)
from message_board.store.base import OrderedMap, Present


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_message_id() -> str:
    return str(uuid.uuid4())


class MessageBoard:
    """Every read and write of board messages goes through here.

    One instance is built at startup and shared by both the REST and the
    direct-call routes. Operations run one at a time under ``_lock``.
    """

    def __init__(
        self,
        store: OrderedMap,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_message_id,
    ) -> None:
        self.store = store
        self._clock = clock
        self._id_factory = id_factory
        self._lock = RLock()

    def count(self) -> int:
        with self._lock:
            return self.store.len()

    def list_messages(self) -> list[Message]:
        with self._lock, tracer.trace("messages.list", resource="list_messages") as span:
            data = self.store.values()
            span.set_metric("messages.count", len(data))
            if not data:
                raise self._fail("list", NotFoundError("there are no data"))
            record_operation("list")
            return data

    def list_keys(self, offset: Any = None, limit: Any = None) -> list[str]:
        with self._lock, tracer.trace("messages.keys", resource="list_keys") as span:
            try:
                start = parse_bound("offset", offset)
                length = parse_bound("limit", limit)
            except MessageBoardError as exc:
                raise self._fail("keys", exc) from None
            if start is None or length is None:
                keys = self.store.keys(0, self.store.len())
            else:
                keys = self.store.keys(start, length)
            span.set_metric("keys.count", len(keys))
            record_operation("keys")
            return keys

    def get_message(self, message_id: str | None) -> Message:
        with self._lock, tracer.trace("messages.get", resource="get_message"):
            found = self._lookup("get", message_id)
            record_operation("get")
            return found

    def create_message(self, title: Any, body: Any) -> Message:
        with self._lock, tracer.trace("messages.create", resource="create_message") as span:
            try:
                validate_new_message(title, body)
            except MessageBoardError as exc:
                raise self._fail("create", exc) from None

            now = self._clock()
            message = Message(
                id=self._id_factory(),
                title=title,
                body=body,
                attachment_url="",
                created_at=now,
                updated_at=now,
            )
            span.set_tag("message.id", message.id)

            # Ids are random; a collision must surface rather than overwrite.
            if isinstance(self.store.get(message.id), Present):
                raise self._fail(
                    "create",
                    DataExistError(
                        f"Message with ID: {message.id} exist. "
                        "If you want to update please use 'update' message"
                    ),
                )

            self.store.insert(message.id, message)
            self._stored()
            record_operation("create")
            log_info("message created", operation="create", message_id=message.id)
            return message

    def update_message(self, message_id: str | None, fields: dict[str, Any] | None) -> Message:
        with self._lock, tracer.trace("messages.update", resource="update_message") as span:
            current = self._lookup("update", message_id)
            try:
                changes = extract_changes(fields)
            except MessageBoardError as exc:
                raise self._fail("update", exc) from None
            span.set_metric("changes.count", len(changes))

            updated_at = self._clock()
            previous = current.updated_at or current.created_at
            if updated_at <= previous:
                # The clock has not ticked since the last write.
                updated_at = previous + timedelta(microseconds=1)
            changes["updated_at"] = updated_at

            merged = current.model_copy(update=changes)
            self.store.insert(current.id, merged)
            record_operation("update")
            log_info("message updated", operation="update", message_id=current.id)
            return merged

    def delete_message(self, message_id: str | None) -> Message:
        with self._lock, tracer.trace("messages.delete", resource="delete_message"):
            try:
                key = validate_id(message_id)
            except MessageBoardError as exc:
                raise self._fail("delete", exc) from None
            removed = self.store.remove(key)
            if not isinstance(removed, Present):
                raise self._fail(
                    "delete", NotFoundError(f"the message with id={key} not found")
                )
            self._stored()
            record_operation("delete")
            log_info("message deleted", operation="delete", message_id=key)
            return removed.value

    def reset_store(self) -> str:
        with self._lock, tracer.trace("messages.reset", resource="reset_store") as span:
            size = self.store.len()
            if size < 1:
                raise self._fail("reset", NotFoundError("Store is empty"))

            for key in self.store.keys(0, size):
                self.store.remove(key)
            span.set_metric("messages.deleted", size)
            self._stored()
            record_operation("reset")
            log_info(f"removed {size} messages", operation="reset")
            return f"Removed {size} items"

    def _lookup(self, operation: str, message_id: str | None) -> Message:
        try:
            key = validate_id(message_id)
        except MessageBoardError as exc:
            raise self._fail(operation, exc) from None
        found = self.store.get(key)
        if not isinstance(found, Present):
            raise self._fail(operation, NotFoundError(f"the message with id={key} not found"))
        return found.value

    def _stored(self) -> None:
        record_stored(self.store.len())

    @staticmethod
    def _fail(operation: str, exc: MessageBoardError) -> MessageBoardError:
        record_operation(operation, exc.kind)
        log_info(
            "message operation rejected",
            operation=operation,
            error_kind=exc.kind,
        )
        return exc
