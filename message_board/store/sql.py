from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, func, select, text
from sqlalchemy.orm import Session, sessionmaker

from message_board.db.models import MessageRecord
from message_board.db.session import build_session_factory, init_schema
from message_board.domain.message import Message
from message_board.store.base import ABSENT, Lookup, OrderedMap, Present


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _to_message(row: MessageRecord) -> Message:
    return Message(
        id=row.id,
        title=row.title,
        body=row.body,
        attachment_url=row.attachment_url,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlMessageMap(OrderedMap):
    """Durable ordered map over the ``messages`` table.

    Every mutation commits in its own session. Iteration order is ascending
    primary key.
    """

    def __init__(
        self, engine: Engine, session_factory: sessionmaker[Session] | None = None
    ) -> None:
        self.engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    def create_schema(self) -> None:
        init_schema(self.engine)

    def insert(self, key: str, value: Message) -> Lookup:
        with self._session_factory() as db:
            row = db.get(MessageRecord, key)
            previous: Lookup = ABSENT
            if row is None:
                row = MessageRecord(id=key)
                db.add(row)
            else:
                previous = Present(_to_message(row))
            row.title = value.title
            row.body = value.body
            row.attachment_url = value.attachment_url
            row.created_at = value.created_at
            row.updated_at = value.updated_at
            db.commit()
            return previous

    def get(self, key: str) -> Lookup:
        with self._session_factory() as db:
            row = db.get(MessageRecord, key)
            if row is None:
                return ABSENT
            return Present(_to_message(row))

    def remove(self, key: str) -> Lookup:
        with self._session_factory() as db:
            row = db.get(MessageRecord, key)
            if row is None:
                return ABSENT
            removed = _to_message(row)
            db.delete(row)
            db.commit()
            return Present(removed)

    def len(self) -> int:
        with self._session_factory() as db:
            return int(db.execute(select(func.count()).select_from(MessageRecord)).scalar_one())

    def keys(self, offset: int, limit: int) -> list[str]:
        offset = max(offset, 0)
        limit = max(limit, 0)
        if limit == 0:
            return []
        with self._session_factory() as db:
            query = (
                select(MessageRecord.id)
                .order_by(MessageRecord.id)
                .offset(offset)
                .limit(limit)
            )
            return list(db.scalars(query).all())

    def values(self) -> list[Message]:
        with self._session_factory() as db:
            rows = db.scalars(select(MessageRecord).order_by(MessageRecord.id)).all()
            return [_to_message(row) for row in rows]

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
