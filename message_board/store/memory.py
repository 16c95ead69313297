from __future__ import annotations

from bisect import bisect_left, insort

from message_board.domain.message import Message
from message_board.store.base import ABSENT, Lookup, OrderedMap, Present


class InMemoryOrderedMap(OrderedMap):
    """Process-local ordered map; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, Message] = {}
        self._sorted_keys: list[str] = []

    def insert(self, key: str, value: Message) -> Lookup:
        previous = self._items.get(key)
        self._items[key] = value
        if previous is None:
            insort(self._sorted_keys, key)
            return ABSENT
        return Present(previous)

    def get(self, key: str) -> Lookup:
        if key in self._items:
            return Present(self._items[key])
        return ABSENT

    def remove(self, key: str) -> Lookup:
        if key not in self._items:
            return ABSENT
        value = self._items.pop(key)
        del self._sorted_keys[bisect_left(self._sorted_keys, key)]
        return Present(value)

    def len(self) -> int:
        return len(self._items)

    def keys(self, offset: int, limit: int) -> list[str]:
        offset = max(offset, 0)
        limit = max(limit, 0)
        return self._sorted_keys[offset : offset + limit]

    def values(self) -> list[Message]:
        return [self._items[key] for key in self._sorted_keys]
