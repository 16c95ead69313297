"""Ordered map contract the message board is written against.

Implementations keep values under string keys and enumerate them in one
stable order (ascending key order), so ``keys(offset, limit)`` and
``values()`` always agree with each other.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from message_board.domain.message import Message

T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    value: T


@dataclass(frozen=True)
class Absent:
    def __bool__(self) -> bool:
        return False


ABSENT = Absent()

Lookup = Union[Present[Message], Absent]


class OrderedMap(ABC):
    @abstractmethod
    def insert(self, key: str, value: Message) -> Lookup:
        """Store ``value`` under ``key``, returning the value it replaced."""

    @abstractmethod
    def get(self, key: str) -> Lookup:
        ...

    @abstractmethod
    def remove(self, key: str) -> Lookup:
        """Delete ``key``; an absent key is left alone and reported as ``ABSENT``."""

    @abstractmethod
    def len(self) -> int:
        ...

    @abstractmethod
    def keys(self, offset: int, limit: int) -> list[str]:
        """Return up to ``limit`` keys starting at ordinal ``offset``."""

    @abstractmethod
    def values(self) -> list[Message]:
        ...

    def __len__(self) -> int:
        return self.len()

    def ping(self) -> None:
        """Raise if the backing storage cannot be reached."""
