from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from message_board.services.errors import MessageBoardError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def to_wire(self) -> dict[str, Any]:
        return {"Ok": _wire_value(self.value)}


@dataclass(frozen=True)
class Err:
    error: MessageBoardError

    def to_wire(self) -> dict[str, Any]:
        return {"Err": self.error.to_variant()}


Result = Union[Ok[T], Err]


def capture(operation: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Run a board operation, folding classified failures into ``Err``."""
    try:
        return Ok(operation(*args, **kwargs))
    except MessageBoardError as exc:
        return Err(exc)


def _wire_value(value: Any) -> Any:
    if isinstance(value, list):
        return [_wire_value(item) for item in value]
    to_wire = getattr(value, "to_wire", None)
    if callable(to_wire):
        return to_wire()
    return value
