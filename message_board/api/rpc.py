"""Direct-call surface: one route per exported board function.

Each route answers 200 with the tagged result, ``{"Ok": ...}`` or
``{"Err": {"NotFound" | "InvalidPayload" | "DataExist": detail}}``, so callers
branch on the tag instead of the HTTP status.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from message_board.api.deps import Board
from message_board.api.schemas import CreateMessageRequest, KeysRequest, MessageIdRequest
from message_board.domain.message import Message
from message_board.services.messages import MessageBoard
from message_board.services.result import Result, capture


class MessageBoardRpc:
    def __init__(self, board: MessageBoard) -> None:
        self.board = board

    def get_messages(self) -> Result[list[Message]]:
        return capture(self.board.list_messages)

    def get_keys(self, offset: Any = None, limit: Any = None) -> Result[list[str]]:
        return capture(self.board.list_keys, offset, limit)

    def get_message(self, message_id: str | None) -> Result[Message]:
        return capture(self.board.get_message, message_id)

    def add_message(self, title: str | None, body: str | None) -> Result[Message]:
        return capture(self.board.create_message, title, body)

    def reset_store(self) -> Result[str]:
        return capture(self.board.reset_store)


router = APIRouter(prefix="/rpc", tags=["rpc"])


@router.post("/getMessages")
def get_messages(board: Board) -> dict[str, Any]:
    return MessageBoardRpc(board).get_messages().to_wire()


@router.post("/getKeys")
def get_keys(board: Board, payload: KeysRequest | None = None) -> dict[str, Any]:
    payload = payload or KeysRequest()
    return MessageBoardRpc(board).get_keys(payload.offset, payload.limit).to_wire()


@router.post("/getMessage")
def get_message(board: Board, payload: MessageIdRequest | None = None) -> dict[str, Any]:
    payload = payload or MessageIdRequest()
    return MessageBoardRpc(board).get_message(payload.id).to_wire()


@router.post("/addMessage")
def add_message(board: Board, payload: CreateMessageRequest | None = None) -> dict[str, Any]:
    payload = payload or CreateMessageRequest()
    return MessageBoardRpc(board).add_message(payload.title, payload.body).to_wire()


@router.post("/resetStore")
def reset_store(board: Board) -> dict[str, Any]:
    return MessageBoardRpc(board).reset_store().to_wire()
