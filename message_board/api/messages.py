from __future__ import annotations

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from message_board.api.deps import Board
from message_board.api.schemas import (
    CreateMessageRequest,
    ErrorResponse,
    MessageResponse,
    UpdateMessageRequest,
)
from message_board.services.errors import InvalidPayloadError, NotFoundError

router = APIRouter(prefix="/messages", tags=["messages"])

TEXT_ERROR = {"content": {"text/plain": {}}}


@router.post(
    "",
    response_model=MessageResponse,
    responses={400: TEXT_ERROR, 409: {"model": ErrorResponse}},
)
def create_message(payload: CreateMessageRequest, board: Board) -> Response:
    try:
        message = board.create_message(payload.title, payload.body)
    except InvalidPayloadError as exc:
        return PlainTextResponse(exc.detail, status_code=400)
    return JSONResponse(content=message.to_wire())


@router.get("", response_model=list[MessageResponse])
def read_messages(board: Board) -> Response:
    try:
        rows = board.list_messages()
    except NotFoundError:
        rows = []
    return JSONResponse(content=[row.to_wire() for row in rows])


@router.get("/{message_id}", response_model=MessageResponse, responses={404: TEXT_ERROR})
def read_message(message_id: str, board: Board) -> Response:
    try:
        message = board.get_message(message_id)
    except NotFoundError:
        return PlainTextResponse(f"the message with id={message_id} not found", status_code=404)
    return JSONResponse(content=message.to_wire())


@router.put("/{message_id}", response_model=MessageResponse, responses={400: TEXT_ERROR})
def update_message(
    message_id: str, payload: UpdateMessageRequest, board: Board
) -> Response:
    try:
        message = board.update_message(message_id, payload.changes())
    except NotFoundError:
        return PlainTextResponse(
            f"couldn't update a message with id={message_id}. message not found",
            status_code=400,
        )
    except InvalidPayloadError as exc:
        return PlainTextResponse(
            f"couldn't update a message with id={message_id}. {exc.detail}: "
            + "; ".join(exc.details),
            status_code=400,
        )
    return JSONResponse(content=message.to_wire())


@router.delete("/{message_id}", response_model=MessageResponse, responses={400: TEXT_ERROR})
def delete_message(message_id: str, board: Board) -> Response:
    try:
        message = board.delete_message(message_id)
    except NotFoundError:
        return PlainTextResponse(
            f"couldn't delete a message with id={message_id}. message not found",
            status_code=400,
        )
    return JSONResponse(content=message.to_wire())
