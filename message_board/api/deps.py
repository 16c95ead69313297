from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from message_board.services.messages import MessageBoard


def get_board(request: Request) -> MessageBoard:
    return request.app.state.board


Board = Annotated[MessageBoard, Depends(get_board)]
