from __future__ import annotations

from message_board.api.rpc import MessageBoardRpc
from message_board.services.errors import NotFoundError
from message_board.services.messages import MessageBoard
from message_board.services.result import Err, Ok, capture


def test_capture_wraps_classified_errors() -> None:
    def missing() -> None:
        raise NotFoundError("nothing here")

    result = capture(missing)
    assert isinstance(result, Err)
    assert result.to_wire() == {"Err": {"NotFound": "nothing here"}}
    assert capture(lambda: 1).to_wire() == {"Ok": 1}


def test_rpc_mirrors_board_operations(board: MessageBoard) -> None:
    rpc = MessageBoardRpc(board)

    assert rpc.get_messages().to_wire() == {"Err": {"NotFound": "there are no data"}}
    assert rpc.reset_store().to_wire() == {"Err": {"NotFound": "Store is empty"}}
    assert rpc.add_message("", "body").to_wire() == {
        "Err": {"InvalidPayload": "You didnt provide all the data, try again"}
    }

    added = rpc.add_message("Hi", "World")
    assert isinstance(added, Ok)
    message = added.value

    assert rpc.get_message(message.id) == Ok(message)
    assert rpc.get_message("").to_wire() == {"Err": {"InvalidPayload": "you provided wrong data"}}
    assert rpc.get_keys().to_wire() == {"Ok": [message.id]}
    assert rpc.get_keys(0, 0).to_wire() == {"Ok": []}
    assert rpc.get_messages().to_wire() == {"Ok": [message.to_wire()]}
    assert rpc.reset_store().to_wire() == {"Ok": "Removed 1 items"}
