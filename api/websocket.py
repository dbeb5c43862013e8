"""WebSocket route for playing a live game one move at a time."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ConfigDict, StrictStr

from arbiter.constants import START_FEN, WHITE
from arbiter.errors import ArbiterError, KingMissing
from arbiter.game import Game
from arbiter.notation import to_notation

router = APIRouter()
logger = logging.getLogger(__name__)


def _serialize_state(game: Game) -> dict:
    last = game.history[-1] if game.history else None
    return {
        "type": "state",
        "fen": game.board.to_fen(),
        "side_to_move": "w" if game.board.side_to_move == WHITE else "b",
        "ply": game.ply,
        "status": game.outcome.status.value,
        "summary": game.outcome.summary,
        "in_check": game.outcome.in_check,
        "last_move": last.uci if last else None,
        "last_move_san": to_notation(last.move) if last else None,
    }


def _serialize_error(exc: ArbiterError) -> dict:
    return {"type": "error", **exc.to_dict()}

class ClientMessage(BaseModel):
    """One frame from the client: either a move token or a reset request."""

    model_config = ConfigDict(extra="forbid")

    move: StrictStr | None = None
    reset: StrictStr | None = None


def _invalid_message(message: str) -> dict:
    return {"type": "error", "code": "InvalidMessage", "message": message}


def _parse_frame(text: str) -> ClientMessage:
    message = ClientMessage.model_validate_json(text)
    if not message.model_fields_set:
        raise ValueError("expected a 'move' or 'reset' field")
    return message


@router.websocket("/ws/game")
async def game_websocket(websocket: WebSocket) -> None:
    await websocket.accept()

    game = Game.from_fen(START_FEN)
    await websocket.send_json(_serialize_state(game))

    try:
        while True:
            text = await websocket.receive_text()
            try:
                message = _parse_frame(text)
            except ValueError as exc:
                # ValidationError subclasses ValueError.
                logger.debug("rejecting frame %r: %s", text, exc)
                await websocket.send_json(_invalid_message(str(exc)))
                continue

            if "reset" in message.model_fields_set:
                try:
                    game = Game.from_fen(message.reset or START_FEN)
                except (ValueError, KingMissing) as exc:
                    await websocket.send_json({"type": "error", "code": "InvalidFen", "message": str(exc)})
                    continue
                await websocket.send_json(_serialize_state(game))
                continue

            try:
                game.play(message.move or "")
            except KingMissing as exc:
                logger.error("closing game socket: %s", exc)
                await websocket.send_json(_serialize_error(exc))
                await websocket.close(code=1011)
                return
            except ArbiterError as exc:
                await websocket.send_json(_serialize_error(exc))
                continue

            await websocket.send_json(_serialize_state(game))
    except WebSocketDisconnect:
        return
