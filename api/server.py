"""FastAPI server exposing move resolution and game status endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from arbiter.board import Board
from arbiter.config import get_settings
from arbiter.constants import START_FEN, WHITE, square_name
from arbiter.errors import ArbiterError, KingMissing
from arbiter.game import Game
from arbiter.movegen import generate_legal_moves
from arbiter.notation import parse_move, to_notation
from arbiter.outcome import classify
from arbiter.perft import perft, perft_divide
from arbiter.resolver import resolve

from .websocket import router as websocket_router

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)
logger = logging.getLogger(__name__)


class PositionRequest(BaseModel):
    fen: str = Field(default=START_FEN)


class MoveRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    move: str = Field(min_length=2, max_length=10)


class GameRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    moves: list[str] = Field(default_factory=list, max_length=1000)


class PerftRequest(BaseModel):
    fen: str = Field(default=START_FEN)
    depth: int = Field(default=3, ge=1, le=settings.max_perft_depth)
    divide: bool = Field(default=False)


app = FastAPI(title=settings.api_title, version="0.3.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(websocket_router)


def _board_from_fen(fen: str) -> Board:
    try:
        return Board(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"code": "InvalidFen", "message": str(exc)}) from exc


def _side_name(board: Board) -> str:
    return "w" if board.side_to_move == WHITE else "b"


def position_payload(board: Board) -> dict:
    try:
        outcome = classify(board)
    except KingMissing as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
    fen = board.to_fen()
    return {
        "fen": fen,
        "side_to_move": _side_name(board),
        "castling": fen.split()[2],
        "en_passant": None if board.en_passant is None else square_name(*board.en_passant),
        "status": outcome.status.value,
        "summary": outcome.summary,
        "in_check": outcome.in_check,
        "legal_moves": [move.uci() for move in generate_legal_moves(board)],
    }


def _rejected(exc: ArbiterError, **extra) -> HTTPException:
    logger.info("rejected move: %s", exc.code)
    return HTTPException(status_code=400, detail={**exc.to_dict(), **extra})


@app.get("/")
def root() -> dict[str, str]:
    return {"status": "ok", "service": settings.api_title}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/position")
def position(payload: PositionRequest) -> dict:
    return position_payload(_board_from_fen(payload.fen))


@app.post("/move")
def move(payload: MoveRequest) -> dict:
    board = _board_from_fen(payload.fen)
    try:
        played = resolve(board, parse_move(payload.move))
        board.apply(played)
    except KingMissing as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
    except ArbiterError as exc:
        raise _rejected(exc) from exc

    response = position_payload(board)
    response["last_move"] = played.uci()
    response["last_move_san"] = to_notation(played)
    return response


@app.post("/game")
def game(payload: GameRequest) -> dict:
    board = _board_from_fen(payload.fen)
    try:
        session = Game(board=board)
    except KingMissing as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc

    for ply, token in enumerate(payload.moves, start=1):
        try:
            session.play(token)
        except KingMissing as exc:
            raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
        except ArbiterError as exc:
            raise _rejected(exc, ply=ply, move=token) from exc

    response = position_payload(session.board)
    response["moves"] = [played.uci for played in session.history]
    return response


@app.post("/perft")
def run_perft(payload: PerftRequest) -> dict:
    board = _board_from_fen(payload.fen)
    try:
        if payload.divide:
            return {"divide": perft_divide(board, payload.depth)}
        return {"nodes": perft(board, payload.depth)}
    except KingMissing as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
