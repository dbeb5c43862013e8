"""Game outcome classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .attacks import is_attacked
from .board import Board
from .constants import COLOR_NAMES, opposite
from .movegen import has_legal_move


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass(frozen=True, slots=True)
class Outcome:
    status: Status
    winner: int | None = None
    in_check: bool = False

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def summary(self) -> str:
        if self.status == Status.CHECKMATE:
            return f"{COLOR_NAMES[self.winner]} wins by checkmate"
        if self.status == Status.STALEMATE:
            return "draw by stalemate"
        return "game incomplete"

    def __str__(self) -> str:
        return self.summary


def classify(board: Board) -> Outcome:
    side = board.side_to_move
    attacked = is_attacked(board, side)
    if has_legal_move(board, side):
        return Outcome(Status.IN_PROGRESS, in_check=attacked)
    if attacked:
        return Outcome(Status.CHECKMATE, winner=opposite(side), in_check=True)
    return Outcome(Status.STALEMATE)
