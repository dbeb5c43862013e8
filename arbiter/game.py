"""Game session: owns one board and plays notation tokens against it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .board import Board
from .constants import COLOR_NAMES, START_FEN
from .errors import GameOverError, IllegalMoveError, KingMissing
from .move import MoveDescriptor
from .notation import parse_move, split_tokens, to_notation
from .outcome import Outcome, classify
from .resolver import resolve

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlayedMove:
    ply: int
    token: str
    move: MoveDescriptor

    @property
    def uci(self) -> str:
        return self.move.uci()


@dataclass
class Game:
    """A single game. The board is only written by :meth:`play`.

    A rejected move leaves the board exactly as it was; the caller reports the
    error and asks for another move.
    """

    board: Board = field(default_factory=Board)
    history: list[PlayedMove] = field(default_factory=list)
    outcome: Outcome | None = None

    @classmethod
    def from_fen(cls, fen: str = START_FEN) -> Game:
        return cls(board=Board(fen))

    def __post_init__(self) -> None:
        if self.outcome is None:
            self.outcome = classify(self.board)

    @property
    def ply(self) -> int:
        return len(self.history)

    def play(self, token: str) -> Outcome:
        if self.outcome.is_over:
            raise GameOverError(f"Game is over: {self.outcome.summary}")

        mover = COLOR_NAMES[self.board.side_to_move]
        move = parse_move(token)
        try:
            resolve(self.board, move)
        except IllegalMoveError as exc:
            logger.info("rejected %s move %r: %s", mover, token, exc.code)
            raise

        self.board.apply(move)
        self.history.append(PlayedMove(ply=self.ply + 1, token=token, move=move))
        logger.debug("ply %d: %s played %s (%s)", self.ply, mover, to_notation(move), move.uci())

        try:
            self.outcome = classify(self.board)
        except KingMissing:
            logger.error("board lost a king after %r; position %s", token, self.board.to_fen())
            raise

        if self.outcome.is_over:
            logger.info("game over after %d plies: %s", self.ply, self.outcome.summary)
        return self.outcome

    def play_line(self, text: str) -> Outcome:
        """Play every token in *text* in order, stopping at the first error."""
        for token in split_tokens(text):
            self.play(token)
        return self.outcome
