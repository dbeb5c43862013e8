"""Move descriptor filled in by the notation layer and the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import (
    CASTLE_KINGSIDE,
    CASTLE_NONE,
    CASTLE_QUEENSIDE,
    PAWN,
    PIECE_LETTERS,
    square_name,
)

if TYPE_CHECKING:
    from .board import Piece


@dataclass(slots=True)
class MoveDescriptor:
    """A move as declared by notation, completed in place by the resolver.

    The notation layer sets ``piece``, the destination and whichever of the
    optional fields the token carried. :func:`arbiter.resolver.resolve` then
    fills ``source_file``, ``source_rank`` and ``moving_piece`` (plus the
    en-passant and double-push markers). Only a complete descriptor may be
    applied to a board.
    """

    piece: int
    to_file: int
    to_rank: int
    from_file: int | None = None
    from_rank: int | None = None
    capture: bool = False
    promotion: int | None = None
    castle: int = CASTLE_NONE

    en_passant: bool = False
    double_push: bool = False
    source_file: int | None = None
    source_rank: int | None = None
    moving_piece: Piece | None = None

    @property
    def is_complete(self) -> bool:
        return (
            self.source_file is not None
            and self.source_rank is not None
            and self.moving_piece is not None
        )

    @property
    def source(self) -> tuple[int, int] | None:
        if self.source_file is None or self.source_rank is None:
            return None
        return self.source_file, self.source_rank

    @property
    def destination(self) -> tuple[int, int]:
        return self.to_file, self.to_rank

    def complete(self, source_file: int, source_rank: int, moving_piece: Piece) -> MoveDescriptor:
        self.source_file = source_file
        self.source_rank = source_rank
        self.moving_piece = moving_piece
        return self

    def uci(self) -> str:
        if not self.is_complete:
            raise ValueError("Move has no resolved origin")
        promo = ""
        if self.promotion is not None:
            promo = PIECE_LETTERS[self.promotion].lower()
        origin = square_name(self.source_file, self.source_rank)
        return f"{origin}{square_name(self.to_file, self.to_rank)}{promo}"

    def __str__(self) -> str:
        if self.castle == CASTLE_KINGSIDE:
            return "O-O"
        if self.castle == CASTLE_QUEENSIDE:
            return "O-O-O"
        if self.is_complete:
            return self.uci()
        letter = "" if self.piece == PAWN else PIECE_LETTERS[self.piece]
        return f"{letter}{'x' if self.capture else ''}{square_name(self.to_file, self.to_rank)}"
