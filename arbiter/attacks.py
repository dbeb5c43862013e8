"""Attack detection: is a king (or any square) under attack."""

from __future__ import annotations

from .board import Board
from .constants import (
    BISHOP,
    BISHOP_DIRS,
    COLOR_NAMES,
    KING,
    KING_DELTAS,
    KNIGHT,
    KNIGHT_DELTAS,
    PAWN,
    QUEEN,
    ROOK,
    ROOK_DIRS,
    forward,
    in_bounds,
    opposite,
)
from .errors import KingMissing
from .move import MoveDescriptor


def king_square(board: Board, color: int) -> tuple[int, int]:
    for file_idx, rank_idx, piece in board.pieces(color):
        if piece.kind == KING:
            return file_idx, rank_idx
    raise KingMissing(f"No {COLOR_NAMES[color]} king on the board")


def _ray_hits(board: Board, file_idx: int, rank_idx: int, by_color: int, dirs, kinds) -> bool:
    for df, dr in dirs:
        nf, nr = file_idx + df, rank_idx + dr
        while in_bounds(nf, nr):
            piece = board.piece_at(nf, nr)
            if piece is not None:
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
            nf += df
            nr += dr
    return False


def _leaper_hits(board: Board, file_idx: int, rank_idx: int, by_color: int, deltas, kind: int) -> bool:
    for df, dr in deltas:
        nf, nr = file_idx + df, rank_idx + dr
        if not in_bounds(nf, nr):
            continue
        piece = board.piece_at(nf, nr)
        if piece is not None and piece.color == by_color and piece.kind == kind:
            return True
    return False


def is_square_attacked(board: Board, file_idx: int, rank_idx: int, by_color: int) -> bool:
    if _ray_hits(board, file_idx, rank_idx, by_color, ROOK_DIRS, (ROOK, QUEEN)):
        return True
    if _ray_hits(board, file_idx, rank_idx, by_color, BISHOP_DIRS, (BISHOP, QUEEN)):
        return True
    if _leaper_hits(board, file_idx, rank_idx, by_color, KNIGHT_DELTAS, KNIGHT):
        return True

    # An attacking pawn stands one step behind the square in its own direction of travel.
    behind = -forward(by_color)
    pawn_deltas = ((-1, behind), (1, behind))
    if _leaper_hits(board, file_idx, rank_idx, by_color, pawn_deltas, PAWN):
        return True

    return _leaper_hits(board, file_idx, rank_idx, by_color, KING_DELTAS, KING)


def is_attacked(board: Board, color: int) -> bool:
    """Whether *color*'s king is attacked. Raises :class:`KingMissing` without a king."""
    file_idx, rank_idx = king_square(board, color)
    return is_square_attacked(board, file_idx, rank_idx, opposite(color))


def leaves_king_attacked(board: Board, move: MoveDescriptor) -> bool:
    """Apply *move* to a scratch copy and report whether the mover's king is then attacked."""
    scratch = board.copy()
    scratch.apply(move)
    return is_attacked(scratch, move.moving_piece.color)
