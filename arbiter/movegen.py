"""Pseudo-legal move generation, castling validation and the legal-move oracle."""

from __future__ import annotations

from dataclasses import replace

from .attacks import is_square_attacked, leaves_king_attacked
from .board import Board, Piece
from .constants import (
    CASTLE_GEOMETRY,
    CASTLE_KINGSIDE,
    CASTLE_QUEENSIDE,
    COLOR_NAMES,
    KING,
    KING_DELTAS,
    KNIGHT,
    KNIGHT_DELTAS,
    PAWN,
    PROMOTION_PIECES,
    QUEEN,
    ROOK,
    SLIDER_DIRS,
    castle_right,
    forward,
    home_rank,
    in_bounds,
    opposite,
    pawn_start_rank,
    promotion_rank,
)
from .errors import (
    CastlingPathBlocked,
    CastlingRightsRevoked,
    CastlingRookMissing,
    CastlingThroughCheck,
    IllegalMoveError,
)
from .move import MoveDescriptor

_WING = {CASTLE_KINGSIDE: "kingside", CASTLE_QUEENSIDE: "queenside"}


def _make(
    piece: Piece,
    from_file: int,
    from_rank: int,
    to_file: int,
    to_rank: int,
    capture: bool = False,
    **flags,
) -> MoveDescriptor:
    move = MoveDescriptor(piece=piece.kind, to_file=to_file, to_rank=to_rank, capture=capture, **flags)
    return move.complete(from_file, from_rank, piece)


def _generate_pawn_moves(board: Board, file_idx: int, rank_idx: int, pawn: Piece, moves: list[MoveDescriptor]) -> None:
    step = forward(pawn.color)
    last_rank = promotion_rank(pawn.color)

    def promo(to_rank: int) -> int | None:
        return QUEEN if to_rank == last_rank else None

    one_up = rank_idx + step
    if in_bounds(file_idx, one_up) and board.piece_at(file_idx, one_up) is None:
        moves.append(_make(pawn, file_idx, rank_idx, file_idx, one_up, promotion=promo(one_up)))
        two_up = rank_idx + 2 * step
        if rank_idx == pawn_start_rank(pawn.color) and board.piece_at(file_idx, two_up) is None:
            moves.append(_make(pawn, file_idx, rank_idx, file_idx, two_up, double_push=True))

    for df in (-1, 1):
        cap_file = file_idx + df
        if not in_bounds(cap_file, one_up):
            continue
        target = board.piece_at(cap_file, one_up)
        if target is not None:
            if target.color != pawn.color:
                moves.append(
                    _make(pawn, file_idx, rank_idx, cap_file, one_up, capture=True, promotion=promo(one_up))
                )
        elif board.en_passant == (cap_file, one_up) and pawn.color == board.side_to_move:
            moves.append(_make(pawn, file_idx, rank_idx, cap_file, one_up, capture=True, en_passant=True))


def _generate_leaper_moves(board: Board, file_idx: int, rank_idx: int, piece: Piece, deltas, moves: list[MoveDescriptor]) -> None:
    for df, dr in deltas:
        nf, nr = file_idx + df, rank_idx + dr
        if not in_bounds(nf, nr):
            continue
        target = board.piece_at(nf, nr)
        if target is not None and target.color == piece.color:
            continue
        moves.append(_make(piece, file_idx, rank_idx, nf, nr, capture=target is not None))


def _generate_slider_moves(board: Board, file_idx: int, rank_idx: int, piece: Piece, directions, moves: list[MoveDescriptor]) -> None:
    for df, dr in directions:
        nf, nr = file_idx + df, rank_idx + dr
        while in_bounds(nf, nr):
            target = board.piece_at(nf, nr)
            if target is None:
                moves.append(_make(piece, file_idx, rank_idx, nf, nr))
            else:
                if target.color != piece.color:
                    moves.append(_make(piece, file_idx, rank_idx, nf, nr, capture=True))
                break
            nf += df
            nr += dr


def check_castling(board: Board, color: int, side: int) -> IllegalMoveError | None:
    """Return the first reason *color* cannot castle on *side*, or ``None`` if it can.

    The attack conditions are evaluated on scratch copies with the king stepped
    one and two files towards the rook.
    """
    rank_idx = home_rank(color)
    king_file, rook_file, between, crossed = CASTLE_GEOMETRY[side]
    wing = _WING[side]
    who = COLOR_NAMES[color]

    if not board.has_castling_right(castle_right(color, side)):
        return CastlingRightsRevoked(f"{who} may no longer castle {wing}")

    king = Piece(KING, color)
    if board.piece_at(king_file, rank_idx) != king:
        return CastlingRightsRevoked(f"{who} king is not on its home square")

    if board.piece_at(rook_file, rank_idx) != Piece(ROOK, color):
        return CastlingRookMissing(f"{who} has no rook on its {wing} corner")

    for file_idx in between:
        if board.piece_at(file_idx, rank_idx) is not None:
            return CastlingPathBlocked(f"{who} cannot castle {wing}: path is blocked")

    enemy = opposite(color)
    if is_square_attacked(board, king_file, rank_idx, enemy):
        return CastlingThroughCheck(f"{who} cannot castle out of check")

    for file_idx in crossed:
        scratch = board.copy()
        scratch.set_piece(king_file, rank_idx, None)
        scratch.set_piece(file_idx, rank_idx, king)
        if is_square_attacked(scratch, file_idx, rank_idx, enemy):
            return CastlingThroughCheck(f"{who} cannot castle {wing} through or into check")

    return None


def castling_move(board: Board, color: int, side: int) -> MoveDescriptor:
    """Validated castling descriptor; raises the failing condition otherwise."""
    failure = check_castling(board, color, side)
    if failure is not None:
        raise failure
    return _castle_descriptor(color, side)


def _castle_descriptor(color: int, side: int) -> MoveDescriptor:
    king_file, _, _, crossed = CASTLE_GEOMETRY[side]
    rank_idx = home_rank(color)
    return _make(Piece(KING, color), king_file, rank_idx, crossed[-1], rank_idx, castle=side)


def _generate_castling(board: Board, file_idx: int, rank_idx: int, king: Piece, moves: list[MoveDescriptor]) -> None:
    if (file_idx, rank_idx) != (4, home_rank(king.color)):
        return
    for side in (CASTLE_KINGSIDE, CASTLE_QUEENSIDE):
        if check_castling(board, king.color, side) is None:
            moves.append(_castle_descriptor(king.color, side))


def generate(board: Board, file_idx: int, rank_idx: int) -> list[MoveDescriptor]:
    """Pseudo-legal moves of the piece on the square; empty for an empty square."""
    piece = board.piece_at(file_idx, rank_idx)
    moves: list[MoveDescriptor] = []
    if piece is None:
        return moves

    if piece.kind == PAWN:
        _generate_pawn_moves(board, file_idx, rank_idx, piece, moves)
    elif piece.kind == KNIGHT:
        _generate_leaper_moves(board, file_idx, rank_idx, piece, KNIGHT_DELTAS, moves)
    elif piece.kind == KING:
        _generate_leaper_moves(board, file_idx, rank_idx, piece, KING_DELTAS, moves)
        _generate_castling(board, file_idx, rank_idx, piece, moves)
    else:
        _generate_slider_moves(board, file_idx, rank_idx, piece, SLIDER_DIRS[piece.kind], moves)
    return moves


def generate_pseudo_legal_moves(board: Board, color: int | None = None) -> list[MoveDescriptor]:
    side = board.side_to_move if color is None else color
    moves: list[MoveDescriptor] = []
    for file_idx, rank_idx, _ in list(board.pieces(side)):
        moves.extend(generate(board, file_idx, rank_idx))
    return moves


def expand_promotions(moves: list[MoveDescriptor]) -> list[MoveDescriptor]:
    """One move per promotion choice for every promoting move in *moves*."""
    expanded: list[MoveDescriptor] = []
    for move in moves:
        if move.promotion is None:
            expanded.append(move)
            continue
        expanded.extend(replace(move, promotion=choice) for choice in PROMOTION_PIECES)
    return expanded


def has_legal_move(board: Board, color: int) -> bool:
    for move in generate_pseudo_legal_moves(board, color):
        if not leaves_king_attacked(board, move):
            return True
    return False


def generate_legal_moves(board: Board) -> list[MoveDescriptor]:
    legal = [
        move
        for move in generate_pseudo_legal_moves(board)
        if not leaves_king_attacked(board, move)
    ]
    return expand_promotions(legal)
