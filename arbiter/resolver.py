"""Resolve a declared move against a position.

The notation layer only knows what a token says: piece type, destination,
optional source file/rank and the capture, promotion and castling markers.
:func:`resolve` works out which piece on the board makes that move and writes
the origin into the descriptor. It reads the board but never changes it.

Search is destination-centred. Knights and kings look back along their fixed
offsets; bishops, rooks and queens scan outward along their rays and only the
first occupied square of each ray can be the mover, so a piece standing behind
a blocker is never selected.
"""

from __future__ import annotations

from dataclasses import replace

from .attacks import leaves_king_attacked
from .board import Board, Piece
from .constants import (
    CASTLE_NONE,
    COLOR_NAMES,
    FILES,
    KING,
    KING_DELTAS,
    KNIGHT,
    KNIGHT_DELTAS,
    PAWN,
    PIECE_NAMES,
    PROMOTION_PIECES,
    QUEEN,
    SLIDER_DIRS,
    forward,
    in_bounds,
    pawn_start_rank,
    promotion_rank,
    square_name,
)
from .errors import (
    AmbiguousCapture,
    AmbiguousMove,
    CaptureOnEmptySquare,
    DisambiguationMismatch,
    IllegalSameColorTarget,
    InvalidPromotion,
    KingLeftInCheck,
    NoPawnCanCapture,
    NoPawnCanMove,
    NoPieceCanMove,
)
from .move import MoveDescriptor
from .movegen import castling_move

Square = tuple[int, int]


def resolve(board: Board, move: MoveDescriptor) -> MoveDescriptor:
    """Fill in the origin of *move* for the side to move and return it.

    Raises an :class:`~arbiter.errors.IllegalMoveError` subclass when no piece,
    or more than one piece, can make the move, or when the move would leave the
    mover's king attacked.
    """
    color = board.side_to_move

    if move.castle != CASTLE_NONE:
        return _resolve_castle(board, move, color)

    target = board.piece_at(move.to_file, move.to_rank)
    if target is not None and target.color == color:
        raise IllegalSameColorTarget(
            f"{_describe(move, color)}: {square_name(*move.destination)} holds a "
            f"{COLOR_NAMES[color]} {PIECE_NAMES[target.kind]}"
        )

    promotion = _check_promotion(move, color)
    double_push = en_passant = False

    if move.piece == PAWN:
        capture = move.capture
        if capture:
            found, en_passant = _pawn_capture_candidates(board, move, color)
        else:
            found, double_push = _pawn_push_candidates(board, move, color)
    else:
        if move.capture and target is None:
            raise CaptureOnEmptySquare(f"{_describe(move, color)}: nothing to capture")
        capture = target is not None
        found = _piece_candidates(board, move, color)

    trial = MoveDescriptor(
        piece=move.piece,
        to_file=move.to_file,
        to_rank=move.to_rank,
        capture=capture,
        promotion=promotion,
        en_passant=en_passant,
    )
    file_idx, rank_idx = _narrow(board, move, trial, color, found)

    # The descriptor is only written once resolution has succeeded.
    move.capture = capture
    move.promotion = promotion
    move.en_passant = en_passant
    move.double_push = double_push
    return move.complete(file_idx, rank_idx, board.piece_at(file_idx, rank_idx))


def _describe(move: MoveDescriptor, color: int) -> str:
    return f"{COLOR_NAMES[color]} {PIECE_NAMES[move.piece]} to {square_name(*move.destination)}"


def _resolve_castle(board: Board, move: MoveDescriptor, color: int) -> MoveDescriptor:
    validated = castling_move(board, color, move.castle)
    move.piece = KING
    move.to_file, move.to_rank = validated.destination
    move.capture = False
    move.promotion = None
    return move.complete(validated.source_file, validated.source_rank, validated.moving_piece)


def _check_promotion(move: MoveDescriptor, color: int) -> int | None:
    reaches_last_rank = move.piece == PAWN and move.to_rank == promotion_rank(color)
    if move.promotion is None:
        return QUEEN if reaches_last_rank else None
    if not reaches_last_rank:
        raise InvalidPromotion(f"{_describe(move, color)}: only a pawn reaching the last rank promotes")
    if move.promotion not in PROMOTION_PIECES:
        raise InvalidPromotion(f"{_describe(move, color)}: cannot promote to a {PIECE_NAMES[move.promotion]}")
    return move.promotion


# -- Pawns --------------------------------------------------------------------


def _pawn_push_candidates(board: Board, move: MoveDescriptor, color: int) -> tuple[list[Square], bool]:
    pawn = Piece(PAWN, color)
    back = -forward(color)
    file_idx, rank_idx = move.destination

    if board.piece_at(file_idx, rank_idx) is None:
        one_behind = rank_idx + back
        if in_bounds(file_idx, one_behind):
            if board.piece_at(file_idx, one_behind) == pawn:
                return [(file_idx, one_behind)], False
            two_behind = one_behind + back
            if (
                two_behind == pawn_start_rank(color)
                and board.piece_at(file_idx, one_behind) is None
                and board.piece_at(file_idx, two_behind) == pawn
            ):
                return [(file_idx, two_behind)], True

    raise NoPawnCanMove(f"{_describe(move, color)}: no pawn can move there")


def _pawn_capture_candidates(board: Board, move: MoveDescriptor, color: int) -> tuple[list[Square], bool]:
    pawn = Piece(PAWN, color)
    file_idx, rank_idx = move.destination
    behind = rank_idx - forward(color)

    en_passant = board.en_passant == move.destination
    if not en_passant and board.piece_at(file_idx, rank_idx) is None:
        raise CaptureOnEmptySquare(f"{_describe(move, color)}: nothing to capture")

    found = [
        (f, behind)
        for f in (file_idx - 1, file_idx + 1)
        if in_bounds(f, behind) and board.piece_at(f, behind) == pawn
    ]
    if not found:
        raise NoPawnCanCapture(f"{_describe(move, color)}: no pawn can capture there")
    return found, en_passant


# -- Pieces -------------------------------------------------------------------


def _leaper_candidates(board: Board, move: MoveDescriptor, wanted: Piece, deltas) -> list[Square]:
    found = []
    for df, dr in deltas:
        nf, nr = move.to_file + df, move.to_rank + dr
        if in_bounds(nf, nr) and board.piece_at(nf, nr) == wanted:
            found.append((nf, nr))
    return found


def _heads_towards(step: int, hint: int | None, start: int) -> bool:
    if hint is None:
        return True
    delta = hint - start
    if step == 0:
        return delta == 0
    return delta != 0 and (delta > 0) == (step > 0)


def _slider_candidates(
    board: Board, move: MoveDescriptor, wanted: Piece, directions, use_hints: bool = True
) -> list[Square]:
    found = []
    for df, dr in directions:
        # Only rays that can reach the hinted file/rank are worth scanning.
        if use_hints and not (
            _heads_towards(df, move.from_file, move.to_file)
            and _heads_towards(dr, move.from_rank, move.to_rank)
        ):
            continue
        nf, nr = move.to_file + df, move.to_rank + dr
        while in_bounds(nf, nr):
            piece = board.piece_at(nf, nr)
            if piece is not None:
                if piece == wanted:
                    found.append((nf, nr))
                break
            nf += df
            nr += dr
    return found


def _piece_candidates(board: Board, move: MoveDescriptor, color: int) -> list[Square]:
    wanted = Piece(move.piece, color)
    if move.piece == KNIGHT:
        found = _leaper_candidates(board, move, wanted, KNIGHT_DELTAS)
    elif move.piece == KING:
        found = _leaper_candidates(board, move, wanted, KING_DELTAS)
    else:
        found = _slider_candidates(board, move, wanted, SLIDER_DIRS[move.piece])
        hinted = move.from_file is not None or move.from_rank is not None
        if not found and hinted and _slider_candidates(
            board, move, wanted, SLIDER_DIRS[move.piece], use_hints=False
        ):
            raise DisambiguationMismatch(f"{_describe(move, color)}: {_hint(move)} matches no candidate")

    if not found:
        raise NoPieceCanMove(f"{_describe(move, color)}: no {PIECE_NAMES[move.piece]} can move there")
    return found


# -- Choosing one origin ------------------------------------------------------


def _is_safe(board: Board, trial: MoveDescriptor, origin: Square) -> bool:
    trial = replace(trial)
    trial.complete(origin[0], origin[1], board.piece_at(*origin))
    return not leaves_king_attacked(board, trial)


def _narrow(
    board: Board, move: MoveDescriptor, trial: MoveDescriptor, color: int, found: list[Square]
) -> Square:
    """Pick the single origin among *found*.

    Source hints are applied first. Without hints, pinned candidates are
    dropped before ambiguity is reported, so a pinned knight does not force
    the other one to be disambiguated.
    """
    if move.from_file is not None or move.from_rank is not None:
        found = [
            sq
            for sq in found
            if (move.from_file is None or sq[0] == move.from_file)
            and (move.from_rank is None or sq[1] == move.from_rank)
        ]
        if not found:
            raise DisambiguationMismatch(f"{_describe(move, color)}: {_hint(move)} matches no candidate")
        if len(found) > 1:
            raise DisambiguationMismatch(f"{_describe(move, color)}: {_hint(move)} matches several candidates")

    safe = [sq for sq in found if _is_safe(board, trial, sq)]
    if not safe:
        raise KingLeftInCheck(f"{_describe(move, color)}: move would leave the {COLOR_NAMES[color]} king in check")
    if len(safe) > 1:
        names = ", ".join(square_name(*sq) for sq in safe)
        error = AmbiguousCapture if move.piece == PAWN else AmbiguousMove
        raise error(f"{_describe(move, color)}: ambiguous between {names}")
    return safe[0]


def _hint(move: MoveDescriptor) -> str:
    file_part = "" if move.from_file is None else FILES[move.from_file]
    rank_part = "" if move.from_rank is None else str(move.from_rank + 1)
    return f"source hint '{file_part}{rank_part}'"
