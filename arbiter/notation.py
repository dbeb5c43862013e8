"""Algebraic notation tokens to declared move descriptors and back."""

from __future__ import annotations

import re

from .constants import (
    CASTLE_KINGSIDE,
    CASTLE_QUEENSIDE,
    FILES,
    KING,
    LETTER_TO_PIECE,
    PAWN,
    PIECE_LETTERS,
    RANKS,
    parse_square,
    square_name,
)
from .errors import NotationError
from .move import MoveDescriptor

_MOVE_RE = re.compile(
    r"^(?P<piece>[KQRBN])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promotion>[QRBN]))?$"
)
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_CASTLES = {
    "O-O": CASTLE_KINGSIDE,
    "0-0": CASTLE_KINGSIDE,
    "O-O-O": CASTLE_QUEENSIDE,
    "0-0-0": CASTLE_QUEENSIDE,
}
_RESULTS = {"1-0", "0-1", "1/2-1/2", "*"}
_ANNOTATIONS = "+#!?"


def parse_move(token: str) -> MoveDescriptor:
    """Parse one token such as ``Nbd2``, ``exd6``, ``e8=Q`` or ``O-O-O``."""
    text = token.strip().rstrip(_ANNOTATIONS)
    if text.endswith("e.p."):
        text = text[:-4].rstrip()
    if not text:
        raise NotationError(f"Empty move token: {token!r}")

    castle = _CASTLES.get(text)
    if castle is not None:
        # Destination is filled in by the resolver from the side to move.
        return MoveDescriptor(piece=KING, to_file=6 if castle == CASTLE_KINGSIDE else 2, to_rank=0, castle=castle)

    match = _MOVE_RE.match(text)
    if match is None:
        raise NotationError(f"Cannot parse move: {token!r}")

    piece = LETTER_TO_PIECE[match["piece"]] if match["piece"] else PAWN
    to_file, to_rank = parse_square(match["dest"])
    from_file = FILES.index(match["file"]) if match["file"] else None
    from_rank = RANKS.index(match["rank"]) if match["rank"] else None
    promotion = LETTER_TO_PIECE[match["promotion"]] if match["promotion"] else None

    if piece != PAWN and promotion is not None:
        raise NotationError(f"Only pawns promote: {token!r}")
    if piece == PAWN and match["capture"] and from_file is None:
        raise NotationError(f"Pawn capture needs its source file: {token!r}")

    return MoveDescriptor(
        piece=piece,
        to_file=to_file,
        to_rank=to_rank,
        from_file=from_file,
        from_rank=from_rank,
        capture=bool(match["capture"]),
        promotion=promotion,
    )


def parse_moves(text: str) -> list[MoveDescriptor]:
    """Parse a line of moves, skipping move numbers and result markers."""
    return [parse_move(token) for token in split_tokens(text)]


def split_tokens(text: str) -> list[str]:
    tokens = []
    for raw in text.split():
        token = _MOVE_NUMBER_RE.sub("", raw)
        if token and token not in _RESULTS:
            tokens.append(token)
    return tokens


def to_notation(move: MoveDescriptor) -> str:
    if move.castle == CASTLE_KINGSIDE:
        return "O-O"
    if move.castle == CASTLE_QUEENSIDE:
        return "O-O-O"

    parts = []
    if move.piece != PAWN:
        parts.append(PIECE_LETTERS[move.piece])
    if move.piece == PAWN and move.capture:
        source_file = move.from_file if move.from_file is not None else move.source_file
        if source_file is not None:
            parts.append(FILES[source_file])
    else:
        if move.from_file is not None:
            parts.append(FILES[move.from_file])
        if move.from_rank is not None:
            parts.append(RANKS[move.from_rank])
    if move.capture:
        parts.append("x")
    parts.append(square_name(move.to_file, move.to_rank))
    if move.promotion is not None:
        parts.append(f"={PIECE_LETTERS[move.promotion]}")
    return "".join(parts)

