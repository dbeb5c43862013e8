"""Engine-wide constants and square helpers."""

from __future__ import annotations

WHITE = 0
BLACK = 1

PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = range(6)

PIECE_LETTERS = {
    PAWN: "P",
    KNIGHT: "N",
    BISHOP: "B",
    ROOK: "R",
    QUEEN: "Q",
    KING: "K",
}

LETTER_TO_PIECE = {v: k for k, v in PIECE_LETTERS.items()}

PIECE_NAMES = {
    PAWN: "pawn",
    KNIGHT: "knight",
    BISHOP: "bishop",
    ROOK: "rook",
    QUEEN: "queen",
    KING: "king",
}

COLOR_NAMES = {WHITE: "white", BLACK: "black"}

PROMOTION_PIECES = (QUEEN, ROOK, BISHOP, KNIGHT)

CASTLE_WHITE_KING = 1
CASTLE_WHITE_QUEEN = 2
CASTLE_BLACK_KING = 4
CASTLE_BLACK_QUEEN = 8
CASTLE_ALL = CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN | CASTLE_BLACK_KING | CASTLE_BLACK_QUEEN

CASTLE_NONE = 0
CASTLE_KINGSIDE = 1
CASTLE_QUEENSIDE = 2

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"
RANKS = "12345678"

KNIGHT_DELTAS = ((1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2))
KING_DELTAS = ((1, 1), (1, 0), (1, -1), (0, 1), (0, -1), (-1, 1), (-1, 0), (-1, -1))
BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS = BISHOP_DIRS + ROOK_DIRS

SLIDER_DIRS = {
    BISHOP: BISHOP_DIRS,
    ROOK: ROOK_DIRS,
    QUEEN: QUEEN_DIRS,
}

# King file, rook file, squares that must be empty, files the king crosses.
CASTLE_GEOMETRY = {
    CASTLE_KINGSIDE: (4, 7, (5, 6), (5, 6)),
    CASTLE_QUEENSIDE: (4, 0, (1, 2, 3), (3, 2)),
}

CASTLE_ROOK_TARGET = {CASTLE_KINGSIDE: 5, CASTLE_QUEENSIDE: 3}


def castle_right(color: int, side: int) -> int:
    if color == WHITE:
        return CASTLE_WHITE_KING if side == CASTLE_KINGSIDE else CASTLE_WHITE_QUEEN
    return CASTLE_BLACK_KING if side == CASTLE_KINGSIDE else CASTLE_BLACK_QUEEN


# Corner square -> castling right lost when that corner's rook moves or is captured.
ROOK_CORNERS = {
    (7, 0): CASTLE_WHITE_KING,
    (0, 0): CASTLE_WHITE_QUEEN,
    (7, 7): CASTLE_BLACK_KING,
    (0, 7): CASTLE_BLACK_QUEEN,
}


def in_bounds(file_idx: int, rank_idx: int) -> bool:
    return 0 <= file_idx < 8 and 0 <= rank_idx < 8


def square_name(file_idx: int, rank_idx: int) -> str:
    if not in_bounds(file_idx, rank_idx):
        raise ValueError(f"Square out of range: ({file_idx}, {rank_idx})")
    return f"{FILES[file_idx]}{RANKS[rank_idx]}"


def parse_square(square: str) -> tuple[int, int]:
    if len(square) != 2 or square[0] not in FILES or square[1] not in RANKS:
        raise ValueError(f"Invalid square: {square}")
    return FILES.index(square[0]), RANKS.index(square[1])


def opposite(color: int) -> int:
    return color ^ 1


def forward(color: int) -> int:
    """Rank step of a pawn advancing for *color*."""
    return 1 if color == WHITE else -1


def home_rank(color: int) -> int:
    return 0 if color == WHITE else 7


def pawn_start_rank(color: int) -> int:
    return 1 if color == WHITE else 6


def promotion_rank(color: int) -> int:
    return 7 if color == WHITE else 0
