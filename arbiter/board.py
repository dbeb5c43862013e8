"""Board state and move application."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    BLACK,
    CASTLE_ALL,
    CASTLE_BLACK_KING,
    CASTLE_BLACK_QUEEN,
    CASTLE_KINGSIDE,
    CASTLE_NONE,
    CASTLE_GEOMETRY,
    CASTLE_ROOK_TARGET,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    COLOR_NAMES,
    KING,
    LETTER_TO_PIECE,
    PAWN,
    PIECE_LETTERS,
    ROOK_CORNERS,
    START_FEN,
    WHITE,
    castle_right,
    forward,
    home_rank,
    opposite,
    parse_square,
    square_name,
)
from .errors import CastlingRightsRevoked, IncompleteMove
from .move import MoveDescriptor

_CASTLE_FEN = (
    ("K", CASTLE_WHITE_KING),
    ("Q", CASTLE_WHITE_QUEEN),
    ("k", CASTLE_BLACK_KING),
    ("q", CASTLE_BLACK_QUEEN),
)
_CASTLE_FLAGS = dict(_CASTLE_FEN)


@dataclass(frozen=True, slots=True)
class Piece:
    kind: int
    color: int

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        kind = LETTER_TO_PIECE.get(symbol.upper())
        if kind is None:
            raise ValueError(f"Invalid piece symbol: {symbol}")
        return cls(kind, WHITE if symbol.isupper() else BLACK)

    def __str__(self) -> str:
        letter = PIECE_LETTERS[self.kind]
        return letter if self.color == WHITE else letter.lower()


class Board:
    __slots__ = (
        "squares",
        "side_to_move",
        "castling_rights",
        "en_passant",
    )

    def __init__(self, fen: str = START_FEN):
        self.squares: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self.side_to_move = WHITE
        self.castling_rights = 0
        self.en_passant: tuple[int, int] | None = None
        self.set_fen(fen)

    @classmethod
    def empty(cls, side_to_move: int = WHITE) -> Board:
        board = cls("8/8/8/8/8/8/8/8 w - -")
        board.side_to_move = side_to_move
        return board

    def reset(self) -> None:
        self.squares = [[None] * 8 for _ in range(8)]
        self.side_to_move = WHITE
        self.castling_rights = 0
        self.en_passant = None

    def set_fen(self, fen: str) -> None:
        """Load placement, side to move, castling and en passant.

        Clock fields are accepted and ignored.
        """
        self.reset()
        fields = fen.split()
        if len(fields) not in (4, 6):
            raise ValueError(f"Invalid FEN: {fen}")

        placement, side, castling, ep = fields[:4]

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError(f"Invalid FEN board placement: {placement}")

        for rank_idx, rank in enumerate(reversed(ranks)):
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    file_idx += int(ch)
                    continue
                if file_idx > 7:
                    raise ValueError(f"Invalid rank in FEN: {rank}")
                self.squares[rank_idx][file_idx] = Piece.from_symbol(ch)
                file_idx += 1
            if file_idx != 8:
                raise ValueError(f"Invalid rank in FEN: {rank}")

        if side not in ("w", "b"):
            raise ValueError(f"Invalid side to move in FEN: {side}")
        self.side_to_move = WHITE if side == "w" else BLACK

        if castling != "-":
            for ch in castling:
                flag = _CASTLE_FLAGS.get(ch)
                if flag is None:
                    raise ValueError(f"Invalid castling field in FEN: {castling}")
                self.castling_rights |= flag

        self.en_passant = None if ep == "-" else parse_square(ep)

    def to_fen(self) -> str:
        rows = []
        for rank_idx in range(7, -1, -1):
            row = ""
            empty = 0
            for file_idx in range(8):
                piece = self.squares[rank_idx][file_idx]
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
            if empty:
                row += str(empty)
            rows.append(row)

        side = "w" if self.side_to_move == WHITE else "b"
        castling = "".join(ch for ch, flag in _CASTLE_FEN if self.castling_rights & flag) or "-"
        ep = "-" if self.en_passant is None else square_name(*self.en_passant)
        return f"{'/'.join(rows)} {side} {castling} {ep} 0 1"

    def piece_at(self, file_idx: int, rank_idx: int) -> Piece | None:
        return self.squares[rank_idx][file_idx]

    def set_piece(self, file_idx: int, rank_idx: int, piece: Piece | None) -> None:
        self.squares[rank_idx][file_idx] = piece

    def pieces(self, color: int):
        """Yield ``(file, rank, piece)`` for every piece of *color*."""
        for rank_idx, row in enumerate(self.squares):
            for file_idx, piece in enumerate(row):
                if piece is not None and piece.color == color:
                    yield file_idx, rank_idx, piece

    def has_castling_right(self, flag: int) -> bool:
        return bool(self.castling_rights & flag)

    def copy(self) -> Board:
        """Independent scratch copy for look-ahead; no grid row is shared."""
        clone = Board.__new__(Board)
        clone.squares = [row.copy() for row in self.squares]
        clone.side_to_move = self.side_to_move
        clone.castling_rights = self.castling_rights
        clone.en_passant = self.en_passant
        return clone

    def apply(self, move: MoveDescriptor) -> None:
        """Apply a resolved move; the board is unchanged if this raises."""
        if not move.is_complete:
            raise IncompleteMove(f"Move {move} has no resolved origin")

        color = move.moving_piece.color
        from_file, from_rank = move.source_file, move.source_rank
        to_file, to_rank = move.to_file, move.to_rank

        if self.piece_at(from_file, from_rank) != move.moving_piece:
            raise IncompleteMove(
                f"Move {move} is stale: {square_name(from_file, from_rank)} does not hold the moving piece"
            )
        if move.castle != CASTLE_NONE and not self.has_castling_right(castle_right(color, move.castle)):
            raise CastlingRightsRevoked(f"{COLOR_NAMES[color]} may no longer castle {_wing(move.castle)}")

        if move.capture:
            self.set_piece(to_file, to_rank, None)
            if move.en_passant:
                self.set_piece(to_file, to_rank - forward(color), None)

        if move.castle != CASTLE_NONE:
            self._move_rook_for_castle(color, move.castle)

        placed = move.moving_piece
        if move.promotion is not None:
            placed = Piece(move.promotion, color)
        self.set_piece(to_file, to_rank, placed)
        self.set_piece(from_file, from_rank, None)

        self.en_passant = None
        if move.moving_piece.kind == PAWN and abs(to_rank - from_rank) == 2:
            self.en_passant = (to_file, from_rank + forward(color))

        self._update_castling_rights(move)
        self.side_to_move = opposite(self.side_to_move)

    def _move_rook_for_castle(self, color: int, side: int) -> None:
        rank_idx = home_rank(color)
        _, rook_file, _, _ = CASTLE_GEOMETRY[side]
        rook = self.piece_at(rook_file, rank_idx)
        self.set_piece(rook_file, rank_idx, None)
        self.set_piece(CASTLE_ROOK_TARGET[side], rank_idx, rook)

    def _update_castling_rights(self, move: MoveDescriptor) -> None:
        if move.moving_piece.kind == KING:
            if move.moving_piece.color == WHITE:
                self.castling_rights &= ~(CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN)
            else:
                self.castling_rights &= ~(CASTLE_BLACK_KING | CASTLE_BLACK_QUEEN)

        for square in (move.source, move.destination):
            flag = ROOK_CORNERS.get(square)
            if flag is not None:
                self.castling_rights &= ~flag
        self.castling_rights &= CASTLE_ALL

    def debug_state(self) -> tuple:
        return (
            tuple(tuple(row) for row in self.squares),
            self.side_to_move,
            self.castling_rights,
            self.en_passant,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.debug_state() == other.debug_state()

    def __str__(self) -> str:
        rows = ["   a b c d e f g h", "  -----------------"]
        for r in range(7, -1, -1):
            row = []
            for f in range(8):
                piece = self.squares[r][f]
                row.append("." if piece is None else str(piece))
            rows.append(f"{r + 1}| {' '.join(row)} |{r + 1}")
        rows.append("  -----------------")
        rows.append("   a b c d e f g h")
        return "\n".join(rows)


def _wing(side: int) -> str:
    return "kingside" if side == CASTLE_KINGSIDE else "queenside"
