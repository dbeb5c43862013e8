import pytest

from arbiter.board import Board, Piece
from arbiter.constants import (
    BISHOP,
    BLACK,
    CASTLE_ALL,
    CASTLE_BLACK_KING,
    CASTLE_WHITE_KING,
    CASTLE_WHITE_QUEEN,
    KING,
    KNIGHT,
    PAWN,
    PROMOTION_PIECES,
    QUEEN,
    ROOK,
    START_FEN,
    WHITE,
    parse_square,
)
from arbiter.errors import CastlingRightsRevoked, IncompleteMove
from arbiter.move import MoveDescriptor
from arbiter.notation import parse_move
from arbiter.resolver import resolve


def snapshot(board: Board):
    return board.debug_state()


def play(board: Board, token: str) -> MoveDescriptor:
    move = resolve(board, parse_move(token))
    board.apply(move)
    return move


def at(board: Board, square: str) -> Piece | None:
    return board.piece_at(*parse_square(square))


def test_fen_roundtrip_start_position() -> None:
    board = Board()
    assert board.to_fen() == START_FEN
    assert board.side_to_move == WHITE
    assert board.castling_rights == CASTLE_ALL
    assert board.en_passant is None


def test_fen_accepts_missing_clock_fields() -> None:
    board = Board("4k3/8/8/8/8/8/8/4K3 b - e3")
    assert board.side_to_move == BLACK
    assert board.en_passant == parse_square("e3")


def test_invalid_fen_rejected() -> None:
    with pytest.raises(ValueError):
        Board("8/8/8/8/8/8/8 w - - 0 1")
    with pytest.raises(ValueError):
        Board("4k3/8/8/8/8/8/8/4K3 x - - 0 1")
    with pytest.raises(ValueError):
        Board("4k3/8/8/8/8/8/8/4K2X w - - 0 1")


def test_copy_is_independent() -> None:
    board = Board()
    scratch = board.copy()
    scratch.set_piece(4, 1, None)
    scratch.castling_rights = 0

    assert at(board, "e2") == Piece(PAWN, WHITE)
    assert board.castling_rights == CASTLE_ALL
    assert scratch != board


def test_apply_refuses_incomplete_move() -> None:
    board = Board()
    initial = snapshot(board)

    with pytest.raises(IncompleteMove):
        board.apply(MoveDescriptor(piece=PAWN, to_file=4, to_rank=3))
    assert snapshot(board) == initial


def test_apply_refuses_stale_move() -> None:
    board = Board()
    move = resolve(board, parse_move("e4"))
    board.apply(move)
    after = snapshot(board)

    with pytest.raises(IncompleteMove):
        board.apply(move)
    assert snapshot(board) == after


def test_double_push_sets_and_next_move_clears_en_passant() -> None:
    board = Board()
    play(board, "e4")
    assert board.en_passant == parse_square("e3")
    assert board.side_to_move == BLACK

    play(board, "Nf6")
    assert board.en_passant is None


def test_en_passant_removes_pawn_behind_destination() -> None:
    board = Board("4k3/8/8/8/4p3/8/3P4/4K3 w - - 0 1")
    play(board, "d4")
    assert board.en_passant == parse_square("d3")

    move = play(board, "exd3")

    assert move.en_passant
    assert at(board, "d3") == Piece(PAWN, BLACK)
    assert at(board, "d4") is None
    assert at(board, "e4") is None
    assert board.en_passant is None


def test_castle_kingside_moves_king_and_rook_together() -> None:
    board = Board("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    play(board, "O-O")

    assert at(board, "g1") == Piece(KING, WHITE)
    assert at(board, "f1") == Piece(ROOK, WHITE)
    assert at(board, "e1") is None
    assert at(board, "h1") is None
    assert at(board, "a1") == Piece(ROOK, WHITE)
    assert board.castling_rights == 0


def test_castle_queenside_for_black() -> None:
    board = Board("r3k2r/8/8/8/8/8/8/4K3 b kq - 0 1")
    play(board, "O-O-O")

    assert at(board, "c8") == Piece(KING, BLACK)
    assert at(board, "d8") == Piece(ROOK, BLACK)
    assert at(board, "a8") is None
    assert at(board, "h8") == Piece(ROOK, BLACK)
    assert board.castling_rights == 0
    assert board.side_to_move == WHITE


def test_castle_with_revoked_right_is_refused() -> None:
    board = Board("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    move = resolve(board, parse_move("O-O"))
    board.castling_rights = 0
    initial = snapshot(board)

    with pytest.raises(CastlingRightsRevoked):
        board.apply(move)
    assert snapshot(board) == initial


def test_rook_move_clears_only_its_wing() -> None:
    board = Board("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    play(board, "Rh2")
    assert board.castling_rights == CASTLE_WHITE_QUEEN


def test_capture_on_corner_clears_opponent_right() -> None:
    board = Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    play(board, "Rxa8+")

    assert at(board, "a8") == Piece(ROOK, WHITE)
    assert board.castling_rights == CASTLE_WHITE_KING | CASTLE_BLACK_KING


def test_king_move_clears_both_rights() -> None:
    board = Board("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    play(board, "Kd7")
    assert board.castling_rights == CASTLE_WHITE_KING | CASTLE_WHITE_QUEEN


def test_every_promotion_choice_is_distinct() -> None:
    base = Board("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
    letters = {QUEEN: "Q", ROOK: "R", BISHOP: "B", KNIGHT: "N"}

    for choice in PROMOTION_PIECES:
        board = base.copy()
        play(board, f"e8={letters[choice]}")
        assert at(board, "e8") == Piece(choice, WHITE)
        assert at(board, "e7") is None


def test_opening_sequence_matches_hand_built_board() -> None:
    board = Board()
    for token in ("e4", "e5", "Nf3", "Nc6", "Bb5"):
        play(board, token)

    expected = Board()
    for origin, dest in (("e2", "e4"), ("e7", "e5"), ("g1", "f3"), ("b8", "c6"), ("f1", "b5")):
        piece = at(expected, origin)
        expected.set_piece(*parse_square(origin), None)
        expected.set_piece(*parse_square(dest), piece)
    expected.side_to_move = BLACK

    assert board == expected
    assert board.castling_rights == CASTLE_ALL
    assert board.en_passant is None
