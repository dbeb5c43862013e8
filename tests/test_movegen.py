from arbiter.board import Board
from arbiter.constants import BLACK, CASTLE_QUEENSIDE, QUEEN, WHITE, parse_square
from arbiter.errors import CastlingRookMissing
from arbiter.movegen import (
    check_castling,
    generate,
    generate_legal_moves,
    generate_pseudo_legal_moves,
    has_legal_move,
)


def legal_uci(fen: str) -> set[str]:
    return {move.uci() for move in generate_legal_moves(Board(fen))}


def moves_from(board: Board, square: str) -> set[str]:
    return {move.uci() for move in generate(board, *parse_square(square))}


def test_start_position_move_count() -> None:
    board = Board()
    assert len(generate_legal_moves(board)) == 20
    assert len(generate_pseudo_legal_moves(board, BLACK)) == 20


def test_knight_moves_from_start() -> None:
    assert moves_from(Board(), "b1") == {"b1a3", "b1c3"}


def test_empty_square_generates_nothing() -> None:
    assert generate(Board(), *parse_square("e4")) == []


def test_blocked_pawn_does_not_push() -> None:
    assert moves_from(Board("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1"), "e2") == set()
    assert moves_from(Board("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1"), "e2") == {"e2e3"}


def test_slider_stops_at_enemy_and_includes_capture() -> None:
    board = Board("4k3/8/8/8/R2p4/8/8/4K3 w - - 0 1")
    moves = moves_from(board, "a4")
    assert "a4d4" in moves
    assert "a4e4" not in moves
    assert "a4a8" in moves


def test_promotions_are_expanded() -> None:
    board = Board("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    pushes = generate(board, *parse_square("a7"))
    assert len(pushes) == 1
    assert pushes[0].promotion == QUEEN
    assert {"a7a8q", "a7a8r", "a7a8b", "a7a8n"} <= legal_uci(board.to_fen())


def test_en_passant_capture_generated() -> None:
    moves = legal_uci("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
    assert "e5d6" in moves


def test_castling_generated_when_legal() -> None:
    moves = legal_uci("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "e1g1" in moves
    assert "e1c1" in moves


def test_castling_not_through_attacked_square() -> None:
    moves = legal_uci("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "e1g1" not in moves
    assert "e1c1" in moves


def test_castling_not_out_of_check() -> None:
    moves = legal_uci("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
    assert "e1g1" not in moves
    assert "e1c1" not in moves


def test_queenside_castle_ignores_attack_on_b_file() -> None:
    assert "e1c1" in legal_uci("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")


def test_castling_needs_rook_on_corner() -> None:
    board = Board("4k3/8/8/8/8/8/8/4K2R w KQ - 0 1")
    assert isinstance(check_castling(board, WHITE, CASTLE_QUEENSIDE), CastlingRookMissing)
    assert "e1c1" not in legal_uci(board.to_fen())


def test_illegal_moves_leaving_king_in_check_are_filtered() -> None:
    moves = legal_uci("4k3/8/8/8/8/8/4r3/R3K3 w Q - 0 1")
    assert "a1a2" not in moves
    assert "e1d1" in moves
    assert "e1e2" in moves
    assert "e1c1" not in moves


def test_has_legal_move() -> None:
    assert has_legal_move(Board(), WHITE)
    assert has_legal_move(Board(), BLACK)
    assert not has_legal_move(Board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"), BLACK)
