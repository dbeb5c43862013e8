import pytest

from arbiter.attacks import is_attacked, is_square_attacked, king_square, leaves_king_attacked
from arbiter.board import Board
from arbiter.constants import BLACK, WHITE, parse_square
from arbiter.errors import KingMissing
from arbiter.notation import parse_move
from arbiter.resolver import resolve


def test_start_position_has_no_check() -> None:
    board = Board()
    assert not is_attacked(board, WHITE)
    assert not is_attacked(board, BLACK)


def test_rook_attacks_along_open_rank() -> None:
    board = Board("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
    assert is_attacked(board, WHITE)


def test_ray_stops_at_first_piece_of_either_color() -> None:
    assert not is_attacked(Board("4k3/8/8/8/8/8/8/4KB1r w - - 0 1"), WHITE)
    assert not is_attacked(Board("4k3/8/8/8/8/8/8/4Kn1r w - - 0 1"), WHITE)


def test_queen_attacks_along_diagonal() -> None:
    board = Board("4k3/8/8/q7/8/8/8/4K3 w - - 0 1")
    assert is_attacked(board, WHITE)


def test_knight_attack() -> None:
    board = Board("4k3/8/8/8/8/5n2/8/4K3 w - - 0 1")
    assert is_attacked(board, WHITE)


def test_pawns_attack_only_forward() -> None:
    assert is_attacked(Board("4k3/8/8/3p4/4K3/8/8/8 w - - 0 1"), WHITE)
    assert not is_attacked(Board("4k3/8/8/8/4K3/3p4/8/8 w - - 0 1"), WHITE)
    assert is_attacked(Board("8/8/8/4k3/3P4/8/8/4K3 b - - 0 1"), BLACK)


def test_adjacent_king_counts_as_attacker() -> None:
    board = Board("8/8/8/8/8/8/4k3/4K3 w - - 0 1")
    assert is_square_attacked(board, *parse_square("e1"), BLACK)
    assert is_square_attacked(board, *parse_square("d1"), BLACK)
    assert not is_square_attacked(board, *parse_square("a1"), BLACK)


def test_missing_king_raises() -> None:
    board = Board.empty()
    with pytest.raises(KingMissing):
        king_square(board, WHITE)
    with pytest.raises(KingMissing):
        is_attacked(board, WHITE)


def test_look_ahead_does_not_touch_board() -> None:
    board = Board("4k3/4r3/8/8/8/8/4N3/4K3 w - - 0 1")
    before = board.debug_state()
    move = parse_move("Kd1")
    resolve(board, move)

    pinned = parse_move("Nc3")
    pinned.complete(*parse_square("e2"), board.piece_at(*parse_square("e2")))

    assert leaves_king_attacked(board, pinned)
    assert not leaves_king_attacked(board, move)
    assert board.debug_state() == before
