import logging

import pytest

from arbiter.board import Board
from arbiter.constants import START_FEN
from arbiter.errors import GameOverError, KingMissing, NoPawnCanMove, NotationError
from arbiter.game import Game
from arbiter.outcome import Status

OPERA_GAME = (
    "1. e4 e5 2. Nf3 d6 3. d4 Bg4 4. dxe5 Bxf3 5. Qxf3 dxe5 6. Bc4 Nf6 7. Qb3 Qe7 "
    "8. Nc3 c6 9. Bg5 b5 10. Nxb5 cxb5 11. Bxb5+ Nbd7 12. O-O-O Rd8 13. Rxd7 Rxd7 "
    "14. Rd1 Qe6 15. Bxd7+ Nxd7 16. Qb8+ Nxb8 17. Rd8# 1-0"
)


def test_history_records_each_ply() -> None:
    game = Game()
    game.play("e4")
    game.play("c5")

    assert game.ply == 2
    assert [played.uci for played in game.history] == ["e2e4", "c7c5"]
    assert [played.token for played in game.history] == ["e4", "c5"]


def test_rejected_move_leaves_game_untouched(caplog: pytest.LogCaptureFixture) -> None:
    game = Game()
    caplog.set_level(logging.INFO, logger="arbiter.game")

    with pytest.raises(NoPawnCanMove):
        game.play("e5")
    with pytest.raises(NotationError):
        game.play("Zz9")

    assert game.board == Board(START_FEN)
    assert game.history == []
    assert "NoPawnCanMove" in caplog.text

    game.play("e4")
    assert game.ply == 1


def test_play_after_mate_is_refused() -> None:
    game = Game()
    game.play_line("1. f3 e5 2. g4 Qh4#")
    assert game.outcome.status == Status.CHECKMATE

    with pytest.raises(GameOverError):
        game.play("a3")


def test_opera_game_replays_to_mate() -> None:
    game = Game()
    outcome = game.play_line(OPERA_GAME)

    assert outcome.summary == "white wins by checkmate"
    assert game.ply == 33
    assert game.history[22].uci == "e1c1"


def test_stalemate_position_is_over_on_load() -> None:
    game = Game.from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    assert game.outcome.status == Status.STALEMATE
    with pytest.raises(GameOverError):
        game.play("Kh7")


def test_missing_king_is_fatal() -> None:
    with pytest.raises(KingMissing):
        Game.from_fen("8/8/8/8/8/8/8/4K3 b - - 0 1")
