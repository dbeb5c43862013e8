import io

import pytest

from arbiter.game import Game
from main import play, run


def test_play_reports_errors_and_carries_on() -> None:
    out = io.StringIO()
    code = play(Game(), io.StringIO("f3 e5\ng4 Ke6 Qh4#\n"), out=out)

    text = out.getvalue()
    assert code == 1
    assert "error: Ke6: NoPieceCanMove" in text
    assert text.rstrip().endswith("black wins by checkmate")


def test_play_clean_game_exits_zero() -> None:
    out = io.StringIO()
    assert play(Game(), io.StringIO("e4 e5\n"), out=out) == 0
    assert "game incomplete" in out.getvalue()


def test_perft_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["perft", "2"]) == 0
    assert capsys.readouterr().out.strip() == "400"


def test_legal_command_with_fen(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["--fen", "4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1", "legal"]) == 0
    moves = capsys.readouterr().out.split()
    assert "e1g1" in moves
    assert "e1c1" in moves


def test_bad_arguments_exit() -> None:
    with pytest.raises(SystemExit):
        run(["perft", "9"])
    with pytest.raises(SystemExit):
        run(["--fen", "bogus", "legal"])


def test_missing_king_is_reported_not_raised(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["--fen", "8/8/8/8/8/8/r7/4K3 w - - 0 1", "perft", "2"]) == 2
    assert "error: KingMissing" in capsys.readouterr().err
