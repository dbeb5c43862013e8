"""Command-line front end for the rules engine."""

from __future__ import annotations

import argparse
import logging
import sys

from arbiter.board import Board
from arbiter.config import get_settings
from arbiter.constants import COLOR_NAMES, START_FEN
from arbiter.errors import ArbiterError, KingMissing
from arbiter.game import Game
from arbiter.movegen import generate_legal_moves
from arbiter.notation import split_tokens
from arbiter.perft import perft, perft_divide

logger = logging.getLogger("arbiter.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess move resolution and rules engine")
    parser.add_argument("--fen", default=START_FEN, help="Starting position (FEN)")
    parser.add_argument("--log-level", default=None, help="Logging level (default from ARBITER_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("play", help="Read moves from stdin and report the result")

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    subparsers.add_parser("legal", help="List legal moves for the side to move")

    return parser


def configure_logging(level: str | None) -> None:
    settings = get_settings()
    logging.basicConfig(level=(level or settings.log_level).upper(), format=settings.log_format)


def play(game: Game, stream, out=sys.stdout) -> int:
    """Play moves from *stream*, reporting rejected moves and carrying on."""
    interactive = stream.isatty()
    errors = 0

    while True:
        if interactive:
            out.write(f"{COLOR_NAMES[game.board.side_to_move]} to move> ")
            out.flush()
        line = stream.readline()
        if not line:
            break
        for token in split_tokens(line):
            try:
                game.play(token)
            except KingMissing:
                raise
            except ArbiterError as exc:
                errors += 1
                print(f"error: {token}: {exc.code}: {exc.message}", file=out)
                if interactive:
                    break

    print(game.board, file=out)
    print(game.outcome.summary, file=out)
    return 1 if errors else 0


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        board = Board(args.fen)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "perft" and args.depth > get_settings().max_perft_depth:
        parser.error(f"perft depth is limited to {get_settings().max_perft_depth}")

    try:
        return _dispatch(args, board)
    except KingMissing as exc:
        logger.error("position cannot be played: %s", exc)
        print(f"error: {exc.code}: {exc.message}", file=sys.stderr)
        return 2


def _dispatch(args: argparse.Namespace, board: Board) -> int:
    if args.command == "play":
        return play(Game(board=board), sys.stdin)

    if args.command == "perft":
        if args.divide:
            for move, count in perft_divide(board, args.depth).items():
                print(f"{move}: {count}")
        else:
            print(perft(board, args.depth))
        return 0

    if args.command == "legal":
        print(" ".join(move.uci() for move in generate_legal_moves(board)))
        return 0

    print(board)
    return 0


if __name__ == "__main__":
    sys.exit(run())
