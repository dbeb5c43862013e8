#!/usr/bin/env python3
"""Generate reproducible benchmark CSVs for the rules engine."""

from __future__ import annotations

import argparse
import csv
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from arbiter.board import Board
from arbiter.constants import START_FEN
from arbiter.errors import IllegalMoveError
from arbiter.game import Game
from arbiter.notation import split_tokens
from arbiter.perft import perft


KIWIPETE_FEN = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"

# Opera game, Morphy vs. Duke of Brunswick and Count Isouard, 1858.
OPERA_GAME = (
    "e4 e5 Nf3 d6 d4 Bg4 dxe5 Bxf3 Qxf3 dxe5 Bc4 Nf6 Qb3 Qe7 Nc3 c6 Bg5 b5 "
    "Nxb5 cxb5 Bxb5+ Nbd7 O-O-O Rd8 Rxd7 Rxd7 Rd1 Qe6 Bxd7+ Nxd7 Qb8+ Nxb8 Rd8#"
)
SCHOLARS_MATE = "e4 e5 Qh5 Nc6 Bc4 Nf6 Qxf7#"


@dataclass(frozen=True)
class PositionCase:
    name: str
    fen: str


@dataclass(frozen=True)
class GameCase:
    name: str
    moves: str


# Each entry is a position and a token the resolver must refuse there.
REJECTION_CASES = (
    (START_FEN, "e5"),
    (START_FEN, "Nd2"),
    (START_FEN, "Bc4"),
    (START_FEN, "exd3"),
    (START_FEN, "O-O"),
    ("4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1", "Nd2"),
    ("4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1", "Ncd2"),
    ("4r2k/8/8/8/3p4/8/4N3/4K3 w - - 0 1", "Nd4"),
    ("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1", "Rxa8"),
    ("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1", "e4=Q"),
)


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def run_perft_bench(depths_by_case: dict[PositionCase, list[int]]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case, depths in depths_by_case.items():
        for depth in depths:
            board = Board(case.fen)
            start = perf_counter()
            nodes = perft(board, depth)
            elapsed_ms = (perf_counter() - start) * 1000.0
            nps = int(nodes / max(elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "depth": depth,
                    "nodes": nodes,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "nps": nps,
                }
            )
    return rows


def run_replay_bench(cases: list[GameCase], repeats: int) -> list[dict[str, object]]:
    """Time resolve + apply + classify per ply while replaying whole games."""
    rows: list[dict[str, object]] = []
    for case in cases:
        tokens = split_tokens(case.moves)
        for run in range(1, repeats + 1):
            game = Game.from_fen(START_FEN)
            start = perf_counter()
            for token in tokens:
                game.play(token)
            elapsed_ms = (perf_counter() - start) * 1000.0
            rows.append(
                {
                    "game": case.name,
                    "run": run,
                    "plies": len(tokens),
                    "elapsed_ms": round(elapsed_ms, 3),
                    "ms_per_ply": round(elapsed_ms / max(len(tokens), 1), 3),
                    "result": game.outcome.summary,
                }
            )
    return rows


def run_rejection_bench(repeats: int) -> list[dict[str, object]]:
    """Count rejections per error code and time how long each refusal takes."""
    timings: dict[str, list[float]] = {}
    for fen, token in REJECTION_CASES:
        game = Game.from_fen(fen)
        for _ in range(repeats):
            start = perf_counter()
            try:
                game.play(token)
            except IllegalMoveError as exc:
                timings.setdefault(exc.code, []).append((perf_counter() - start) * 1_000_000.0)
            else:
                raise SystemExit(f"{token} was accepted in {fen}")
    return [
        {"code": code, "count": len(samples), "mean_us": round(sum(samples) / len(samples), 2)}
        for code, samples in sorted(timings.items())
    ]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate rules engine benchmark CSV files")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Output directory for CSV metrics",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=5,
        help="Replays per game in the replay benchmark",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)

    perft_cases = [
        PositionCase("start", START_FEN),
        PositionCase("kiwipete", KIWIPETE_FEN),
    ]
    game_cases = [
        GameCase("opera", OPERA_GAME),
        GameCase("scholars_mate", SCHOLARS_MATE),
    ]

    perft_rows = run_perft_bench(
        {
            perft_cases[0]: [1, 2, 3],
            # Copy-based legality checks make Kiwipete depth 3 slow; keep the default run short.
            perft_cases[1]: [1, 2],
        }
    )
    replay_rows = run_replay_bench(game_cases, repeats=args.repeats)
    rejection_rows = run_rejection_bench(repeats=args.repeats)

    perft_path = metrics_dir / "perft_metrics.csv"
    replay_path = metrics_dir / "replay_metrics.csv"
    rejection_path = metrics_dir / "rejection_metrics.csv"

    _write_csv(
        perft_path,
        fieldnames=["position", "depth", "nodes", "elapsed_ms", "nps"],
        rows=perft_rows,
    )
    _write_csv(
        replay_path,
        fieldnames=["game", "run", "plies", "elapsed_ms", "ms_per_ply", "result"],
        rows=replay_rows,
    )
    _write_csv(rejection_path, fieldnames=["code", "count", "mean_us"], rows=rejection_rows)

    print(f"wrote {perft_path}")
    print(f"wrote {replay_path}")
    print(f"wrote {rejection_path}")


if __name__ == "__main__":
    main()
