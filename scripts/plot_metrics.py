#!/usr/bin/env python3
"""Chart the CSVs written by ``scripts/bench.py``.

Three panels go into one SVG: perft node counts against wall time, the
per-ply replay cost of each game and the cost of each kind of rejection.
"""

from __future__ import annotations

import argparse
import csv
from pathlib import Path
from statistics import mean

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]

INK = "#22313f"
ACCENT = ("#2e86ab", "#e07a5f", "#81b29a", "#f2cc8f")


def read_rows(path: Path) -> list[dict[str, str]]:
    if not path.exists():
        return []
    with path.open(newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


def perft_panel(ax, rows: list[dict[str, str]]) -> None:
    positions = sorted({row["position"] for row in rows})
    for color, position in zip(ACCENT * 2, positions):
        points = sorted(
            (int(row["depth"]), int(row["nodes"]), float(row["elapsed_ms"]))
            for row in rows
            if row["position"] == position
        )
        ax.scatter([p[1] for p in points], [p[2] for p in points], s=60, color=color, label=position)
        for depth, nodes, elapsed in points:
            ax.annotate(f"d{depth}", (nodes, elapsed), textcoords="offset points", xytext=(6, -4), fontsize=8)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("nodes")
    ax.set_ylabel("elapsed (ms)")
    ax.set_title("Perft: nodes vs. wall time")
    if positions:
        ax.legend(loc="upper left", fontsize=8)


def replay_panel(ax, rows: list[dict[str, str]]) -> None:
    by_game: dict[str, list[float]] = {}
    results: dict[str, str] = {}
    for row in rows:
        by_game.setdefault(row["game"], []).append(float(row["ms_per_ply"]))
        results[row["game"]] = row["result"]

    games = sorted(by_game)
    means = [mean(by_game[game]) for game in games]
    spread = [
        [avg - min(by_game[game]) for game, avg in zip(games, means)],
        [max(by_game[game]) - avg for game, avg in zip(games, means)],
    ]
    ax.barh(games, means, xerr=spread, color=ACCENT[1], capsize=4)
    for y, (game, avg) in enumerate(zip(games, means)):
        ax.text(avg, y + 0.3, results[game], fontsize=8, color=INK)

    ax.set_xlabel("ms per ply (min to max over runs)")
    ax.set_title("Replay cost")


def rejection_panel(ax, rows: list[dict[str, str]]) -> None:
    rows = sorted(rows, key=lambda row: float(row["mean_us"]), reverse=True)
    codes = [row["code"] for row in rows]
    ax.bar(codes, [float(row["mean_us"]) for row in rows], color=ACCENT[2])
    for x, row in enumerate(rows):
        ax.text(x, float(row["mean_us"]), f"n={row['count']}", ha="center", va="bottom", fontsize=7)

    ax.set_ylabel("mean time to reject (us)")
    ax.set_title("Rejections by code")
    ax.tick_params(axis="x", labelrotation=45, labelsize=7)


def render(metrics_dir: Path, output: Path) -> None:
    fig, (left, middle, right) = plt.subplots(1, 3, figsize=(18, 5.5))
    perft_panel(left, read_rows(metrics_dir / "perft_metrics.csv"))
    replay_panel(middle, read_rows(metrics_dir / "replay_metrics.csv"))
    rejection_panel(right, read_rows(metrics_dir / "rejection_metrics.csv"))

    for ax in (left, middle, right):
        ax.grid(True, linestyle=":", alpha=0.5)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)

    output.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output, format="svg")
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(description="Chart rules engine benchmark CSVs")
    parser.add_argument("--metrics-dir", type=Path, default=ROOT / "docs" / "metrics")
    parser.add_argument("--output", type=Path, default=ROOT / "docs" / "visuals" / "benchmarks.svg")
    args = parser.parse_args()

    render(args.metrics_dir, args.output)
    print(f"wrote {args.output}")


if __name__ == "__main__":
    main()
