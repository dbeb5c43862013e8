#!/usr/bin/env python3
"""Replay a game from algebraic moves and render every position into a GIF."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from PIL import Image, ImageDraw, ImageFont

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from arbiter.attacks import king_square
from arbiter.board import Board
from arbiter.constants import PIECE_LETTERS, START_FEN, WHITE
from arbiter.game import Game
from arbiter.notation import split_tokens, to_notation

W, H = 900, 580
BOARD_X, BOARD_Y, CELL = 40, 60, 60

COLORS = {
    "bg": "#161616",
    "panel": "#1e1e1e",
    "border": "#2b2b2b",
    "light": "#f0d9b5",
    "dark": "#b58863",
    "text": "#e6e2d8",
    "gold": "#c6a25a",
    "red": "#b84f3a",
    "muted": "#9f988d",
}


def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for family in (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "/Library/Fonts/Arial.ttf",
    ):
        try:
            return ImageFont.truetype(family, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


FONT_TITLE = _font(28)
FONT_BODY = _font(18)
FONT_PIECE = _font(24)


def _square_box(file_idx: int, rank_idx: int) -> tuple[int, int, int, int]:
    x = BOARD_X + file_idx * CELL
    y = BOARD_Y + (7 - rank_idx) * CELL
    return x, y, x + CELL, y + CELL


def draw_board(
    draw: ImageDraw.ImageDraw,
    board: Board,
    highlight: list[tuple[int, int]] | None = None,
    check_square: tuple[int, int] | None = None,
) -> None:
    for rank_idx in range(8):
        for file_idx in range(8):
            is_light = (file_idx + rank_idx) % 2 == 1
            draw.rectangle(_square_box(file_idx, rank_idx), fill=COLORS["light"] if is_light else COLORS["dark"])

    for square in highlight or []:
        x0, y0, x1, y1 = _square_box(*square)
        draw.rectangle((x0 + 3, y0 + 3, x1 - 3, y1 - 3), outline=COLORS["gold"], width=3)

    if check_square is not None:
        x0, y0, x1, y1 = _square_box(*check_square)
        draw.rectangle((x0 + 3, y0 + 3, x1 - 3, y1 - 3), outline=COLORS["red"], width=4)

    for rank_idx in range(8):
        for file_idx in range(8):
            piece = board.piece_at(file_idx, rank_idx)
            if piece is None:
                continue
            x0, y0, _, _ = _square_box(file_idx, rank_idx)
            fill = "#f8f6f2" if piece.color == WHITE else "#1f1f1f"
            outline = "#5c5c5c" if piece.color == WHITE else "#d8d3c8"
            cx, cy = x0 + CELL // 2, y0 + CELL // 2
            r = CELL // 2 - 8
            draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=fill, outline=outline, width=2)
            text = PIECE_LETTERS[piece.kind]
            tw = draw.textlength(text, font=FONT_PIECE)
            draw.text((cx - tw / 2, cy - 14), text, fill=outline, font=FONT_PIECE)


def render_frame(game: Game, title: str) -> Image.Image:
    img = Image.new("RGB", (W, H), COLORS["bg"])
    draw = ImageDraw.Draw(img)
    draw.text((40, 15), title, fill=COLORS["text"], font=FONT_TITLE)

    highlight = None
    if game.history:
        last = game.history[-1].move
        highlight = [last.source, last.destination]

    check_square = None
    if game.outcome.in_check:
        check_square = king_square(game.board, game.board.side_to_move)

    draw_board(draw, game.board, highlight=highlight, check_square=check_square)

    draw.rounded_rectangle((560, 60, 860, 540), radius=14, fill=COLORS["panel"], outline=COLORS["border"], width=2)
    draw.text((580, 80), "MOVES", fill=COLORS["gold"], font=FONT_BODY)
    recent = game.history[-14:]
    for row, played in enumerate(recent):
        number = (played.ply + 1) // 2
        dots = "." if played.ply % 2 else "..."
        draw.text((580, 112 + row * 24), f"{number}{dots} {to_notation(played.move)}", fill=COLORS["text"], font=FONT_BODY)

    draw.text((580, 480), game.outcome.summary, fill=COLORS["muted"], font=FONT_BODY)
    return img


def render_game(moves: str, fen: str = START_FEN, title: str = "Game Replay") -> list[Image.Image]:
    game = Game.from_fen(fen)
    frames = [render_frame(game, title)]
    for token in split_tokens(moves):
        game.play(token)
        frames.append(render_frame(game, title))
    return frames


def save_gif(path: Path, frames: list[Image.Image], duration_ms: int = 700) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        path,
        save_all=True,
        append_images=frames[1:],
        duration=duration_ms,
        loop=0,
        optimize=True,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a game replay GIF")
    parser.add_argument("moves", help="Whitespace-separated moves, e.g. 'e4 e5 Qh5 Nc6 Bc4 Nf6 Qxf7#'")
    parser.add_argument("--fen", default=START_FEN, help="Starting position")
    parser.add_argument("--title", default="Game Replay", help="Title drawn on every frame")
    parser.add_argument("--duration-ms", type=int, default=700, help="Frame duration")
    parser.add_argument(
        "--output",
        default=str(ROOT / "docs" / "visuals" / "replay.gif"),
        help="Output GIF path",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    frames = render_game(args.moves, fen=args.fen, title=args.title)
    output = Path(args.output)
    save_gif(output, frames, duration_ms=args.duration_ms)
    print(f"wrote {len(frames)} frames to {output}")


if __name__ == "__main__":
    main()
