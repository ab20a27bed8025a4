from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Set

from simple_othello.config import (
    AI_COLORS,
    CONFIG_PATH,
    ai_color_from,
    ensure_config,
    load_config,
    log_level_from,
    search_config_from,
)
from simple_othello.engine.notation import cell_to_notation, notation_to_cell
from simple_othello.engine.search import SearchConfig
from simple_othello.game import Color, Game
from simple_othello.logging_setup import setup_logging

logger = logging.getLogger(__name__)

DISC_CHARS = {Color.BLACK: "X", Color.WHITE: "O"}
LEGAL_CHAR = "*"
EMPTY_CHAR = "."
POLL_INTERVAL_S = 1 / 60

# Restart side chosen by the human mapped to the colours the AI then plays
RESTART_SIDES = {"black": {Color.WHITE}, "white": {Color.BLACK}}


def ai_colors(choice: str) -> Set[Color]:
    return {
        "black": {Color.BLACK},
        "white": {Color.WHITE},
        "both": {Color.BLACK, Color.WHITE},
        "none": set(),
    }[choice]


def render(game: Game) -> str:
    colors = game.cell_colors()
    legal = game.legal_cell_mask()
    lines = ["  a b c d e f g h"]
    for row in range(8):
        cells = []
        for col in range(8):
            c = row * 8 + col
            if colors[c] is not None:
                cells.append(DISC_CHARS[colors[c]])
            elif legal[c]:
                cells.append(LEGAL_CHAR)
            else:
                cells.append(EMPTY_CHAR)
        lines.append(f"{row + 1} " + " ".join(cells))
    lines.append(f"Black (X): {game.black_score()}  White (O): {game.white_score()}")
    return "\n".join(lines)


def status_line(game: Game) -> str:
    if game.is_over():
        b, w = game.black_score(), game.white_score()
        if b == w:
            return "Game over. Draw."
        winner = "Black" if b > w else "White"
        return f"Game over. {winner} wins ({game.final_score():+d} for Black)."
    return f"{game.active_color().name.title()} to move."


def wait_for_ai(game: Game) -> Optional[int]:
    """Poll the AI every frame until it has moved; returns its evaluation."""
    while True:
        result = game.request_ai_move()
        if result is not None:
            print(f"AI plays {cell_to_notation(result.cell)} (evaluation {result.value:+d})")
            return result.value
        if not game.search_pending():
            return None
        time.sleep(POLL_INTERVAL_S)


def play(game: Game, ai: Set[Color], stdin=None) -> int:
    stdin = stdin or sys.stdin
    print(render(game))
    while True:
        print(status_line(game))
        if game.is_over():
            print(f"Transcript: {game.transcript()}")
            return 0
        if game.active_color() in ai:
            wait_for_ai(game)
            print(render(game))
            continue
        print("Your move (e.g. f5), 'reset [black|white]' or 'quit': ", end="", flush=True)
        line = stdin.readline()
        if not line:
            return 0
        cmd = line.strip().lower()
        if cmd in ("quit", "exit", "q"):
            return 0
        words = cmd.split()
        if words and words[0] == "reset":
            if len(words) > 2 or (len(words) == 2 and words[1] not in RESTART_SIDES):
                print("usage: reset [black|white]")
                continue
            if len(words) == 2:
                ai = RESTART_SIDES[words[1]]
                logger.info("Restarting with the human as %s", words[1])
            game.reset()
            print(render(game))
            continue
        try:
            cell = notation_to_cell(cmd)
        except ValueError as e:
            print(e)
            continue
        if not game.legal_cell_mask()[cell]:
            print(f"{cmd} is not a legal move")
            continue
        game.apply_move(cell)
        print(render(game))


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="simple-othello")
    p.add_argument("--depth", type=positive_int, default=None, help="AI search depth in plies (overrides config)")
    p.add_argument("--ai", choices=AI_COLORS, default=None, help="Colour(s) played by the AI")
    p.add_argument("--config", default=None, help="Configuration file path")
    p.add_argument("--log-level", default=None, help="Logging level (overrides config)")
    args = p.parse_args(argv)

    created = ensure_config() if args.config is None else False
    try:
        cfg = load_config(args.config)
        if args.log_level:
            cfg.setdefault("logging", {})["level"] = args.log_level
        level = log_level_from(cfg)
        search_cfg = search_config_from(cfg)
        ai = ai_colors(args.ai or ai_color_from(cfg))
    except ValueError as e:
        p.error(str(e))
    if args.depth is not None:
        search_cfg = SearchConfig(depth=args.depth, weights=search_cfg.weights)

    # The terminal is the game display; logs go to the file only
    setup_logging(overwrite=True, level=level, console=False)
    if created:
        logger.info("Initialised configuration at %s", CONFIG_PATH)
    logger.info("Starting game: depth=%d ai=%s", search_cfg.depth, sorted(c.name for c in ai))

    with Game(search_cfg) as game:
        try:
            code = play(game, ai)
        except KeyboardInterrupt:
            code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
