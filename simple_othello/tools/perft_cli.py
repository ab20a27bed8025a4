from __future__ import annotations

import argparse
from time import perf_counter

from simple_othello.engine.board import Board
from simple_othello.engine.perft import perft, play_moves


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="othello-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--position", type=str, default=None, help="move sequence like f5d6c3")
    args = p.parse_args(argv)

    b = Board.initial()
    if args.position:
        try:
            b = play_moves(b, args.position)
        except ValueError as e:
            p.error(str(e))
    for d in range(1, args.depth + 1):
        t0 = perf_counter()
        n = perft(b, d)
        dt = perf_counter() - t0
        print(f"perft(d={d})={n} in {dt:.3f}s")


if __name__ == "__main__":
    main()
