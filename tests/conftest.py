from __future__ import annotations

import random
from typing import List

import pytest

from simple_othello.engine.bitboard import iter_bits
from simple_othello.engine.board import Board


def random_playout(rng: random.Random, plies: int) -> Board:
    """Play up to `plies` random legal moves from the opening, passing when forced."""
    b = Board.initial()
    passed = False
    for _ in range(plies):
        legal = b.legal_bitboard()
        if legal == 0:
            if passed:
                break
            b.pass_turn()
            passed = True
            continue
        passed = False
        pos = rng.choice(list(iter_bits(legal)))
        b.move(b.get_flip(pos))
    return b


def reachable_boards(seed: int, count: int) -> List[Board]:
    """Every position met while playing random games to the end."""
    rng = random.Random(seed)
    boards: List[Board] = []
    while len(boards) < count:
        b = Board.initial()
        passes = 0
        while passes < 2 and len(boards) < count:
            boards.append(b.copy())
            legal = b.legal_bitboard()
            if legal == 0:
                b.pass_turn()
                passes += 1
                continue
            passes = 0
            b.move(b.get_flip(rng.choice(list(iter_bits(legal)))))
    return boards


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0xC0FFEE)
