from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

from .bitboard import popcount

# Static cell-weight evaluation. The board is split into 10 symmetric cell
# classes; weights were fit against final disc differentials scaled by 256.

CELL_CLASS_MASKS: Tuple[int, ...] = (
    0x8100000000000081,  # corners
    0x4281000000008142,  # C-squares
    0x2400810000810024,  # A-squares
    0x1800008181000018,  # B-squares
    0x0042000000004200,  # X-squares
    0x0024420000422400,
    0x0018004242001800,
    0x0000240000240000,
    0x0000182424180000,
    0x0000001818000000,  # centre
)

SCALE = 256
MAX_EVAL = 64


@dataclass(frozen=True)
class EvalWeights:
    cells: Tuple[int, ...] = (2714, 147, 69, -18, -577, -186, -153, -379, -122, -169)

    def __post_init__(self) -> None:
        if len(self.cells) != len(CELL_CLASS_MASKS):
            raise ValueError(
                f"expected {len(CELL_CLASS_MASKS)} cell weights, got {len(self.cells)}"
            )

    @staticmethod
    def from_sequence(values: Sequence[int]) -> "EvalWeights":
        return EvalWeights(tuple(int(v) for v in values))


DEFAULT_WEIGHTS = EvalWeights()


def raw_score(me: int, opp: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    res = 0
    for w, mask in zip(weights.cells, CELL_CLASS_MASKS):
        res += w * (popcount(me & mask) - popcount(opp & mask))
    return res


def evaluate_masks(me: int, opp: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    """Estimated final disc differential for `me`, clamped to [-64, 64]."""
    res = raw_score(me, opp, weights)
    # Round half away from zero, then truncate toward zero
    if res > 0:
        res = (res + SCALE // 2) // SCALE
    elif res < 0:
        res = -((-res + SCALE // 2) // SCALE)
    return max(-MAX_EVAL, min(MAX_EVAL, res))
