from __future__ import annotations

from .bitboard import cell_mask, has_cell

# Naive per-cell, per-direction scan. Slow; used to cross-check the bitboard generator.

RAYS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]


def flips_at(me: int, opp: int, cell: int) -> int:
    """Bitboard of opponent discs captured by `me` playing `cell`."""
    if has_cell(me | opp, cell):
        return 0
    row, col = divmod(cell, 8)
    flips = 0
    for dr, dc in RAYS:
        run = 0
        r, c = row + dr, col + dc
        while 0 <= r < 8 and 0 <= c < 8 and has_cell(opp, r * 8 + c):
            run |= cell_mask(r * 8 + c)
            r, c = r + dr, c + dc
        if run and 0 <= r < 8 and 0 <= c < 8 and has_cell(me, r * 8 + c):
            flips |= run
    return flips


def legal_moves_mask(me: int, opp: int) -> int:
    moves = 0
    for cell in range(64):
        if flips_at(me, opp, cell):
            moves |= cell_mask(cell)
    return moves
