from __future__ import annotations
from typing import Iterator, Tuple

# Board is 8x8. Cell indices are row-major from the top-left: a1=0, h1=7, a8=56, h8=63.
# Bitboards: 1 bit per cell, cell i lives at bit position 63-i (a1 is the MSB, h8 the LSB).

MASK64 = 0xFFFFFFFFFFFFFFFF

# Shifts per ray: E/W, S/N, the two diagonals (each as a +/- pair)
SHIFTS = (1, -1, 8, -8, 7, -7, 9, -9)

# Wrap masks per axis; index with i // 2 for SHIFTS[i]
HORIZONTAL_MASK = 0x7E7E7E7E7E7E7E7E
VERTICAL_MASK = 0x00FFFFFFFFFFFF00
DIAGONAL_MASK = 0x007E7E7E7E7E7E00
AXIS_MASKS = (HORIZONTAL_MASK, VERTICAL_MASK, DIAGONAL_MASK, DIAGONAL_MASK)

# (shift, mask) for every ray direction
DIRECTIONS: Tuple[Tuple[int, int], ...] = tuple(
    (s, AXIS_MASKS[i // 2]) for i, s in enumerate(SHIFTS)
)


def popcount(x: int) -> int:
    return x.bit_count()


def shift(bb: int, d: int) -> int:
    """Shift left for positive `d`, right for negative, truncated to 64 bits."""
    if d >= 0:
        return (bb << d) & MASK64
    return bb >> (-d)


def first_bit(x: int) -> int:
    """Number of trailing zeros of `x`; 64 for an empty board."""
    return popcount(~x & (x - 1) & MASK64) if x else 64


def next_bit(x: int) -> Tuple[int, int]:
    """Clear the lowest set bit and return (remaining bits, index of new lowest bit)."""
    x &= x - 1
    return x, first_bit(x)


def iter_bits(x: int) -> Iterator[int]:
    """Yield set bit positions in ascending order."""
    while x:
        lsb = x & -x
        yield lsb.bit_length() - 1
        x ^= lsb


def bit_to_cell(pos: int) -> int:
    return 63 - pos


def cell_to_bit(cell: int) -> int:
    if not 0 <= cell < 64:
        raise ValueError(f"Invalid cell index: {cell}")
    return 63 - cell


def cell_mask(cell: int) -> int:
    return 1 << cell_to_bit(cell)


def has_cell(bb: int, cell: int) -> bool:
    return bool(1 & (bb >> (63 - cell)))


def to_cells(bb: int) -> list[int]:
    """Cell indices set in `bb`, ascending."""
    return sorted(bit_to_cell(p) for p in iter_bits(bb))
