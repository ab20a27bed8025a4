from __future__ import annotations

from typing import Optional

from .bitboard import cell_to_bit, first_bit, next_bit
from .board import Board
from .notation import cell_to_notation, string_to_moves


def perft(board: Board, depth: int) -> int:
    """Count leaf positions `depth` plies ahead; a forced pass counts as a ply."""
    if depth == 0:
        return 1
    legal = board.legal_bitboard()
    if legal == 0:
        board.pass_turn()
        try:
            if not board.has_legal_move():
                return 1
            return perft(board, depth - 1)
        finally:
            board.pass_turn()
    total = 0
    pos = first_bit(legal)
    while legal:
        flip = board.get_flip(pos)
        board.move(flip)
        total += perft(board, depth - 1)
        board.undo(flip)
        legal, pos = next_bit(legal)
    return total


def play_moves(board: Optional[Board], moves: str) -> Board:
    """Apply a transcript like "f5d6c3" to a copy of `board` (opening if None).

    Forced passes are made automatically, so "--" entries are skipped.
    """
    b = Board.initial() if board is None else board.copy()
    for cell in string_to_moves(moves):
        if cell < 0:
            continue
        pos = cell_to_bit(cell)
        if not (b.legal_bitboard() >> pos) & 1:
            raise ValueError(f"illegal move: {cell_to_notation(cell)}")
        b.move(b.get_flip(pos))
        if not b.has_legal_move():
            b.pass_turn()
    return b
