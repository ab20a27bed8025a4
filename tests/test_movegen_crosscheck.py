from __future__ import annotations

from simple_othello.engine.bitboard import bit_to_cell, cell_to_bit, iter_bits, to_cells
from simple_othello.engine.board import Board
from simple_othello.engine.movegen_ref import flips_at, legal_moves_mask as ref_legal
from simple_othello.engine.notation import notation_to_cell

from conftest import reachable_boards


def test_opening_has_four_legal_moves():
    b = Board.initial()
    cells = to_cells(b.legal_bitboard())
    assert cells == sorted(notation_to_cell(n) for n in ("d3", "c4", "f5", "e6"))


def test_opening_flip_f5_captures_e5():
    b = Board.initial()
    flip = b.get_flip(cell_to_bit(notation_to_cell("f5")))
    assert to_cells(flip.flip) == [notation_to_cell("e5")]


def test_flip_on_illegal_cell_is_empty():
    b = Board.initial()
    assert b.get_flip(cell_to_bit(notation_to_cell("a1"))).flip == 0
    # occupied-adjacent but not flanking
    assert b.get_flip(cell_to_bit(notation_to_cell("c3"))).flip == 0


def test_movegen_match_on_random_positions():
    for b in reachable_boards(seed=0xC0FFEE, count=1200):
        assert b.legal_bitboard() == ref_legal(b.player, b.opponent)
        for pos in iter_bits(b.legal_bitboard()):
            flip = b.get_flip(pos)
            assert flip.flip
            assert flip.flip == flips_at(b.player, b.opponent, bit_to_cell(pos))


def test_no_wraparound_across_edges():
    # mover on h1, opponent on a2: row-major neighbours, but not adjacent on the board
    h1, a2, b2 = (notation_to_cell(n) for n in ("h1", "a2", "b2"))
    b = Board(player=1 << cell_to_bit(h1), opponent=1 << cell_to_bit(a2))
    assert b.legal_bitboard() == 0
    assert b.get_flip(cell_to_bit(b2)).flip == 0
