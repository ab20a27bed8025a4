from __future__ import annotations

import random
import time

import pytest

from simple_othello.engine.bitboard import cell_mask
from simple_othello.engine.board import Board
from simple_othello.engine.notation import notation_to_cell
from simple_othello.engine.search import SearchConfig
from simple_othello.game import Color, Game, GameStatus


def cells(*names):
    mask = 0
    for n in names:
        mask |= cell_mask(notation_to_cell(n))
    return mask


def drive_ai(game: Game, timeout: float = 30.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        res = game.request_ai_move()
        if res is not None:
            return res
        time.sleep(0.005)
    raise AssertionError("AI did not move in time")


class TestGameBasics:
    def test_new_game_state(self):
        g = Game()
        assert not g.is_over()
        assert g.status is GameStatus.IN_PROGRESS
        assert g.active_color() is Color.BLACK
        assert g.black_score() == 2 and g.white_score() == 2
        mask = g.legal_cell_mask()
        assert len(mask) == 64 and sum(mask) == 4
        assert g.legal_cells() == sorted(notation_to_cell(n) for n in ("d3", "c4", "f5", "e6"))

    def test_cell_colors_for_rendering(self):
        g = Game()
        colors = g.cell_colors()
        assert colors[notation_to_cell("d5")] is Color.BLACK
        assert colors[notation_to_cell("e4")] is Color.BLACK
        assert colors[notation_to_cell("d4")] is Color.WHITE
        assert colors[notation_to_cell("e5")] is Color.WHITE
        assert colors.count(None) == 60

    def test_apply_move_flips_and_hands_over(self):
        g = Game()
        g.apply_move(notation_to_cell("f5"))
        assert g.active_color() is Color.WHITE
        assert g.black_score() == 4 and g.white_score() == 1
        assert g.cell_colors()[notation_to_cell("e5")] is Color.BLACK
        assert g.transcript() == "f5"
        assert g.history[0].color is Color.BLACK

    def test_illegal_move_rejected(self):
        g = Game()
        before = g.board.copy()
        with pytest.raises(ValueError):
            g.apply_move(notation_to_cell("a1"))
        with pytest.raises(ValueError):
            g.move(64)
        assert g.board == before
        assert g.history == []

    def test_scores_follow_colour_not_role(self):
        rng = random.Random(3)
        g = Game()
        while not g.is_over():
            g.apply_move(rng.choice(g.legal_cells()))
            colors = g.cell_colors()
            assert g.black_score() == colors.count(Color.BLACK)
            assert g.white_score() == colors.count(Color.WHITE)
        assert g.legal_cells() == []
        assert not any(g.legal_cell_mask())


class TestPasses:
    def test_single_pass_keeps_game_going(self):
        g = Game()
        # Black: a1, a3. White: b1, b3. After Black c1, White has no reply.
        g.board = Board(player=cells("a1", "a3"), opponent=cells("b1", "b3"))
        g.apply_move(notation_to_cell("c1"))
        assert not g.is_over()
        assert g.active_color() is Color.BLACK
        assert g.history[-1].color is Color.WHITE and g.history[-1].flip is None
        assert g.transcript() == "c1--"
        assert notation_to_cell("c3") in g.legal_cells()

    def test_double_pass_ends_game(self):
        g = Game()
        g.board = Board(player=cells("a1", "a3"), opponent=cells("b1", "b3"))
        g.apply_move(notation_to_cell("c1"))
        g.apply_move(notation_to_cell("c3"))
        assert g.is_over()
        assert g.black_score() == 6 and g.white_score() == 0
        # every empty cell goes to the side with more discs
        assert g.final_score() == 6 + 58
        with pytest.raises(ValueError):
            g.apply_move(notation_to_cell("h8"))

    def test_final_score_matches_manual_count(self):
        rng = random.Random(99)
        for _ in range(5):
            g = Game()
            while not g.is_over():
                g.apply_move(rng.choice(g.legal_cells()))
            b, w = g.black_score(), g.white_score()
            empties = 64 - b - w
            if b > w:
                expected = b - w + empties
            elif w > b:
                expected = b - w - empties
            else:
                expected = 0
            assert g.final_score() == expected


class TestAISearch:
    def test_request_ai_move_plays_a_legal_move(self):
        g = Game(SearchConfig(depth=2))
        legal = g.legal_cells()
        res = drive_ai(g)
        assert res.cell in legal
        assert g.active_color() is Color.WHITE
        assert not g.search_pending()
        assert len(g.history) == 1

    def test_two_phase_search_api(self):
        g = Game(SearchConfig(depth=2))
        task = g.start_search()
        assert g.search_pending()
        with pytest.raises(RuntimeError):
            g.start_search()
        assert task.wait(timeout=30)
        res = g.poll_result()
        assert res is not None
        # polling does not consume the result
        assert g.poll_result() == res
        assert g.search_pending()
        assert g.take_result() == res
        assert not g.search_pending()
        g.move(res.pos)
        assert g.active_color() is Color.WHITE

    def test_ai_vs_ai_game_finishes(self):
        g = Game(SearchConfig(depth=1))
        while not g.is_over():
            drive_ai(g)
        assert g.black_score() + g.white_score() <= 64
        assert not g.search_pending()

    def test_reset_cancels_inflight_search(self):
        g = Game(SearchConfig(depth=12))
        g.apply_move(notation_to_cell("f5"))
        task = g.start_search()
        time.sleep(0.05)
        t0 = time.perf_counter()
        g.reset()
        assert time.perf_counter() - t0 < 10
        assert task.done() and task.cancelled
        assert not g.search_pending()
        assert g.board == Board.initial()
        assert g.active_color() is Color.BLACK
        assert g.history == [] and not g.is_over()
        # the game is immediately usable again
        g.apply_move(notation_to_cell("d3"))
        assert g.white_score() == 1

    def test_abort_then_reset_is_safe(self):
        g = Game(SearchConfig(depth=12))
        g.start_search()
        g.abort_search()
        g.reset()
        assert g.board == Board.initial()

    def test_move_while_searching_discards_search(self):
        g = Game(SearchConfig(depth=12))
        task = g.start_search()
        g.apply_move(notation_to_cell("f5"))
        assert task.cancelled
        assert not g.search_pending()

    def test_context_manager_aborts_on_exit(self):
        with Game(SearchConfig(depth=12)) as g:
            task = g.start_search()
        assert task.done()
        assert not g.search_pending()

    def test_no_search_after_game_over(self):
        g = Game()
        g.board = Board(player=cells("a1", "a3"), opponent=cells("b1", "b3"))
        g.apply_move(notation_to_cell("c1"))
        g.apply_move(notation_to_cell("c3"))
        assert g.request_ai_move() is None
        with pytest.raises(RuntimeError):
            g.start_search()
