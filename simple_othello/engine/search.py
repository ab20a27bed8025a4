from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .bitboard import bit_to_cell, first_bit, next_bit
from .board import MAX_SCORE, Board
from .eval import DEFAULT_WEIGHTS, EvalWeights

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 5


class CancelToken:
    """Cooperative cancellation flag shared between a search and its owner."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    weights: EvalWeights = DEFAULT_WEIGHTS

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"search depth must be >= 1, got {self.depth}")


@dataclass(frozen=True)
class AIResult:
    pos: int  # bit position, -1 when no move was searched
    value: int  # predicted final disc differential for the mover
    nodes: int = 0
    time_ms: int = 0

    @property
    def cell(self) -> int:
        return bit_to_cell(self.pos) if self.pos >= 0 else -1


class Searcher:
    def __init__(self, weights: EvalWeights = DEFAULT_WEIGHTS, token: Optional[CancelToken] = None) -> None:
        self.weights = weights
        self.token = token
        self.nodes = 0

    @property
    def aborted(self) -> bool:
        return self.token is not None and self.token.cancelled

    def nega_alpha(self, board: Board, depth: int, alpha: int, beta: int, passed: bool) -> int:
        """Fail-hard negamax with alpha-beta pruning.

        `board` is searched in place with make/undo and is restored on return.
        A cancelled search unwinds with the -MAX_SCORE sentinel at every node.
        """
        if self.aborted:
            return -MAX_SCORE
        self.nodes += 1
        if depth <= 0:
            return board.evaluate(self.weights)

        legal = board.legal_bitboard()
        if legal == 0:
            if passed:
                # Neither side can move: the game is over in this line
                return board.get_score()
            board.pass_turn()
            score = -self.nega_alpha(board, depth, -beta, -alpha, True)
            board.pass_turn()
            return score

        pos = first_bit(legal)
        while legal:
            flip = board.get_flip(pos)
            board.move(flip)
            alpha = max(alpha, -self.nega_alpha(board, depth - 1, -beta, -alpha, False))
            board.undo(flip)
            if beta <= alpha:
                break
            legal, pos = next_bit(legal)
        return alpha

    def choose_move(self, board: Board, depth: int) -> AIResult:
        """Search every root move and keep the strictly best one (first wins ties)."""
        start = time.perf_counter()
        self.nodes = 0
        b = board.copy()
        best_pos = -1
        best_value = -MAX_SCORE - 1
        legal = b.legal_bitboard()
        pos = first_bit(legal)
        while legal:
            flip = b.get_flip(pos)
            b.move(flip)
            v = -self.nega_alpha(b, depth - 1, -MAX_SCORE, -best_value, False)
            b.undo(flip)
            if best_value < v:
                best_pos = flip.pos
                best_value = v
            legal, pos = next_bit(legal)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "choose_move depth=%d pos=%d value=%d nodes=%d time_ms=%d aborted=%s",
            depth, best_pos, best_value, self.nodes, elapsed_ms, self.aborted,
        )
        return AIResult(best_pos, best_value, self.nodes, elapsed_ms)


def nega_alpha(
    board: Board,
    depth: int,
    alpha: int,
    beta: int,
    passed: bool = False,
    token: Optional[CancelToken] = None,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> int:
    return Searcher(weights, token).nega_alpha(board.copy(), depth, alpha, beta, passed)


def choose_move(
    board: Board,
    depth: int = DEFAULT_DEPTH,
    token: Optional[CancelToken] = None,
    weights: EvalWeights = DEFAULT_WEIGHTS,
) -> AIResult:
    return Searcher(weights, token).choose_move(board, depth)
