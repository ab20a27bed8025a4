from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import log_event
from .engine.bitboard import bit_to_cell, cell_to_bit, has_cell, popcount, to_cells
from .engine.board import Board, Flip
from .engine.notation import cell_to_notation, moves_to_string
from .engine.search import AIResult, SearchConfig
from .engine.task import SearchTask

logger = logging.getLogger(__name__)


class Color(enum.IntEnum):
    BLACK = 0
    WHITE = 1

    @property
    def opponent(self) -> "Color":
        return Color(self ^ 1)


class GameStatus(enum.Enum):
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class HistoryEntry:
    color: Color
    flip: Optional[Flip]  # None for a forced pass

    @property
    def cell(self) -> int:
        return bit_to_cell(self.flip.pos) if self.flip is not None else -1


class Game:
    """Turn-taking wrapper around a colour-agnostic Board.

    The board only knows "player" and "opponent"; the game tracks which
    colour the player is, auto-passes a side with no legal move and ends the
    game after two consecutive passes. At most one AI search runs at a time.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self.board = Board.initial()
        self.history: List[HistoryEntry] = []
        self._active = Color.BLACK
        self._status = GameStatus.IN_PROGRESS
        self._task: Optional[SearchTask] = None

    def __enter__(self) -> "Game":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- state -----------------------------------------------------------

    def reset(self) -> None:
        # The worker must be gone before the board is reinitialised
        self.abort_search()
        self.board.reset()
        self.history.clear()
        self._active = Color.BLACK
        self._status = GameStatus.IN_PROGRESS
        log_event("game", "reset")

    def close(self) -> None:
        self.abort_search()

    @property
    def status(self) -> GameStatus:
        return self._status

    def is_over(self) -> bool:
        return self._status is GameStatus.GAME_OVER

    def active_color(self) -> Color:
        return self._active

    def legal_cells(self) -> List[int]:
        if self.is_over():
            return []
        return to_cells(self.board.legal_bitboard())

    def legal_cell_mask(self) -> List[bool]:
        legal = 0 if self.is_over() else self.board.legal_bitboard()
        return [has_cell(legal, c) for c in range(64)]

    def cell_colors(self) -> List[Optional[Color]]:
        """Per-cell disc colour for rendering, None for empty cells."""
        out: List[Optional[Color]] = []
        for c in range(64):
            if has_cell(self.board.player, c):
                out.append(self._active)
            elif has_cell(self.board.opponent, c):
                out.append(self._active.opponent)
            else:
                out.append(None)
        return out

    def black_score(self) -> int:
        if self._active is Color.BLACK:
            return self.board.player_score()
        return self.board.opponent_score()

    def white_score(self) -> int:
        if self._active is Color.BLACK:
            return self.board.opponent_score()
        return self.board.player_score()

    def final_score(self) -> int:
        """Exact score from Black's perspective, empties going to the side ahead."""
        score = self.board.get_score()
        return score if self._active is Color.BLACK else -score

    def transcript(self) -> str:
        return moves_to_string([h.cell for h in self.history])

    # --- moves -----------------------------------------------------------

    def move(self, pos: int) -> Flip:
        """Play bit position `pos` for the active colour, then hand over the turn."""
        if self.is_over():
            raise ValueError("illegal move: game is over")
        if not 0 <= pos < 64 or not (self.board.legal_bitboard() >> pos) & 1:
            raise ValueError(f"illegal move: bit {pos}")
        # Any search still in flight was computed for the position being left
        self.abort_search()

        flip = self.board.get_flip(pos)
        mover = self._active
        self.board.move(flip)
        self._active = mover.opponent
        self.history.append(HistoryEntry(mover, flip))
        log_event(
            "game", "move",
            color=mover.name, cell=cell_to_notation(bit_to_cell(pos)), flips=popcount(flip.flip),
        )

        if not self.board.has_legal_move():
            passer = self._active
            self.board.pass_turn()
            self._active = passer.opponent
            if not self.board.has_legal_move():
                self._status = GameStatus.GAME_OVER
                logger.info("Game over: black=%d white=%d", self.black_score(), self.white_score())
                log_event(
                    "game", "game_over",
                    black=self.black_score(), white=self.white_score(), score=self.final_score(),
                )
            else:
                self.history.append(HistoryEntry(passer, None))
                logger.info("%s has no legal move and passes", passer.name.title())
                log_event("game", "pass", color=passer.name)
        return flip

    def apply_move(self, cell: int) -> Flip:
        """Play cell index `cell` (0 = a1 top-left) for the active colour."""
        return self.move(cell_to_bit(cell))

    # --- AI search -------------------------------------------------------

    def search_pending(self) -> bool:
        return self._task is not None

    def start_search(self) -> SearchTask:
        """Launch the AI search for the side to move on a copy of the board."""
        if self._task is not None:
            raise RuntimeError("a search is already pending")
        if self.is_over():
            raise RuntimeError("cannot search: game is over")
        if not self.board.has_legal_move():
            raise RuntimeError("cannot search: no legal move")
        task = SearchTask(self.board, self.config.depth, self.config.weights)
        task.start()
        self._task = task
        log_event("search", "start", color=self._active.name, depth=self.config.depth)
        return task

    def poll_result(self) -> Optional[AIResult]:
        """Non-blocking; the finished result for the current board, if any."""
        task = self._task
        if task is None or not task.done():
            return None
        if task.board != self.board:
            return None
        return task.result()

    def take_result(self) -> Optional[AIResult]:
        """Release a finished search slot, returning its result if still current."""
        task = self._task
        if task is None or not task.done():
            return None
        self._task = None
        if task.board != self.board:
            logger.warning("Discarding search result for a stale position")
            return None
        result = task.result()
        if result is not None:
            log_event(
                "search", "done",
                cell=cell_to_notation(result.cell) if result.pos >= 0 else None,
                value=result.value, nodes=result.nodes, time_ms=result.time_ms,
            )
        return result

    def request_ai_move(self) -> Optional[AIResult]:
        """Per-frame driver: start a search if needed, play its move once ready.

        Returns the applied result, or None while the AI is still thinking.
        """
        if self.is_over():
            return None
        if self._task is None:
            self.start_search()
        if not self._task.done():
            return None
        result = self.take_result()
        if result is None or result.pos < 0:
            return None
        self.move(result.pos)
        return result

    def abort_search(self) -> None:
        """Cancel any pending search and wait for its worker to exit."""
        task = self._task
        if task is None:
            return
        self._task = None
        task.cancel(wait=True)
        log_event("search", "cancelled", finished=task.done())
