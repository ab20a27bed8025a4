from __future__ import annotations

import logging
import threading
from typing import Optional

from .board import Board
from .eval import DEFAULT_WEIGHTS, EvalWeights
from .search import AIResult, CancelToken, Searcher

logger = logging.getLogger(__name__)


class SearchTask:
    """Root move search on a worker thread.

    The task searches a snapshot of the board taken at construction and owns
    its own cancel token. The owner polls `done()`/`result()` without
    blocking and may `cancel()` at any time; a cancelled task never yields a
    result.
    """

    def __init__(self, board: Board, depth: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> None:
        self.board = board.copy()
        self.depth = depth
        self.token = CancelToken()
        self._searcher = Searcher(weights, self.token)
        self._thread: Optional[threading.Thread] = None
        self._result: Optional[AIResult] = None
        self._error: Optional[Exception] = None
        self._finished = threading.Event()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("search task already started")
        self._thread = threading.Thread(target=self._run, name="othello-search", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            self._result = self._searcher.choose_move(self.board, self.depth)
        except Exception as e:
            logger.exception("search worker failed")
            self._error = e
        finally:
            self._finished.set()

    @property
    def started(self) -> bool:
        return self._thread is not None

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def done(self) -> bool:
        return self._finished.is_set()

    def result(self) -> Optional[AIResult]:
        """Non-blocking; None while running or after cancellation."""
        if not self._finished.is_set():
            return None
        if self._error is not None:
            raise self._error
        if self.token.cancelled:
            return None
        return self._result

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def cancel(self, wait: bool = True, timeout: Optional[float] = None) -> None:
        self.token.cancel()
        if wait and self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("search worker still running after %.1fs", timeout or 0.0)
        logger.debug("search task cancelled (finished=%s)", self.done())
