"""Bitboard, evaluation and search core"""

from .board import Board, Flip, MAX_SCORE
from .eval import EvalWeights, DEFAULT_WEIGHTS
from .search import AIResult, CancelToken, SearchConfig, Searcher, choose_move, nega_alpha
from .task import SearchTask

__all__ = [
    'Board',
    'Flip',
    'MAX_SCORE',
    'EvalWeights',
    'DEFAULT_WEIGHTS',
    'AIResult',
    'CancelToken',
    'SearchConfig',
    'Searcher',
    'choose_move',
    'nega_alpha',
    'SearchTask',
]
