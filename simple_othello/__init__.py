"""Bitboard Othello engine with an asynchronous, cancellable alpha-beta AI"""

from .game import Color, Game, GameStatus, HistoryEntry

__all__ = [
    'Color',
    'Game',
    'GameStatus',
    'HistoryEntry',
]

__version__ = "0.1.0"
