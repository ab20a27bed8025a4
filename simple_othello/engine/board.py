from __future__ import annotations

from dataclasses import dataclass

from .bitboard import DIRECTIONS, MASK64, popcount, shift
from .eval import DEFAULT_WEIGHTS, EvalWeights, evaluate_masks

# Largest absolute score a position can have (final disc differential)
MAX_SCORE = 64

# Standard opening: the side to move (Black) holds d5/e4, the other side d4/e5
INITIAL_PLAYER = 0x0000000810000000
INITIAL_OPPONENT = 0x0000001008000000


@dataclass(frozen=True)
class Flip:
    """Move record: played bit position and the discs it captures.

    Only valid against the exact board it was computed from.
    """

    pos: int
    flip: int


@dataclass
class Board:
    """Two bitboards relative to whoever moves next.

    `player` is the side to act, `opponent` the other; `move` and `pass_turn`
    swap the roles, so the board itself carries no notion of colour.
    """

    player: int = INITIAL_PLAYER
    opponent: int = INITIAL_OPPONENT

    @staticmethod
    def initial() -> "Board":
        return Board(INITIAL_PLAYER, INITIAL_OPPONENT)

    def reset(self) -> None:
        self.player = INITIAL_PLAYER
        self.opponent = INITIAL_OPPONENT

    def copy(self) -> "Board":
        return Board(self.player, self.opponent)

    def move(self, flip: Flip) -> None:
        self.player ^= flip.flip
        self.opponent ^= flip.flip
        self.player ^= 1 << flip.pos
        self.player, self.opponent = self.opponent, self.player

    def undo(self, flip: Flip) -> None:
        self.player, self.opponent = self.opponent, self.player
        self.player ^= 1 << flip.pos
        self.player ^= flip.flip
        self.opponent ^= flip.flip

    def pass_turn(self) -> None:
        self.player, self.opponent = self.opponent, self.player

    def get_flip(self, pos: int) -> Flip:
        """Discs captured by playing bit position `pos`; empty if the move is not legal."""
        x = 1 << pos
        flips = 0
        for d, mask in DIRECTIONS:
            flips |= self._flip_part(d, mask, x)
        return Flip(pos=pos, flip=flips)

    def _flip_part(self, d: int, mask: int, x: int) -> int:
        o = self.opponent & mask
        f = shift(x, d) & o
        # A ray crosses at most eight cells
        for _ in range(8):
            nf = shift(f, d)
            if nf & self.player:
                return f
            grown = f | (nf & o)
            if grown == f:
                break
            f = grown
        return 0

    def legal_bitboard(self) -> int:
        """Bitmask of legal moves for the side to act."""
        moves = 0
        for d, mask in DIRECTIONS:
            moves |= self._legal_part(d, mask)
        return moves & self.empty_bitboard()

    def _legal_part(self, d: int, mask: int) -> int:
        o = self.opponent & mask
        t = o & shift(self.player, d)
        # Five more expansions cover the longest capturable run on an 8x8 board
        t |= o & shift(t, d)
        t |= o & shift(t, d)
        t |= o & shift(t, d)
        t |= o & shift(t, d)
        t |= o & shift(t, d)
        return shift(t, d)

    def has_legal_move(self) -> bool:
        return self.legal_bitboard() != 0

    def empty_bitboard(self) -> int:
        return ~(self.player | self.opponent) & MASK64

    def empty_count(self) -> int:
        return 64 - popcount(self.player | self.opponent)

    def player_score(self) -> int:
        return popcount(self.player)

    def opponent_score(self) -> int:
        return popcount(self.opponent)

    def evaluate(self, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
        return evaluate_masks(self.player, self.opponent, weights)

    def get_score(self) -> int:
        """Exact final score for the side to act, empties going to the side ahead."""
        p = self.player_score()
        o = self.opponent_score()
        v = 64 - p - o
        if p > o:
            return p - o + v
        if p < o:
            return p - o - v
        # Tied discs leave no side ahead, so the empties count for neither
        return 0
