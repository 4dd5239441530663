"""Uniform piece randomizer"""
import random
from typing import Optional

from tetris_piece import TETROMINO_TYPES, Piece, TetrominoType


class PieceRandomizer:
    """Independent uniform draw over the seven tetrominoes on every call.

    There is no bag and no repeat rejection, so droughts and streaks are
    possible. Pass a seed for a reproducible sequence.
    """

    PIECES = TETROMINO_TYPES

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rand = random.Random(seed)

    def next_type(self) -> TetrominoType:
        return self._rand.choice(self.PIECES)

    def next_piece(self) -> Piece:
        return Piece.create(self.next_type())
