import os
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from tetris_board import Board
from tetris_piece import Piece, TetrominoType


class FixedRandomizer:
    """Hands out a scripted sequence of types, then repeats the last one."""
    def __init__(self, *types):
        self.types = [TetrominoType(t) for t in types]
        self.i = 0

    def next_type(self):
        t = self.types[min(self.i, len(self.types) - 1)]
        self.i += 1
        return t

    def next_piece(self):
        return Piece.create(self.next_type())


def fill_row(board, y, color=(9, 9, 9), skip=()):
    for x in range(board.width):
        if x not in skip:
            board.set_cell(x, y, color)


@pytest.fixture
def board():
    return Board(10, 20)
