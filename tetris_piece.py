"""Piece model, shapes, clockwise rotation"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, Tuple

Shape = Tuple[Tuple[int, ...], ...]
Color = Tuple[int, int, int]

SPAWN_X, SPAWN_Y = 3, 0


class TetrominoType(str, Enum):
    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    TetrominoType.O: ((1,1),(1,1)),
    TetrominoType.T: ((0,1,0),(1,1,1),(0,0,0)),
    TetrominoType.S: ((0,1,1),(1,1,0),(0,0,0)),
    TetrominoType.Z: ((1,1,0),(0,1,1),(0,0,0)),
    TetrominoType.J: ((1,0,0),(1,1,1),(0,0,0)),
    TetrominoType.L: ((0,0,1),(1,1,1),(0,0,0)),
}

COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0,245,255),
    TetrominoType.O: (255,255,0),
    TetrominoType.T: (160,0,240),
    TetrominoType.S: (0,240,0),
    TetrominoType.Z: (240,0,0),
    TetrominoType.J: (0,0,240),
    TetrominoType.L: (255,128,0),
}

TETROMINO_TYPES = list(TetrominoType)


def rotate_cw(m: Shape) -> Shape:
    n = len(m)
    out = [[0] * n for _ in range(n)]
    for y in range(n):
        for x in range(n):
            out[x][n - 1 - y] = m[y][x]
    return tuple(tuple(r) for r in out)


@dataclass(frozen=True)
class Piece:
    t: TetrominoType
    shape: Shape
    color: Color
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @staticmethod
    def create(t, x: int = SPAWN_X, y: int = SPAWN_Y) -> "Piece":
        t = TetrominoType(t)
        return Piece(t, SHAPES[t], COLORS[t], x, y)

    @property
    def size(self) -> int:
        return len(self.shape)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def rotate(self) -> "Piece":
        """Clockwise quarter turn inside the bounding box; position is kept."""
        return replace(self, shape=rotate_cw(self.shape))

    def move(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def at(self, x: int, y: int) -> "Piece":
        return replace(self, x=x, y=y)

    def get_blocks(self) -> Iterator[Tuple[int, int]]:
        for r, row in enumerate(self.shape):
            for c, v in enumerate(row):
                if v:
                    yield (self.x + c, self.y + r)

    def clone(self) -> "Piece":
        return replace(self, shape=tuple(tuple(r) for r in self.shape))
