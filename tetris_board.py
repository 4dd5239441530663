"""Board: collide, place, sweep, ghost"""
from typing import Iterator, List, Optional, Tuple

from tetris_config import CONFIG
from tetris_piece import Color, Piece

Cell = Optional[Color]


class Board:
    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        self.width = width or CONFIG["BOARD_WIDTH"]
        self.height = height or CONFIG["BOARD_HEIGHT"]
        self.grid: List[List[Cell]] = self._empty_grid()

    def _empty_grid(self) -> List[List[Cell]]:
        return [[None] * self.width for _ in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        return self.grid[y][x]

    def set_cell(self, x: int, y: int, color: Cell):
        self.grid[y][x] = color

    def rows(self) -> Iterator[Tuple[Cell, ...]]:
        for row in self.grid:
            yield tuple(row)

    def is_valid_position(self, piece: Piece) -> bool:
        # rows above the board count as out of bounds; spawn collision relies on it
        for x, y in piece.get_blocks():
            if not self.in_bounds(x, y): return False
            if self.grid[y][x] is not None: return False
        return True

    def place_piece(self, piece: Piece):
        for x, y in piece.get_blocks():
            if self.in_bounds(x, y):
                self.grid[y][x] = piece.color

    def clear_lines(self) -> int:
        c = 0; y = self.height - 1
        while y >= 0:
            if all(v is not None for v in self.grid[y]):
                del self.grid[y]; self.grid.insert(0, [None] * self.width); c += 1
            else: y -= 1
        return c

    def is_game_over(self) -> bool:
        return any(v is not None for v in self.grid[0])

    def clear(self):
        self.grid = self._empty_grid()

    def get_ghost_piece_position(self, piece: Piece) -> Piece:
        ghost = piece.clone()
        while self.is_valid_position(ghost):
            ghost = ghost.move(0, 1)
        return ghost.move(0, -1)
