"""Game rules: spawn, gravity, input actions, locking, scoring, restart"""
import logging
from dataclasses import dataclass
from typing import Optional

from tetris_board import Board
from tetris_config import CONFIG
from tetris_input import InputTimingController
from tetris_piece import Piece
from tetris_rng import PieceRandomizer

log = logging.getLogger(__name__)

LINES_PER_LEVEL = 10
SCORE_TABLE = (0, 40, 100, 300, 1200)   # multiplied by level+1
HARD_DROP_PER_CELL = 2
MIN_DROP_INTERVAL_MS = 50
DROP_INTERVAL_STEP_MS = 50

# Tried in order after a plain rotation collides
WALL_KICKS = ((-1, 0), (1, 0), (0, -1), (-2, 0), (2, 0))


def line_clear_score(lines: int, level: int) -> int:
    return SCORE_TABLE[lines] * (level + 1)


def level_for_lines(total_lines: int) -> int:
    return total_lines // LINES_PER_LEVEL + 1


def drop_interval_for_level(level: int, base: Optional[int] = None) -> int:
    base = CONFIG["DROP_INTERVAL_MS"] if base is None else base
    return max(MIN_DROP_INTERVAL_MS, base - (level - 1) * DROP_INTERVAL_STEP_MS)


@dataclass
class GameState:
    score: int = 0
    level: int = 1
    lines: int = 0
    is_paused: bool = False
    is_game_over: bool = False


class GameEngine:
    """Owns the board, the falling piece and the lookahead piece.

    Drive it with :meth:`tick` once per frame. ``renderer`` and ``status``
    are optional sinks; with neither attached the engine runs headless.
    """

    def __init__(self, board: Optional[Board] = None,
                 controller: Optional[InputTimingController] = None,
                 randomizer: Optional[PieceRandomizer] = None,
                 renderer=None, status=None,
                 drop_interval: Optional[int] = None):
        self.board = board or Board()
        self.controller = controller or InputTimingController()
        self.randomizer = randomizer or PieceRandomizer(CONFIG["SEED"])
        self.renderer = renderer
        self.status = status
        self.base_drop_interval = CONFIG["DROP_INTERVAL_MS"] if drop_interval is None else drop_interval
        self.drop_interval = self.base_drop_interval
        self.drop_timer = 0
        self.state = GameState()
        self.current: Optional[Piece] = None
        self.next: Optional[Piece] = None
        self.running = True
        self.spawn()

    @property
    def spawn_position(self):
        return ((self.board.width - 4) // 2, 0)

    # ---------- spawn ----------
    def spawn(self):
        sx, sy = self.spawn_position
        if self.next is not None:
            self.current = self.next.at(sx, sy)
        else:
            self.current = self.randomizer.next_piece().at(sx, sy)
        self.next = self.randomizer.next_piece()
        log.debug("spawned %s, next %s", self.current.t.value, self.next.t.value)
        if not self.board.is_valid_position(self.current):
            self._game_over()

    def _game_over(self):
        self.state.is_game_over = True
        log.info("game over: score=%d level=%d lines=%d",
                 self.state.score, self.state.level, self.state.lines)

    # ---------- frame ----------
    def tick(self, dt: float):
        if not self.running:
            return
        self.controller.update(dt)
        self.handle_input()
        if not self.state.is_paused and not self.state.is_game_over:
            self.update(dt)
        self.render()

    def handle_input(self):
        controls = self.controller.get_controls()
        if controls.pause != self.state.is_paused:
            self.state.is_paused = controls.pause
        if controls.restart and self.state.is_game_over:
            self.restart()
        # paused and game-over frames leave pending actions for the next live frame
        if self.state.is_paused or self.state.is_game_over or self.current is None:
            return
        if controls.left: self.move_piece(-1, 0)
        elif controls.right: self.move_piece(1, 0)
        elif controls.down: self.move_piece(0, 1)
        elif controls.up: self.rotate_piece()
        elif controls.space: self.hard_drop()
        self.controller.reset_one_time_controls()

    def update(self, dt: float):
        if self.current is None:
            return
        self.drop_timer += dt
        if self.drop_timer >= self.drop_interval:
            self.drop_timer = 0
            if not self.move_piece(0, 1):
                self.lock_piece()

    # ---------- actions ----------
    def move_piece(self, dx: int, dy: int) -> bool:
        if self.current is None:
            return False
        moved = self.current.move(dx, dy)
        if self.board.is_valid_position(moved):
            self.current = moved
            return True
        return False

    def rotate_piece(self) -> bool:
        if self.current is None:
            return False
        rotated = self.current.rotate()
        if self.board.is_valid_position(rotated):
            self.current = rotated
            return True
        for dx, dy in WALL_KICKS:
            kicked = rotated.move(dx, dy)
            if self.board.is_valid_position(kicked):
                self.current = kicked
                return True
        return False

    def hard_drop(self) -> int:
        if self.current is None:
            return 0
        drop = 0
        while self.move_piece(0, 1):
            drop += 1
        self.state.score += drop * HARD_DROP_PER_CELL
        self.lock_piece()
        return drop

    def lock_piece(self):
        if self.current is None:
            return
        self.board.place_piece(self.current)
        cleared = self.board.clear_lines()
        log.debug("locked %s at %s, cleared %d", self.current.t.value, self.current.position, cleared)
        self.update_score(cleared)
        if self.board.is_game_over():
            self._game_over()
        else:
            self.spawn()

    def update_score(self, lines_cleared: int):
        if lines_cleared <= 0:
            return
        s = self.state
        s.lines += lines_cleared
        s.score += line_clear_score(lines_cleared, s.level)
        new_level = level_for_lines(s.lines)
        if new_level > s.level:
            s.level = new_level
            self.drop_interval = drop_interval_for_level(s.level, self.base_drop_interval)
            log.debug("level %d, drop interval %dms", s.level, self.drop_interval)

    # ---------- lifecycle ----------
    def restart(self):
        log.info("restart")
        self.board.clear()
        self.state = GameState()
        self.drop_interval = self.base_drop_interval
        self.drop_timer = 0
        self.controller.reset_pause()
        self.current = None
        self.next = None
        self.spawn()

    def destroy(self):
        self.running = False
        self.controller.cancel_all()

    # ---------- output ----------
    def ghost_piece(self) -> Optional[Piece]:
        if self.current is None:
            return None
        return self.board.get_ghost_piece_position(self.current)

    def render(self):
        if self.renderer is not None:
            r = self.renderer
            r.clear()
            r.draw_grid()
            r.draw_board(self.board)
            if self.current is not None:
                r.draw_ghost_piece(self.ghost_piece())
                r.draw_piece(self.current)
            if self.next is not None:
                r.draw_next_piece(self.next)
        if self.status is not None:
            s = self.state
            self.status.update_status(s.score, s.level, s.lines, s.is_paused, s.is_game_over)
