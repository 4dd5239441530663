"""
pygame render sink and status sink.

- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render the static background (grid + panel frame + button strip) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Optional
from tetris_board import Board
from tetris_layout import Dims
from tetris_piece import Color, Piece, TetrominoType

BG = (10,13,34)
GRID = (40,50,90)
PANEL = (21,25,53)
FRAME = (50,60,100)
TEXT = (200,210,240)
DIM_TEXT = (165,175,215)

BUTTON_LABELS = {
    "left": "<", "rotate": "Rot", "right": ">", "down": "v",
    "drop": "Drop", "pause": "P", "restart": "R",
}


class EnvironmentMissingError(RuntimeError):
    """A surface or font the renderer needs was not provided."""


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_type: Optional[TetrominoType] = None
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_label: Optional[pygame.Surface] = None
    controls: Optional[list] = None


class Renderer:
    """Draws board, pieces and HUD onto ``screen``. Never mutates game state."""
    def __init__(self, screen: pygame.Surface, dims: Dims, font: pygame.font.Font,
                 big_font: Optional[pygame.font.Font] = None):
        if screen is None:
            raise EnvironmentMissingError("game surface not found")
        if font is None:
            raise EnvironmentMissingError("HUD font not found")
        self.screen = screen
        self.dims = dims
        self.font = font
        self.big_font = big_font or font
        self.hud = HudCache()
        self.cell_surf: Dict[Color, pygame.Surface] = {}
        self.ghost_surf: Dict[Color, pygame.Surface] = {}
        self.pv_cell = max(14, int(dims.cell*0.75))
        self.pv_x = dims.panel_x + 12
        self.pv_y = dims.panel_y + 150
        self._make_static()

    # ---------- Static background (panel + buttons) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, PANEL, panel_rect)
        pygame.draw.rect(self.bg, FRAME, panel_rect, 1)
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*4+12, self.pv_cell*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)
        for name, rect in d.buttons.items():
            r = pygame.Rect(rect)
            pygame.draw.rect(self.bg, PANEL, r)
            pygame.draw.rect(self.bg, FRAME, r, 1)
            label = self.font.render(BUTTON_LABELS.get(name, name), True, TEXT)
            self.bg.blit(label, label.get_rect(center=r.center))

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _cell(self, color: Color) -> pygame.Surface:
        s = self.cell_surf.get(color)
        if s is None:
            c = self.dims.cell
            s = pygame.Surface((c-2, c-2))
            s.fill(color)
            self.cell_surf[color] = s
        return s

    def _ghost(self, color: Color) -> pygame.Surface:
        g = self.ghost_surf.get(color)
        if g is None:
            c = self.dims.cell
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, color, (0,0,c-8,c-8), 2)
            self.ghost_surf[color] = g
        return g

    # ---------- Render sink ----------
    def clear(self):
        self.screen.blit(self.bg, (0,0))

    def draw_grid(self):
        d = self.dims
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.screen, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.screen, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))

    def _visible(self, bx: int, by: int) -> bool:
        return 0 <= bx < self.dims.cols and 0 <= by < self.dims.rows

    def draw_cell(self, bx: int, by: int, color: Color):
        if not self._visible(bx, by): return
        rx = self.dims.board_x + bx*self.dims.cell + 1
        ry = self.dims.board_y + by*self.dims.cell + 1
        self.screen.blit(self._cell(color), (rx, ry))

    def draw_ghost_cell(self, bx: int, by: int, color: Color):
        if not self._visible(bx, by): return
        rx = self.dims.board_x + bx*self.dims.cell + 4
        ry = self.dims.board_y + by*self.dims.cell + 4
        self.screen.blit(self._ghost(color), (rx, ry))

    def draw_board(self, board: Board):
        for y, row in enumerate(board.rows()):
            for x, color in enumerate(row):
                if color is not None:
                    self.draw_cell(x, y, color)

    def draw_piece(self, piece: Piece):
        for x, y in piece.get_blocks():
            self.draw_cell(x, y, piece.color)

    def draw_ghost_piece(self, piece: Piece):
        for x, y in piece.get_blocks():
            self.draw_ghost_cell(x, y, piece.color)

    def draw_next_piece(self, piece: Piece):
        if piece.t != self.hud.next_type:
            self.hud.next_type = piece.t
            s = pygame.Surface((self.pv_cell*4, self.pv_cell*4), pygame.SRCALPHA)
            block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
            block.fill(piece.color)
            off = (4 - piece.size) // 2
            for x, y in piece.at(off, off).get_blocks():
                s.blit(block, (x * self.pv_cell + 1, y * self.pv_cell + 1))
            self.hud.next_label = s
        self.screen.blit(self.hud.next_label, (self.pv_x, self.pv_y))

    # ---------- Status sink ----------
    def update_status(self, score: int, level: int, lines: int, paused: bool, game_over: bool):
        d = self.dims
        f = self.font
        screen = self.screen
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, TEXT)
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, TEXT)
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, TEXT)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("Left/Right Move", True, DIM_TEXT),
                f.render("Down Soft drop", True, DIM_TEXT),
                f.render("Up Rotate", True, DIM_TEXT),
                f.render("Space Hard drop", True, DIM_TEXT),
                f.render("P Pause / R Restart", True, DIM_TEXT),
                f.render("F1 Tuning", True, DIM_TEXT),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
        if game_over:
            self._banner("GAME OVER", "Press R to restart")
        elif paused:
            self._banner("PAUSED", "Press P to resume")

    def _banner(self, title: str, hint: str):
        d = self.dims
        shade = pygame.Surface((d.board_w, d.board_h), pygame.SRCALPHA)
        shade.fill((0,0,0,170))
        self.screen.blit(shade, (d.board_x, d.board_y))
        cx = d.board_x + d.board_w // 2
        cy = d.board_y + d.board_h // 2
        msg = self.big_font.render(title, True, (255,220,220))
        self.screen.blit(msg, msg.get_rect(center=(cx, cy - 16)))
        sub = self.font.render(hint, True, TEXT)
        self.screen.blit(sub, sub.get_rect(center=(cx, cy + 18)))
