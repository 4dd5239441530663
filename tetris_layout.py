# tetris_layout.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from tetris_config import CONFIG

# On-screen buttons for touch/mouse play, left to right below the board
TOUCH_BUTTONS = ("left", "rotate", "right", "down", "drop", "pause", "restart")

Rect = Tuple[int, int, int, int]

@dataclass
class Dims:
    cols: int
    rows: int
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    buttons_y: int
    button_h: int
    buttons: Dict[str, Rect] = field(default_factory=dict)

    def button_at(self, pos: Tuple[int, int]) -> Optional[str]:
        px, py = pos
        for name, (x, y, w, h) in self.buttons.items():
            if x <= px < x + w and y <= py < y + h:
                return name
        return None

def compute_dims(cols: Optional[int] = None, rows: Optional[int] = None) -> Dims:
    cols = cols or CONFIG["BOARD_WIDTH"]
    rows = rows or CONFIG["BOARD_HEIGHT"]
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    panel_w = 220
    button_h = 44

    board_w = cols * cell
    board_h = rows * cell

    total_w = margin + board_w + margin + panel_w + margin
    total_h = margin + board_h + margin + button_h + margin

    board_x = margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin
    buttons_y = board_y + board_h + margin

    gap = 6
    span = total_w - 2 * margin
    bw = (span - gap * (len(TOUCH_BUTTONS) - 1)) // len(TOUCH_BUTTONS)
    buttons = {
        name: (margin + i * (bw + gap), buttons_y, bw, button_h)
        for i, name in enumerate(TOUCH_BUTTONS)
    }

    return Dims(
        cols=cols, rows=rows, cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y,
        buttons_y=buttons_y, button_h=button_h, buttons=buttons,
    )
