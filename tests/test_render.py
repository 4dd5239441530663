import pygame
import pytest

from tetris_board import Board
from tetris_engine import GameEngine
from tetris_layout import compute_dims
from tetris_piece import Piece
from tetris_render import BG, EnvironmentMissingError, Renderer

from conftest import FixedRandomizer


@pytest.fixture(scope="module")
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 22)


@pytest.fixture
def dims():
    return compute_dims()


@pytest.fixture
def renderer(dims, font):
    screen = pygame.Surface((dims.total_w, dims.total_h))
    return Renderer(screen, dims, font)


def cell_center(dims, x, y):
    return (dims.board_x + x * dims.cell + dims.cell // 2,
            dims.board_y + y * dims.cell + dims.cell // 2)


def test_missing_surface_is_fatal(dims, font):
    with pytest.raises(EnvironmentMissingError):
        Renderer(None, dims, font)


def test_missing_font_is_fatal(dims):
    with pytest.raises(EnvironmentMissingError):
        Renderer(pygame.Surface((10, 10)), dims, None)


def test_draw_cell_fills_color(renderer, dims):
    renderer.clear()
    renderer.draw_cell(2, 5, (250, 10, 10))
    assert tuple(renderer.screen.get_at(cell_center(dims, 2, 5)))[:3] == (250, 10, 10)


def test_offscreen_cells_are_skipped(renderer, dims):
    renderer.clear()
    renderer.draw_cell(0, -1, (250, 10, 10))
    renderer.draw_cell(dims.cols, 0, (250, 10, 10))
    assert tuple(renderer.screen.get_at((dims.board_x + 5, dims.board_y - 5)))[:3] == BG


def test_draw_board_and_piece(renderer, dims):
    b = Board(dims.cols, dims.rows)
    b.set_cell(0, 19, (1, 200, 3))
    renderer.clear()
    renderer.draw_board(b)
    p = Piece.create("O", 6, 10)
    renderer.draw_piece(p)
    assert tuple(renderer.screen.get_at(cell_center(dims, 0, 19)))[:3] == (1, 200, 3)
    assert tuple(renderer.screen.get_at(cell_center(dims, 7, 11)))[:3] == p.color


def test_ghost_is_outline_only(renderer, dims):
    renderer.clear()
    p = Piece.create("T", 3, 10)
    renderer.draw_ghost_piece(p)
    # centre of a ghost cell stays background
    assert tuple(renderer.screen.get_at(cell_center(dims, 4, 10)))[:3] == BG


def test_full_frame_through_engine(renderer):
    e = GameEngine(board=Board(10, 20), randomizer=FixedRandomizer("T", "I"),
                   renderer=renderer, status=renderer)
    e.tick(16)
    assert renderer.hud.score == 0
    assert renderer.hud.next_label is not None
    e._game_over()
    e.tick(16)
    renderer.update_status(10, 2, 12, True, False)
    assert renderer.hud.level == 2


def test_next_preview_is_cached_per_type(renderer, dims):
    renderer.clear()
    renderer.draw_next_piece(Piece.create("L"))
    first = renderer.hud.next_label
    renderer.draw_next_piece(Piece.create("L"))
    assert renderer.hud.next_label is first
    renderer.draw_next_piece(Piece.create("O"))
    assert renderer.hud.next_label is not first
    # O sits centred: preview cells 1..2 of the 4x4 box
    px = renderer.pv_x + renderer.pv_cell + renderer.pv_cell // 2
    py = renderer.pv_y + renderer.pv_cell + renderer.pv_cell // 2
    assert tuple(renderer.screen.get_at((px, py)))[:3] == Piece.create("O").color
