from conftest import fill_row

from tetris_board import Board
from tetris_piece import Piece


def test_dimensions_and_empty_grid(board):
    assert (board.width, board.height) == (10, 20)
    assert all(v is None for row in board.rows() for v in row)


def test_spawned_piece_is_valid(board):
    assert board.is_valid_position(Piece.create("I"))


def test_out_of_bounds_is_invalid(board):
    o = Piece.create("O")
    assert not board.is_valid_position(o.at(-1, 0))
    assert not board.is_valid_position(o.at(9, 0))
    assert not board.is_valid_position(o.at(0, 19))
    assert not board.is_valid_position(o.at(0, -1))
    assert board.is_valid_position(o.at(8, 18))


def test_blocks_above_board_are_invalid(board):
    # T's first row holds a block, so y=-1 puts it above the board
    assert not board.is_valid_position(Piece.create("T", 3, -1))


def test_occupied_cell_is_invalid(board):
    board.set_cell(4, 1, (1, 1, 1))
    assert not board.is_valid_position(Piece.create("I"))
    assert board.is_valid_position(Piece.create("I", 5, 0))


def test_place_piece_writes_color(board):
    p = Piece.create("O", 0, 18)
    board.place_piece(p)
    for x, y in [(0,18),(1,18),(0,19),(1,19)]:
        assert board.cell(x, y) == p.color


def test_place_piece_ignores_off_grid_blocks(board):
    p = Piece.create("O", 9, -1)
    board.place_piece(p)
    assert board.cell(9, 0) == p.color
    assert sum(v is not None for row in board.rows() for v in row) == 1


def test_clear_lines_single(board):
    fill_row(board, 19)
    board.set_cell(0, 18, (5, 5, 5))
    assert board.clear_lines() == 1
    assert board.cell(0, 19) == (5, 5, 5)
    assert all(v is None for v in board.grid[0])


def test_clear_lines_is_idempotent(board):
    fill_row(board, 19)
    fill_row(board, 17)
    assert board.clear_lines() == 2
    assert board.clear_lines() == 0


def test_clear_adjacent_and_split_rows(board):
    fill_row(board, 19)
    fill_row(board, 18)
    board.set_cell(3, 17, (7, 7, 7))
    fill_row(board, 16)
    board.set_cell(6, 15, (8, 8, 8))
    assert board.clear_lines() == 3
    assert board.cell(3, 19) == (7, 7, 7)
    assert board.cell(6, 18) == (8, 8, 8)
    assert sum(v is not None for row in board.rows() for v in row) == 2


def test_locking_into_top_row_clears_and_shifts():
    b = Board(4, 6)
    marker_a, marker_b = (1, 0, 0), (0, 1, 0)
    # row 0 and row 2 each miss one cell that a vertical I piece fills
    fill_row(b, 0, skip=(3,))
    b.set_cell(0, 1, marker_a)
    fill_row(b, 2, skip=(3,))
    b.set_cell(1, 3, marker_b)
    fill_row(b, 4, skip=(0,))
    vertical_i = Piece.create("I").rotate().at(1, 0)
    assert list(vertical_i.get_blocks()) == [(3,0),(3,1),(3,2),(3,3)]
    b.place_piece(vertical_i)
    assert b.clear_lines() == 2
    # surviving rows keep their order; each drops by the cleared rows below it
    assert b.cell(0, 2) == marker_a
    assert b.cell(3, 2) == vertical_i.color
    assert b.cell(1, 3) == marker_b
    assert b.cell(3, 3) == vertical_i.color
    assert b.cell(0, 4) is None and b.cell(1, 4) is not None
    assert all(v is None for v in b.grid[0])
    assert all(v is None for v in b.grid[1])


def test_game_over_only_watches_top_row(board):
    fill_row(board, 1, skip=(0,))
    assert not board.is_game_over()
    board.set_cell(5, 0, (1, 1, 1))
    assert board.is_game_over()


def test_clear_resets_cells_keeps_size(board):
    fill_row(board, 10, skip=(2,))
    board.clear()
    assert (board.width, board.height) == (10, 20)
    assert all(v is None for row in board.rows() for v in row)


def test_ghost_drops_to_floor(board):
    p = Piece.create("I")
    g = board.get_ghost_piece_position(p)
    assert g.position == (3, 18)
    assert g.shape == p.shape
    assert p.position == (3, 0)


def test_ghost_rests_on_stack(board):
    fill_row(board, 19, skip=(0,))
    g = board.get_ghost_piece_position(Piece.create("O", 4, 0))
    assert g.position == (4, 17)


def test_default_size_comes_from_config():
    b = Board()
    assert (b.width, b.height) == (10, 20)
