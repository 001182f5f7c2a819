import numpy as np
import pytest

from block_puzzle_engine.game import (
    Board,
    CellStatus,
    IllegalPlacementError,
    OutOfBoundsError,
    PieceKind,
    is_legal,
    new_board,
)
from tests.helpers import GREEN, RED, empty_rows, make_piece


def test_new_board_is_empty():
    board = new_board(8)
    assert board.size == 8
    assert not board.filled_mask().any()
    cell = board.cell(3, 4)
    assert cell.status == CellStatus.EMPTY
    assert cell.color is None and cell.break_color is None


def test_board_size_must_be_positive():
    with pytest.raises(ValueError):
        Board(0)


def test_for_each_cell_visits_row_major_once():
    board = new_board(4)
    seen = []
    board.for_each_cell(lambda cell, x, y: seen.append((x, y, cell.x, cell.y)))
    assert [(x, y) for x, y, _, _ in seen] == [(x, y) for y in range(4) for x in range(4)]
    assert all(x == cx and y == cy for x, y, cx, cy in seen)


def test_place_fills_cells_with_piece_color():
    board = new_board(8)
    piece = make_piece(PieceKind.T, color=GREEN)
    cells = board.place(piece, 2, 5)
    assert cells == [(2, 5), (3, 5), (4, 5), (3, 6)]
    for x, y in cells:
        cell = board.cell(x, y)
        assert cell.status == CellStatus.FILLED
        assert cell.color == GREEN
    assert int(board.filled_mask().sum()) == 4


def test_place_out_of_bounds_fails_without_mutation():
    board = new_board(8)
    with pytest.raises(OutOfBoundsError) as info:
        board.place(make_piece(PieceKind.I3), 6, 0)
    assert (info.value.x, info.value.y) == (8, 0)
    assert not board.filled_mask().any()


def test_place_overlap_fails_without_mutation():
    board = new_board(8)
    board.place(make_piece(PieceKind.DOT), 1, 0)
    before = board.status.copy()
    with pytest.raises(IllegalPlacementError) as info:
        board.place(make_piece(PieceKind.I3), 0, 0)
    assert not isinstance(info.value, OutOfBoundsError)
    assert np.array_equal(board.status, before)


def test_out_of_bounds_is_an_illegal_placement():
    assert issubclass(OutOfBoundsError, IllegalPlacementError)
    with pytest.raises(OutOfBoundsError):
        new_board(8).cell(8, 0)


def test_is_filled_rejects_outside_cells():
    board = new_board(8)
    board.place(make_piece(PieceKind.DOT), 7, 0)
    for x, y in [(-1, 0), (0, -1), (8, 0), (0, 8)]:
        with pytest.raises(OutOfBoundsError):
            board.is_filled(x, y)



def test_from_rows_and_format_board():
    board = Board.from_rows(["#..", ".#.", "..#"])
    assert board.is_filled(0, 0) and board.is_filled(1, 1) and board.is_filled(2, 2)
    assert not board.is_filled(1, 0)
    assert board.format_board() == "█··\n·█·\n··█"
    with pytest.raises(ValueError):
        Board.from_rows(["##", "#"])


def test_hover_preview_marks_piece_cells():
    board = new_board(8)
    assert board.update_hover_preview(make_piece(PieceKind.SQUARE2, color=GREEN), 3, 3)
    for x, y in [(3, 3), (4, 3), (3, 4), (4, 4)]:
        cell = board.cell(x, y)
        assert cell.status == CellStatus.HOVER_PREVIEW
        assert cell.color == GREEN
    assert len(board.hover_cells()) == 4
    assert not board.filled_mask().any()


def test_hover_preview_marks_lines_that_would_break():
    rows = empty_rows()
    rows[0] = "..######"
    board = Board.from_rows(rows, color=RED)
    assert board.update_hover_preview(make_piece(PieceKind.DOMINO, color=GREEN), 0, 0)
    for x in (0, 1):
        cell = board.cell(x, 0)
        assert cell.status == CellStatus.HOVER_BREAK_ON_EMPTY
        assert cell.color == GREEN
    for x in range(2, 8):
        cell = board.cell(x, 0)
        assert cell.status == CellStatus.HOVER_BREAK_ON_FILLED
        assert cell.color == RED
        assert cell.break_color == GREEN
    assert all(board.cell(x, 1).status == CellStatus.EMPTY for x in range(8))


def test_hover_preview_marks_crossing_row_and_column():
    rows = [".......#" for _ in range(7)] + ["#######."]
    board = Board.from_rows(rows)
    assert board.update_hover_preview(make_piece(PieceKind.DOT, color=GREEN), 7, 7)
    assert board.cell(7, 7).status == CellStatus.HOVER_BREAK_ON_EMPTY
    assert board.cell(0, 7).status == CellStatus.HOVER_BREAK_ON_FILLED
    assert board.cell(7, 0).status == CellStatus.HOVER_BREAK_ON_FILLED
    assert board.cell(0, 0).status == CellStatus.EMPTY


def test_illegal_hover_leaves_board_alone():
    rows = empty_rows()
    rows[0] = "#......."
    board = Board.from_rows(rows)
    before = board.status.copy()
    assert not board.update_hover_preview(make_piece(PieceKind.DOMINO), 0, 0)
    assert not board.update_hover_preview(make_piece(PieceKind.DOMINO), 7, 3)
    assert np.array_equal(board.status, before)


def test_clear_hover_state_restores_committed_pattern():
    rows = empty_rows()
    rows[0] = "..######"
    rows[5] = "##..#..."
    board = Board.from_rows(rows, color=RED)
    status = board.status.copy()
    colors = board.colors.copy()
    breaks = board.break_colors.copy()

    board.update_hover_preview(make_piece(PieceKind.DOMINO, color=GREEN), 0, 0)
    board.clear_hover_state()
    assert np.array_equal(board.status, status)
    assert np.array_equal(board.colors, colors)
    assert np.array_equal(board.break_colors, breaks)

    board.clear_hover_state()
    assert np.array_equal(board.status, status)


def test_hover_cells_count_as_empty_for_legality():
    board = new_board(8)
    board.update_hover_preview(make_piece(PieceKind.DOT), 3, 3)
    assert board.cell(3, 3).status == CellStatus.HOVER_PREVIEW
    assert is_legal(board, make_piece(PieceKind.DOT), 3, 3)
    board.place(make_piece(PieceKind.DOT), 3, 3)
    assert board.cell(3, 3).status == CellStatus.FILLED


def test_copy_is_independent():
    board = new_board(8)
    clone = board.copy()
    clone.place(make_piece(PieceKind.DOT), 0, 0)
    assert not board.filled_mask().any()
    assert clone.is_filled(0, 0)
