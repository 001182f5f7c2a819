from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import IllegalPlacementError, OutOfBoundsError
from .lines import would_clear
from .pieces import Piece
from .placement import is_legal
from .themes import Color


Coordinate = Tuple[int, int]

NO_COLOR = -1


class CellStatus(IntEnum):
    EMPTY = 0
    FILLED = 1
    HOVER_PREVIEW = 2
    HOVER_BREAK_ON_EMPTY = 3
    HOVER_BREAK_ON_FILLED = 4


# Statuses that sit on top of a committed piece.
COMMITTED_STATUSES = (CellStatus.FILLED, CellStatus.HOVER_BREAK_ON_FILLED)
HOVER_STATUSES = (
    CellStatus.HOVER_PREVIEW,
    CellStatus.HOVER_BREAK_ON_EMPTY,
    CellStatus.HOVER_BREAK_ON_FILLED,
)


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    status: CellStatus
    color: Optional[Color] = None
    break_color: Optional[Color] = None

    @property
    def is_filled(self) -> bool:
        return self.status in COMMITTED_STATUSES


def _color_at(colors: np.ndarray, x: int, y: int) -> Optional[Color]:
    r, g, b = (int(v) for v in colors[y, x])
    if r == NO_COLOR:
        return None
    return (r, g, b)


class Board:
    """Square grid of cells with a per-cell status and colour.

    Storage is three numpy arrays indexed ``[y, x]``: the status codes, the
    cell colour and the break-preview colour (``-1`` meaning no colour).
    Committed occupancy is FILLED or HOVER_BREAK_ON_FILLED; every other status
    is logically empty.
    """

    def __init__(self, size: int) -> None:
        size = int(size)
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self.status = np.zeros((size, size), dtype=np.int8)
        self.colors = np.full((size, size, 3), NO_COLOR, dtype=np.int16)
        self.break_colors = np.full((size, size, 3), NO_COLOR, dtype=np.int16)

    @classmethod
    def create(cls, size: int) -> "Board":
        return cls(size)

    @classmethod
    def from_rows(cls, rows: Sequence[str], color: Color = (200, 200, 200)) -> "Board":
        """Build a board from text rows where ``#`` marks a filled cell."""
        board = cls(len(rows))
        for y, row in enumerate(rows):
            if len(row) != board.size:
                raise ValueError(f"Row {y} has length {len(row)}, expected {board.size}")
            for x, ch in enumerate(row):
                if ch == "#":
                    board.status[y, x] = CellStatus.FILLED
                    board.colors[y, x] = color
        return board

    def reset(self) -> None:
        self.status.fill(CellStatus.EMPTY)
        self.colors.fill(NO_COLOR)
        self.break_colors.fill(NO_COLOR)

    def copy(self) -> "Board":
        new_board = Board(self.size)
        new_board.status = self.status.copy()
        new_board.colors = self.colors.copy()
        new_board.break_colors = self.break_colors.copy()
        return new_board

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Cell:
        if not self.is_inside(x, y):
            raise OutOfBoundsError(f"Cell ({x}, {y}) is outside a {self.size}x{self.size} board", x, y)
        return Cell(
            x=x,
            y=y,
            status=CellStatus(int(self.status[y, x])),
            color=_color_at(self.colors, x, y),
            break_color=_color_at(self.break_colors, x, y),
        )

    def is_filled(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            raise OutOfBoundsError(f"Cell ({x}, {y}) is outside a {self.size}x{self.size} board", x, y)
        return int(self.status[y, x]) in COMMITTED_STATUSES

    def filled_mask(self) -> np.ndarray:
        return np.isin(self.status, COMMITTED_STATUSES)

    def occupancy(self) -> np.ndarray:
        return self.filled_mask().astype(np.int8)

    def for_each_cell(self, fn: Callable[[Cell, int, int], None]) -> None:
        for y in range(self.size):
            for x in range(self.size):
                fn(self.cell(x, y), x, y)

    def clear_hover_state(self) -> None:
        """Drop every hover status, restoring the committed EMPTY/FILLED pattern."""
        on_empty = np.isin(self.status, (CellStatus.HOVER_PREVIEW, CellStatus.HOVER_BREAK_ON_EMPTY))
        on_filled = self.status == CellStatus.HOVER_BREAK_ON_FILLED
        self.status[on_empty] = CellStatus.EMPTY
        self.colors[on_empty] = NO_COLOR
        self.status[on_filled] = CellStatus.FILLED
        self.break_colors[on_filled] = NO_COLOR

    def check_placement(self, piece: Piece, x: int, y: int) -> None:
        """Raise if ``piece`` cannot be committed with its anchor at (x, y)."""
        for cx, cy in piece.cells_at(x, y):
            if not self.is_inside(cx, cy):
                raise OutOfBoundsError(
                    f"{piece.kind.name} at ({x}, {y}) covers ({cx}, {cy}) outside the board", cx, cy
                )
            if self.is_filled(cx, cy):
                raise IllegalPlacementError(
                    f"{piece.kind.name} at ({x}, {y}) overlaps filled cell ({cx}, {cy})", cx, cy
                )

    def place(self, piece: Piece, x: int, y: int) -> List[Coordinate]:
        """Commit ``piece`` with its anchor at (x, y) and return the filled cells.

        The whole placement is validated before any cell changes.
        """
        self.check_placement(piece, x, y)
        cells = piece.cells_at(x, y)
        for cx, cy in cells:
            self.status[cy, cx] = CellStatus.FILLED
            self.colors[cy, cx] = piece.color
            self.break_colors[cy, cx] = NO_COLOR
        return cells

    def clear_cells(self, cells: Iterable[Coordinate]) -> None:
        for x, y in cells:
            self.status[y, x] = CellStatus.EMPTY
            self.colors[y, x] = NO_COLOR
            self.break_colors[y, x] = NO_COLOR

    def update_hover_preview(self, piece: Piece, x: int, y: int) -> bool:
        """Mark the cells ``piece`` would occupy and the lines it would break.

        Returns False without touching the board when the spot is illegal.
        Committed occupancy is left unchanged.
        """
        if not is_legal(self, piece, x, y):
            return False
        cells = piece.cells_at(x, y)
        for cx, cy in cells:
            self.status[cy, cx] = CellStatus.HOVER_PREVIEW
            self.colors[cy, cx] = piece.color

        rows, cols = would_clear(self, cells)
        line_cells = {(cx, row) for row in rows for cx in range(self.size)}
        line_cells.update((col, cy) for col in cols for cy in range(self.size))
        for cx, cy in line_cells:
            if self.is_filled(cx, cy):
                self.status[cy, cx] = CellStatus.HOVER_BREAK_ON_FILLED
                self.break_colors[cy, cx] = piece.color
            else:
                self.status[cy, cx] = CellStatus.HOVER_BREAK_ON_EMPTY
                self.colors[cy, cx] = piece.color
        return True

    def hover_cells(self) -> List[Coordinate]:
        ys, xs = np.nonzero(np.isin(self.status, HOVER_STATUSES))
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def get_filled_ratio(self) -> float:
        return float(np.sum(self.filled_mask())) / float(self.size * self.size)

    def format_board(self) -> str:
        glyphs = {
            CellStatus.EMPTY: "·",
            CellStatus.FILLED: "█",
            CellStatus.HOVER_PREVIEW: "▒",
            CellStatus.HOVER_BREAK_ON_EMPTY: "+",
            CellStatus.HOVER_BREAK_ON_FILLED: "*",
        }
        return "\n".join(
            "".join(glyphs[CellStatus(int(v))] for v in row) for row in self.status
        )

    def __repr__(self) -> str:
        return f"Board(size={self.size}, filled={int(np.sum(self.filled_mask()))})"


def new_board(size: int) -> Board:
    return Board.create(size)
