from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Set, Tuple

import numpy as np

if TYPE_CHECKING:
    from .grid import Board


Coordinate = Tuple[int, int]


@dataclass
class LineClearResult:
    rows: Set[int] = field(default_factory=set)
    cols: Set[int] = field(default_factory=set)
    cleared_cells: List[Coordinate] = field(default_factory=list)

    @property
    def lines_cleared(self) -> int:
        # A crossing cell is cleared once but both of its lines count.
        return len(self.rows) + len(self.cols)


def _full_lines(filled: np.ndarray) -> Tuple[Set[int], Set[int]]:
    rows = {int(r) for r in np.where(np.all(filled, axis=1))[0]}
    cols = {int(c) for c in np.where(np.all(filled, axis=0))[0]}
    return rows, cols


def find_full_lines(board: "Board") -> Tuple[Set[int], Set[int]]:
    """Return (full row indices, full column indices) of committed cells."""
    return _full_lines(board.filled_mask())


def would_clear(board: "Board", cells: Iterable[Coordinate]) -> Tuple[Set[int], Set[int]]:
    """Lines that would be full if ``cells`` were filled on top of ``board``."""
    filled = board.filled_mask().copy()
    for x, y in cells:
        filled[y, x] = True
    return _full_lines(filled)


def resolve(board: "Board") -> LineClearResult:
    """Empty every full row and column in one pass.

    Detection happens once before anything is cleared, so clearing never
    triggers further lines within the same call.
    """
    rows, cols = find_full_lines(board)
    result = LineClearResult(rows=rows, cols=cols)
    if not rows and not cols:
        return result
    cleared = np.zeros((board.size, board.size), dtype=np.bool_)
    for row in rows:
        cleared[row, :] = True
    for col in cols:
        cleared[:, col] = True
    ys, xs = np.nonzero(cleared)
    result.cleared_cells = [(int(x), int(y)) for y, x in zip(ys, xs)]
    board.clear_cells(result.cleared_cells)
    return result
