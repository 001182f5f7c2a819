from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np

from .pieces import Piece

if TYPE_CHECKING:
    from .grid import Board


def is_legal(board: "Board", piece: Piece, x: int, y: int) -> bool:
    """Check if ``piece`` fits with its anchor at (x, y).

    Every covered cell must be on the board and not hold a committed piece;
    hover statuses count as empty.
    """
    filled = board.filled_mask()
    return _fits(filled, board.size, piece, x, y)


def _fits(filled: np.ndarray, size: int, piece: Piece, x: int, y: int) -> bool:
    for dx, dy in piece.offsets:
        cx = x + dx
        cy = y + dy
        if cx < 0 or cy < 0 or cx >= size or cy >= size:
            return False
        if filled[cy, cx]:
            return False
    return True


def legal_spots(board: "Board", piece: Piece) -> np.ndarray:
    """Boolean map indexed ``[y, x]`` of every anchor where ``piece`` fits."""
    filled = board.filled_mask()
    spots = np.zeros((board.size, board.size), dtype=np.bool_)
    for y in range(board.size):
        for x in range(board.size):
            spots[y, x] = _fits(filled, board.size, piece, x, y)
    return spots


def get_valid_placements(board: "Board", piece: Piece) -> List[Tuple[int, int]]:
    """All (x, y) anchors where ``piece`` fits, in row-major order."""
    ys, xs = np.nonzero(legal_spots(board, piece))
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def has_any_legal_spot(board: "Board", piece: Piece) -> bool:
    filled = board.filled_mask()
    for y in range(board.size):
        for x in range(board.size):
            if _fits(filled, board.size, piece, x, y):
                return True
    return False


def has_any_move(board: "Board", hand: Sequence[Optional[Piece]]) -> bool:
    """True if at least one occupied hand slot has somewhere to go."""
    for piece in hand:
        if piece is None:
            continue
        if has_any_legal_spot(board, piece):
            return True
    return False
