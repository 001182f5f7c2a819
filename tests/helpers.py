from __future__ import annotations

import random
from typing import Iterable, List

from block_puzzle_engine.game import CATALOG, Piece, PieceKind, shape_for

RED = (186, 19, 38)
GREEN = (16, 158, 40)


def make_piece(kind: PieceKind, rotation: int = 0, color=RED) -> Piece:
    return Piece(shape=shape_for(kind, rotation), color=color)


def empty_rows(size: int = 8) -> List[str]:
    return ["." * size for _ in range(size)]


class ScriptedDeal(random.Random):
    """Random source that deals the given kinds in order, in the first palette colour."""

    def __init__(self, kinds: Iterable[PieceKind]) -> None:
        super().__init__(0)
        self._shapes = [shape_for(kind) for kind in kinds]

    def choice(self, seq):
        if seq is CATALOG:
            return self._shapes.pop(0)
        return seq[0]
