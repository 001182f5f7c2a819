from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .themes import Color


Offset = Tuple[int, int]


class PieceKind(IntEnum):
    DOT = 1
    DOMINO = 2
    I3 = 3
    I4 = 4
    I5 = 5
    SQUARE2 = 6
    SQUARE3 = 7
    RECT2X3 = 8
    CORNER3 = 9
    L = 10
    J = 11
    T = 12
    S = 13
    Z = 14
    CORNER5 = 15


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.DOT: np.array([[1]], dtype=np.int8),
    PieceKind.DOMINO: np.array([[1, 1]], dtype=np.int8),
    PieceKind.I3: np.array([[1, 1, 1]], dtype=np.int8),
    PieceKind.I4: np.array([[1, 1, 1, 1]], dtype=np.int8),
    PieceKind.I5: np.array([[1, 1, 1, 1, 1]], dtype=np.int8),
    PieceKind.SQUARE2: np.array([[1, 1], [1, 1]], dtype=np.int8),
    PieceKind.SQUARE3: np.array([[1, 1, 1], [1, 1, 1], [1, 1, 1]], dtype=np.int8),
    PieceKind.RECT2X3: np.array([[1, 1, 1], [1, 1, 1]], dtype=np.int8),
    PieceKind.CORNER3: np.array([[1, 0], [1, 1]], dtype=np.int8),
    PieceKind.L: np.array([[1, 0], [1, 0], [1, 1]], dtype=np.int8),
    PieceKind.J: np.array([[0, 1], [0, 1], [1, 1]], dtype=np.int8),
    PieceKind.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    PieceKind.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    PieceKind.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    PieceKind.CORNER5: np.array([[1, 0, 0], [1, 0, 0], [1, 1, 1]], dtype=np.int8),
}


@dataclass(frozen=True)
class PieceShape:
    """One orientation of a catalog shape as (dx, dy) offsets from its anchor.

    The anchor is the top-left corner of the bounding box, so every offset is
    non-negative. Offsets are stored in row-major order.
    """

    kind: PieceKind
    rotation: int
    offsets: Tuple[Offset, ...]

    @classmethod
    def from_array(cls, kind: PieceKind, shape: Shape, rotation: int = 0) -> "PieceShape":
        offsets = tuple((int(dx), int(dy)) for dy, dx in np.argwhere(shape))
        if not offsets:
            raise ValueError("A piece needs at least one cell")
        return cls(kind=kind, rotation=rotation, offsets=offsets)

    @property
    def block_count(self) -> int:
        return len(self.offsets)

    @property
    def width(self) -> int:
        return max(dx for dx, _ in self.offsets) + 1

    @property
    def height(self) -> int:
        return max(dy for _, dy in self.offsets) + 1

    def to_array(self) -> Shape:
        arr = np.zeros((self.height, self.width), dtype=np.int8)
        for dx, dy in self.offsets:
            arr[dy, dx] = 1
        return arr


def _build_catalog() -> Tuple[PieceShape, ...]:
    catalog: List[PieceShape] = []
    for kind, base in BASE_SHAPES.items():
        seen: List[Shape] = []
        for r in range(4):
            shape = _rot90(base, r)
            if any(np.array_equal(shape, existing) for existing in seen):
                continue
            seen.append(shape)
            catalog.append(PieceShape.from_array(kind, shape, rotation=r))
    return tuple(catalog)


CATALOG: Tuple[PieceShape, ...] = _build_catalog()


def shape_for(kind: PieceKind, rotation: int = 0) -> PieceShape:
    """Look up the catalog entry for ``kind`` at ``rotation`` quarter turns."""
    target = _rot90(BASE_SHAPES[kind], rotation)
    for entry in CATALOG:
        if entry.kind == kind and np.array_equal(entry.to_array(), target):
            return entry
    raise KeyError(f"No catalog entry for {kind.name} rotation {rotation}")


@dataclass(frozen=True)
class Piece:
    shape: PieceShape
    color: Color

    @property
    def kind(self) -> PieceKind:
        return self.shape.kind

    @property
    def offsets(self) -> Tuple[Offset, ...]:
        return self.shape.offsets

    @property
    def block_count(self) -> int:
        return self.shape.block_count

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.shape.offsets]


def random_shape(rng: random.Random) -> PieceShape:
    return rng.choice(CATALOG)


def color_piece(shape: PieceShape, palette: Sequence[Color], rng: random.Random) -> Piece:
    if not palette:
        raise ValueError("Palette must contain at least one colour")
    return Piece(shape=shape, color=tuple(rng.choice(palette)))


def random_piece(rng: random.Random, palette: Sequence[Color]) -> Piece:
    return color_piece(random_shape(rng), palette, rng)


def random_hand(size: int, rng: random.Random, palette: Sequence[Color]) -> List[Piece]:
    if size < 1:
        raise ValueError(f"Hand size must be positive, got {size}")
    return [random_piece(rng, palette) for _ in range(size)]
