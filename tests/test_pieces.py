import random

import numpy as np
import pytest

from block_puzzle_engine.game import (
    CATALOG,
    PieceKind,
    ThemeType,
    color_piece,
    palette_for,
    random_hand,
    random_piece,
    random_shape,
    shape_for,
)
from tests.helpers import make_piece


def test_catalog_has_every_distinct_orientation():
    assert len(CATALOG) == 37
    arrays = [entry.to_array() for entry in CATALOG]
    for i, a in enumerate(arrays):
        for b in arrays[i + 1:]:
            assert not np.array_equal(a, b)
    assert {entry.kind for entry in CATALOG} == set(PieceKind)


def test_offsets_are_anchored_at_bounding_box_corner():
    for entry in CATALOG:
        assert min(dx for dx, _ in entry.offsets) == 0
        assert min(dy for _, dy in entry.offsets) == 0
        assert len(set(entry.offsets)) == entry.block_count


@pytest.mark.parametrize(
    "kind,count",
    [
        (PieceKind.DOT, 1),
        (PieceKind.DOMINO, 2),
        (PieceKind.I5, 5),
        (PieceKind.SQUARE3, 9),
        (PieceKind.RECT2X3, 6),
        (PieceKind.CORNER5, 5),
        (PieceKind.T, 4),
    ],
)
def test_block_counts(kind, count):
    assert shape_for(kind).block_count == count


def test_rotated_line_is_vertical():
    vertical = shape_for(PieceKind.I3, 1)
    assert vertical.offsets == ((0, 0), (0, 1), (0, 2))
    assert (vertical.width, vertical.height) == (1, 3)
    # Half turn of a line is the same catalog entry
    assert shape_for(PieceKind.I3, 2) == shape_for(PieceKind.I3, 0)


def test_random_piece_uses_palette_and_is_reproducible(palette):
    a = [random_piece(random.Random(5), palette) for _ in range(3)]
    b = [random_piece(random.Random(5), palette) for _ in range(3)]
    assert a == b
    rng = random.Random(9)
    for _ in range(50):
        piece = random_piece(rng, palette)
        assert piece.color in palette
        assert piece.shape in CATALOG


def test_color_assignment_is_separate_from_shape(rng):
    shape = random_shape(rng)
    neon = palette_for(ThemeType.NEON)
    piece = color_piece(shape, neon, rng)
    assert piece.shape is shape
    assert piece.color in neon


def test_color_piece_rejects_empty_palette(rng):
    with pytest.raises(ValueError):
        color_piece(shape_for(PieceKind.DOT), (), rng)


def test_random_hand_sizes(rng, palette):
    assert len(random_hand(3, rng, palette)) == 3
    assert len(random_hand(5, rng, palette)) == 5
    with pytest.raises(ValueError):
        random_hand(0, rng, palette)


def test_cells_at_offsets_from_anchor():
    piece = make_piece(PieceKind.CORNER3)
    assert piece.cells_at(2, 3) == [(2, 3), (2, 4), (3, 4)]
