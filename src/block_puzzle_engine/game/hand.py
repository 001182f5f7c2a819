from __future__ import annotations

import random
from typing import Iterator, List, Optional, Sequence

from .errors import EmptyHandSlotError
from .pieces import Piece, random_hand
from .themes import Color


class Hand:
    """Fixed number of slots, each holding a piece or ``None`` once played.

    Slots empty one at a time; the hand is only refilled as a whole.
    """

    def __init__(self, slots: Sequence[Optional[Piece]]) -> None:
        if not slots:
            raise ValueError("A hand needs at least one slot")
        self._slots: List[Optional[Piece]] = list(slots)

    @classmethod
    def deal(cls, size: int, rng: random.Random, palette: Sequence[Color]) -> "Hand":
        return cls(random_hand(size, rng, palette))

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> List[Optional[Piece]]:
        return list(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Optional[Piece]]:
        return iter(list(self._slots))

    def __getitem__(self, index: int) -> Optional[Piece]:
        return self._slots[index]

    def pieces(self) -> List[Piece]:
        return [p for p in self._slots if p is not None]

    @property
    def is_empty(self) -> bool:
        return all(p is None for p in self._slots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._slots):
            raise IndexError(f"Hand slot {index} out of range for hand of {len(self._slots)}")

    def peek(self, index: int) -> Piece:
        self._check_index(index)
        piece = self._slots[index]
        if piece is None:
            raise EmptyHandSlotError(index)
        return piece

    def take(self, index: int) -> Piece:
        piece = self.peek(index)
        self._slots[index] = None
        return piece

    def refill(self, rng: random.Random, palette: Sequence[Color]) -> None:
        self._slots = random_hand(len(self._slots), rng, palette)

    def refill_if_empty(self, rng: random.Random, palette: Sequence[Color]) -> bool:
        if not self.is_empty:
            return False
        self.refill(rng, palette)
        return True

    def __repr__(self) -> str:
        names = [p.kind.name if p is not None else "-" for p in self._slots]
        return f"Hand({', '.join(names)})"
