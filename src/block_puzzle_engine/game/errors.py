from __future__ import annotations


class EngineError(ValueError):
    """Base class for contract violations raised by the engine."""


class IllegalPlacementError(EngineError):
    """A piece was committed where it does not fit."""

    def __init__(self, message: str, x: int | None = None, y: int | None = None) -> None:
        super().__init__(message)
        self.x = x
        self.y = y


class OutOfBoundsError(IllegalPlacementError):
    """A piece cell resolves outside the board."""


class EmptyHandSlotError(EngineError):
    def __init__(self, slot: int) -> None:
        super().__init__(f"Hand slot {slot} is empty")
        self.slot = slot


class GameOverError(EngineError):
    """Raised when a commit is attempted after the game has ended."""
