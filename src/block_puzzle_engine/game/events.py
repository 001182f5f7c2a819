from __future__ import annotations

from typing import Any, Callable, Dict

from blinker import Signal

Handler = Callable[..., Any]


class EventBus:
    """Named game events dispatched through blinker signals.

    Handlers receive the bus as the sender plus the event payload as
    keyword arguments.
    """

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Handler) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so lambdas and throwaway observers stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Handler) -> None:
        sig = self._signals.get(name)
        if sig is not None:
            sig.disconnect(fn)

    def emit(self, name: str, **payload: Any) -> None:
        sig = self._signals.get(name)
        if sig is not None:
            sig.send(self, **payload)


EVENT_PIECE_PLACED = "piece_placed"        # payload: slot=int, kind=str, cells=[(x,y),...], color=(r,g,b)
EVENT_LINES_CLEARED = "lines_cleared"      # payload: rows=[int], cols=[int], cells=[(x,y),...], combo=int
EVENT_COMBO_RESET = "combo_reset"          # payload: previous=int
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=float, delta=float
EVENT_HAND_REFILLED = "hand_refilled"      # payload: kinds=[str]
EVENT_DRAG_CANCELLED = "drag_cancelled"    # payload: slot=int|None
EVENT_GAME_OVER = "game_over"              # payload: score=int
