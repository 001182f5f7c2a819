from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import numpy as np

from .errors import EngineError, GameOverError, IllegalPlacementError
from .events import (
    EVENT_COMBO_RESET,
    EVENT_DRAG_CANCELLED,
    EVENT_GAME_OVER,
    EVENT_HAND_REFILLED,
    EVENT_LINES_CLEARED,
    EVENT_PIECE_PLACED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from .grid import Board, Coordinate
from .hand import Hand
from .lines import resolve
from .pieces import Piece
from .placement import has_any_move, legal_spots
from .records import ScoreRecord, ScoreRecorder
from .rules import ScoreState, ScoringRules
from .themes import Color, ThemeType, palette_for


logger = logging.getLogger(__name__)

# Widest catalog piece spans five cells.
MIN_BOARD_SIZE = 5


class GameMode(str, Enum):
    NORMAL = "normal"
    CHAOS = "chaos"


MODE_DEFAULTS: Dict[GameMode, Tuple[int, int]] = {
    GameMode.NORMAL: (8, 3),
    GameMode.CHAOS: (10, 5),
}


class GamePhase(Enum):
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    board_size: int = 8
    hand_size: int = 3
    mode: GameMode = GameMode.NORMAL
    random_seed: Optional[int] = None
    theme: ThemeType = ThemeType.CLASSIC

    def __post_init__(self) -> None:
        self.mode = GameMode(self.mode)
        self.theme = ThemeType(self.theme)
        if self.board_size < MIN_BOARD_SIZE:
            raise ValueError(f"board_size must be at least {MIN_BOARD_SIZE}, got {self.board_size}")
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be positive, got {self.hand_size}")

    @classmethod
    def for_mode(cls, mode: GameMode | str, **overrides: Any) -> "GameConfig":
        mode = GameMode(mode)
        board_size, hand_size = MODE_DEFAULTS[mode]
        params: Dict[str, Any] = {"board_size": board_size, "hand_size": hand_size, "mode": mode}
        params.update(overrides)
        return cls(**params)


def _now_ms() -> float:
    return time.time() * 1000.0


@dataclass
class SessionContext:
    """Collaborators a session is handed instead of reading global state."""

    palette: Tuple[Color, ...]
    rng: random.Random
    bus: EventBus = field(default_factory=EventBus)
    recorder: Optional[ScoreRecorder] = None
    clock: Callable[[], float] = _now_ms

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        recorder: Optional[ScoreRecorder] = None,
        bus: Optional[EventBus] = None,
    ) -> "SessionContext":
        return cls(
            palette=palette_for(config.theme),
            rng=random.Random(config.random_seed),
            bus=bus or EventBus(),
            recorder=recorder,
        )


@dataclass
class PlacementOutcome:
    slot: int
    piece: Piece
    anchor: Coordinate
    filled_cells: List[Coordinate]
    cleared_rows: Set[int]
    cleared_cols: Set[int]
    cleared_cells: List[Coordinate]
    score_delta: float
    score: float
    combo: int
    turns_since_last_clear: int
    hand_refilled: bool
    game_over: bool

    @property
    def lines_cleared(self) -> int:
        return len(self.cleared_rows) + len(self.cleared_cols)


class BlockPuzzleGame:
    """One game session: owns its board, hand and score state.

    Every commit runs place, resolve, score update, hand refill and the
    game-over check in that order. Calls must be serialised by the caller.
    """

    def __init__(self, config: Optional[GameConfig] = None, context: Optional[SessionContext] = None) -> None:
        self.config = config or GameConfig()
        self.context = context or SessionContext.from_config(self.config)
        self.rules = ScoringRules(board_size=self.config.board_size, hand_size=self.config.hand_size)
        self.board = Board(self.config.board_size)
        self.hand = Hand([None] * self.config.hand_size)
        self.score_state = ScoreState()
        self.phase = GamePhase.ACTIVE
        self.dragging: Optional[int] = None
        self.possible_spots = self._no_spots()
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self._record_id: Optional[int] = None
        self.reset()

    def _no_spots(self) -> np.ndarray:
        return np.zeros((self.config.board_size, self.config.board_size), dtype=np.bool_)

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    @property
    def score(self) -> float:
        return self.score_state.score

    @property
    def combo(self) -> int:
        return self.score_state.combo

    @property
    def turns_since_last_clear(self) -> int:
        return self.score_state.turns_since_last_clear

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.context.rng.seed(seed)
        self.board.reset()
        self.score_state.reset()
        self.hand = Hand.deal(self.config.hand_size, self.context.rng, self.context.palette)
        self.phase = GamePhase.ACTIVE
        self.dragging = None
        self.possible_spots = self._no_spots()
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self._record_id = None
        if self.context.recorder is not None:
            self._record_id = self.context.recorder.create(self._score_record())
        logger.info(
            "New %s game: %dx%d board, hand of %d",
            self.config.mode.value,
            self.config.board_size,
            self.config.board_size,
            self.config.hand_size,
        )

    def _score_record(self) -> ScoreRecord:
        return ScoreRecord(
            score=self.score_state.final_score,
            date=self.context.clock(),
            mode=self.config.mode.value,
        )

    # Drag lifecycle

    def begin_drag(self, slot: int) -> np.ndarray:
        """Pick up the piece in ``slot`` and return its legal anchor map."""
        if self.game_over:
            raise GameOverError("The game is over")
        piece = self.hand.peek(slot)
        self.dragging = slot
        self.possible_spots = legal_spots(self.board, piece)
        return self.possible_spots.copy()

    def hover(self, x: int, y: int) -> bool:
        """Preview the dragged piece at (x, y); False if it does not fit there."""
        self.board.clear_hover_state()
        if self.dragging is None:
            return False
        piece = self.hand.peek(self.dragging)
        return self.board.update_hover_preview(piece, x, y)

    def end_hover(self) -> None:
        self.board.clear_hover_state()

    def cancel_drag(self) -> None:
        slot = self.dragging
        self.board.clear_hover_state()
        self.dragging = None
        self.possible_spots = self._no_spots()
        self.bus.emit(EVENT_DRAG_CANCELLED, slot=slot)

    def drop(self, x: int, y: int) -> PlacementOutcome:
        if self.dragging is None:
            raise EngineError("No piece is being dragged")
        slot = self.dragging
        try:
            return self.commit(slot, x, y)
        except IllegalPlacementError:
            self.cancel_drag()
            raise
        finally:
            self.dragging = None
            self.possible_spots = self._no_spots()

    def _sync_drag(self) -> None:
        """Recompute the dragged piece's spots after the board changed.

        The drag ends if its slot was emptied or the game is over.
        """
        if self.dragging is None:
            return
        piece = self.hand[self.dragging]
        if piece is None or self.game_over:
            self.dragging = None
            self.possible_spots = self._no_spots()
            return
        self.possible_spots = legal_spots(self.board, piece)

    # Commit path

    def commit(self, slot: int, x: int, y: int) -> PlacementOutcome:
        """Place the piece from ``slot`` with its anchor at (x, y).

        Board and hand are unchanged if the placement is rejected.
        """
        if self.game_over:
            raise GameOverError("The game is over")
        self.board.clear_hover_state()
        piece = self.hand.peek(slot)
        try:
            self.board.check_placement(piece, x, y)
        except IllegalPlacementError as exc:
            logger.warning("Rejected %s from slot %d at (%d, %d): %s", piece.kind.name, slot, x, y, exc)
            raise

        self.hand.take(slot)
        filled = self.board.place(piece, x, y)
        self.bus.emit(
            EVENT_PIECE_PLACED, slot=slot, kind=piece.kind.name, cells=filled, color=piece.color
        )

        cleared = resolve(self.board)
        previous_combo = self.score_state.combo
        delta = self.score_state.apply(self.rules, piece.block_count, cleared.lines_cleared)
        self.total_pieces_placed += 1
        self.total_lines_cleared += cleared.lines_cleared
        if cleared.lines_cleared:
            self.bus.emit(
                EVENT_LINES_CLEARED,
                rows=sorted(cleared.rows),
                cols=sorted(cleared.cols),
                cells=cleared.cleared_cells,
                combo=self.score_state.combo,
            )
        elif previous_combo and not self.score_state.combo:
            self.bus.emit(EVENT_COMBO_RESET, previous=previous_combo)
        self.bus.emit(EVENT_SCORE_CHANGED, score=self.score_state.score, delta=delta)

        if self.context.recorder is not None and self._record_id is not None:
            self.context.recorder.update(self._record_id, self._score_record())

        refilled = self.hand.refill_if_empty(self.context.rng, self.context.palette)
        if refilled:
            self.bus.emit(EVENT_HAND_REFILLED, kinds=[p.kind.name for p in self.hand.pieces()])

        logger.debug(
            "Placed %s at (%d, %d): %d line(s), +%s, combo %d",
            piece.kind.name,
            x,
            y,
            cleared.lines_cleared,
            delta,
            self.score_state.combo,
        )

        if not has_any_move(self.board, self.hand.slots):
            self.phase = GamePhase.GAME_OVER
            logger.info("Game over with score %d", self.score_state.final_score)
            self.bus.emit(EVENT_GAME_OVER, score=self.score_state.final_score)

        self._sync_drag()

        return PlacementOutcome(
            slot=slot,
            piece=piece,
            anchor=(x, y),
            filled_cells=filled,
            cleared_rows=cleared.rows,
            cleared_cols=cleared.cols,
            cleared_cells=cleared.cleared_cells,
            score_delta=delta,
            score=self.score_state.score,
            combo=self.score_state.combo,
            turns_since_last_clear=self.score_state.turns_since_last_clear,
            hand_refilled=refilled,
            game_over=self.game_over,
        )

    def has_any_move(self) -> bool:
        return has_any_move(self.board, self.hand.slots)

    def get_current_piece_types(self) -> List[int]:
        return [int(p.kind) if p is not None else -1 for p in self.hand]

    def get_state(self) -> Dict[str, Any]:
        return {
            "grid": self.board.occupancy(),
            "current_pieces": self.get_current_piece_types(),
            "pieces_remaining": len(self.hand.pieces()),
            "score": self.score_state.score,
            "combo": self.score_state.combo,
            "turns_since_last_clear": self.score_state.turns_since_last_clear,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "game_over": self.game_over,
            "filled_ratio": self.board.get_filled_ratio(),
        }

    def get_game_stats(self) -> Dict[str, Any]:
        return {
            "final_score": self.score_state.final_score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "final_fill_ratio": self.board.get_filled_ratio(),
            "avg_score_per_piece": self.score_state.score / max(1, self.total_pieces_placed),
            "avg_lines_per_piece": self.total_lines_cleared / max(1, self.total_pieces_placed),
        }
