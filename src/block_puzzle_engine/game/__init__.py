"""Game module for the block puzzle engine.

Exports the engine and its supporting classes:
- Piece, PieceShape, PieceKind: the fixed shape catalog and random hands
- Board, Cell, CellStatus: the grid, hover previews and placement
- is_legal, legal_spots, has_any_legal_spot, has_any_move: placement validation
- find_full_lines, resolve: line clearing
- ScoringRules, ScoreState: score and combo bookkeeping
- Hand: the pieces available to place
- BlockPuzzleGame: a session running the commit pipeline
"""

from .errors import (
    EngineError,
    IllegalPlacementError,
    OutOfBoundsError,
    EmptyHandSlotError,
    GameOverError,
)
from .themes import Color, ThemeType, palette_for
from .pieces import (
    CATALOG,
    Piece,
    PieceKind,
    PieceShape,
    color_piece,
    random_hand,
    random_piece,
    random_shape,
    shape_for,
)
from .grid import Board, Cell, CellStatus, new_board
from .placement import has_any_legal_spot, has_any_move, is_legal, legal_spots
from .lines import LineClearResult, find_full_lines, resolve
from .rules import ScoreState, ScoringRules
from .hand import Hand
from .events import EventBus
from .records import InMemoryScoreRecorder, ScoreRecord, ScoreRecorder
from .core import (
    BlockPuzzleGame,
    GameConfig,
    GameMode,
    GamePhase,
    PlacementOutcome,
    SessionContext,
)

__all__ = [
    "EngineError",
    "IllegalPlacementError",
    "OutOfBoundsError",
    "EmptyHandSlotError",
    "GameOverError",
    "Color",
    "ThemeType",
    "palette_for",
    "CATALOG",
    "Piece",
    "PieceKind",
    "PieceShape",
    "color_piece",
    "random_hand",
    "random_piece",
    "random_shape",
    "shape_for",
    "Board",
    "Cell",
    "CellStatus",
    "new_board",
    "has_any_legal_spot",
    "has_any_move",
    "is_legal",
    "legal_spots",
    "LineClearResult",
    "find_full_lines",
    "resolve",
    "ScoreState",
    "ScoringRules",
    "Hand",
    "EventBus",
    "InMemoryScoreRecorder",
    "ScoreRecord",
    "ScoreRecorder",
    "BlockPuzzleGame",
    "GameConfig",
    "GameMode",
    "GamePhase",
    "PlacementOutcome",
    "SessionContext",
]
