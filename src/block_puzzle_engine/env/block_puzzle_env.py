from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_puzzle_engine.game import (
    BlockPuzzleGame,
    EmptyHandSlotError,
    GameConfig,
    GameOverError,
    GameMode,
    IllegalPlacementError,
    legal_spots,
)
from block_puzzle_engine.game.pieces import PieceKind


def _compute_action_mask(game: BlockPuzzleGame) -> np.ndarray:
    size = game.config.board_size
    k = game.config.hand_size
    mask = np.zeros((k, size, size), dtype=np.bool_)
    if game.game_over:
        return mask
    for slot, piece in enumerate(game.hand):
        if piece is not None:
            # legal_spots is [y, x]; actions are (slot, x, y)
            mask[slot] = legal_spots(game.board, piece).T
    return mask


class BlockPuzzleEnv(gym.Env):
    """Headless driver: each action commits one hand slot at an anchor.

    Action ``(slot, x, y)``; reward is the engine's score delta. Actions that
    the engine rejects leave the game untouched and earn ``invalid_action_penalty``.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, mode: GameMode | str | None = None,
                 render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        if config is None:
            config = GameConfig.for_mode(mode or GameMode.NORMAL)
        self.game = BlockPuzzleGame(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        size = config.board_size
        k = config.hand_size

        # Observation space: committed grid (0/1) and hand piece kinds (-1 for empty)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=int(max(PieceKind)), shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, x, y)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        obs: Dict[str, Any] = {
            "grid": self.game.board.occupancy(),
            "pieces": np.array(self.game.get_current_piece_types(), dtype=np.int8),
            "pieces_remaining": len(self.game.hand.pieces()),
        }
        return obs

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "combo": self.game.combo,
            "steps": self._steps,
        }

    def action_masks(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action):
        slot, x, y = map(int, action)
        truncated = False

        lines = 0
        try:
            outcome = self.game.commit(slot, x, y)
        except GameOverError:
            # Stepping a finished episode changes nothing; callers should reset.
            info = self._get_info()
            info["lines_cleared"] = 0
            return self._get_obs(), 0.0, True, False, info
        except (IllegalPlacementError, EmptyHandSlotError, IndexError):
            reward = self.invalid_action_penalty
        else:
            reward = float(outcome.score_delta)
            lines = outcome.lines_cleared

        self._steps += 1
        terminated = bool(self.game.game_over)
        if terminated:
            reward += self.terminal_penalty
        elif self._steps >= self.max_episode_steps:
            truncated = True

        obs = self._get_obs()
        info = self._get_info()
        info["lines_cleared"] = lines
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            hand = " ".join(p.kind.name if p is not None else "-" for p in self.game.hand)
            return f"{self.game.board.format_board()}\nscore={self.game.score:g} combo={self.game.combo} hand=[{hand}]"
        return None

    def close(self) -> None:
        pass
