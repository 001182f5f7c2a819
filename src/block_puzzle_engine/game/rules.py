from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ScoringRules:
    board_size: int = 8
    hand_size: int = 3

    def line_bonus(self, lines: int, combo: int, block_count: int) -> float:
        """Bonus for breaking ``lines`` once ``combo`` already includes them.

        ``combo / 2`` is true division; the half is kept.
        """
        if lines <= 0:
            return 0.0
        return lines * self.board_size * (combo / 2) * block_count


@dataclass
class ScoreState:
    score: float = 0.0
    combo: int = 0
    turns_since_last_clear: int = 0

    def reset(self) -> None:
        self.score = 0.0
        self.combo = 0
        self.turns_since_last_clear = 0

    def apply(self, rules: ScoringRules, block_count: int, lines_broken: int) -> float:
        """Advance the state for one committed placement and return the score delta."""
        if block_count < 0 or lines_broken < 0:
            raise ValueError(
                f"block_count and lines_broken must be non-negative, got {block_count}, {lines_broken}"
            )
        delta = float(block_count)
        if lines_broken > 0:
            self.turns_since_last_clear = 0
            self.combo += lines_broken
            delta += rules.line_bonus(lines_broken, self.combo, block_count)
        else:
            self.turns_since_last_clear += 1
            if self.turns_since_last_clear >= rules.hand_size:
                self.combo = 0
        self.score += delta
        return delta

    @property
    def final_score(self) -> int:
        return int(math.floor(self.score))
