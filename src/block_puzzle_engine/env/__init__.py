"""Gymnasium environments for the block puzzle engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Normal mode: 8x8 board, hand of 3
register(
    id="BlockPuzzle-8x8-v0",
    entry_point="block_puzzle_engine.env.block_puzzle_env:BlockPuzzleEnv",
    kwargs={"mode": "normal"},
)

# Chaos mode: 10x10 board, hand of 5
register(
    id="BlockPuzzleChaos-10x10-v0",
    entry_point="block_puzzle_engine.env.block_puzzle_env:BlockPuzzleEnv",
    kwargs={"mode": "chaos"},
)

ENV_IDS = ("BlockPuzzle-8x8-v0", "BlockPuzzleChaos-10x10-v0")

__all__ = ["ENV_IDS"]
