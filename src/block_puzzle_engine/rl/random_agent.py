from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

import gymnasium as gym
import numpy as np

import block_puzzle_engine.env  # ensure registration
from block_puzzle_engine.env.wrappers import FlattenDiscreteActionWrapper


logger = logging.getLogger(__name__)


def build_env(env_id: str = "BlockPuzzle-8x8-v0", render_mode: Optional[str] = None) -> gym.Env:
    env = gym.make(env_id, render_mode=render_mode, disable_env_checker=True)
    return FlattenDiscreteActionWrapper(env)


def run_random(episodes: int = 5, env_id: str = "BlockPuzzle-8x8-v0", seed: Optional[int] = None,
               render: bool = False) -> List[float]:
    """Play ``episodes`` games picking uniformly among legal actions; return the scores."""
    rng = random.Random(seed)
    env = build_env(env_id, render_mode="ansi" if render else None)
    scores: List[float] = []
    for episode in range(episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        terminated = truncated = False
        while not (terminated or truncated):
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid.tolist()))
            obs, reward, terminated, truncated, info = env.step(action)
            if render:
                logger.debug("\n%s", env.render())
        game = env.unwrapped.game
        stats = game.get_game_stats()
        logger.info(
            "Episode %d: score %d, %d pieces, %d lines",
            episode,
            stats["final_score"],
            stats["pieces_placed"],
            stats["lines_cleared"],
        )
        scores.append(game.score)
    env.close()
    return scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play block puzzle games with a random legal agent")
    p.add_argument("--env", choices=list(block_puzzle_engine.env.ENV_IDS), default="BlockPuzzle-8x8-v0")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--render", action="store_true", help="log the board after every move")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    scores = run_random(args.episodes, args.env, args.seed, args.render)
    logger.info("Mean score over %d episode(s): %.2f", len(scores), float(np.mean(scores)))


if __name__ == "__main__":  # pragma: no cover
    main()
