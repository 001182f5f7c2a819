import random

import pytest

from block_puzzle_engine.game import BlockPuzzleGame, GameConfig, ThemeType, palette_for


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def palette():
    return palette_for(ThemeType.CLASSIC)


@pytest.fixture
def game():
    return BlockPuzzleGame(GameConfig(random_seed=7))
