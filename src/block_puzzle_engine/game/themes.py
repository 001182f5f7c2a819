from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


Color = Tuple[int, int, int]


class ThemeType(str, Enum):
    CLASSIC = "classic"
    NEON = "neon"
    DARK = "dark"
    RETRO = "retro"
    BLUE = "blue"


# Piece colours only; the rest of a theme is presentation.
PALETTES: Dict[ThemeType, Tuple[Color, ...]] = {
    ThemeType.CLASSIC: (
        (227, 143, 16),
        (186, 19, 38),
        (16, 158, 40),
        (20, 56, 184),
        (101, 19, 148),
        (31, 165, 222),
    ),
    ThemeType.NEON: (
        (255, 0, 128),
        (0, 255, 255),
        (255, 255, 0),
        (0, 255, 128),
        (255, 0, 255),
        (128, 0, 255),
    ),
    ThemeType.DARK: (
        (100, 100, 100),
        (120, 120, 120),
        (140, 140, 140),
        (160, 160, 160),
        (180, 180, 180),
        (200, 200, 200),
    ),
    ThemeType.RETRO: (
        (170, 255, 170),
        (100, 180, 100),
        (80, 160, 80),
        (60, 120, 60),
        (40, 100, 40),
        (30, 80, 30),
    ),
    ThemeType.BLUE: (
        (255, 255, 255),
        (255, 204, 0),
        (0, 153, 51),
        (0, 102, 204),
        (255, 0, 0),
        (153, 51, 255),
    ),
}


def palette_for(theme: ThemeType | str) -> Tuple[Color, ...]:
    """Return the piece palette of ``theme`` (accepts the enum or its value)."""
    return PALETTES[ThemeType(theme)]
