"""Experience and leveling domain.

Global earned XP is bucketed into levels of 500; the engine detects
upward crossings so a celebration fires once per crossing.
"""

from .engine import (
    LevelingEngine,
    LevelProgress,
    level_for,
    level_progress,
    next_level_threshold,
)
from .events import LevelUp

__all__ = [
    "LevelingEngine",
    "LevelProgress",
    "LevelUp",
    "level_for",
    "level_progress",
    "next_level_threshold",
]
