"""Experience levels and level-up detection.

A level is a fixed-size bucket of global earned XP. The engine keeps a
single piece of memory, the last total it observed, and compares each
new total against it to spot an upward crossing of a bucket boundary.
"""

from pydantic import BaseModel

from atomize.domain.types import POINTS_PER_LEVEL

from .events import LevelUp


def level_for(total_xp: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    """Map a raw XP total to its level (floor division, never negative)."""
    return max(0, total_xp) // points_per_level


def next_level_threshold(level: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    """XP total at which the level after `level` starts."""
    return (level + 1) * points_per_level


class LevelProgress(BaseModel):
    """Where a total sits inside its level bucket."""

    total_xp: int
    level: int
    xp_into_level: int
    xp_for_next_level: int
    next_level_at: int

    @property
    def percent(self) -> int:
        if self.xp_for_next_level <= 0:
            return 0
        return min(100, self.xp_into_level * 100 // self.xp_for_next_level)


def level_progress(total_xp: int, points_per_level: int = POINTS_PER_LEVEL) -> LevelProgress:
    """Describe progress through the current level for display."""
    level = level_for(total_xp, points_per_level)
    floor = level * points_per_level
    return LevelProgress(
        total_xp=total_xp,
        level=level,
        xp_into_level=max(0, total_xp) - floor,
        xp_for_next_level=points_per_level,
        next_level_at=next_level_threshold(level, points_per_level),
    )


class LevelingEngine:
    """Detects upward level crossings of the global XP total.

    Only upward movement is tracked: when the total drops, the memory
    stays where it was until the total climbs past it again.

    Example:
        engine = LevelingEngine()
        engine.seed(480)
        engine.observe(520)  # -> LevelUp(old_level=0, new_level=1, ...)
        engine.observe(540)  # -> None
    """

    def __init__(self, points_per_level: int = POINTS_PER_LEVEL) -> None:
        self._points_per_level = points_per_level
        self._last_observed_xp = 0
        self._seeded = False

    @property
    def last_observed_xp(self) -> int:
        return self._last_observed_xp

    @property
    def level(self) -> int:
        """Level of the last observed total."""
        return level_for(self._last_observed_xp, self._points_per_level)

    def seed(self, total_xp: int) -> bool:
        """Record the starting total for this session.

        Only the first call has any effect, so XP carried over from a
        previous session never counts as a fresh level-up.

        Returns:
            True if this call seeded the engine.
        """
        if self._seeded:
            return False
        self._seeded = True
        self._last_observed_xp = max(0, total_xp)
        return True

    def observe(self, total_xp: int) -> LevelUp | None:
        """Observe a new global total after a store mutation.

        Args:
            total_xp: Sum of earned points across the store.

        Returns:
            A LevelUp event when the total crossed into a higher level,
            otherwise None.
        """
        last = self._last_observed_xp

        if last == 0:
            # Baseline only; the first XP seen never fires a level-up
            if total_xp > 0:
                self._last_observed_xp = total_xp
            return None

        if total_xp <= last:
            return None

        old_level = level_for(last, self._points_per_level)
        new_level = level_for(total_xp, self._points_per_level)
        self._last_observed_xp = total_xp

        if new_level > old_level:
            return LevelUp(old_level=old_level, new_level=new_level, total_xp=total_xp)
        return None
