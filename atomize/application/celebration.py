"""Celebration side effects.

Confetti, sounds and haptics are advisory: nothing depends on them for
correctness, and a platform without them uses NullCelebrator. Effects
can be deferred so they land after a visual transition; a deferred
effect is re-checked against a guard right before it fires.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from atomize.domain.leveling import LevelUp
from atomize.domain.types import Point

logger = logging.getLogger(__name__)

LEVEL_UP_DELAY = 0.8  # seconds; lets the completion animation finish first


class Celebrator(Protocol):
    """Something that can make a fuss about progress."""

    def task_completed(self, origin: Point, color: str, sound: bool) -> None: ...

    def level_up(self, event: LevelUp, sound: bool) -> None: ...


class NullCelebrator:
    """Celebrator for platforms without any effects."""

    def task_completed(self, origin: Point, color: str, sound: bool) -> None:
        pass

    def level_up(self, event: LevelUp, sound: bool) -> None:
        pass


class CelebrationScheduler:
    """Runs effects now or after a fixed delay.

    With a zero delay the effect runs inline, which suits
    non-interactive use and tests. Otherwise it runs on a daemon timer.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self._timers: list[threading.Timer] = []

    def schedule(
        self,
        effect: Callable[[], None],
        guard: Callable[[], bool] | None = None,
        delay: float | None = None,
    ) -> None:
        """Schedule an effect.

        Args:
            effect: The effect to run.
            guard: Checked right before firing; the effect is dropped
                when it returns False.
            delay: Override of the scheduler's default delay.
        """
        wait = self.delay if delay is None else delay

        def fire() -> None:
            if guard is not None and not guard():
                logger.debug("Celebration suppressed: guard no longer holds")
                return
            try:
                effect()
            except Exception as e:
                # Effects are advisory; a broken speaker must not break a toggle
                logger.warning(f"Celebration effect failed: {e}")

        if wait <= 0:
            fire()
            return

        timer = threading.Timer(wait, fire)
        timer.daemon = True
        self._timers = [t for t in self._timers if t.is_alive()]
        self._timers.append(timer)
        timer.start()

    def pending(self) -> int:
        """Number of deferred effects that have not fired yet."""
        return sum(1 for t in self._timers if t.is_alive())

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers = []
