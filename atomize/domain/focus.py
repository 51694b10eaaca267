"""Focus mode: a stopwatch bound to a single task.

Pure state machine. Callers pass in the current monotonic clock value,
so nothing here reads time on its own.
"""

from pydantic import BaseModel


class FocusSession(BaseModel):
    """A running or paused focus stopwatch for one task."""

    project_id: str
    task_id: int
    accumulated: float = 0.0
    running_since: float | None = None

    @property
    def is_running(self) -> bool:
        return self.running_since is not None

    def start(self, now: float) -> "FocusSession":
        """Start from zero, returning a new session."""
        return self.model_copy(update={"accumulated": 0.0, "running_since": now})

    def pause(self, now: float) -> "FocusSession":
        if self.running_since is None:
            return self
        return self.model_copy(
            update={
                "accumulated": self.accumulated + max(0.0, now - self.running_since),
                "running_since": None,
            }
        )

    def resume(self, now: float) -> "FocusSession":
        if self.running_since is not None:
            return self
        return self.model_copy(update={"running_since": now})

    def toggle(self, now: float) -> "FocusSession":
        return self.pause(now) if self.is_running else self.resume(now)

    def elapsed(self, now: float) -> int:
        """Whole seconds spent focused so far."""
        total = self.accumulated
        if self.running_since is not None:
            total += max(0.0, now - self.running_since)
        return int(total)


def format_elapsed(seconds: int) -> str:
    """Render seconds as MM:SS (minutes keep growing past 59)."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
