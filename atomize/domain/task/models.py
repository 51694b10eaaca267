"""Task domain models.

An atomic task is the smallest trackable unit of work inside a project.
It has no behaviour of its own; every change goes through the owning
project (see atomize.application.task_service).
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from atomize.domain.types import MAX_WEIGHT, MIN_WEIGHT, POINTS_PER_WEIGHT


class IntelState(str, Enum):
    """Fetch state of the lazily generated tip for a task."""

    UNFETCHED = "unfetched"
    PENDING = "pending"
    PRESENT = "present"


class AtomicTask(BaseModel):
    """A single weighted task.

    `id` is unique within the owning project only.
    """

    id: int
    title: str = Field(min_length=1)
    point_weight: int = Field(ge=MIN_WEIGHT, le=MAX_WEIGHT)
    description: str = ""
    is_completed: bool = False
    intel_state: IntelState = IntelState.UNFETCHED
    tip: str | None = None
    estimated_minutes: int | None = None

    @field_validator("intel_state")
    @classmethod
    def _drop_stale_pending(cls, state: IntelState) -> IntelState:
        # A fetch never outlives the process that started it
        if state == IntelState.PENDING:
            return IntelState.UNFETCHED
        return state

    @property
    def points(self) -> int:
        """XP this task is worth when completed."""
        return self.point_weight * POINTS_PER_WEIGHT

    @property
    def earned_points(self) -> int:
        """XP this task currently contributes."""
        return self.points if self.is_completed else 0

    def has_intel(self) -> bool:
        return self.intel_state == IntelState.PRESENT


class TaskDraft(BaseModel):
    """A task that has not been given an id yet.

    Produced by the roadmap generator or by user input, then numbered
    when it is attached to a project.
    """

    title: str
    point_weight: int = Field(default=1, ge=MIN_WEIGHT, le=MAX_WEIGHT)
    description: str = ""
