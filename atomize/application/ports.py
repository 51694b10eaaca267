"""Contracts for the collaborators the application talks to.

The roadmap generator, the tip provider and the persistence layer are
reached through these protocols; infrastructure supplies the concrete
implementations.
"""

from typing import Protocol

from pydantic import BaseModel, Field

from atomize.config import UserSettings
from atomize.domain.project import ProjectStore
from atomize.domain.shared import Result
from atomize.domain.task import TaskDraft
from atomize.domain.types import Priority


class ProjectMeta(BaseModel):
    """Project metadata proposed by the roadmap generator."""

    name: str = ""
    icon: str = ""
    description: str = ""
    priority: Priority = Priority.MEDIUM
    estimated_days: int = 7
    category: str = ""


class RoadmapDraft(BaseModel):
    """A generated roadmap: metadata plus the first batch of tasks."""

    meta: ProjectMeta = Field(default_factory=ProjectMeta)
    tasks: list[TaskDraft] = Field(default_factory=list)


class TaskIntel(BaseModel):
    """A generated how-to-start tip for one task."""

    tip: str
    minutes: int


class DailyBriefing(BaseModel):
    """Short motivational briefing for the home screen."""

    headline: str
    content: str
    focus_suggestion: str


class RoadmapGenerator(Protocol):
    def generate_roadmap(self, prompt: str) -> Result[RoadmapDraft, str]: ...


class IntelProvider(Protocol):
    def generate_task_intel(self, task_title: str, project_title: str) -> Result[TaskIntel, str]: ...


class StoreWriter(Protocol):
    def load(self) -> Result[ProjectStore, str]: ...

    def save(self, store: ProjectStore) -> Result[None, str]: ...


class SettingsWriter(Protocol):
    def load(self) -> Result[UserSettings, str]: ...

    def save(self, settings: UserSettings) -> Result[None, str]: ...
