"""Shared test fixtures for Atomize tests.

This module provides common fixtures used across all test modules:
- A fixed clock and project/task builders
- A celebrator that records what it was asked to celebrate
- Sessions backed by a temporary data directory
- Fake generators standing in for the HTTP client

Usage:
    def test_something(session, recorder):
        session.toggle_task(...)
        assert recorder.completions
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from atomize.application import RoadmapDraft, Session, TaskIntel
from atomize.domain.leveling import LevelUp
from atomize.domain.project import Project, ProjectStore, recompute
from atomize.domain.shared import Err, Ok, Result
from atomize.domain.task import AtomicTask, TaskDraft
from atomize.domain.types import Point
from atomize.infrastructure.storage import SettingsRepository, StoreRepository


# ─────────────────────────────────────────────────────────────────────────────
# Builders
# ─────────────────────────────────────────────────────────────────────────────

FIXED_NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def make_task(task_id: int, weight: int = 1, done: bool = False, title: str | None = None) -> AtomicTask:
    return AtomicTask(
        id=task_id,
        title=title or f"Task {task_id}",
        point_weight=weight,
        is_completed=done,
    )


def make_project(
    project_id: str = "p1",
    tasks: list[AtomicTask] | None = None,
    title: str = "Learn Rust",
    **fields,
) -> Project:
    """Build a project with totals and status derived from its tasks."""
    project = Project(
        id=project_id,
        title=title,
        tasks=tasks or [],
        created_at=FIXED_NOW,
        due_date=FIXED_NOW + timedelta(days=7),
        **fields,
    )
    return recompute(project) if tasks else project


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


# ─────────────────────────────────────────────────────────────────────────────
# Celebrations
# ─────────────────────────────────────────────────────────────────────────────


class RecordingCelebrator:
    """Celebrator that records calls instead of making noise."""

    def __init__(self) -> None:
        self.completions: list[tuple[Point, str, bool]] = []
        self.level_ups: list[LevelUp] = []

    def task_completed(self, origin: Point, color: str, sound: bool) -> None:
        self.completions.append((origin, color, sound))

    def level_up(self, event: LevelUp, sound: bool) -> None:
        self.level_ups.append(event)


@pytest.fixture
def recorder() -> RecordingCelebrator:
    return RecordingCelebrator()


# ─────────────────────────────────────────────────────────────────────────────
# Sessions
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory.

    Returns:
        Path to temporary data directory
    """
    data_dir = tmp_path / "atomize"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


@pytest.fixture
def make_session(
    temp_data_dir: Path,
    recorder: RecordingCelebrator,
) -> Callable[..., Session]:
    """Factory for sessions persisted under the temporary data directory.

    Passing a store saves it first, so the session seeds from it the
    same way it would after a restart.
    """

    def _make(store: ProjectStore | None = None) -> Session:
        store_repo = StoreRepository(temp_data_dir)
        settings_repo = SettingsRepository(temp_data_dir)
        if store is not None:
            store_repo.save(store)
        return Session.load(
            store_repo,
            settings_repo,
            celebrator=recorder,
            level_up_delay=0,
        )

    return _make


@pytest.fixture
def session(make_session: Callable[..., Session]) -> Session:
    """A fresh session with an empty store."""
    return make_session()


# ─────────────────────────────────────────────────────────────────────────────
# Fake Generators
# ─────────────────────────────────────────────────────────────────────────────


class FakeGenerator:
    """Roadmap generator and tip provider with canned answers."""

    def __init__(
        self,
        roadmap: Result[RoadmapDraft, str] | None = None,
        intel: Result[TaskIntel, str] | None = None,
    ) -> None:
        self.roadmap = roadmap or Ok(
            RoadmapDraft(
                tasks=[
                    TaskDraft(title="Install toolchain", point_weight=1),
                    TaskDraft(title="Read the book", point_weight=3),
                    TaskDraft(title="Write a CLI", point_weight=5),
                ]
            )
        )
        self.intel = intel or Ok(TaskIntel(tip="Start with rustup.", minutes=20))
        self.prompts: list[str] = []
        self.intel_requests: list[tuple[str, str]] = []
        self.before_intel: Callable[[], None] | None = None

    def generate_roadmap(self, prompt: str) -> Result[RoadmapDraft, str]:
        self.prompts.append(prompt)
        return self.roadmap

    def generate_task_intel(self, task_title: str, project_title: str) -> Result[TaskIntel, str]:
        self.intel_requests.append((task_title, project_title))
        if self.before_intel is not None:
            self.before_intel()
        return self.intel


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator(roadmap=Err("model offline"), intel=Err("model offline"))
