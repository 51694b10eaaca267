"""Tests for atomize/application/project_service.py"""

from datetime import timedelta

from atomize.application import (
    ProjectDraft,
    build_roadmap_prompt,
    create_project,
    create_project_with_tasks,
    dashboard_stats,
    pick_focus_project,
    validate_draft,
)
from atomize.domain.project import ProjectStatus, ProjectStore
from atomize.domain.shared import Err, Ok
from atomize.domain.task import TaskDraft
from atomize.domain.types import Category, Priority
from tests.conftest import make_project, make_task


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────


class TestValidateDraft:
    """Tests for rejecting bad creation input up front."""

    def test_trims_title(self):
        result = validate_draft(ProjectDraft(title="  Learn Rust  "))
        assert isinstance(result, Ok)
        assert result.value.title == "Learn Rust"

    def test_rejects_blank_title(self):
        assert isinstance(validate_draft(ProjectDraft(title="   ")), Err)

    def test_rejects_short_duration(self):
        result = validate_draft(ProjectDraft(title="x", duration_days=0))
        assert isinstance(result, Err)
        assert "Duration" in result.error

    def test_rejects_unknown_color(self):
        result = validate_draft(ProjectDraft(title="x", theme_color="#123456"))
        assert isinstance(result, Err)


# ─────────────────────────────────────────────────────────────────────────────
# Creation
# ─────────────────────────────────────────────────────────────────────────────


class TestCreateProject:
    """Tests for manual project creation."""

    def test_empty_project_with_placeholder_total(self, now):
        """A manual project starts with no tasks and a 100 point placeholder."""
        result = create_project(ProjectDraft(title="Learn Rust"), now=now, project_id="p1")

        assert isinstance(result, Ok)
        project, event = result.value
        assert project.tasks == []
        assert project.total_points == 100
        assert project.earned_points == 0
        assert project.status == ProjectStatus.NOT_STARTED
        assert event.project_id == "p1"
        assert event.generated is False

    def test_due_date_from_duration(self, now):
        result = create_project(ProjectDraft(title="x", duration_days=30), now=now)
        project, _ = result.value

        assert project.created_at == now
        assert project.due_date == now + timedelta(days=30)

    def test_ids_are_unique(self):
        a, _ = create_project(ProjectDraft(title="x")).value
        b, _ = create_project(ProjectDraft(title="x")).value
        assert a.id != b.id

    def test_invalid_draft_creates_nothing(self):
        result = create_project(ProjectDraft(title=""))
        assert isinstance(result, Err)


class TestCreateProjectWithTasks:
    """Tests for creating a project from generated tasks."""

    def test_tasks_numbered_in_order(self, now):
        drafts = [TaskDraft(title="A", point_weight=1), TaskDraft(title="B", point_weight=4)]
        project, event = create_project_with_tasks(ProjectDraft(title="x"), drafts, now=now).value

        assert [(t.id, t.title) for t in project.tasks] == [(1, "A"), (2, "B")]
        assert project.total_points == 500
        assert project.next_task_id == 3
        assert event.task_count == 2
        assert event.generated is True

    def test_totals_from_tasks_not_placeholder(self):
        project, _ = create_project_with_tasks(ProjectDraft(title="x"), []).value
        assert project.total_points == 0

    def test_fallback_description(self):
        project, _ = create_project_with_tasks(
            ProjectDraft(title="x"), [], fallback_description="From the generator"
        ).value
        assert project.description == "From the generator"

    def test_own_description_wins(self):
        project, _ = create_project_with_tasks(
            ProjectDraft(title="x", description="Mine"), [], fallback_description="Theirs"
        ).value
        assert project.description == "Mine"


class TestRoadmapPrompt:
    def test_mentions_all_draft_fields(self):
        draft = ProjectDraft(
            title="Learn Rust",
            description="Systems programming",
            category=Category.PROGRAMMING,
            priority=Priority.HIGH,
            duration_days=14,
        )
        assert build_roadmap_prompt(draft) == (
            "Goal: Learn Rust. Description: Systems programming. "
            "Category: Programming. Priority: High. Duration: 14 days."
        )


# ─────────────────────────────────────────────────────────────────────────────
# Dashboard
# ─────────────────────────────────────────────────────────────────────────────


class TestDashboard:
    """Tests for home screen numbers."""

    def test_focus_prefers_unfinished_high_priority(self):
        store = (
            ProjectStore()
            .add(make_project("low", priority=Priority.LOW))
            .add(
                make_project(
                    "done-high",
                    priority=Priority.HIGH,
                    tasks=[make_task(1, done=True)],
                )
            )
            .add(make_project("high", priority=Priority.HIGH))
            .add(make_project("newest"))
        )
        assert pick_focus_project(store).id == "high"

    def test_focus_falls_back_to_newest(self):
        store = ProjectStore().add(make_project("a")).add(make_project("b"))
        assert pick_focus_project(store).id == "b"

    def test_focus_empty_store(self):
        assert pick_focus_project(ProjectStore()) is None

    def test_stats(self):
        store = (
            ProjectStore()
            .add(make_project("a", tasks=[make_task(1, 5, done=True), make_task(2, 1)]))
            .add(make_project("b", tasks=[make_task(1, 2, done=True)]))
        )
        stats = dashboard_stats(store)

        assert stats.project_count == 2
        assert stats.tasks_done == 2
        assert stats.tasks_open == 1
        assert stats.total_xp == 700
        assert stats.level.level == 1
        assert stats.level.xp_into_level == 200
