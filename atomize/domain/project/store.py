"""The project store: every project the user has.

Copy-on-write collection. Each mutator returns a new store and replaces
the affected project wholesale, so a reader holding the old store never
sees a half-applied change.
"""

from collections.abc import Callable

from pydantic import BaseModel, Field

from .models import Project, ProjectStatus


class ProjectStore(BaseModel):
    """Ordered collection of projects, newest first."""

    projects: list[Project] = Field(default_factory=list)

    def find_by_id(self, project_id: str) -> Project | None:
        """Get a project by its id; None is an expected outcome."""
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def contains(self, project_id: str) -> bool:
        return self.find_by_id(project_id) is not None

    def count(self) -> int:
        return len(self.projects)

    def add(self, project: Project) -> "ProjectStore":
        """Insert a project at the front, returning a new store."""
        return ProjectStore(projects=[project, *self.projects])

    def update(
        self,
        project_id: str,
        mutator: Callable[[Project], Project],
    ) -> "ProjectStore":
        """Replace the matching project with mutator(project).

        Returns the same store instance when the id is absent, so callers
        can detect a no-op with an identity check.
        """
        if not self.contains(project_id):
            return self
        return ProjectStore(
            projects=[mutator(p) if p.id == project_id else p for p in self.projects]
        )

    def remove(self, project_id: str) -> "ProjectStore":
        """Drop one project, returning a new store (unchanged if absent)."""
        if not self.contains(project_id):
            return self
        return ProjectStore(projects=[p for p in self.projects if p.id != project_id])

    def clear(self) -> "ProjectStore":
        return ProjectStore()

    def total_earned_points(self) -> int:
        """Global earned XP: the sum of earned points over all projects."""
        return sum(p.earned_points for p in self.projects)

    def total_completed_tasks(self) -> int:
        return sum(p.completed_count() for p in self.projects)


def filter_projects(
    store: ProjectStore,
    status: ProjectStatus | None = None,
    category: str | None = None,
    query: str = "",
) -> list[Project]:
    """Filter projects the way the project list does.

    Args:
        store: Store to filter.
        status: Keep only this status (None for all).
        category: Keep only this category label (None for all).
        query: Case-insensitive substring of the title.

    Returns:
        Matching projects in store order.
    """
    needle = query.strip().lower()
    result: list[Project] = []
    for project in store.projects:
        if status is not None and project.status != status:
            continue
        if category is not None and project.category.value != category:
            continue
        if needle and needle not in project.title.lower():
            continue
        result.append(project)
    return result
