"""Session controller.

The session owns all mutable application state: the project store, the
user settings, the active project reference, the leveling engine and
the focus stopwatch. Every change is committed as a whole new store,
persisted, then shown to the leveling engine.

Mutations are synchronous and run one at a time. The only asynchronous
work is the external generator/tip calls; those run in a worker thread
and their results are re-validated by id before being committed, so a
project deleted meanwhile turns the late result into a no-op.
"""

import asyncio
import logging
from collections.abc import Callable

from atomize.config import UserSettings
from atomize.domain.focus import FocusSession
from atomize.domain.leveling import LevelingEngine, LevelUp
from atomize.domain.project import (
    Project,
    ProjectRemoved,
    ProjectStore,
    StoreCleared,
)
from atomize.domain.shared import Err, Ok, Result
from atomize.domain.task import AtomicTask, IntelState, TaskDraft
from atomize.domain.types import Point

from . import project_service, task_service
from .celebration import LEVEL_UP_DELAY, CelebrationScheduler, Celebrator, NullCelebrator
from .ports import IntelProvider, RoadmapGenerator, SettingsWriter, StoreWriter

logger = logging.getLogger(__name__)


class Session:
    """Single-user application state and the operations that change it."""

    def __init__(
        self,
        store: ProjectStore | None = None,
        settings: UserSettings | None = None,
        store_repo: StoreWriter | None = None,
        settings_repo: SettingsWriter | None = None,
        celebrator: Celebrator | None = None,
        scheduler: CelebrationScheduler | None = None,
        level_up_delay: float = LEVEL_UP_DELAY,
    ) -> None:
        """Initialize the session.

        Args:
            store: Starting store (empty when omitted).
            settings: Starting settings (defaults when omitted).
            store_repo: Where the store is saved after each change.
            settings_repo: Where settings are saved after each change.
            celebrator: Effects for completions and level-ups.
            scheduler: Runs the effects; inline by default.
            level_up_delay: Seconds between a crossing and its celebration.
        """
        self._store = store or ProjectStore()
        self.settings = settings or UserSettings()
        self._store_repo = store_repo
        self._settings_repo = settings_repo
        self.celebrator: Celebrator = celebrator or NullCelebrator()
        self.scheduler = scheduler or CelebrationScheduler()
        self.level_up_delay = level_up_delay

        self.active_project_id: str | None = None
        self.focus: FocusSession | None = None
        self.last_level_up: LevelUp | None = None

        self.engine = LevelingEngine()
        self.engine.seed(self._store.total_earned_points())

    @classmethod
    def load(
        cls,
        store_repo: StoreWriter,
        settings_repo: SettingsWriter,
        **kwargs,
    ) -> "Session":
        """Start a session from persisted state.

        Unreadable data is logged and replaced by an empty store or
        default settings; loading never fails.
        """
        store_result = store_repo.load()
        if isinstance(store_result, Err):
            logger.warning(f"Starting with an empty store: {store_result.error}")
            store = ProjectStore()
        else:
            store = store_result.value

        settings_result = settings_repo.load()
        if isinstance(settings_result, Err):
            logger.warning(f"Starting with default settings: {settings_result.error}")
            settings = UserSettings()
        else:
            settings = settings_result.value

        return cls(
            store=store,
            settings=settings,
            store_repo=store_repo,
            settings_repo=settings_repo,
            **kwargs,
        )

    # =========================================================================
    # State
    # =========================================================================

    @property
    def store(self) -> ProjectStore:
        return self._store

    @property
    def total_xp(self) -> int:
        return self._store.total_earned_points()

    def find_project(self, project_id: str) -> Project | None:
        return self._store.find_by_id(project_id)

    def select(self, project_id: str | None) -> Project | None:
        """Make a project the active one (None clears the selection)."""
        if project_id is None or not self._store.contains(project_id):
            self.active_project_id = None
            return None
        self.active_project_id = project_id
        return self._store.find_by_id(project_id)

    def active_project(self) -> Project | None:
        """The active project, or None if it has been deleted since."""
        if self.active_project_id is None:
            return None
        return self._store.find_by_id(self.active_project_id)

    def _commit(self, store: ProjectStore, project_id: str | None = None) -> LevelUp | None:
        """Install a new store, persist it, and check for a level-up."""
        if store is self._store:
            return None
        self._store = store
        self._persist()
        return self._observe(project_id)

    def _persist(self) -> None:
        if self._store_repo is None:
            return
        result = self._store_repo.save(self._store)
        if isinstance(result, Err):
            logger.error(f"Failed to save projects: {result.error}")

    def _observe(self, project_id: str | None) -> LevelUp | None:
        event = self.engine.observe(self._store.total_earned_points())
        if event is None:
            return None

        logger.info(f"Level up: {event.old_level} -> {event.new_level} ({event.total_xp} XP)")
        self.last_level_up = event
        sound = self.settings.sound_enabled

        def guard() -> bool:
            return project_id is None or self._store.contains(project_id)

        self.scheduler.schedule(
            lambda: self.celebrator.level_up(event, sound),
            guard=guard,
            delay=self.level_up_delay,
        )
        return event

    # =========================================================================
    # Projects
    # =========================================================================

    def create_project(self, draft: project_service.ProjectDraft) -> Result[str, str]:
        """Create an empty project and make it active.

        Returns:
            Ok(project_id), or Err(str) when the draft is invalid.
        """
        result = project_service.create_project(draft)
        if isinstance(result, Err):
            return result

        project, event = result.value
        self._commit(self._store.add(project))
        self.active_project_id = project.id
        logger.debug(f"Project created: {event.project_id} ({event.title})")
        return Ok(project.id)

    def create_project_with_tasks(
        self,
        draft: project_service.ProjectDraft,
        tasks: list[TaskDraft],
        fallback_description: str = "",
    ) -> Result[str, str]:
        """Create a project seeded with tasks.

        Returns:
            Ok(project_id), or Err(str) when the draft is invalid.
        """
        result = project_service.create_project_with_tasks(
            draft,
            tasks,
            fallback_description=fallback_description,
        )
        if isinstance(result, Err):
            return result

        project, event = result.value
        self._commit(self._store.add(project))
        self.active_project_id = project.id
        logger.debug(f"Project created: {event.project_id} with {event.task_count} tasks")
        return Ok(project.id)

    async def generate_project(
        self,
        draft: project_service.ProjectDraft,
        generator: RoadmapGenerator,
        on_success: Callable[[str], None] | None = None,
        on_failure: Callable[[str], None] | None = None,
        fallback_to_manual: bool = False,
    ) -> Result[str, str]:
        """Create a project whose tasks come from the roadmap generator.

        The draft is validated before the generator is called. If the
        generator fails the store is untouched, unless
        `fallback_to_manual` asks for an empty project instead.

        Args:
            draft: Creation draft.
            generator: Roadmap generator.
            on_success: Called with the new project id.
            on_failure: Called with the generator's error message.
            fallback_to_manual: Create an empty project on failure.

        Returns:
            Ok(project_id), or Err(str) with the validation or generator error.
        """
        checked = project_service.validate_draft(draft)
        if isinstance(checked, Err):
            return checked

        prompt = project_service.build_roadmap_prompt(checked.value)
        result = await asyncio.to_thread(generator.generate_roadmap, prompt)

        if isinstance(result, Err):
            logger.warning(f"Roadmap generation failed: {result.error}")
            if on_failure is not None:
                on_failure(result.error)
            if fallback_to_manual:
                return self.create_project(checked.value)
            return result

        roadmap = result.value
        created = self.create_project_with_tasks(
            checked.value,
            roadmap.tasks,
            fallback_description=roadmap.meta.description,
        )
        if isinstance(created, Ok) and on_success is not None:
            on_success(created.value)
        return created

    def remove_project(self, project_id: str) -> ProjectRemoved | None:
        """Delete one project; None if it does not exist."""
        project = self._store.find_by_id(project_id)
        if project is None:
            return None

        self._commit(self._store.remove(project_id))
        if self.active_project_id == project_id:
            self.active_project_id = None
        if self.focus is not None and self.focus.project_id == project_id:
            self.focus = None
        return ProjectRemoved(project_id=project_id, points_lost=project.earned_points)

    def reset(self) -> StoreCleared:
        """Delete every project."""
        count = self._store.count()
        self._commit(self._store.clear())
        self.active_project_id = None
        self.focus = None
        logger.info(f"Store cleared ({count} projects)")
        return StoreCleared(projects_removed=count)

    # =========================================================================
    # Tasks
    # =========================================================================

    def add_task(
        self,
        project_id: str,
        title: str,
        description: str = "",
        point_weight: int = 1,
    ) -> Result[int | None, str]:
        """Add a task to a project.

        Returns:
            Ok(task_id), Ok(None) when the project no longer exists, or
            Err(str) when the input is invalid.
        """
        project = self._store.find_by_id(project_id)
        if project is None:
            logger.debug(f"add_task: project {project_id} not found")
            return Ok(None)

        result = task_service.add_task(project, title, description, point_weight)
        if isinstance(result, Err):
            return result

        updated, event = result.value
        self._commit(self._store.update(project_id, lambda _: updated), project_id)
        return Ok(event.task_id)

    def edit_task(
        self,
        project_id: str,
        task_id: int,
        title: str,
        description: str = "",
        point_weight: int = 1,
    ) -> Result[bool, str]:
        """Edit a task.

        Returns:
            Ok(True) if a task changed, Ok(False) if the project or task
            does not exist, or Err(str) when the input is invalid.
        """
        project = self._store.find_by_id(project_id)
        if project is None:
            return Ok(False)

        result = task_service.edit_task(project, task_id, title, description, point_weight)
        if isinstance(result, Err):
            return result

        updated, event = result.value
        if event is None:
            return Ok(False)
        self._commit(self._store.update(project_id, lambda _: updated), project_id)
        return Ok(True)

    def delete_task(self, project_id: str, task_id: int) -> bool:
        """Delete a task. Confirmation is the caller's concern.

        Returns:
            True if a task was removed.
        """
        project = self._store.find_by_id(project_id)
        if project is None:
            return False

        updated, event = task_service.delete_task(project, task_id)
        if event is None:
            return False
        self._commit(self._store.update(project_id, lambda _: updated), project_id)
        if self.focus is not None and self.focus.task_id == task_id:
            self.focus = None
        return True

    def toggle_task(self, project_id: str, task_id: int, origin: Point | None = None) -> bool:
        """Flip a task's completion.

        A completion schedules a celebration burst at `origin` in the
        project's theme color; reopening a task never does.

        Returns:
            True only when the toggle completed the task.
        """
        project = self._store.find_by_id(project_id)
        if project is None:
            return False

        outcome = task_service.toggle_task(project, task_id)
        if outcome.event is None:
            return False

        if outcome.completed:
            point = origin or Point()
            color = project.theme_color
            sound = self.settings.sound_enabled
            self.scheduler.schedule(
                lambda: self.celebrator.task_completed(point, color, sound),
                guard=lambda: self._store.contains(project_id),
                delay=0,
            )

        self._commit(self._store.update(project_id, lambda _: outcome.project), project_id)
        return outcome.completed

    # =========================================================================
    # Generated Tips
    # =========================================================================

    async def fetch_task_intel(
        self,
        project_id: str,
        task_id: int,
        provider: IntelProvider,
        on_success: Callable[[AtomicTask], None] | None = None,
        on_failure: Callable[[str], None] | None = None,
    ) -> AtomicTask | None:
        """Fetch and cache the tip for a task, at most once.

        A task whose tip is present or already being fetched is returned
        as is without a new request. A failed request leaves the tip
        unset so it can be tried again later.

        Returns:
            The task as it stands afterwards, or None if the project or
            task no longer exists.
        """
        project = self._store.find_by_id(project_id)
        task = project.get_task(task_id) if project else None
        if project is None or task is None:
            return None

        pending, started = task_service.mark_intel_pending(project, task_id)
        if not started:
            return task
        self._commit(self._store.update(project_id, lambda _: pending))

        result = await asyncio.to_thread(provider.generate_task_intel, task.title, project.title)

        # The project or task may have been deleted while waiting
        current = self._store.find_by_id(project_id)
        if current is None or current.get_task(task_id) is None:
            logger.debug(f"Dropping tip for deleted task {project_id}/{task_id}")
            return None

        if isinstance(result, Err):
            logger.warning(f"Tip generation failed for task {task_id}: {result.error}")
            reverted = task_service.reset_intel(current, task_id)
            self._commit(self._store.update(project_id, lambda _: reverted))
            if on_failure is not None:
                on_failure(result.error)
            return reverted.get_task(task_id)

        intel = result.value
        enriched, _event = task_service.apply_intel(current, task_id, intel.tip, intel.minutes)
        self._commit(self._store.update(project_id, lambda _: enriched))

        final = enriched.get_task(task_id)
        if final is not None and final.intel_state == IntelState.PRESENT and on_success is not None:
            on_success(final)
        return final

    # =========================================================================
    # Focus
    # =========================================================================

    def enter_focus(self, project_id: str, task_id: int, now: float) -> FocusSession | None:
        """Start a focus stopwatch on a task."""
        project = self._store.find_by_id(project_id)
        if project is None or project.get_task(task_id) is None:
            return None
        self.active_project_id = project_id
        self.focus = FocusSession(project_id=project_id, task_id=task_id).start(now)
        return self.focus

    def exit_focus(self, now: float, complete: bool = False, origin: Point | None = None) -> int:
        """Stop the focus stopwatch, optionally completing its task.

        A task that is already completed is left as it is.

        Returns:
            Seconds spent focused (0 when no focus session was running).
        """
        if self.focus is None:
            return 0

        focus = self.focus.pause(now)
        self.focus = None
        elapsed = focus.elapsed(now)

        if complete:
            project = self._store.find_by_id(focus.project_id)
            task = project.get_task(focus.task_id) if project else None
            if task is not None and not task.is_completed:
                self.toggle_task(focus.project_id, focus.task_id, origin)
        return elapsed

    # =========================================================================
    # Settings
    # =========================================================================

    def update_settings(self, **changes) -> UserSettings:
        """Change user settings and persist them."""
        updates = {k: v for k, v in changes.items() if v is not None}
        self.settings = self.settings.model_copy(update=updates)
        if self._settings_repo is not None:
            result = self._settings_repo.save(self.settings)
            if isinstance(result, Err):
                logger.error(f"Failed to save settings: {result.error}")
        return self.settings
