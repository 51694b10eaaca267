"""Roadmap, tip and briefing generation over an Ollama-compatible API.

Every call is a single blocking chat request asking for JSON output.
Failures come back as Err values (or, for the briefing, a static
offline message) and are never raised.
"""

import json
import logging
import re
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator

from atomize.application.ports import DailyBriefing, ProjectMeta, RoadmapDraft, TaskIntel
from atomize.config import AIConfig
from atomize.domain.project import Project, ProjectStatus
from atomize.domain.shared.result import Err, Ok, Result
from atomize.domain.task import TaskDraft
from atomize.domain.types import Priority, Weight

logger = logging.getLogger(__name__)

MAX_ROADMAP_TASKS = 7

ROADMAP_SYSTEM_PROMPT = """You are the planning core of a goal tracker that splits goals into levels.

Rules:
1. For the starting level create between 5 and 7 atomic tasks. Never more.
2. The tasks must be the very first steps of the project.
3. Give each task an xp_weight from 1 to 5.
4. Output ONLY valid JSON with this structure (no markdown, no explanation):
{
  "project_meta": {
    "name": "Short project name",
    "icon": "single emoji",
    "description": "One sentence",
    "priority": "Low | Medium | High",
    "estimated_days": 7
  },
  "roadmap": [
    {"id": 1, "task_title": "First step", "xp_weight": 2, "description": "What to do"}
  ]
}"""

INTEL_PROMPT = """Context: Project "{project}"
Task: "{task}"

Goal: Provide a specific, actionable tactical tip (1-2 sentences) on exactly how to
start this task efficiently. Also estimate its duration in minutes.
Tone: Professional, concise, helpful.
Output ONLY JSON: {{"tip": "...", "minutes": 15}}"""

BRIEFING_PROMPT = """You are an elite cyberpunk handler. Prepare a daily briefing for your agent.

Data:
    User: {user}
    Total Projects: {projects}
    Total Pending Tasks: {pending}
    Primary Focus Project: {focus}

Rules:
1. "headline": a short, striking title.
2. "content": a motivating, strategic paragraph of at most 30 words.
3. "focus_suggestion": one short thing to focus on today.
Output ONLY JSON with the keys headline, content and focus_suggestion."""

OFFLINE_BRIEFING = DailyBriefing(
    headline="System Offline",
    content="Neural link unstable. Proceed with standard protocols. Trust your instincts, Agent.",
    focus_suggestion="Manual Override",
)

FALLBACK_INTEL = TaskIntel(
    tip="Review project documentation and proceed with standard protocols.",
    minutes=15,
)


class _RoadmapTask(BaseModel):
    task_title: str
    xp_weight: int = 1
    description: str = ""

    @field_validator("xp_weight", mode="before")
    @classmethod
    def _coerce_weight(cls, v: Any) -> int:
        try:
            return int(v)
        except (TypeError, ValueError):
            return 1


class _RoadmapMeta(BaseModel):
    name: str = ""
    icon: str = ""
    description: str = ""
    priority: str = "Medium"
    estimated_days: int = 7


class _RoadmapResponse(BaseModel):
    project_meta: _RoadmapMeta = Field(default_factory=_RoadmapMeta)
    roadmap: list[_RoadmapTask] = Field(default_factory=list)


def extract_json(text: str) -> Result[dict[str, Any], str]:
    """Pull a JSON object out of model output.

    Accepts a bare object, or one wrapped in a fenced code block or
    surrounding chatter.
    """
    fenced = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
    if fenced:
        text = fenced.group(1)

    raw = re.search(r"(\{.*\})", text, re.DOTALL)
    if raw:
        text = raw.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(f"Response is not valid JSON: {e}")
    if not isinstance(data, dict):
        return Err("Response is not a JSON object")
    return Ok(data)


def _parse_priority(value: str) -> Priority:
    for priority in Priority:
        if priority.value.lower() == value.strip().lower():
            return priority
    return Priority.MEDIUM


def parse_roadmap(data: dict[str, Any]) -> Result[RoadmapDraft, str]:
    """Convert the generator's JSON into a roadmap draft.

    Weights are clamped into 1..5, blank titles dropped, and at most
    seven tasks kept.
    """
    try:
        response = _RoadmapResponse.model_validate(data)
    except ValidationError as e:
        return Err(f"Unexpected roadmap format: {e}")

    tasks = [
        TaskDraft(
            title=t.task_title.strip(),
            point_weight=Weight.clamp(t.xp_weight).value,
            description=t.description.strip(),
        )
        for t in response.roadmap
        if t.task_title.strip()
    ][:MAX_ROADMAP_TASKS]
    if not tasks:
        return Err("Roadmap contained no tasks")

    meta = response.project_meta
    return Ok(
        RoadmapDraft(
            meta=ProjectMeta(
                name=meta.name.strip(),
                icon=meta.icon.strip(),
                description=meta.description.strip(),
                priority=_parse_priority(meta.priority),
                estimated_days=max(1, meta.estimated_days),
            ),
            tasks=tasks,
        )
    )


class RoadmapClient:
    """Client for the roadmap, tip and briefing generator.

    Example:
        client = RoadmapClient(get_ai_config())
        result = client.generate_roadmap("Goal: Learn Rust. ...")
        if isinstance(result, Ok):
            tasks = result.value.tasks
    """

    def __init__(
        self,
        config: AIConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint, model and timeout (defaults when omitted).
            transport: Custom httpx transport, mainly for tests.
        """
        self.config = config or AIConfig()
        self._transport = transport

    def _chat(self, prompt: str, system: str | None = None) -> Result[dict[str, Any], str]:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            with httpx.Client(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                response = client.post(
                    "/api/chat",
                    json={
                        "model": self.config.model,
                        "messages": messages,
                        "stream": False,
                        "format": "json",
                    },
                )
        except httpx.ConnectError:
            return Err(f"Cannot connect to the generator at {self.config.base_url}. Is Ollama running?")
        except httpx.TimeoutException:
            return Err(f"Generator timed out after {self.config.timeout:.0f}s")
        except httpx.HTTPError as e:
            return Err(f"Generator request failed: {e}")

        if response.status_code != 200:
            return Err(f"Generator returned HTTP {response.status_code}")

        try:
            content = response.json()["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            return Err(f"Malformed generator response: {e}")

        if not content:
            return Err("Empty response from generator")
        return extract_json(content)

    def is_available(self) -> bool:
        """Check if the generator endpoint is reachable."""
        try:
            with httpx.Client(
                base_url=self.config.base_url,
                timeout=5.0,
                transport=self._transport,
            ) as client:
                return client.get("/api/tags").status_code == 200
        except httpx.HTTPError:
            return False

    def generate_roadmap(self, prompt: str) -> Result[RoadmapDraft, str]:
        """Generate the first level of tasks for a goal.

        Args:
            prompt: Goal description built by build_roadmap_prompt().

        Returns:
            Ok(RoadmapDraft) with 1-7 tasks, or Err(str) on any failure.
        """
        result = self._chat(prompt, system=ROADMAP_SYSTEM_PROMPT)
        if isinstance(result, Err):
            logger.error(f"Roadmap generation failed: {result.error}")
            return result

        parsed = parse_roadmap(result.value)
        if isinstance(parsed, Ok):
            logger.info(f"Generated roadmap with {len(parsed.value.tasks)} tasks")
        return parsed

    def generate_task_intel(self, task_title: str, project_title: str) -> Result[TaskIntel, str]:
        """Generate a how-to-start tip and a duration estimate for a task."""
        result = self._chat(INTEL_PROMPT.format(project=project_title, task=task_title))
        if isinstance(result, Err):
            return result

        try:
            intel = TaskIntel.model_validate(result.value)
        except ValidationError as e:
            return Err(f"Unexpected tip format: {e}")

        if not intel.tip.strip():
            return Err("Generator returned an empty tip")
        return Ok(intel.model_copy(update={"tip": intel.tip.strip(), "minutes": max(1, intel.minutes)}))

    def generate_daily_briefing(self, user_name: str, projects: list[Project]) -> DailyBriefing:
        """Generate the daily briefing, or the offline one on any failure."""
        pending = sum(1 for p in projects for t in p.tasks if not t.is_completed)
        focus = next(
            (p for p in projects if p.priority == Priority.HIGH and p.status != ProjectStatus.DONE),
            projects[0] if projects else None,
        )
        prompt = BRIEFING_PROMPT.format(
            user=user_name,
            projects=len(projects),
            pending=pending,
            focus=focus.title if focus else "None",
        )

        result = self._chat(prompt)
        if isinstance(result, Err):
            logger.warning(f"Briefing unavailable: {result.error}")
            return OFFLINE_BRIEFING

        try:
            return DailyBriefing.model_validate(result.value)
        except ValidationError as e:
            logger.warning(f"Unexpected briefing format: {e}")
            return OFFLINE_BRIEFING
