"""Tests for atomize/infrastructure/ai/client.py

The HTTP layer is replaced with httpx.MockTransport so no model server
is needed.
"""

import json

import httpx

from atomize.config import AIConfig
from atomize.domain.shared import Err, Ok
from atomize.domain.types import Priority
from atomize.infrastructure.ai import (
    OFFLINE_BRIEFING,
    RoadmapClient,
    extract_json,
    parse_roadmap,
)
from tests.conftest import make_project, make_task


def _client(content: str | None = None, status: int = 200, error: Exception | None = None, seen=None):
    """Client whose chat endpoint answers with `content`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if error is not None:
            raise error
        return httpx.Response(status, json={"message": {"role": "assistant", "content": content}})

    return RoadmapClient(AIConfig(), transport=httpx.MockTransport(handler))


ROADMAP = {
    "project_meta": {
        "name": "Rust",
        "icon": "🦀",
        "description": "Learn systems programming",
        "priority": "High",
        "estimated_days": 14,
    },
    "roadmap": [
        {"id": 1, "task_title": "Install rustup", "xp_weight": 1, "description": "Toolchain"},
        {"id": 2, "task_title": "Read chapter 1", "xp_weight": 9, "description": ""},
        {"id": 3, "task_title": "Write hello world", "xp_weight": 0, "description": ""},
    ],
}


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────


class TestExtractJson:
    """Tests for pulling JSON out of model output."""

    def test_bare_object(self):
        assert extract_json('{"a": 1}') == Ok({"a": 1})

    def test_fenced_block(self):
        text = 'Sure!\n```json\n{"a": 1}\n```\nGood luck.'
        assert extract_json(text) == Ok({"a": 1})

    def test_surrounding_chatter(self):
        assert extract_json('Here you go: {"a": {"b": 2}} enjoy') == Ok({"a": {"b": 2}})

    def test_garbage(self):
        assert isinstance(extract_json("no json here"), Err)


class TestParseRoadmap:
    """Tests for mapping generator JSON onto a roadmap draft."""

    def test_weights_clamped(self):
        result = parse_roadmap(ROADMAP)

        assert isinstance(result, Ok)
        assert [t.point_weight for t in result.value.tasks] == [1, 5, 1]
        assert result.value.meta.priority == Priority.HIGH

    def test_capped_at_seven_tasks(self):
        data = {"roadmap": [{"task_title": f"T{i}", "xp_weight": 1} for i in range(10)]}
        assert len(parse_roadmap(data).value.tasks) == 7

    def test_blank_titles_dropped(self):
        data = {"roadmap": [{"task_title": "  "}, {"task_title": "Real"}]}
        assert [t.title for t in parse_roadmap(data).value.tasks] == ["Real"]

    def test_no_tasks_is_err(self):
        assert isinstance(parse_roadmap({"roadmap": []}), Err)

    def test_unknown_priority_defaults_to_medium(self):
        data = {"project_meta": {"priority": "Urgent"}, "roadmap": [{"task_title": "x"}]}
        assert parse_roadmap(data).value.meta.priority == Priority.MEDIUM


# ─────────────────────────────────────────────────────────────────────────────
# HTTP Client
# ─────────────────────────────────────────────────────────────────────────────


class TestGenerateRoadmap:
    """Tests for the roadmap request."""

    def test_success(self):
        seen = []
        client = _client(json.dumps(ROADMAP), seen=seen)

        result = client.generate_roadmap("Goal: Learn Rust.")
        assert isinstance(result, Ok)
        assert len(result.value.tasks) == 3

        body = json.loads(seen[0].content)
        assert seen[0].url.path == "/api/chat"
        assert body["model"] == "qwen2.5-coder:7b"
        assert body["format"] == "json"
        assert body["stream"] is False
        assert body["messages"][-1] == {"role": "user", "content": "Goal: Learn Rust."}

    def test_connection_error(self):
        client = _client(error=httpx.ConnectError("refused"))
        result = client.generate_roadmap("x")

        assert isinstance(result, Err)
        assert "Cannot connect" in result.error

    def test_http_error_status(self):
        result = _client("{}", status=500).generate_roadmap("x")
        assert result == Err("Generator returned HTTP 500")

    def test_empty_content(self):
        assert isinstance(_client("").generate_roadmap("x"), Err)


class TestGenerateTaskIntel:
    """Tests for the tip request."""

    def test_success(self):
        client = _client('{"tip": "  Open the docs.  ", "minutes": 0}')
        result = client.generate_task_intel("Read chapter 1", "Rust")

        assert isinstance(result, Ok)
        assert result.value.tip == "Open the docs."
        assert result.value.minutes == 1

    def test_prompt_mentions_task_and_project(self):
        seen = []
        _client('{"tip": "x", "minutes": 5}', seen=seen).generate_task_intel("Read chapter 1", "Rust")
        prompt = json.loads(seen[0].content)["messages"][-1]["content"]

        assert '"Read chapter 1"' in prompt
        assert '"Rust"' in prompt

    def test_wrong_shape(self):
        assert isinstance(_client('{"advice": "x"}').generate_task_intel("a", "b"), Err)


class TestDailyBriefing:
    """Tests for the briefing request and its offline fallback."""

    def test_success(self):
        content = json.dumps(
            {"headline": "Mission Update", "content": "Push on.", "focus_suggestion": "Ship it"}
        )
        briefing = _client(content).generate_daily_briefing("Ada", [])
        assert briefing.headline == "Mission Update"

    def test_offline_fallback(self):
        briefing = _client(error=httpx.ConnectError("refused")).generate_daily_briefing("Ada", [])
        assert briefing == OFFLINE_BRIEFING
        assert briefing.headline == "System Offline"

    def test_context_in_prompt(self):
        seen = []
        projects = [make_project("p1", title="Rust", tasks=[make_task(1), make_task(2, done=True)])]
        _client("{}", seen=seen).generate_daily_briefing("Ada", projects)
        prompt = json.loads(seen[0].content)["messages"][-1]["content"]

        assert "User: Ada" in prompt
        assert "Total Pending Tasks: 1" in prompt
        assert "Primary Focus Project: Rust" in prompt
