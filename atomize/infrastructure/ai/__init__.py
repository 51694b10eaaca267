"""Generator client for Atomize.

Talks to an Ollama-compatible chat endpoint for roadmaps, task tips
and daily briefings.
"""

from atomize.infrastructure.ai.client import (
    FALLBACK_INTEL,
    OFFLINE_BRIEFING,
    RoadmapClient,
    extract_json,
    parse_roadmap,
)

__all__ = [
    "RoadmapClient",
    "extract_json",
    "parse_roadmap",
    "OFFLINE_BRIEFING",
    "FALLBACK_INTEL",
]
