"""Configuration for Atomize.

User settings and AI configuration live in the data directory,
~/.atomize by default (override with ATOMIZE_HOME).
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

STORE_FILENAME = "roadmaps.json"
SETTINGS_FILENAME = "settings.json"
AI_CONFIG_FILENAME = "config.json"


class UserSettings(BaseModel):
    """Per-user preferences persisted next to the project store."""

    name: str = "Architect"
    sound_enabled: bool = True
    zen_mode: bool = False  # hide detailed stats


class AIConfig(BaseModel):
    """Where the roadmap and tip generator lives."""

    base_url: str = "http://localhost:11434"
    model: str = "qwen2.5-coder:7b"
    timeout: float = 60.0


def get_data_dir() -> Path:
    """Get the Atomize data directory, creating it if needed."""
    override = os.environ.get("ATOMIZE_HOME")
    data_dir = Path(override) if override else Path.home() / ".atomize"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_ai_config(data_dir: Path | None = None) -> AIConfig:
    """Load AI configuration, applying environment overrides."""
    config_file = (data_dir or get_data_dir()) / AI_CONFIG_FILENAME
    config = AIConfig()
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            config = AIConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Ignoring invalid AI config {config_file}: {e}")

    updates: dict[str, str] = {}
    if url := os.environ.get("ATOMIZE_AI_URL"):
        updates["base_url"] = url
    if model := os.environ.get("ATOMIZE_AI_MODEL"):
        updates["model"] = model
    return config.model_copy(update=updates) if updates else config


def save_ai_config(config: AIConfig, data_dir: Path | None = None) -> None:
    """Save AI configuration."""
    config_file = (data_dir or get_data_dir()) / AI_CONFIG_FILENAME
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )
