"""Configuration loading utilities."""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

from llm_code_review.config.schema import ReviewSettings


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".llm_code_review" / "config.json"


def load_settings(config_path: Path | None = None) -> ReviewSettings:
    """Load settings from file (if present) and environment.

    Values from the file take precedence over ``LLM_CODE_REVIEW_*`` variables.
    Falls back to defaults if the file cannot be read or parsed. Invalid
    environment values raise pydantic.ValidationError.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return ReviewSettings(**convert_keys(data))
        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")

    return ReviewSettings()


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case recursively."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
