"""
Configuration management for DAG Canvas.

Handles persistent configuration including:
- Server settings (title, port)
- Canvas dimensions and grid size
- Palette template file location
- Log level

Config is stored in config.json next to the executable/project root.
Environment variables (usually loaded from .env by app.py) take priority.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dagcanvas.paths import get_config_path, get_templates_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "title": "DAG Builder",
    "port": 8081,
    "canvas_width": 1600,
    "canvas_height": 1000,
    "grid_size": 24,
    "templates_path": None,
    "log_level": "INFO",
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "DAGCANVAS_TITLE": "title",
    "DAGCANVAS_PORT": "port",
    "DAGCANVAS_TEMPLATES": "templates_path",
    "DAGCANVAS_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class Settings:
    title: str
    port: int
    canvas_width: int
    canvas_height: int
    grid_size: int
    templates_path: Path
    log_level: str


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_path}: expected a JSON object")
            return {}
        return data
    return {}


def save_config(config: dict, config_path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = config_path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def _as_int(value, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid integer setting {value!r}, using {fallback}")
        return fallback


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Resolve effective settings.

    Priority:
    1. Environment variables (DAGCANVAS_*)
    2. Stored in config.json
    3. Built-in defaults
    """
    merged = dict(DEFAULT_CONFIG)
    merged.update(load_config(config_path))

    for env_name, key in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            merged[key] = env_value

    templates_path = merged.get("templates_path")
    return Settings(
        title=str(merged["title"]),
        port=_as_int(merged["port"], DEFAULT_CONFIG["port"]),
        canvas_width=_as_int(merged["canvas_width"], DEFAULT_CONFIG["canvas_width"]),
        canvas_height=_as_int(merged["canvas_height"], DEFAULT_CONFIG["canvas_height"]),
        grid_size=_as_int(merged["grid_size"], DEFAULT_CONFIG["grid_size"]),
        templates_path=Path(templates_path) if templates_path else get_templates_path(),
        log_level=str(merged["log_level"]).upper(),
    )
