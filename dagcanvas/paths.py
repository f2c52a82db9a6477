"""
Locations of the files DAG Canvas reads at startup.

Both optional files sit in the project root: config.json for settings and
templates.yaml for palette overrides. A frozen build looks beside its binary.
"""

import sys
from pathlib import Path


def get_project_root() -> Path:
    """Directory holding config.json and templates.yaml."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).resolve().parents[1]


def get_config_path() -> Path:
    return get_project_root() / "config.json"


def get_templates_path() -> Path:
    return get_project_root() / "templates.yaml"
