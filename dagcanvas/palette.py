"""
Template catalog for the DAG Canvas palette.

Each template describes a kind of task the user can drag onto the canvas:
  - kind: identifier copied onto created nodes (never validated by the graph)
  - label: display text copied onto created nodes
  - color: opaque display tag
  - description: one-line palette help text

The built-in operators are always available. A templates.yaml file next to the
project root may replace them; it is a list of mappings with the keys above.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeTemplate:
    kind: str
    label: str
    color: str
    description: str = ""

    def to_payload(self) -> Dict[str, str]:
        """Drag payload attached to a palette entry."""
        return {"kind": self.kind, "label": self.label, "color": self.color}


DEFAULT_TEMPLATES = (
    NodeTemplate("python", "PythonOperator", "cyan", "Execute Python code"),
    NodeTemplate("bash", "BashOperator", "emerald", "Run bash commands"),
    NodeTemplate("sql", "SQLOperator", "blue", "Execute SQL queries"),
    NodeTemplate("spark", "SparkOperator", "orange", "Run Spark jobs"),
    NodeTemplate("s3", "S3Operator", "amber", "S3 operations"),
    NodeTemplate("email", "EmailOperator", "purple", "Send email notifications"),
    NodeTemplate("sensor", "Sensor", "pink", "Wait for condition"),
    NodeTemplate("branch", "BranchOperator", "indigo", "Conditional branching"),
)


def template_from_dict(entry: Any) -> Optional[NodeTemplate]:
    """Build a template from a mapping, or None if required keys are missing."""
    if not isinstance(entry, dict):
        return None
    kind = entry.get("kind", entry.get("type"))
    label = entry.get("label")
    if not isinstance(kind, str) or not kind.strip():
        return None
    if not isinstance(label, str) or not label.strip():
        return None
    return NodeTemplate(
        kind=kind.strip(),
        label=label.strip(),
        color=str(entry.get("color") or "slate"),
        description=str(entry.get("description") or ""),
    )


class TemplateCatalog:
    """
    Loads palette templates.

    Falls back to DEFAULT_TEMPLATES when the YAML file is absent, unreadable,
    or contains no valid entry.
    """

    def __init__(self, templates_path: Optional[Path] = None):
        self.templates_path = templates_path
        self._cache: Optional[List[NodeTemplate]] = None

    def _load_file(self) -> List[NodeTemplate]:
        path = self.templates_path
        if path is None or not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            logger.warning(f"Failed to load templates from {path}: {e}")
            return []

        if isinstance(raw, dict):
            raw = raw.get("templates", [])
        if not isinstance(raw, list):
            logger.warning(f"Templates file {path} must contain a list")
            return []

        templates = []
        seen = set()
        for index, entry in enumerate(raw):
            template = template_from_dict(entry)
            if template is None:
                logger.warning(f"Template {index} in {path}: missing 'kind' or 'label', skipped")
                continue
            if template.kind in seen:
                logger.warning(f"Template {index} in {path}: duplicate kind '{template.kind}', skipped")
                continue
            seen.add(template.kind)
            templates.append(template)
        return templates

    def list_templates(self) -> List[NodeTemplate]:
        if self._cache is None:
            self._cache = self._load_file() or list(DEFAULT_TEMPLATES)
        return list(self._cache)

    def get(self, kind: str) -> Optional[NodeTemplate]:
        for template in self.list_templates():
            if template.kind == kind:
                return template
        return None

    def reload(self) -> List[NodeTemplate]:
        self._cache = None
        return self.list_templates()
