"""YAML-backed storage of custom field configuration options.

Layout of the options file::

    fields:
      customfield_10500:
        default: ["R2."]
        projects:
          OBS: ["OBS 1."]

A project entry overrides the field default for issues of that project.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class OptionsFileError(RuntimeError):
    """Raised when the options file cannot be read or has an unexpected shape."""


class FieldOptionsStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.debug("Options file %s not found; starting empty", self.path)
            return {"fields": {}}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise OptionsFileError(f"Invalid options file {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("fields", {}), dict):
            raise OptionsFileError(f"Options file {self.path} must map 'fields' to field entries")
        data.setdefault("fields", {})
        return data

    def reload(self) -> None:
        self._data = self._load()

    def field_ids(self) -> list[str]:
        return sorted(self._data["fields"])

    def get_options(self, field_id: str, project_key: str | None = None) -> list[str]:
        """Return the options relevant to ``field_id`` in ``project_key``'s context."""
        entry = self._data["fields"].get(field_id) or {}
        if project_key:
            projects = entry.get("projects") or {}
            if project_key in projects:
                return [str(v) for v in projects[project_key] or []]
        return [str(v) for v in entry.get("default") or []]

    def set_options(self, field_id: str, values: list[str], project_key: str | None = None) -> None:
        cleaned = [v.strip() for v in values if v and v.strip()]
        entry = self._data["fields"].setdefault(field_id, {})
        if project_key:
            entry.setdefault("projects", {})[project_key] = cleaned
        else:
            entry["default"] = cleaned
        self._save()
        logger.debug("Stored options for %s (project=%s): %s", field_id, project_key, cleaned)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(self._data, sort_keys=True), encoding="utf-8")
