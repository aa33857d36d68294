"""Domain data models for Jira versions, issues, and computed version states."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(slots=True, frozen=True)
class VersionModel:
    name: str
    release_date: date | None = None
    released: bool = False
    id: str | None = None
    archived: bool = False


@dataclass(slots=True, frozen=True)
class IssueModel:
    key: str
    project_key: str
    issuetype: str | None
    fix_versions: tuple[str, ...] = field(default_factory=tuple)
    affects_versions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class StatusResult:
    label: str
    color: str
