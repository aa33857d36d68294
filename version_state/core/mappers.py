"""Mapping raw Jira version/issue JSON or jira resources into model instances."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

import pandas as pd

from .config import VERSION_COLUMNS
from .models import IssueModel, VersionModel


def _raw(obj: Any) -> dict[str, Any]:
    # jira.resources.Resource keeps the REST payload on ``raw``
    if hasattr(obj, "raw") and isinstance(obj.raw, dict):
        return obj.raw
    if isinstance(obj, dict):
        return obj
    raise TypeError(f"Unexpected Jira payload type: {type(obj)!r}")


def parse_release_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def map_version(raw: Any) -> VersionModel:
    data = _raw(raw)
    version_id = data.get("id")
    return VersionModel(
        name=str(data.get("name") or ""),
        release_date=parse_release_date(data.get("releaseDate")),
        released=bool(data.get("released", False)),
        id=str(version_id) if version_id is not None else None,
        archived=bool(data.get("archived", False)),
    )


def map_versions(raws: Iterable[Any]) -> list[VersionModel]:
    return [map_version(r) for r in raws or []]


def _version_names(values: Any) -> tuple[str, ...]:
    names: list[str] = []
    for v in values or []:
        if isinstance(v, dict):
            nm = v.get("name")
            if nm:
                names.append(str(nm))
    return tuple(names)


def map_issue(raw: Any) -> IssueModel:
    data = _raw(raw)
    fields = data.get("fields") or {}
    project = fields.get("project") or {}
    issuetype = fields.get("issuetype") or {}
    key = data.get("key") or ""
    project_key = project.get("key")
    if not project_key and "-" in key:
        # Issue keys are always "<PROJECT>-<number>"
        project_key = key.rsplit("-", 1)[0]
    return IssueModel(
        key=key,
        project_key=project_key or "",
        issuetype=issuetype.get("name"),
        fix_versions=_version_names(fields.get("fixVersions")),
        affects_versions=_version_names(fields.get("versions")),
    )


def versions_to_dataframe(versions: Iterable[VersionModel]) -> pd.DataFrame:
    rows = [
        {
            "name": v.name,
            "release_date": v.release_date,
            "released": v.released,
            "archived": v.archived,
        }
        for v in versions
    ]
    return pd.DataFrame(rows, columns=list(VERSION_COLUMNS))
