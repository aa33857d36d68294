"""VersionStateService: fetches issues/versions from Jira and evaluates the field."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from .evaluator import release_date_order
from .field_type import VersionStateField
from .jira_client import JiraAPI
from .mappers import map_issue, map_versions, versions_to_dataframe
from .models import IssueModel, VersionModel
from .status import label_for

logger = logging.getLogger(__name__)


class VersionStateService:
    def __init__(self, api: JiraAPI, field: VersionStateField):
        self.api = api
        self.field = field

    # ------------------ Fetch Methods ------------------
    def fetch_issue(self, issue_key: str) -> IssueModel:
        return map_issue(self.api.fetch_issue_raw(issue_key))

    def fetch_versions(self, project_key: str) -> list[VersionModel]:
        return map_versions(self.api.project_versions_raw(project_key))

    # ------------------ Evaluation ------------------
    def evaluate_issue(self, issue_key: str, field_id: str) -> str:
        issue = self.fetch_issue(issue_key)
        return self.field.get_value_from_issue(field_id, issue)

    def evaluate_issues(self, issue_keys: Iterable[str], field_id: str) -> pd.DataFrame:
        """Evaluate several issues; versions are fetched once per project."""
        versions_by_project: dict[str, list[VersionModel]] = {}
        rows = []
        for key in issue_keys:
            issue = self.fetch_issue(key)
            if issue.project_key not in versions_by_project:
                versions_by_project[issue.project_key] = self.fetch_versions(issue.project_key)
            value = self.field.get_value_from_issue(
                field_id, issue, versions=versions_by_project[issue.project_key]
            )
            rows.append({"key": issue.key, "state": label_for(value), "html": value})
        logger.debug("Evaluated %d issues for field %s", len(rows), field_id)
        return pd.DataFrame(rows, columns=["key", "state", "html"])

    def version_overview(self, project_key: str, prefix: str | None = None) -> pd.DataFrame:
        """Project versions ordered by release date (undated first), optionally prefix-filtered."""
        versions = self.fetch_versions(project_key)
        if prefix:
            versions = [v for v in versions if v.name.startswith(prefix)]
        return versions_to_dataframe(sorted(versions, key=release_date_order))
