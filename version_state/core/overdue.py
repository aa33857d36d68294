"""Lookup of overdue issues tied to a version.

An issue counts as overdue for a version when it lives in the same project,
has a different issue type than the issue being evaluated, is attached to the
version, and its due date is at least one day in the past.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import OVERDUE_DUE_OFFSET
from .jira_client import JiraAPI, JiraQueryError
from .models import IssueModel

logger = logging.getLogger(__name__)

VERSION_FIELDS = frozenset({"fixVersion", "affectedVersion"})


def build_overdue_jql(
    project_key: str,
    issue_type: str | None,
    version_name: str,
    version_field: str = "fixVersion",
) -> str:
    """Build the JQL selecting overdue related issues.

    Examples
    --------
    >>> build_overdue_jql("OBS", "Epic", "R2.1")
    'project = OBS and issuetype != "Epic" and fixVersion = "R2.1" and due <= -1d ORDER BY key DESC'
    """
    if version_field not in VERSION_FIELDS:
        raise ValueError(f"Unsupported version field: {version_field!r}")
    return (
        f'project = {project_key} and issuetype != "{issue_type or ""}" '
        f'and {version_field} = "{version_name}" '
        f"and due <= {OVERDUE_DUE_OFFSET} ORDER BY key DESC"
    )


def find_overdue_issues(
    api: JiraAPI,
    issue: IssueModel,
    version_name: str,
    version_field: str = "fixVersion",
) -> list[dict[str, Any]]:
    """Return overdue issues related to ``issue`` through ``version_name``.

    Parse and search failures are logged and reported as "no overdue issues".
    """
    jql = build_overdue_jql(issue.project_key, issue.issuetype, version_name, version_field)
    try:
        errors = api.parse_jql(jql)
    except JiraQueryError as exc:
        logger.error("Error parsing JQL %r: %s", jql, exc)
        return []
    if errors:
        logger.error("Error parsing JQL %r: %s", jql, errors)
        return []
    try:
        return api.search_enhanced(jql, fields=["key", "duedate"])
    except JiraQueryError as exc:
        logger.error("Error running search %r: %s", jql, exc)
        return []
