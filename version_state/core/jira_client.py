"""Jira API client wrapper (REST v3 + enhanced search pagination + JQL parsing)."""

from __future__ import annotations

from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import SEARCH_PAGE_SIZE

# ResilientSession raises JIRAError on non-2xx; plain sessions raise the requests errors.
REQUEST_ERRORS = (JIRAError, requests.RequestException, ValueError)


class JiraQueryError(RuntimeError):
    """Raised when a Jira REST call fails."""


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )

    def _session(self):
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraQueryError("JIRA session unavailable")
        return session

    def _request_json(self, what: str, method: str, url: str, **kwargs) -> dict[str, Any]:
        session = self._session()
        try:
            resp = getattr(session, method)(url, **kwargs)
            # Only reached with sessions that do not raise on error statuses
            if resp.status_code >= 400:
                raise JiraQueryError(f"{what} failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
        except REQUEST_ERRORS as exc:
            raise JiraQueryError(f"{what} failed: {exc}") from exc
        if not isinstance(data, dict):
            raise JiraQueryError(f"{what} returned unexpected payload type {type(data)!r}")
        return data

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = SEARCH_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Run ``jql`` and return every matching issue (all pages)."""
        url = f"{self.server}/rest/api/3/search/jql"
        params = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            data = self._request_json("Enhanced search", "get", url, params=qp)
            out.extend(data.get("issues", []))
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        return out

    def parse_jql(self, jql: str) -> list[str]:
        """Validate ``jql`` with Jira's parser; returns error messages (empty when valid)."""
        url = f"{self.server}/rest/api/3/jql/parse"
        data = self._request_json(
            "JQL parse", "post", url, params={"validation": "strict"}, json={"queries": [jql]}
        )
        queries = data.get("queries") or [{}]
        return [str(e) for e in queries[0].get("errors") or []]

    def fetch_issue_raw(self, issue_key: str) -> dict[str, Any]:
        try:
            issue = self.client.issue(issue_key, fields="project,issuetype,fixVersions,versions")
        except REQUEST_ERRORS as exc:  # pragma: no cover - network error path
            raise JiraQueryError(f"Failed to fetch issue {issue_key}: {exc}") from exc
        if hasattr(issue, "raw"):
            return issue.raw
        if isinstance(issue, dict):
            return issue
        raise JiraQueryError(f"Unexpected issue payload type for {issue_key}: {type(issue)!r}")

    def project_versions_raw(self, project_key: str) -> list[dict[str, Any]]:
        try:
            versions = self.client.project_versions(project_key)
        except REQUEST_ERRORS as exc:  # pragma: no cover - network error path
            raise JiraQueryError(f"Failed to fetch versions of {project_key}: {exc}") from exc
        return [v.raw if hasattr(v, "raw") else v for v in versions]
