"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import version_state` works. Also provides a network-free
``JiraAPI`` stand-in shared by the test modules.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from version_state.core.jira_client import JiraAPI, JiraQueryError  # noqa: E402


class DummyAPI(JiraAPI):
    def __init__(self, versions=None, issues=None, overdue=None, parse_errors=None, fail_search=False):
        self.server = "https://example.atlassian.net"
        self.versions = versions or []
        self.issues = issues or {}
        self.overdue = overdue or []
        self.parse_errors = parse_errors or []
        self.fail_search = fail_search
        self.searches: list[str] = []
        self.version_fetches = 0

    def parse_jql(self, jql):
        return list(self.parse_errors)

    def search_enhanced(self, jql, fields=None, expand=None, page_size=1000):
        self.searches.append(jql)
        if self.fail_search:
            raise JiraQueryError("Enhanced search failed 500: boom")
        return list(self.overdue)

    def fetch_issue_raw(self, issue_key):
        return self.issues[issue_key]

    def project_versions_raw(self, project_key):
        self.version_fetches += 1
        return list(self.versions)


def raw_issue(key="OBS-1", issuetype="Epic", fix=(), affects=()):
    return {
        "key": key,
        "fields": {
            "project": {"key": key.rsplit("-", 1)[0]},
            "issuetype": {"name": issuetype},
            "fixVersions": [{"name": n} for n in fix],
            "versions": [{"name": n} for n in affects],
        },
    }
