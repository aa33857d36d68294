import json
import logging
from datetime import date
from types import SimpleNamespace
from urllib.parse import urlparse

import pytest
import requests
from jira import JIRAError
from jira.resilientsession import ResilientSession
from requests.adapters import BaseAdapter

from version_state.core.field_type import VersionStateField
from version_state.core.jira_client import JiraAPI, JiraQueryError
from version_state.core.models import IssueModel, VersionModel
from version_state.core.options import FieldOptionsStore
from version_state.core.overdue import find_overdue_issues

SERVER = "https://example.atlassian.net"
ISSUE = IssueModel(key="OBS-1", project_key="OBS", issuetype="Epic")


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    def json(self):
        return self.payload


class FakeSession:
    """Replays queued responses/exceptions and records the requests made."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get(self, url, **kwargs):
        return self._next("get", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("post", url, kwargs)


class StatusAdapter(BaseAdapter):
    """Transport answering each path with a fixed status code and JSON body."""

    def __init__(self, routes):
        super().__init__()
        self.routes = routes

    def send(self, request, **kwargs):
        path = urlparse(request.url).path
        status, body = self.routes[path]
        resp = requests.Response()
        resp.status_code = status
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass


def _api(session):
    api = JiraAPI.__new__(JiraAPI)
    api.server = SERVER
    api.client = SimpleNamespace(_session=session)
    return api


def _resilient(routes):
    session = ResilientSession()
    session.mount("https://", StatusAdapter(routes))
    return session


def test_search_enhanced_follows_page_tokens():
    session = FakeSession(
        FakeResponse({"issues": [{"key": "OBS-1"}, {"key": "OBS-2"}], "nextPageToken": "p2"}),
        FakeResponse({"issues": [{"key": "OBS-3"}], "isLast": True}),
    )
    issues = _api(session).search_enhanced("project = OBS", fields=["key", "duedate"])
    assert [i["key"] for i in issues] == ["OBS-1", "OBS-2", "OBS-3"]
    assert "nextPageToken" not in session.calls[0][2]["params"]
    assert session.calls[1][2]["params"]["nextPageToken"] == "p2"
    assert session.calls[0][2]["params"]["fields"] == "key,duedate"


def test_parse_jql_returns_errors():
    session = FakeSession(
        FakeResponse({"queries": [{"query": "due <= x", "errors": ["Date value 'x' is invalid"]}]}),
        FakeResponse({"queries": [{"query": "project = OBS"}]}),
    )
    api = _api(session)
    assert api.parse_jql("due <= x") == ["Date value 'x' is invalid"]
    assert api.parse_jql("project = OBS") == []
    assert session.calls[0][2]["json"] == {"queries": ["due <= x"]}


@pytest.mark.parametrize(
    "failure",
    [
        JIRAError(status_code=400, text="bad jql"),
        requests.ConnectionError("connection refused"),
        ValueError("Expecting value"),
    ],
)
def test_session_failures_become_query_errors(failure):
    with pytest.raises(JiraQueryError):
        _api(FakeSession(failure)).search_enhanced("project = OBS")
    with pytest.raises(JiraQueryError):
        _api(FakeSession(failure)).parse_jql("project = OBS")


def test_error_status_from_plain_session():
    with pytest.raises(JiraQueryError, match="500"):
        _api(FakeSession(FakeResponse({"errorMessages": ["boom"]}, 500))).search_enhanced("x")


def test_resilient_session_search_error_fails_open(tmp_path, caplog):
    session = _resilient(
        {
            "/rest/api/3/jql/parse": (200, {"queries": [{"query": "ok"}]}),
            "/rest/api/3/search/jql": (400, {"errorMessages": ["Field 'due' is invalid"]}),
        }
    )
    api = _api(session)
    with caplog.at_level(logging.ERROR):
        assert find_overdue_issues(api, ISSUE, "R2.1") == []
    assert "Error running search" in caplog.text

    store = FieldOptionsStore(tmp_path / "field_options.yaml")
    store.set_options("customfield_10500", ["R2"])
    field = VersionStateField(api, store, today_provider=lambda: date(2024, 6, 10))
    versions = [VersionModel(name="R2.1", release_date=date(2024, 7, 1))]
    value = field.get_value_from_issue("customfield_10500", ISSUE, versions=versions)
    assert value == '<table><tr><td bgcolor="#00ff00">On time</td></tr></table>'


def test_resilient_session_parse_error_fails_open(caplog):
    session = _resilient({"/rest/api/3/jql/parse": (400, {"errorMessages": ["nope"]})})
    with caplog.at_level(logging.ERROR):
        assert find_overdue_issues(_api(session), ISSUE, "R2.1") == []
    assert "Error parsing JQL" in caplog.text
