"""Wiring of the Jira client, option store, field type, and service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import SETTINGS, AppSettings
from .field_type import VersionStateField
from .jira_client import JiraAPI
from .options import FieldOptionsStore
from .service import VersionStateService


def read_jira_secrets(secrets: Mapping[str, Any]) -> tuple[str | None, str | None, str | None]:
    """Pull server/email/token from a ``[jira]`` section, falling back to top-level keys."""
    jira_secrets = secrets.get("jira", {}) or {}
    server = jira_secrets.get("JIRA_SERVER") or secrets.get("JIRA_SERVER")
    email = jira_secrets.get("JIRA_EMAIL") or secrets.get("JIRA_EMAIL")
    token = (
        jira_secrets.get("JIRA_API_TOKEN")
        or secrets.get("JIRA_API_TOKEN")
        or jira_secrets.get("JIRA_TOKEN")
        or secrets.get("JIRA_TOKEN")
    )
    return server, email, token


def build_service(api: JiraAPI, settings: AppSettings | None = None) -> VersionStateService:
    settings = settings or SETTINGS
    field = VersionStateField(
        api,
        FieldOptionsStore(settings.options_path),
        policy=settings.selection_policy,
        timezone=settings.timezone,
    )
    return VersionStateService(api, field)
