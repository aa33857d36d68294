"""Calculated "version state" custom field.

This is the narrow contract the issue view and the field configuration page
talk to: compute a displayable value for an issue, expose the field's single
settable option, and convert between stored strings and values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import pytz

from .config import (
    CONFIG_ERROR_MESSAGE,
    DEFAULT_SELECTION_POLICY,
    NULL_VALUE_STRING,
    POLICY_VERSION_FIELDS,
    TIMEZONE,
)
from .evaluator import check_policy, evaluate
from .jira_client import JiraAPI
from .mappers import map_versions
from .models import IssueModel, VersionModel
from .options import FieldOptionsStore
from .overdue import find_overdue_issues
from .status import render_html

logger = logging.getLogger(__name__)

TodayProvider = Callable[[], date]

# Configuration item exposed to the field configuration page
SETTABLE_OPTIONS_ITEM = "settable_options"


def local_today(tz_name: str = TIMEZONE) -> date:
    """Current calendar date in ``tz_name``."""
    return datetime.now(pytz.timezone(tz_name)).date()


class VersionStateField:
    def __init__(
        self,
        api: JiraAPI,
        options: FieldOptionsStore,
        *,
        policy: str = DEFAULT_SELECTION_POLICY,
        timezone: str = TIMEZONE,
        today_provider: TodayProvider | None = None,
    ):
        self.api = api
        self.options = options
        self.policy = check_policy(policy)
        # Raises pytz.UnknownTimeZoneError for unknown zone names
        self.timezone = pytz.timezone(timezone).zone
        self._today = today_provider or (lambda: local_today(self.timezone))

    # ------------------ Value Computation ------------------
    def get_value_from_issue(
        self,
        field_id: str,
        issue: IssueModel,
        versions: list[VersionModel] | None = None,
    ) -> str:
        """Return the HTML fragment for ``issue`` (or the configuration instruction).

        ``versions`` may be supplied by callers that already fetched the
        project's versions; otherwise they are read from Jira.
        """
        options = self.get_options(field_id, issue.project_key)
        if len(options) != 1:
            logger.warning(
                "Field %s has %d options for project %s; expected exactly one",
                field_id,
                len(options),
                issue.project_key,
            )
            return CONFIG_ERROR_MESSAGE
        target = options[0]
        if versions is None:
            versions = map_versions(self.api.project_versions_raw(issue.project_key))
        version_field = POLICY_VERSION_FIELDS[self.policy]

        def lookup(version_name: str) -> list[dict[str, Any]]:
            return find_overdue_issues(self.api, issue, version_name, version_field)

        result = evaluate(versions, target, self._today(), lookup, policy=self.policy)
        return render_html(result)

    # ------------------ Configuration ------------------
    def get_configuration_item_types(self) -> list[str]:
        return [SETTABLE_OPTIONS_ITEM]

    def get_options(self, field_id: str, project_key: str | None = None) -> list[str]:
        return self.options.get_options(field_id, project_key)

    def set_options(self, field_id: str, values: list[str], project_key: str | None = None) -> None:
        self.options.set_options(field_id, values, project_key)

    # ------------------ Value Conversion ------------------
    @staticmethod
    def get_string_from_singular_object(value: Any) -> str:
        return str(value) if value is not None else NULL_VALUE_STRING

    @staticmethod
    def get_singular_object_from_string(text: str | None) -> str:
        return text if text is not None else NULL_VALUE_STRING

    # Calculated values are never stored, so there is nothing to look up or remove.
    def get_issue_ids_with_value(self, field_id: str, option: str) -> set[str]:
        return set()

    def remove_value(self, field_id: str, issue: IssueModel, option: str) -> None:
        return None
