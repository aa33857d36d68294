"""Central configuration, constants, and runtime settings for the version state field."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://your-domain.atlassian.net"
# "Today" is the calendar date in this zone; release dates are compared against it.
TIMEZONE = "UTC"

# =============================================================================
# Field Configuration
# =============================================================================
# YAML file holding the configured option(s) per custom field
FIELD_OPTIONS_FILE = Path(__file__).resolve().parents[2] / "field_options.yaml"

# Shown as the field value when the relevant configuration does not hold
# exactly one option.
CONFIG_ERROR_MESSAGE = (
    "Please create a single configuration option for this field. "
    "Value should be the prefix of the name of the version that you want to monitor"
)

# String stored/returned in place of a null value
NULL_VALUE_STRING = "false"

# =============================================================================
# Version Selection Policies
# =============================================================================
POLICY_EARLIEST_PREFIX = "earliest_prefix"
POLICY_LAST_WINS = "last_wins"
SELECTION_POLICIES: Sequence[str] = (POLICY_EARLIEST_PREFIX, POLICY_LAST_WINS)
DEFAULT_SELECTION_POLICY = POLICY_EARLIEST_PREFIX

# JQL version field each policy matches overdue issues against
POLICY_VERSION_FIELDS: dict[str, str] = {
    POLICY_EARLIEST_PREFIX: "fixVersion",
    POLICY_LAST_WINS: "affectedVersion",
}

# =============================================================================
# Overdue Query
# =============================================================================
OVERDUE_DUE_OFFSET = "-1d"
SEARCH_PAGE_SIZE = 1000

# =============================================================================
# Status Colors
# =============================================================================
COLOR_GREEN = "#00ff00"
COLOR_RED = "#ff0000"
COLOR_YELLOW = "#ffff00"
COLOR_CYAN = "#00ffff"

# Columns used when listing project versions
VERSION_COLUMNS: Sequence[str] = (
    "name",
    "release_date",
    "released",
    "archived",
)


@dataclass(slots=True)
class AppSettings:
    selection_policy: str = DEFAULT_SELECTION_POLICY
    options_path: Path = FIELD_OPTIONS_FILE
    timezone: str = TIMEZONE


SETTINGS = AppSettings()
