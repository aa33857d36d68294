"""Version state evaluation: pick the monitored version and derive its state.

Two selection policies exist:

``earliest_prefix``
    Versions are ordered by release date (undated first) and only names
    starting with the configured prefix are considered. The first dated,
    unreleased match decides the state and ends the scan.

``last_wins``
    Every project version is visited in project order and overwrites the
    running state; the last one visited decides.

Both are pure functions of their inputs: the overdue lookup is passed in as a
callable so the evaluator never talks to Jira itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date
from typing import Any

from .config import POLICY_EARLIEST_PREFIX, POLICY_LAST_WINS, SELECTION_POLICIES
from .models import StatusResult, VersionModel
from .status import (
    ALL_RELEASED,
    DELAYED,
    LAGGING,
    LATE,
    NOT_DATED,
    ON_TIME,
    OVERDUE,
    RELEASED,
)

logger = logging.getLogger(__name__)

# Called with a version name, returns the overdue issues related to it
OverdueLookup = Callable[[str], Sequence[Any]]


def release_date_order(version: VersionModel) -> tuple[int, date]:
    """Sort key: undated versions first, then by ascending release date."""
    if version.release_date is None:
        return (0, date.min)
    return (1, version.release_date)


def evaluate_earliest_prefix(
    versions: Iterable[VersionModel],
    target: str,
    today: date,
    overdue_lookup: OverdueLookup,
) -> StatusResult | None:
    state: StatusResult | None = None
    for version in sorted(versions, key=release_date_order):
        if not version.name.startswith(target):
            continue
        if version.released:
            # Only stands if no unreleased match follows
            if state is None:
                state = RELEASED
            continue
        if version.release_date is None:
            # Keep looking for a dated unreleased match
            state = NOT_DATED
            continue
        if version.release_date < today:
            return OVERDUE
        if overdue_lookup(version.name):
            return DELAYED
        return ON_TIME
    return state


def evaluate_last_wins(
    versions: Iterable[VersionModel],
    target: str,
    today: date,
    overdue_lookup: OverdueLookup,
) -> StatusResult | None:
    state: StatusResult | None = None
    for version in versions:
        if version.released:
            state = ALL_RELEASED
        elif version.release_date is None:
            # Undated unreleased versions leave the state untouched
            continue
        elif version.release_date < today:
            state = LATE
        else:
            state = LAGGING if overdue_lookup(target) else ON_TIME
    return state


_POLICIES = {
    POLICY_EARLIEST_PREFIX: evaluate_earliest_prefix,
    POLICY_LAST_WINS: evaluate_last_wins,
}


def check_policy(policy: str) -> str:
    if policy not in _POLICIES:
        expected = ", ".join(SELECTION_POLICIES)
        raise ValueError(f"Unknown selection policy {policy!r}; expected one of {expected}")
    return policy


def evaluate(
    versions: Iterable[VersionModel],
    target: str,
    today: date,
    overdue_lookup: OverdueLookup,
    policy: str = POLICY_EARLIEST_PREFIX,
) -> StatusResult | None:
    """Compute the state of the version monitored by ``target``.

    Parameters
    ----------
    versions : iterable of VersionModel
        All versions of the issue's project, in project order.
    target : str
        Configured version name prefix.
    today : date
        Current local date; a release date strictly before it is late.
    overdue_lookup : callable
        ``lookup(version_name)`` returning overdue related issues.
    policy : str
        ``"earliest_prefix"`` or ``"last_wins"``.

    Returns
    -------
    StatusResult | None
        The state, or ``None`` when no version decided one.
    """
    func = _POLICIES[check_policy(policy)]
    logger.debug("Target version prefix: %s (policy=%s)", target, policy)
    result = func(list(versions), target, today, overdue_lookup)
    logger.debug("Version state for %s: %s", target, result.label if result else None)
    return result
