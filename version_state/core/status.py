"""Version state catalogue and HTML rendering.

Each state the field can show is a fixed label paired with a fixed background
color. The evaluator only ever returns one of the constants below (or ``None``
when no version matched), and :func:`render_html` turns it into the single-cell
table the issue view displays.
"""

from __future__ import annotations

from .config import COLOR_CYAN, COLOR_GREEN, COLOR_RED, COLOR_YELLOW
from .models import StatusResult

# Earliest-prefix policy
RELEASED = StatusResult("Released", COLOR_GREEN)
NOT_DATED = StatusResult("Not dated", COLOR_GREEN)
OVERDUE = StatusResult("Overdue", COLOR_RED)
ON_TIME = StatusResult("On time", COLOR_GREEN)
DELAYED = StatusResult("Delayed", COLOR_YELLOW)

# Last-wins policy
ALL_RELEASED = StatusResult("Released", COLOR_CYAN)
LATE = StatusResult("Delayed", COLOR_RED)
LAGGING = StatusResult("Lagging", COLOR_YELLOW)

ALL_STATES: frozenset[StatusResult] = frozenset(
    {RELEASED, NOT_DATED, OVERDUE, ON_TIME, DELAYED, ALL_RELEASED, LATE, LAGGING}
)

_TEMPLATE = '<table><tr><td bgcolor="{color}">{label}</td></tr></table>'


def render_html(result: StatusResult | None) -> str:
    """Render a state as the field's HTML fragment.

    Parameters
    ----------
    result : StatusResult | None
        Evaluated state; ``None`` means no monitored version was found.

    Returns
    -------
    str
        ``<table><tr><td bgcolor="#rrggbb">Label</td></tr></table>`` or ``""``.

    Examples
    --------
    >>> render_html(RELEASED)
    '<table><tr><td bgcolor="#00ff00">Released</td></tr></table>'
    >>> render_html(None)
    ''
    """
    if result is None:
        return ""
    return _TEMPLATE.format(color=result.color, label=result.label)


def label_for(value: str | None) -> str:
    """Extract the label from a rendered fragment (for sorting/display in tables)."""
    if not value:
        return ""
    for state in ALL_STATES:
        if value == render_html(state):
            return state.label
    return value
