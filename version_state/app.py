"""Application entry point: page registry, sidebar status, and router."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import streamlit as st

SETUP_PAGE = "Setup / Connection"
PAGE_ORDER = ("Issue Version State", "Field Configuration", SETUP_PAGE)

PAGES: dict[str, Callable[[], None]] = {}


def register_page(label: str):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def ordered_pages(labels: Iterable[str]) -> list[str]:
    """Known pages in PAGE_ORDER, then anything else alphabetically."""
    labels = list(labels)
    known = [name for name in PAGE_ORDER if name in labels]
    return known + sorted(name for name in labels if name not in PAGE_ORDER)


def _render_connection_status() -> bool:
    service = st.session_state.get("version_service")
    if service is None:
        st.sidebar.caption("Not connected to Jira.")
        return False
    server = st.session_state.get("jira_server") or service.api.server
    st.sidebar.caption(f"Jira: {server}")
    st.sidebar.caption(f"Policy: {service.field.policy} · Time zone: {service.field.timezone}")
    return True


def main():
    st.sidebar.title("Version State")
    pages = ordered_pages(PAGES)
    if not pages:
        st.write("No pages registered yet.")
        return
    connected = _render_connection_status()
    # Nothing but setup works until a service exists
    default = pages.index(SETUP_PAGE) if not connected and SETUP_PAGE in pages else 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
