"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``version_state/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from version_state.app import main

st.set_page_config(layout="wide")
logger = logging.getLogger(__name__)


def _auto_init_version_service():
    """Initialize the version state service from Streamlit secrets if available."""
    if "version_service" in st.session_state:
        return

    from version_state.core.bootstrap import build_service, read_jira_secrets

    server, email, token = read_jira_secrets(st.secrets)

    if server and email and token:
        st.sidebar.info("Secrets found, attempting to connect to Jira...")
        try:
            from version_state.core.jira_client import JiraAPI

            api = JiraAPI(server, email, token)
            st.session_state["jira_server"] = server
            st.session_state["version_service"] = build_service(api)
            st.sidebar.success("Jira connection successful!")
        except Exception as e:
            st.sidebar.error(f"Jira connection failed: {e}")
            # Clear any partial state to ensure user is directed to setup
            if "version_service" in st.session_state:
                del st.session_state["version_service"]
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


_auto_init_version_service()

PAGES_DIR = Path(__file__).parent / "version_state" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"version_state.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
