"""Connection setup page: collect Jira credentials and initialize VersionStateService."""

from __future__ import annotations

import streamlit as st

from version_state.app import register_page
from version_state.core.bootstrap import build_service, read_jira_secrets
from version_state.core.config import SELECTION_POLICIES, SETTINGS, AppSettings
from version_state.core.jira_client import JiraAPI


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    # Pre-fill from secrets if available (user can override)
    secret_server, secret_email, secret_token = read_jira_secrets(st.secrets)

    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or secret_server or "",
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input(
        "API Token",
        type="password",
        value=secret_token or "",
    )
    policy = st.selectbox(
        "Version selection policy",
        list(SELECTION_POLICIES),
        index=list(SELECTION_POLICIES).index(SETTINGS.selection_policy),
        help="earliest_prefix: earliest dated unreleased version matching the prefix decides. "
        "last_wins: every project version is visited and the last one decides.",
    )
    timezone = st.text_input("Time zone for 'today'", value=SETTINGS.timezone)
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            api = JiraAPI(server, email, token)
            settings = AppSettings(
                selection_policy=policy,
                options_path=SETTINGS.options_path,
                timezone=timezone or SETTINGS.timezone,
            )
            st.session_state["jira_server"] = server
            st.session_state["jira_email"] = email
            st.session_state["version_service"] = build_service(api, settings)
            st.success("Connection initialized.")
        except Exception as e:  # pragma: no cover
            st.error(f"Failed to initialize Jira client: {e}")

    if "version_service" in st.session_state:
        st.info("VersionStateService ready.")
