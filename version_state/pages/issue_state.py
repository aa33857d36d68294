"""Issue page: render the version state field for one or more issues."""

from __future__ import annotations

import streamlit as st

from version_state.app import register_page
from version_state.core.jira_client import JiraQueryError
from version_state.visual.tables import render_state_table, render_version_table


@register_page("Issue Version State")
def render():
    st.title("Issue Version State")
    service = st.session_state.get("version_service")
    if service is None:
        st.warning("Initialize the Jira connection on the Setup page first.")
        return

    field_id = st.text_input("Custom field id", value=st.session_state.get("field_id", "")).strip()
    keys_text = st.text_input(
        "Issue key(s)",
        value=st.session_state.get("issue_keys", ""),
        help="Comma-separated, e.g. OBS-12, OBS-15",
    )
    if not st.button("Evaluate", type="primary"):
        return
    keys = [k.strip().upper() for k in keys_text.split(",") if k.strip()]
    if not (field_id and keys):
        st.error("Field id and at least one issue key are required.")
        return
    st.session_state["field_id"] = field_id
    st.session_state["issue_keys"] = keys_text

    try:
        with st.spinner("Evaluating version state"):
            if len(keys) == 1:
                issue = service.fetch_issue(keys[0])
                value = service.field.get_value_from_issue(field_id, issue)
                st.markdown(value, unsafe_allow_html=True)
                prefix = service.field.get_options(field_id, issue.project_key)
                st.markdown(f"#### Versions of {issue.project_key}")
                render_version_table(
                    service.version_overview(issue.project_key, prefix[0] if len(prefix) == 1 else None)
                )
            else:
                states = service.evaluate_issues(keys, field_id)
                render_state_table(states, st.session_state.get("jira_server", ""))
    except JiraQueryError as exc:
        st.error(str(exc))
