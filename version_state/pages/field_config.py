"""Field configuration page: view and set the monitored version prefix of a field."""

from __future__ import annotations

import streamlit as st

from version_state.app import register_page
from version_state.core.options import OptionsFileError


@register_page("Field Configuration")
def render():
    st.title("Field Configuration")
    service = st.session_state.get("version_service")
    if service is None:
        st.warning("Initialize the Jira connection on the Setup page first.")
        return
    field = service.field

    st.caption(f"Options file: {field.options.path}")
    if st.button("Reload options file"):
        try:
            field.options.reload()
        except OptionsFileError as exc:
            st.error(f"Failed to reload options: {exc}")
            return
        st.success("Options reloaded from disk.")

    known = field.options.field_ids()
    field_id = st.text_input(
        "Custom field id",
        value=st.session_state.get("field_id") or (known[0] if known else ""),
        help="e.g. customfield_10500",
    ).strip()
    project_key = st.text_input(
        "Project context (blank = default for all projects)",
        value="",
    ).strip().upper()
    if not field_id:
        st.info("Enter a custom field id to view its options.")
        return
    st.session_state["field_id"] = field_id

    current = field.get_options(field_id, project_key or None)
    st.caption("The field needs exactly one option: the prefix of the version name to monitor.")
    if len(current) == 1:
        st.success(f"Monitoring versions starting with: {current[0]}")
    else:
        st.warning(f"{len(current)} option(s) configured; the field will show a configuration message.")

    text = st.text_area("Options (one per line)", value="\n".join(current))
    if st.button("Save options", type="primary"):
        values = text.splitlines()
        try:
            field.set_options(field_id, values, project_key or None)
        except (OSError, OptionsFileError) as exc:
            st.error(f"Failed to save options: {exc}")
            return
        st.success("Options saved.")
