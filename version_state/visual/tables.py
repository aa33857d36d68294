"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from version_state.core.config import VERSION_COLUMNS


def add_issue_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def render_version_table(df: pd.DataFrame, limit: int = 1000):
    if df.empty:
        st.info("No versions found.")
        return
    cols = [c for c in VERSION_COLUMNS if c in df.columns]
    cfg = {
        "release_date": st.column_config.DateColumn("Release date"),
        "released": st.column_config.CheckboxColumn("Released"),
        "archived": st.column_config.CheckboxColumn("Archived"),
    }
    st.dataframe(df[cols].head(limit), hide_index=True, column_config=cfg)


def render_state_table(df: pd.DataFrame, server: str):
    linked, cfg = add_issue_link(df, server)
    cols = [c for c in ("Ticket", "state") if c in linked.columns]
    st.dataframe(linked[cols], hide_index=True, column_config=cfg)
