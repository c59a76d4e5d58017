"""
Stats page rendering.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from core.analytics import build_selection_dashboard
from core.schemas import SessionType, StudySelection


def render_stats_page() -> None:
    st.subheader("Selection Stats")

    library = st.session_state.library
    if not library.tables:
        st.info("No tables yet.")
        return

    table_names = {table.name: table.id for table in library.tables}
    chosen = st.multiselect("Tables", list(table_names), default=list(table_names), key="stats_tables")
    table_ids = [table_names[name] for name in chosen]
    session_type = st.radio(
        "Session type",
        [t.value for t in SessionType],
        horizontal=True,
        key="stats_session_type",
    )

    selection = StudySelection(
        session_type=session_type,
        table_ids=table_ids,
        random_relation=True,
    )
    dashboard = build_selection_dashboard(library.tables, library.relations, selection)
    summary = dashboard.summary

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Items", f"{summary.total_items:,}")
    with col2:
        st.metric("Reviewed", f"{summary.reviewed_items:,}")
    with col3:
        st.metric("Encounters", f"{summary.total_encounters:,}")

    if summary.rating_totals.total:
        st.markdown("### Ratings")
        st.bar_chart(pd.Series(summary.rating_totals.model_dump(), name="reviews"))

    st.markdown("### Level Distribution")
    st.bar_chart(dashboard.level_distribution)

    st.markdown("### Study Next (by Priority Score)")
    if dashboard.priority_ranking.empty:
        st.info("No eligible items for this selection.")
    else:
        st.dataframe(dashboard.priority_ranking, use_container_width=True, hide_index=True)
