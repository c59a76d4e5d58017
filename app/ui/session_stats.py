"""
Session Statistics UI

Renders progress metrics and controls.
"""

import streamlit as st

from core.analytics import SelectionSummary
from core.runners import SessionOutcome, SessionRunner


def render_session_stats(runner: SessionRunner, summary: SelectionSummary) -> bool:
    """
    Render session progress metrics and exit button.

    Args:
        runner: Running session
        summary: Selection summary taken when the session started

    Returns:
        True if quit button was clicked, False otherwise
    """
    col1, col2, col3, col4 = st.columns([2, 2, 2, 1])

    session_reviewed = len(runner.reviewed_ids)
    session_encounters = sum(runner.encounter_counts.values())

    with col1:
        st.metric("Queue", f"{runner.index + 1}/{len(runner.queue)}")

    with col2:
        st.metric("Reviewed", f"{summary.reviewed_items}/{summary.total_items}", delta=session_reviewed or None)

    with col3:
        st.metric("Encounters", summary.total_encounters + session_encounters)

    with col4:
        st.markdown("<br>", unsafe_allow_html=True)  # Align with metrics
        if st.button("❌", help="End session", use_container_width=True):
            return True

    minutes, seconds = divmod(runner.elapsed_seconds, 60)
    st.caption(f"⏱ {minutes:02d}:{seconds:02d}")
    st.divider()
    return False


def render_session_complete(outcome: SessionOutcome) -> None:
    """Render session completion message."""
    if not outcome.reviewed_ids:
        return
    st.success(f"🎉 Session finished! You reviewed {len(outcome.reviewed_ids)} items.")
    minutes = round(outcome.elapsed_seconds / 60)
    if minutes > 0:
        st.info(f"You practiced for {minutes} minutes.")
    if outcome.abandoned_ids:
        st.warning(f"{len(outcome.abandoned_ids)} items were not mastered and will be prioritised next time.")
