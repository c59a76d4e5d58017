"""
Session lifecycle helpers for Streamlit app.
"""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from app.state import get_queue_store
from core import table_repo
from core.analytics import compute_selection_summary, load_selection_items_df
from core.runners import SessionOutcome, TheaterSettings, create_runner
from core.schemas import Item, SessionType, StudySelection
from core.scheduling import Rating
from core.stats_updates import apply_outcome

logger = logging.getLogger(__name__)


def _track_current_item(item: Optional[Item]) -> None:
    st.session_state.current_item_id = item.id if item else None


def start_new_session(selection: StudySelection, theater_settings: Optional[TheaterSettings] = None) -> None:
    """
    Start a new session for a selection.
    """
    library = st.session_state.library
    kwargs = {}
    if SessionType(selection.session_type) == SessionType.THEATER:
        kwargs["settings"] = theater_settings or TheaterSettings()

    runner = create_runner(
        selection.session_type,
        library.tables,
        library.relations,
        selection,
        store=get_queue_store(),
        on_current_changed=_track_current_item,
        **kwargs,
    )
    try:
        runner.start()
    except Exception as exc:
        logger.exception("Could not start %s session", selection.session_type)
        st.error(f"Error creating session: {exc}")
        return

    if runner.is_empty:
        st.session_state.last_outcome = runner.end()
        st.warning("Nothing to study for this selection. Check your relations, modes and sentence length.")
        return

    items_df = load_selection_items_df(library.tables, library.relations, selection)
    st.session_state.session_summary = compute_selection_summary(items_df, selection.session_type)
    st.session_state.runner = runner
    st.session_state.last_outcome = None
    st.session_state.last_feedback = None


def process_rating(rating: Rating) -> None:
    """
    Rate the current flashcard or scramble card and move on.
    """
    runner = st.session_state.runner
    if runner is None:
        return
    runner.rate(rating)
    st.session_state.last_feedback = None


def end_session() -> Optional[SessionOutcome]:
    """
    End (or cancel) the running session and fold its stats into the library.
    """
    runner = st.session_state.runner
    if runner is None:
        return None

    outcome = runner.end()
    library = st.session_state.library
    updated_tables = apply_outcome(library.tables, outcome)
    library = table_repo.replace_tables(library, updated_tables)
    table_repo.save_library(library)

    st.session_state.library = library
    st.session_state.runner = None
    st.session_state.current_item_id = None
    st.session_state.last_outcome = outcome
    return outcome
