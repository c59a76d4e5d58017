"""
Streamlit session state and storage initialization helpers.
"""

from __future__ import annotations

import streamlit as st

from core import table_repo
from core.queue_store import SqlQueueStore


def get_queue_store() -> SqlQueueStore:
    """
    Saved-queue store (created once per Streamlit server process).
    """
    @st.cache_resource
    def _queue_store() -> SqlQueueStore:
        return SqlQueueStore()

    return _queue_store()


def reload_library() -> None:
    """Re-read the library file into session state."""
    st.session_state.library = table_repo.load_library()


def ensure_session_state() -> None:
    """
    Populate Streamlit session_state with defaults.
    """
    if "library" not in st.session_state:
        reload_library()
    if "runner" not in st.session_state:
        st.session_state.runner = None
    if "last_outcome" not in st.session_state:
        st.session_state.last_outcome = None
    if "current_item_id" not in st.session_state:
        st.session_state.current_item_id = None
    if "last_feedback" not in st.session_state:
        st.session_state.last_feedback = None
    if "session_summary" not in st.session_state:
        st.session_state.session_summary = None
