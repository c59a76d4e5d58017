"""
Vocabulary Review Queue - Main App

Streamlit UI for flashcard, scramble, theater and quiz sessions over a
local vocabulary library.
"""

import streamlit as st

from app.router import PAGES
from app.state import ensure_session_state, get_queue_store
from core.config import configure_logging, is_test_mode


# ---- Page Setup ----

st.set_page_config(
    page_title="Vocabulary Review Queue",
    page_icon="📚",
    layout="centered"
)

configure_logging()


# ---- Storage Initialization ----

get_queue_store()
ensure_session_state()


# ---- Main App ----

def main():
    """Main app entry point."""
    if is_test_mode():
        st.warning("⚠️ **TEST MODE** - Using test_review_queues (set TEST_MODE=false in .env for production)")

    tabs = st.tabs([page.title for page in PAGES])
    for tab, page in zip(tabs, PAGES):
        with tab:
            page.render()


if __name__ == "__main__":
    main()
