"""
Feedback Button UI

Renders the five rating buttons for flashcard and scramble cards.
"""

from typing import Optional

import streamlit as st

from core.scheduling import REQUEUE_OFFSETS, Rating


RATING_LABELS = {
    Rating.AGAIN: "❌ Again",
    Rating.HARD: "😰 Hard",
    Rating.GOOD: "👍 Good",
    Rating.EASY: "✨ Easy",
    Rating.PERFECT: "🏆 Perfect",
}


def render_feedback_buttons(key_suffix: str = "") -> Optional[Rating]:
    """
    Render rating buttons.

    Args:
        key_suffix: Makes widget keys unique per card

    Returns:
        Rating selected by user, or None if no button clicked
    """
    st.markdown("**How well did you know this?**")

    columns = st.columns(len(RATING_LABELS))
    for column, (rating, label) in zip(columns, RATING_LABELS.items()):
        with column:
            if st.button(
                label,
                key=f"rate_{rating.value}_{key_suffix}",
                use_container_width=True,
                help=f"Show again in {REQUEUE_OFFSETS[rating]} cards",
            ):
                return rating
    return None
