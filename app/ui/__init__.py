"""UI Components for the review queue app"""

from app.ui.flashcard import render_card_html, render_flashcard
from app.ui.session_stats import render_session_stats, render_session_complete
from app.ui.feedback_buttons import render_feedback_buttons

__all__ = [
    "render_card_html",
    "render_flashcard",
    "render_session_stats",
    "render_session_complete",
    "render_feedback_buttons",
]
