"""
Flashcard Runner

Shows one card at a time; the user flips it and rates it. The rated
card is requeued by its rating (again 3 ... perfect 21 positions on).
"""

from __future__ import annotations

import logging

from core.schemas import RatingCounts, SessionType
from core.scheduling.constants import Rating
from core.scheduling.requeue import requeue
from core.runners.base import SessionRunner

logger = logging.getLogger(__name__)


class FlashcardRunner(SessionRunner):
    """Flip-and-rate sessions over the selected tables."""

    session_type = SessionType.FLASHCARD

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.is_flipped = False
        self.flip_counts: dict[str, int] = {}
        self.rating_totals = RatingCounts()

    def flip(self) -> None:
        """Toggle the current card and count the flip for its table."""
        if not self._is_active():
            return
        card = self.current_card
        self.is_flipped = not self.is_flipped
        self.flip_counts[card.table_id] = self.flip_counts.get(card.table_id, 0) + 1

    def rate(self, rating: Rating) -> None:
        """
        Rate the current card and move on.

        Args:
            rating: User rating for the current card

        Raises:
            ValueError: If rating is not a Rating value
        """
        rating = Rating(rating)
        if not self._is_active():
            return
        card = self.current_card
        self._record_review(card)
        self.rating_totals = self.rating_totals.incremented(rating)
        self.queue, self.index = requeue(self.queue, self.index, rating, card.item_id)
        self.is_flipped = False
        self._notify()

    def _outcome_extras(self) -> dict:
        return {
            "flip_counts": dict(self.flip_counts),
            "rating_totals": self.rating_totals,
        }
