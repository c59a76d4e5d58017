"""
Scramble Runner

Sentence re-ordering: the first question column of the card's relation
is split into chunks and shuffled; the user submits the re-ordered
sentence, then rates the card. Rated cards are requeued like flashcards.
"""

from __future__ import annotations

import logging
import math
import random
import re
from typing import Optional

from core.schemas import RatingCounts, SessionType
from core.scheduling.constants import Rating
from core.scheduling.requeue import requeue
from core.runners.base import SessionRunner
from core.session_builders.eligibility import sentence_for

logger = logging.getLogger(__name__)

# Punctuation ignored when comparing answers
PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
WHITESPACE = re.compile(r"\s+")


def normalize_sentence(text: str) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    text = PUNCTUATION.sub("", text.lower())
    return WHITESPACE.sub(" ", text).strip()


def split_sentence(sentence: str, split_into: int, rng: Optional[random.Random] = None) -> list[str]:
    """
    Split a sentence into shuffled chunks.

    Uses min(split_into, words) parts of ceil(words / parts) words each,
    so the last chunk may be shorter.

    Args:
        sentence: Sentence to split
        split_into: Requested number of chunks
        rng: Random source for the shuffle (None = keep reading order)

    Returns:
        List of chunks
    """
    words = sentence.split()
    if not words:
        return []
    parts = max(min(split_into, len(words)), 1)
    size = math.ceil(len(words) / parts)
    chunks = [" ".join(words[i:i + size]) for i in range(0, len(words), size)]
    if rng is not None:
        rng.shuffle(chunks)
    return chunks


class ScrambleRunner(SessionRunner):
    """Sentence re-ordering sessions."""

    session_type = SessionType.SCRAMBLE

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.parts: list[str] = []
        self.is_submitted = False
        self.last_answer_correct: Optional[bool] = None
        self.rating_totals = RatingCounts()

    @property
    def sentence(self) -> str:
        card = self.current_card
        return sentence_for(card.item, card.relation) if card else ""

    def submit(self, answer: str) -> Optional[bool]:
        """
        Check the user's re-ordered sentence.

        Returns:
            True/False for the first submission of a card, the earlier
            result for repeats, None when no card is active
        """
        if not self._is_active():
            return None
        if self.is_submitted:
            return self.last_answer_correct
        self.is_submitted = True
        self.last_answer_correct = normalize_sentence(answer) == normalize_sentence(self.sentence)
        return self.last_answer_correct

    def rate(self, rating: Rating) -> None:
        """Rate the current card; only allowed after submit()."""
        rating = Rating(rating)
        if not self._is_active():
            return
        if not self.is_submitted:
            logger.warning("Scramble rating ignored: answer not submitted yet")
            return
        card = self.current_card
        self._record_review(card)
        self.rating_totals = self.rating_totals.incremented(rating)
        self.queue, self.index = requeue(self.queue, self.index, rating, card.item_id)
        self._on_card_shown()
        self._notify()

    def _on_card_shown(self) -> None:
        self.is_submitted = False
        self.last_answer_correct = None
        self.parts = split_sentence(self.sentence, self.selection.min_split_size, self.rng)

    def _outcome_extras(self) -> dict:
        return {"rating_totals": self.rating_totals}
