"""
Theater Runner

Timed playback: cards are shown one after another (wrapping at the end),
with the answer revealed after a delay. Every card shown counts as viewed.
The session completes once the configured duration of unpaused time has
passed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.schemas import SessionType
from core.runners.base import SessionRunner

logger = logging.getLogger(__name__)


@dataclass
class TheaterSettings:
    """Playback timing."""
    delay_seconds: float = 2.0          # Question shown alone before the answer appears
    card_interval_seconds: float = 5.0  # Time on each card before auto-advance
    duration_minutes: float = 0.0       # Session length limit (0 = unlimited)


class TheaterRunner(SessionRunner):
    """Playback sessions; never requeues."""

    session_type = SessionType.THEATER

    def __init__(self, *args, settings: Optional[TheaterSettings] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.settings = settings or TheaterSettings()
        self._shown_at = 0.0

    # ---- Navigation ----

    def advance(self) -> None:
        """Show the next card, wrapping to the first."""
        if not self._is_active():
            return
        self.index = (self.index + 1) % len(self.queue)
        self._on_card_shown()
        self._notify()

    def previous(self) -> None:
        """Show the previous card, wrapping to the last."""
        if not self._is_active():
            return
        self.index = (self.index - 1) % len(self.queue)
        self._on_card_shown()
        self._notify()

    def tick(self) -> bool:
        """
        Auto-advance once the current card has been on screen long enough.

        Returns:
            True if the session moved to the next card
        """
        if not self._is_active() or self.is_paused or self.is_complete:
            return False
        if self.seconds_on_card >= self.settings.card_interval_seconds:
            self.advance()
            return True
        return False

    # ---- Pause ----

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        self.clock.resume()

    @property
    def is_paused(self) -> bool:
        return self.clock.is_paused

    # ---- State ----

    @property
    def seconds_on_card(self) -> float:
        return self.clock.elapsed - self._shown_at

    @property
    def answer_visible(self) -> bool:
        return self.seconds_on_card >= self.settings.delay_seconds

    @property
    def is_complete(self) -> bool:
        limit = self.settings.duration_minutes
        return limit > 0 and self.clock.elapsed >= limit * 60

    def _on_card_shown(self) -> None:
        card = self.current_card
        if card is None:
            return
        self._shown_at = self.clock.elapsed
        self._record_review(card)

    def _outcome_extras(self) -> dict:
        return {"completed": self.is_complete}
