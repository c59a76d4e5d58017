"""
Abstract Session Runner

Shared lifecycle for flashcard, scramble, theater and quiz sessions:
- start(): build the queue (restoring the saved order) and show the head
- rating / advance events: bookkeeping plus repositioning
- end(): persist the queue order and return a SessionOutcome

Subclasses implement their own event methods on top of these helpers.
"""

from __future__ import annotations

import logging
import random
import time
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, ClassVar, Optional

from core.schemas import Item, RatingCounts, Relation, SessionType, StudySelection, VocabTable
from core.queue_store.keys import selection_key
from core.queue_store.persistence import QueueStore
from core.session_builders.pool_types import SessionCard
from core.session_builders.queue_builder import build_session_queue

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
CurrentItemCallback = Callable[[Optional[Item]], None]


class SessionClock:
    """
    Elapsed-time counter over an injectable monotonic clock.

    Paused spans are excluded; stop() freezes the reading.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._stopped_at: Optional[float] = None
        self._paused_total = 0.0

    def start(self) -> None:
        self._started_at = self._clock()
        self._paused_at = None
        self._stopped_at = None
        self._paused_total = 0.0

    def pause(self) -> None:
        if self._started_at is not None and self._paused_at is None and self._stopped_at is None:
            self._paused_at = self._clock()

    def resume(self) -> None:
        if self._paused_at is not None and self._stopped_at is None:
            self._paused_total += self._clock() - self._paused_at
            self._paused_at = None

    def stop(self) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._clock()

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    @property
    def elapsed(self) -> float:
        """Unpaused seconds since start (fractional)."""
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        paused = self._paused_total
        if self._paused_at is not None:
            paused += end - self._paused_at
        return max(end - self._started_at - paused, 0.0)

    @property
    def elapsed_seconds(self) -> int:
        return int(self.elapsed)


@dataclass
class QuizResult:
    """Pass/fail tallies of one item over a quiz session."""
    passed1: int = 0
    passed2: int = 0
    failed: int = 0


@dataclass
class SessionOutcome:
    """
    Everything a finished (or cancelled) session hands back to the caller.

    rating_deltas only hold ratings given during this session; fold them
    into the library with core.stats_updates.apply_outcome.
    """
    session_type: SessionType
    selection_key: str
    rating_deltas: dict[str, RatingCounts]
    reviewed_ids: list[str]
    encounter_counts: dict[str, int]
    final_queue: list[str]
    elapsed_seconds: int
    flip_counts: dict[str, int] = field(default_factory=dict)
    rating_totals: RatingCounts = field(default_factory=RatingCounts)
    quiz_results: dict[str, QuizResult] = field(default_factory=dict)
    abandoned_ids: list[str] = field(default_factory=list)
    completed: bool = False
    ended_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionRunner(ABC):
    """
    Base class for session runners.

    Subclasses set `session_type` and add their event methods
    (rate, advance, answer, ...). Every event is a no-op before start(),
    after end() and on an empty queue.
    """

    session_type: ClassVar[SessionType]

    def __init__(
        self,
        tables: list[VocabTable],
        relations: list[Relation],
        selection: StudySelection,
        store: Optional[QueueStore] = None,
        on_current_changed: Optional[CurrentItemCallback] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = time.monotonic,
        now: Optional[datetime] = None,
    ):
        """
        Initialize runner.

        Args:
            tables: All tables of the library
            relations: All relations of the library
            selection: What to study
            store: Saved queue storage (None = no resume, no persistence)
            on_current_changed: Called with the current item (or None) on every change
            rng: Random source for shuffles and question generation
            clock: Monotonic clock in seconds
            now: Reference time for priority scores
        """
        self.tables = tables
        self.relations = relations
        self.selection = selection
        self.store = store
        self.on_current_changed = on_current_changed
        self.rng = rng or random.Random()
        self.clock = SessionClock(clock)
        self.now = now

        self.queue: list[SessionCard] = []
        self.index = 0
        self.encounter_counts: dict[str, int] = {}
        self._reviewed: dict[str, None] = {}  # insertion-ordered set
        self._started = False
        self._outcome: Optional[SessionOutcome] = None

    # ---- Lifecycle ----

    def start(self) -> list[SessionCard]:
        """
        Build the queue and present its head.

        Returns:
            The session queue (empty = nothing to study)
        """
        saved = self.store.load(self.session_type) if self.store else {}
        queue = build_session_queue(
            self.tables,
            self.relations,
            self.selection,
            saved_queues=saved,
            rng=self.rng,
            now=self.now,
        )
        self.queue = self._prepare_queue(queue)
        self.index = 0
        self._started = True
        self._outcome = None
        self.clock.start()

        logger.info(
            "Started %s session %s with %d cards",
            self.session_type.value, self.selection_key, len(self.queue),
        )
        self._on_card_shown()
        self._notify()
        return self.queue

    def end(self) -> SessionOutcome:
        """
        Finish (or cancel) the session.

        Writes the current queue order through the store and returns the
        outcome. Calling end() again returns the same outcome.
        """
        if self._outcome is not None:
            return self._outcome

        self.clock.stop()
        final_queue = self._final_order()
        if self.store is not None:
            self.store.save(self.session_type, self.selection_key, final_queue)

        outcome = SessionOutcome(
            session_type=self.session_type,
            selection_key=self.selection_key,
            rating_deltas=self._rating_deltas(),
            reviewed_ids=list(self._reviewed),
            encounter_counts=dict(self.encounter_counts),
            final_queue=final_queue,
            elapsed_seconds=self.clock.elapsed_seconds,
            **self._outcome_extras(),
        )
        self._outcome = outcome
        logger.info(
            "Ended %s session %s: %d reviewed, %ds",
            self.session_type.value, self.selection_key,
            len(outcome.reviewed_ids), outcome.elapsed_seconds,
        )
        return outcome

    # ---- State ----

    @property
    def selection_key(self) -> str:
        return selection_key(self.selection.table_ids, self.selection.relation_ids)

    @property
    def current_card(self) -> Optional[SessionCard]:
        if 0 <= self.index < len(self.queue):
            return self.queue[self.index]
        return None

    @property
    def current_item(self) -> Optional[Item]:
        card = self.current_card
        return card.item if card else None

    @property
    def is_empty(self) -> bool:
        """True once started with nothing to study."""
        return self._started and not self.queue

    @property
    def is_ended(self) -> bool:
        return self._outcome is not None

    @property
    def reviewed_ids(self) -> list[str]:
        return list(self._reviewed)

    @property
    def elapsed_seconds(self) -> int:
        return self.clock.elapsed_seconds

    # ---- Helpers for subclasses ----

    def _is_active(self) -> bool:
        return self._started and not self.is_ended and bool(self.queue)

    def _record_review(self, card: SessionCard) -> None:
        self._reviewed[card.item_id] = None
        self.encounter_counts[card.item_id] = self.encounter_counts.get(card.item_id, 0) + 1

    def _notify(self) -> None:
        """Fire the current-item callback; failures are logged, never raised."""
        if self.on_current_changed is None:
            return
        try:
            self.on_current_changed(self.current_item)
        except Exception:
            logger.exception("Current item callback failed for %s session", self.session_type.value)

    def _rating_deltas(self) -> dict[str, RatingCounts]:
        return {card.item_id: card.ratings for card in self.queue if card.ratings.total > 0}

    # ---- Hooks ----

    def _prepare_queue(self, queue: list[SessionCard]) -> list[SessionCard]:
        """Adjust the built queue before the session starts."""
        return queue

    def _final_order(self) -> list[str]:
        """Item ids written through the store when the session ends."""
        return [card.item_id for card in self.queue]

    def _on_card_shown(self) -> None:
        """Called whenever a new current card is presented."""

    def _outcome_extras(self) -> dict:
        """Per-type SessionOutcome fields."""
        return {}
