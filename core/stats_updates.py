"""
Stats Updates - Fold session outcomes back into the library

Takes a SessionOutcome and returns updated copies of the tables; the
input tables are never modified. Counters only ever grow.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from core.schemas import SessionType, Stats, VocabTable
from core.runners.base import SessionOutcome

logger = logging.getLogger(__name__)


def _apply_flashcard(stats: Stats, item_id: str, outcome: SessionOutcome, reviewed: set[str], now: datetime) -> None:
    delta = outcome.rating_deltas.get(item_id)
    if delta is not None:
        stats.flashcard_ratings = stats.flashcard_ratings.plus(delta)
    stats.flashcard_encounters += outcome.encounter_counts.get(item_id, 0)
    if item_id in reviewed:
        stats.is_flashcard_reviewed = True
        stats.last_practice_date = now


def _apply_scramble(stats: Stats, item_id: str, outcome: SessionOutcome, reviewed: set[str], now: datetime) -> None:
    delta = outcome.rating_deltas.get(item_id)
    if delta is not None:
        stats.scramble_ratings = stats.scramble_ratings.plus(delta)
    stats.scramble_encounters += outcome.encounter_counts.get(item_id, 0)
    if item_id in reviewed:
        stats.is_scramble_reviewed = True
        stats.last_practice_date = now


def _apply_theater(stats: Stats, item_id: str, outcome: SessionOutcome, reviewed: set[str], now: datetime) -> None:
    stats.theater_encounters += outcome.encounter_counts.get(item_id, 0)
    if item_id in reviewed:
        stats.last_practice_date = now


def _apply_quiz(stats: Stats, item_id: str, outcome: SessionOutcome, reviewed: set[str], now: datetime) -> None:
    if outcome.completed:
        result = outcome.quiz_results.get(item_id)
        if result is None:
            return
        stats.passed1 += result.passed1
        stats.passed2 += result.passed2
        stats.failed += result.failed
        stats.in_queue += 1
        stats.quit_queue = False
        stats.last_practice_date = now
    elif item_id in outcome.abandoned_ids:
        stats.quit_queue = True


_APPLIERS = {
    SessionType.FLASHCARD: _apply_flashcard,
    SessionType.SCRAMBLE: _apply_scramble,
    SessionType.THEATER: _apply_theater,
    SessionType.QUIZ: _apply_quiz,
}


def apply_outcome(
    tables: list[VocabTable],
    outcome: SessionOutcome,
    now: Optional[datetime] = None
) -> list[VocabTable]:
    """
    Fold a session outcome into copies of the tables.

    Args:
        tables: Library tables (left untouched)
        outcome: Result of SessionRunner.end()
        now: Practice timestamp (defaults to the outcome's end time)

    Returns:
        Updated deep copies of the tables
    """
    now = now or outcome.ended_at or datetime.now(timezone.utc)
    apply = _APPLIERS[SessionType(outcome.session_type)]
    reviewed = set(outcome.reviewed_ids)

    updated = [table.model_copy(deep=True) for table in tables]
    for table in updated:
        table.total_flip_count += outcome.flip_counts.get(table.id, 0)
        for item in table.rows:
            apply(item.stats, item.id, outcome, reviewed, now)

    logger.info(
        "Applied %s outcome (%d reviewed) to %d tables",
        SessionType(outcome.session_type).value, len(reviewed), len(updated),
    )
    return updated
