"""
Constants for analytics frames and session-type column mappings.
"""

from __future__ import annotations

from typing import Final

from core.schemas import SessionType


RATING_NAMES: Final[list[str]] = ["again", "hard", "good", "easy", "perfect"]

ITEM_COLUMNS: Final[list[str]] = [
    "item_id",
    "table_id",
    "table_name",
    "label",
    "priority_score",
    "rank_point",
    "level",
    "success_rate",
    "failed",
    "total_attempt",
    "in_queue",
    "quit_queue",
    "last_practice_date",
    "is_flashcard_reviewed",
    "flashcard_encounters",
    "is_scramble_reviewed",
    "scramble_encounters",
    "theater_encounters",
    *[f"flashcard_{name}" for name in RATING_NAMES],
    *[f"scramble_{name}" for name in RATING_NAMES],
]

ENCOUNTER_COLUMN: Final[dict[SessionType, str]] = {
    SessionType.FLASHCARD: "flashcard_encounters",
    SessionType.SCRAMBLE: "scramble_encounters",
    SessionType.THEATER: "theater_encounters",
    SessionType.QUIZ: "total_attempt",
}

RATING_PREFIX: Final[dict[SessionType, str]] = {
    SessionType.FLASHCARD: "flashcard",
    SessionType.SCRAMBLE: "scramble",
}

RANKING_COLUMNS: Final[list[str]] = [
    "label",
    "table_name",
    "priority_score",
    "rank_point",
    "level",
    "success_rate",
    "in_queue",
    "quit_queue",
    "last_practice_date",
]
