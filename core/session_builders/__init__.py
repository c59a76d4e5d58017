"""Session builder modules: eligibility, ordering, composition and quiz questions."""

from core.session_builders.queue_builder import (
    SavedQueueMap,
    base_order,
    build_session_queue,
)
from core.session_builders.pool_types import EligibleItem, SessionCard
from core.session_builders.eligibility import collect_eligible, sentence_for, word_count
from core.session_builders.sort_keys import sort_by_rules, sort_value
from core.session_builders.questions import StudyQuestion, build_question, is_correct, pick_mode

__all__ = [
    "SavedQueueMap",
    "base_order",
    "build_session_queue",
    "EligibleItem",
    "SessionCard",
    "collect_eligible",
    "sentence_for",
    "word_count",
    "sort_by_rules",
    "sort_value",
    "StudyQuestion",
    "build_question",
    "is_correct",
    "pick_mode",
]
