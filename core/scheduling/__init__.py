"""
Scheduling - Review queue ordering

Main API for ordering and repositioning study items.

This package implements:
- A priority score blending rank point, failure rate, level, recency,
  quit state and queue staleness
- Rating-keyed requeue offsets (again 3, hard 5, good 8, easy 13, perfect 21)

Quick start:
    from core import scheduling

    score = scheduling.priority_score(item, max_in_queue=4)
    queue, index = scheduling.requeue(queue, index, scheduling.Rating.GOOD)
"""

# Priority scoring
from core.scheduling.priority import (
    days_since,
    max_in_queue,
    priority_score,
    recency_weight,
)

# Requeue engine
from core.scheduling.requeue import requeue, requeue_offset

# Constants and parameters
from core.scheduling.constants import (
    Rating,
    REQUEUE_OFFSETS,
    WORD_COUNT_OPTIONS,
    MAX_SORT_RULES,
    MCQ_DISTRACTORS,
)


__all__ = [
    # Priority
    "priority_score",
    "max_in_queue",
    "days_since",
    "recency_weight",

    # Requeue
    "requeue",
    "requeue_offset",

    # Enums
    "Rating",

    # Parameters
    "REQUEUE_OFFSETS",
    "WORD_COUNT_OPTIONS",
    "MAX_SORT_RULES",
    "MCQ_DISTRACTORS",
]
