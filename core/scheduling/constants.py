"""
Scheduling Constants and Parameters

All configurable parameters for the review queue in one place:
rating-keyed requeue offsets, selectable session sizes, priority weights
and the rank-point -> level ladder.
"""

from enum import Enum


# ---- Ratings ----

class Rating(str, Enum):
    """User rating after reviewing a flashcard or scramble item."""
    AGAIN = "again"      # Not recalled, keep it close
    HARD = "hard"        # Recalled with high effort
    GOOD = "good"        # Recalled normally
    EASY = "easy"        # Recalled fluently
    PERFECT = "perfect"  # Effortless, push out of this session


# ---- Requeue Offsets ----
# How many positions forward a rated card is reinserted (Fibonacci-like)

REQUEUE_OFFSETS = {
    Rating.AGAIN: 3,
    Rating.HARD: 5,
    Rating.GOOD: 8,
    Rating.EASY: 13,
    Rating.PERFECT: 21,
}


# ---- Session Sizes ----

WORD_COUNT_OPTIONS = (5, 8, 13, 21)  # Selectable automatic queue sizes
MAX_SORT_RULES = 3                   # Cascading sort keys per rule list


# ---- Priority Score Weights ----
# Components of the priority score; weights sum to 1.0

W_RANK = 0.2         # Low rank point -> higher priority
W_FAILURE = 0.2      # High failure rate -> higher priority
W_LEVEL = 0.1        # Low level -> higher priority
W_RECENCY = 0.2      # Long since last practice -> higher priority
W_QUIT = 0.2         # Abandoned in the last quiz -> higher priority
W_IN_QUEUE = 0.1     # Entered many queues relative to the pool -> higher priority


# ---- Recency Buckets ----
# (days since last practice upper bound, recency weight)

RECENCY_BUCKETS = (
    (2, 0.1),
    (5, 0.5),
    (10, 0.8),
)
RECENCY_STALE = 1.0  # Weight at or beyond the last bucket


# ---- Level Ladder ----
# (rank point upper bound, level)

LEVEL_THRESHOLDS = (
    (0, 1),
    (3, 2),
    (7, 3),
    (15, 4),
    (31, 5),
)
MAX_LEVEL = 6


# ---- Quiz ----

MCQ_DISTRACTORS = 3  # Wrong options shown next to the correct one
