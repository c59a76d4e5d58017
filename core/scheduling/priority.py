"""
Priority Score - Criteria ordering for study queues

Combines an item's quiz performance, recency and queue bookkeeping into a
single score in [0, 1]. Higher scores are studied first when no sort rule
is given.

Pure and deterministic once `now` is fixed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, Optional

from core.scheduling.constants import (
    RECENCY_BUCKETS,
    RECENCY_STALE,
    W_FAILURE,
    W_IN_QUEUE,
    W_LEVEL,
    W_QUIT,
    W_RANK,
    W_RECENCY,
)

if TYPE_CHECKING:
    from core.schemas import Item


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def days_since(last_practice: Optional[datetime], now: Optional[datetime] = None) -> Optional[int]:
    """
    Whole calendar days between the last practice and now.

    Args:
        last_practice: When the item was last practised (None = never)
        now: Reference time (defaults to the current UTC time)

    Returns:
        Number of days, or None if never practised
    """
    if last_practice is None:
        return None
    now = _as_utc(now or datetime.now(timezone.utc))
    delta = now.date() - _as_utc(last_practice).date()
    return max(delta.days, 0)


def recency_weight(days: Optional[int]) -> float:
    """Step function over days since practice; never practised is stalest."""
    if days is None:
        return RECENCY_STALE
    for upper_bound, weight in RECENCY_BUCKETS:
        if days < upper_bound:
            return weight
    return RECENCY_STALE


def max_in_queue(items: Iterable[Item]) -> int:
    """Largest in_queue counter of a pool (0 for an empty pool)."""
    return max((item.stats.in_queue for item in items), default=0)


def priority_score(item: Item, max_in_queue: int, now: Optional[datetime] = None) -> float:
    """
    Compute the priority score of one item.

    Args:
        item: Item to score
        max_in_queue: Largest in_queue counter over the pool being ordered
        now: Reference time for recency (defaults to the current UTC time)

    Returns:
        Score in [0, 1]; higher = study sooner
    """
    stats = item.stats

    rank = W_RANK * (1.0 / (max(stats.rank_point, 0) + 1))
    failure = W_FAILURE * stats.failure_rate
    level = W_LEVEL * (1.0 / (stats.level + 1))
    recency = W_RECENCY * recency_weight(days_since(stats.last_practice_date, now))
    quit = W_QUIT if stats.quit_queue else 0.0

    pool_max = max_in_queue if max_in_queue > 0 else 1
    staleness = W_IN_QUEUE * min(stats.in_queue / pool_max, 1.0)

    return rank + failure + level + recency + quit + staleness
