"""
Sort keys for criteria ordering.

Each SortRule names a SortKeyKind; `sort_value` resolves it to a
comparable value. Empty values get a fixed stand-in so every rule has a
total order:
- numeric -> -inf
- text -> ""
- date -> epoch
- bool -> 0/1
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from core.schemas import Item, SortDirection, SortKeyKind, SortRule
from core.scheduling.priority import priority_score
from core.session_builders.pool_types import EligibleItem


EMPTY_NUMBER = float("-inf")
EMPTY_TEXT = ""
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DEFAULT_RULES = [SortRule(kind=SortKeyKind.PRIORITY_SCORE, direction=SortDirection.DESC)]


def _utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def sort_value(item: Item, rule: SortRule, pool_max: int, now: Optional[datetime] = None) -> Any:
    """
    Resolve one sort rule to a comparable value for an item.

    Args:
        item: Item being ordered
        rule: Sort rule to resolve
        pool_max: Largest in_queue over the pool (for the priority score)
        now: Reference time for the priority score

    Returns:
        float, int, str or datetime depending on the key kind
    """
    stats = item.stats
    kind = rule.kind

    if kind == SortKeyKind.PRIORITY_SCORE:
        return priority_score(item, pool_max, now)
    if kind == SortKeyKind.RANK_POINT:
        return stats.rank_point
    if kind == SortKeyKind.SUCCESS_RATE:
        return stats.success_rate if stats.total_attempt > 0 else EMPTY_NUMBER
    if kind == SortKeyKind.LEVEL:
        return stats.level
    if kind == SortKeyKind.LAST_PRACTICED:
        return _utc(stats.last_practice_date) if stats.last_practice_date else EPOCH
    if kind == SortKeyKind.PASSED1:
        return stats.passed1
    if kind == SortKeyKind.PASSED2:
        return stats.passed2
    if kind == SortKeyKind.FAILED:
        return stats.failed
    if kind == SortKeyKind.TOTAL_ATTEMPT:
        return stats.total_attempt
    if kind == SortKeyKind.IN_QUEUE:
        return stats.in_queue
    if kind == SortKeyKind.QUIT_QUEUE:
        return int(stats.quit_queue)
    if kind == SortKeyKind.COLUMN:
        return (item.cols.get(rule.column or "") or EMPTY_TEXT).casefold()

    raise ValueError(f"Unknown sort key: {kind}")


def sort_by_rules(
    entries: list[EligibleItem],
    rules: list[SortRule],
    pool_max: int,
    now: Optional[datetime] = None
) -> list[EligibleItem]:
    """
    Stable cascading sort; ties on every rule keep the incoming order.

    Applies the rules last-to-first so the first rule dominates.
    """
    ordered = list(entries)
    for rule in reversed(rules):
        ordered.sort(
            key=lambda entry: sort_value(entry.item, rule, pool_max, now),
            reverse=rule.direction == SortDirection.DESC,
        )
    return ordered
