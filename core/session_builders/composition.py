"""
Queue composition policies.

Decides how many items each selected table contributes and in which
order, starting from the base order (saved or shuffled). All sorts are
stable, so ties keep the base order.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from core.schemas import CompositionPolicy, SortRule, StudySelection
from core.scheduling.priority import max_in_queue
from core.session_builders.pool_types import EligibleItem
from core.session_builders.pool_utils import fill_in_order, round_half_up
from core.session_builders.sort_keys import DEFAULT_RULES, sort_by_rules

logger = logging.getLogger(__name__)


def _rules_for(selection: StudySelection, table_id: Optional[str] = None) -> list[SortRule]:
    if table_id is not None and selection.per_table_sorts.get(table_id):
        return selection.per_table_sorts[table_id]
    return selection.sort_rules or DEFAULT_RULES


def _split_by_table(base: list[EligibleItem], table_ids: list[str]) -> dict[str, list[EligibleItem]]:
    pools: dict[str, list[EligibleItem]] = {table_id: [] for table_id in table_ids}
    for entry in base:
        pools.setdefault(entry.table_id, []).append(entry)
    return pools


def _sorted_pools(
    base: list[EligibleItem],
    selection: StudySelection,
    table_ids: list[str],
    now: Optional[datetime]
) -> dict[str, list[EligibleItem]]:
    """Sort each table's pool by its own rules, with a per-table pool max."""
    pools = _split_by_table(base, table_ids)
    return {
        table_id: sort_by_rules(
            entries,
            _rules_for(selection, table_id),
            max_in_queue(entry.item for entry in entries),
            now,
        )
        for table_id, entries in pools.items()
    }


def compose_holistic(
    base: list[EligibleItem],
    selection: StudySelection,
    now: Optional[datetime] = None
) -> list[EligibleItem]:
    """
    One pool across all tables.

    Without a word count or sort rules the base order is kept untouched.
    """
    if selection.word_count is None and not selection.sort_rules:
        return list(base)

    pool_max = max_in_queue(entry.item for entry in base)
    ordered = sort_by_rules(base, _rules_for(selection), pool_max, now)
    if selection.word_count is None:
        return ordered
    return ordered[:selection.word_count]


def compose_balanced(
    base: list[EligibleItem],
    table_ids: list[str],
    selection: StudySelection,
    now: Optional[datetime] = None
) -> list[EligibleItem]:
    """
    Even split: table i takes floor(wc/N), plus one while i < wc mod N.

    Short tables are not padded from other tables.
    """
    pools = _sorted_pools(base, selection, table_ids, now)
    if selection.word_count is None:
        return [entry for table_id in table_ids for entry in pools[table_id]]

    table_count = len(table_ids)
    if table_count == 0:
        return []
    per_table, remainder = divmod(selection.word_count, table_count)

    session: list[EligibleItem] = []
    for index, table_id in enumerate(table_ids):
        take = per_table + (1 if index < remainder else 0)
        session.extend(pools[table_id][:take])
    return session


def compose_percentage(
    base: list[EligibleItem],
    table_ids: list[str],
    selection: StudySelection,
    now: Optional[datetime] = None
) -> list[EligibleItem]:
    """
    User-assigned shares: table i takes round_half_up(wc * pct_i / 100).

    Percentages are used as given (no renormalisation). The merged list is
    truncated to the word count, or padded from each table's leftovers in
    selection order when it falls short.
    """
    pools = _sorted_pools(base, selection, table_ids, now)
    if selection.word_count is None:
        return [entry for table_id in table_ids for entry in pools[table_id]]

    word_count = selection.word_count
    session: list[EligibleItem] = []
    leftovers: dict[str, list[EligibleItem]] = {}
    for table_id in table_ids:
        pct = selection.table_percentages.get(table_id, 0.0)
        take = max(round_half_up(word_count * pct / 100), 0)
        session.extend(pools[table_id][:take])
        leftovers[table_id] = pools[table_id][take:]

    if len(session) > word_count:
        return session[:word_count]

    if len(session) < word_count:
        session.extend(fill_in_order(leftovers, table_ids, word_count - len(session)))
    return session


def compose(
    base: list[EligibleItem],
    table_ids: list[str],
    selection: StudySelection,
    now: Optional[datetime] = None
) -> list[EligibleItem]:
    """
    Apply the selection's composition policy to a base order.

    Args:
        base: Eligible items in base (saved or shuffled) order
        table_ids: Selected table ids, in selection order
        selection: Active study selection
        now: Reference time for priority scores

    Returns:
        Composed list of eligible items
    """
    policy = selection.composition
    if policy == CompositionPolicy.BALANCED:
        composed = compose_balanced(base, table_ids, selection, now)
    elif policy == CompositionPolicy.PERCENTAGE:
        composed = compose_percentage(base, table_ids, selection, now)
    else:
        composed = compose_holistic(base, selection, now)

    logger.debug(
        "Composed %d of %d items (policy=%s, word_count=%s)",
        len(composed), len(base), CompositionPolicy(policy).value, selection.word_count,
    )
    return composed
