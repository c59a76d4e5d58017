"""
Session Queue Builder - Ordered queues for every session type

Builds the queue a runner presents:
1. Eligibility: keep items with at least one compatible relation
2. Manual selection: the caller's id list, in order
3. Automatic selection: restore the saved order for this selection
   (appending newly eligible items shuffled), or shuffle the pool
4. Composition: holistic, balanced or percentage, with cascading sorts

Pure function of its inputs plus the injected random source.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Optional

from core.schemas import Relation, StudySelection, VocabTable, WordSelection
from core.queue_store.keys import selection_key
from core.queue_store.persistence import SavedQueueMap
from core.session_builders.composition import compose
from core.session_builders.eligibility import collect_eligible, selected_tables
from core.session_builders.pool_types import EligibleItem, SessionCard
from core.session_builders.pool_utils import merge_saved_order, shuffled

logger = logging.getLogger(__name__)


def _manual_order(eligible: list[EligibleItem], item_ids: list[str]) -> list[EligibleItem]:
    """Resolve manual ids to eligible items, dropping unknown ids and repeats."""
    by_id = {entry.item_id: entry for entry in eligible}
    ordered: list[EligibleItem] = []
    seen: set[str] = set()
    for item_id in item_ids:
        if item_id in by_id and item_id not in seen:
            ordered.append(by_id[item_id])
            seen.add(item_id)
    return ordered


def base_order(
    eligible: list[EligibleItem],
    saved_ids: Optional[list[str]],
    rng: random.Random
) -> list[EligibleItem]:
    """
    Saved order with new items appended, or a fresh shuffle.

    Args:
        eligible: Eligible items in table/row order
        saved_ids: Saved item order for this selection (None = never saved)
        rng: Random source

    Returns:
        Eligible items in base order
    """
    if saved_ids is None:
        return shuffled(eligible, rng)
    return merge_saved_order(eligible, saved_ids, rng, key=lambda entry: entry.item_id)


def build_session_queue(
    tables: list[VocabTable],
    relations: list[Relation],
    selection: StudySelection,
    saved_queues: Optional[SavedQueueMap] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> list[SessionCard]:
    """
    Build the ordered session queue for a selection.

    Args:
        tables: All tables of the library
        relations: All relations of the library
        selection: What to study and how to order it
        saved_queues: Saved item orders keyed by canonical selection key
        rng: Random source (a fresh unseeded one by default)
        now: Reference time for priority scores

    Returns:
        Queue of session cards; no item id appears twice
    """
    rng = rng or random.Random()
    eligible = collect_eligible(tables, relations, selection)

    if selection.word_selection == WordSelection.MANUAL:
        chosen = _manual_order(eligible, selection.manual_item_ids)
    else:
        key = selection_key(selection.table_ids, selection.relation_ids)
        saved_ids = (saved_queues or {}).get(key)
        base = base_order(eligible, saved_ids, rng)
        table_ids = [table.id for table in selected_tables(tables, selection)]
        chosen = compose(base, table_ids, selection, now)

    queue = [
        SessionCard(item=entry.item, table_id=entry.table_id, relation=rng.choice(entry.relations))
        for entry in chosen
    ]
    logger.debug("Built queue of %d cards from %d eligible items", len(queue), len(eligible))
    return queue
