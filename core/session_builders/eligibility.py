"""
Eligibility - Which items a selection can study

An item is eligible when at least one relation of its table is compatible
with the selection. Items without a compatible relation are dropped
silently; duplicate item ids across tables keep their first occurrence.
"""

from __future__ import annotations

import logging

from core.schemas import Item, Relation, SessionType, StudyMode, StudySelection, VocabTable
from core.session_builders.pool_types import EligibleItem

logger = logging.getLogger(__name__)


def word_count(text: str) -> int:
    """Number of whitespace-separated words in a text."""
    return len(text.split())


def sentence_for(item: Item, relation: Relation) -> str:
    """The scramble sentence of an item: its first question column."""
    if not relation.question_cols:
        return ""
    return item.cols.get(relation.question_cols[0]) or ""


def relation_fits(item: Item, relation: Relation, selection: StudySelection) -> bool:
    """
    Check one relation against the selection for one item.

    Args:
        item: Row being considered
        relation: Relation of the row's table
        selection: Active study selection

    Returns:
        True if the item can be studied through this relation
    """
    if not selection.random_relation and relation.id not in selection.relation_ids:
        return False

    if selection.study_modes and not set(relation.modes) & set(selection.study_modes):
        return False

    if selection.session_type == SessionType.SCRAMBLE:
        if StudyMode.SCRAMBLED not in relation.modes:
            return False
        return word_count(sentence_for(item, relation)) >= selection.min_split_size

    return True


def selected_tables(tables: list[VocabTable], selection: StudySelection) -> list[VocabTable]:
    """Selected tables in selection order; unknown ids are skipped."""
    by_id = {table.id: table for table in tables}
    return [by_id[table_id] for table_id in selection.table_ids if table_id in by_id]


def collect_eligible(
    tables: list[VocabTable],
    relations: list[Relation],
    selection: StudySelection
) -> list[EligibleItem]:
    """
    Gather every eligible item of the selected tables, in table then row order.
    """
    eligible: list[EligibleItem] = []
    seen: set[str] = set()

    for table in selected_tables(tables, selection):
        table_relations = [r for r in relations if r.table_id == table.id]
        for item in table.rows:
            if item.id in seen:
                continue
            compatible = [r for r in table_relations if relation_fits(item, r, selection)]
            if not compatible:
                continue
            seen.add(item.id)
            eligible.append(EligibleItem(item=item, table_id=table.id, relations=compatible))

    logger.debug("Eligible items: %d across %d tables", len(eligible), len(selection.table_ids))
    return eligible
