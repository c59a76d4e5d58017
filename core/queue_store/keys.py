"""
Canonical selection keys for saved queues.

The key only depends on the selected table and relation ids, never on
their order: "t1:t2|r1:r2".
"""

from __future__ import annotations

from typing import Iterable


def selection_key(table_ids: Iterable[str], relation_ids: Iterable[str]) -> str:
    """
    Build the canonical key for a (tables, relations) selection.

    Args:
        table_ids: Selected table ids, any order
        relation_ids: Selected relation ids, any order

    Returns:
        Sorted table ids and sorted relation ids, ":"-joined, split by "|"
    """
    return ":".join(sorted(table_ids)) + "|" + ":".join(sorted(relation_ids))


def parse_selection_key(key: str) -> tuple[list[str], list[str]]:
    """Split a canonical key back into (table_ids, relation_ids)."""
    tables_part, _, relations_part = key.partition("|")
    table_ids = [t for t in tables_part.split(":") if t]
    relation_ids = [r for r in relations_part.split(":") if r]
    return table_ids, relation_ids
