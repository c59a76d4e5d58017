"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd

from core.analytics.constants import ITEM_COLUMNS, RATING_NAMES
from core.schemas import Relation, StudySelection, VocabTable
from core.scheduling.priority import max_in_queue, priority_score
from core.session_builders.eligibility import collect_eligible


def load_selection_items_df(
    tables: list[VocabTable],
    relations: list[Relation],
    selection: StudySelection,
    now: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Load one row per eligible item of a selection into a dataframe.
    """
    eligible = collect_eligible(tables, relations, selection)
    if not eligible:
        return pd.DataFrame(columns=ITEM_COLUMNS)

    names = {table.id: table.name for table in tables}
    pool_max = max_in_queue(entry.item for entry in eligible)

    rows = []
    for entry in eligible:
        item, stats = entry.item, entry.item.stats
        label = next((value for value in item.cols.values() if value), item.id)
        row = {
            "item_id": item.id,
            "table_id": entry.table_id,
            "table_name": names.get(entry.table_id, entry.table_id),
            "label": label,
            "priority_score": priority_score(item, pool_max, now),
            "rank_point": stats.rank_point,
            "level": stats.level,
            "success_rate": stats.success_rate,
            "failed": stats.failed,
            "total_attempt": stats.total_attempt,
            "in_queue": stats.in_queue,
            "quit_queue": stats.quit_queue,
            "last_practice_date": stats.last_practice_date,
            "is_flashcard_reviewed": stats.is_flashcard_reviewed,
            "flashcard_encounters": stats.flashcard_encounters,
            "is_scramble_reviewed": stats.is_scramble_reviewed,
            "scramble_encounters": stats.scramble_encounters,
            "theater_encounters": stats.theater_encounters,
        }
        for name in RATING_NAMES:
            row[f"flashcard_{name}"] = getattr(stats.flashcard_ratings, name)
            row[f"scramble_{name}"] = getattr(stats.scramble_ratings, name)
        rows.append(row)

    df = pd.DataFrame(rows, columns=ITEM_COLUMNS)
    df["last_practice_date"] = pd.to_datetime(df["last_practice_date"], utc=True, errors="coerce")
    return df
