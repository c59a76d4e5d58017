"""
Service layer to assemble the selection dashboard.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.analytics.metrics import (
    compute_level_distribution,
    compute_priority_ranking,
    compute_selection_summary,
)
from core.analytics.queries import load_selection_items_df
from core.analytics.types import SelectionDashboardData
from core.schemas import Relation, StudySelection, VocabTable


def build_selection_dashboard(
    tables: list[VocabTable],
    relations: list[Relation],
    selection: StudySelection,
    top_n: Optional[int] = 20,
    now: Optional[datetime] = None
) -> SelectionDashboardData:
    """
    Build all values and frames needed by the stats page for a selection.
    """
    items_df = load_selection_items_df(tables, relations, selection, now=now)
    return SelectionDashboardData(
        summary=compute_selection_summary(items_df, selection.session_type),
        items=items_df,
        priority_ranking=compute_priority_ranking(items_df, top_n=top_n),
        level_distribution=compute_level_distribution(items_df),
    )
