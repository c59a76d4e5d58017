"""
Metric computations for selection analytics.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from core.analytics.constants import ENCOUNTER_COLUMN, RANKING_COLUMNS, RATING_NAMES, RATING_PREFIX
from core.analytics.types import SelectionSummary
from core.schemas import RatingCounts, SessionType
from core.scheduling.constants import MAX_LEVEL


def compute_reviewed_mask(items_df: pd.DataFrame, session_type: SessionType) -> pd.Series:
    """
    Which items count as reviewed for a session type.
    """
    session_type = SessionType(session_type)
    if session_type == SessionType.FLASHCARD:
        return items_df["is_flashcard_reviewed"].astype(bool)
    if session_type == SessionType.SCRAMBLE:
        return items_df["is_scramble_reviewed"].astype(bool)
    if session_type == SessionType.THEATER:
        return items_df["theater_encounters"] > 0
    return items_df["total_attempt"] > 0


def compute_rating_totals(items_df: pd.DataFrame, session_type: SessionType) -> RatingCounts:
    """
    Sum rating buckets over a selection (zero for unrated session types).
    """
    prefix = RATING_PREFIX.get(SessionType(session_type))
    if prefix is None or items_df.empty:
        return RatingCounts()
    return RatingCounts(**{
        name: int(items_df[f"{prefix}_{name}"].sum()) for name in RATING_NAMES
    })


def compute_selection_summary(items_df: pd.DataFrame, session_type: SessionType) -> SelectionSummary:
    """
    Headline numbers shown above a running session.
    """
    session_type = SessionType(session_type)
    if items_df.empty:
        return SelectionSummary(session_type, 0, 0, 0, RatingCounts())

    return SelectionSummary(
        session_type=session_type,
        total_items=int(len(items_df)),
        reviewed_items=int(compute_reviewed_mask(items_df, session_type).sum()),
        total_encounters=int(items_df[ENCOUNTER_COLUMN[session_type]].sum()),
        rating_totals=compute_rating_totals(items_df, session_type),
    )


def compute_priority_ranking(items_df: pd.DataFrame, top_n: Optional[int] = None) -> pd.DataFrame:
    """
    Items ordered by priority score, most urgent first.
    """
    if items_df.empty:
        return pd.DataFrame(columns=RANKING_COLUMNS)
    ranked = items_df.sort_values("priority_score", ascending=False, kind="stable")
    if top_n is not None:
        ranked = ranked.head(top_n)
    return ranked[RANKING_COLUMNS].reset_index(drop=True)


def compute_level_distribution(items_df: pd.DataFrame) -> pd.Series:
    """
    Item count per level (1..6), zero-filled.
    """
    levels = pd.RangeIndex(1, MAX_LEVEL + 1, name="level")
    if items_df.empty:
        return pd.Series(0, index=levels, dtype="int64")
    return items_df["level"].value_counts().reindex(levels, fill_value=0).astype("int64")
