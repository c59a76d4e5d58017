"""
Types for selection analytics.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from core.schemas import RatingCounts, SessionType


@dataclass(frozen=True)
class SelectionSummary:
    """
    Headline numbers of a selection for one session type.
    """
    session_type: SessionType
    total_items: int
    reviewed_items: int
    total_encounters: int
    rating_totals: RatingCounts


@dataclass(frozen=True)
class SelectionDashboardData:
    """
    Precomputed frames and summary for the stats page.
    """
    summary: SelectionSummary
    items: pd.DataFrame
    priority_ranking: pd.DataFrame
    level_distribution: pd.Series
