"""
Analytics package exports.
"""

from core.analytics.metrics import compute_priority_ranking, compute_selection_summary
from core.analytics.queries import load_selection_items_df
from core.analytics.service import build_selection_dashboard
from core.analytics.types import SelectionDashboardData, SelectionSummary

__all__ = [
    "build_selection_dashboard",
    "load_selection_items_df",
    "compute_selection_summary",
    "compute_priority_ranking",
    "SelectionDashboardData",
    "SelectionSummary",
]
