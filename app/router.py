"""
Simple page router for Streamlit tabs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.pages.study import render_study_page
from app.pages.stats import render_stats_page


@dataclass(frozen=True)
class AppPage:
    title: str
    render: Callable[[], None]


PAGES = [
    AppPage(title="Study", render=render_study_page),
    AppPage(title="Stats", render=render_stats_page),
]
