"""
Flashcard UI Component

Renders a study card (question side or answer side) from a session card.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

import streamlit as st

from core.session_builders.pool_types import SessionCard


# ---- Shared Card Layout ----

CARD_PADDING = "35px 24px"
CARD_MIN_HEIGHT = "210px"
FRONT_BG_COLOR = "#f0f2f6"
BACK_BG_COLOR = "#e8f4f8"


@dataclass(frozen=True)
class CardStyle:
    """
    Visual style preset for cards.
    """
    main_font_size: str = "2.5em"
    subtitle_font_size: str = "1.2em"
    wrap_text: bool = False
    bg_color: str = FRONT_BG_COLOR


FRONT_STYLE = CardStyle()
BACK_STYLE = CardStyle(main_font_size="2.2em", wrap_text=True, bg_color=BACK_BG_COLOR)
SENTENCE_STYLE = CardStyle(main_font_size="1.6em", subtitle_font_size="1.0em", wrap_text=True)


def render_card_html(main_text: str, subtitle: str = "", corner_text: str = "", style: CardStyle = FRONT_STYLE) -> None:
    """
    Render a card with main text, optional subtitle and corner label.
    """
    white_space = "normal" if style.wrap_text else "nowrap"
    corner_html = ""
    if corner_text:
        corner_html = (
            '<div style="position: absolute; top: 15px; right: 20px; font-size: 0.9em; '
            f'color: #666; font-style: italic;">{escape(corner_text)}</div>'
        )
    subtitle_html = ""
    if subtitle:
        subtitle_html = (
            f'<p style="font-size: {style.subtitle_font_size}; color: #666; font-style: italic; '
            f'margin: 15px 0 0 0; text-align: center;">{escape(subtitle)}</p>'
        )
    main_html = (
        f'<h1 style="font-size: {style.main_font_size}; color: #1f1f1f; margin: 0; '
        f'white-space: {white_space}; text-align: center; line-height: 1.4; '
        f'overflow-wrap: anywhere;">{escape(main_text)}</h1>'
    )
    html = (
        f'<div style="background-color: {style.bg_color}; padding: {CARD_PADDING}; '
        'border-radius: 15px; text-align: center; box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1); '
        f'min-height: {CARD_MIN_HEIGHT}; display: flex; flex-direction: column; '
        'align-items: center; justify-content: center; position: relative;">'
        f'{corner_html}{main_html}{subtitle_html}</div>'
    )
    st.markdown(html, unsafe_allow_html=True)


def _joined(card: SessionCard, columns: list[str]) -> str:
    return " / ".join(card.item.cols.get(col) or "" for col in columns)


def render_flashcard(card: SessionCard, flipped: bool) -> None:
    """
    Render the question side, or the answer side when flipped.

    Args:
        card: Session card to show
        flipped: Show the answer columns instead of the question columns
    """
    relation = card.relation
    if not flipped:
        render_card_html(_joined(card, relation.question_cols), corner_text=relation.name)
        return
    render_card_html(
        _joined(card, relation.answer_cols) or _joined(card, relation.question_cols),
        subtitle=_joined(card, relation.question_cols),
        corner_text=relation.name,
        style=BACK_STYLE,
    )
