"""
Requeue Engine - Rating-keyed reinsertion

After a flashcard or scramble rating the reviewed card is pulled out of
the queue and reinserted a fixed number of positions further on. Lower
ratings come back sooner.

The engine never mutates its input queue and never raises: a card that
cannot be located just advances the cursor.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from core.scheduling.constants import REQUEUE_OFFSETS, Rating

if TYPE_CHECKING:
    from core.session_builders.pool_types import SessionCard

logger = logging.getLogger(__name__)


def requeue_offset(rating: Rating) -> int:
    """Positions a card moves forward for a rating."""
    return REQUEUE_OFFSETS[Rating(rating)]


def _locate(queue: list[SessionCard], current_index: int, item_id: Optional[str]) -> Optional[int]:
    in_range = 0 <= current_index < len(queue)
    if item_id is None:
        return current_index if in_range else None
    if in_range and queue[current_index].item.id == item_id:
        return current_index
    for index, card in enumerate(queue):
        if card.item.id == item_id:
            return index
    return None


def requeue(
    queue: list[SessionCard],
    current_index: int,
    rating: Rating,
    item_id: Optional[str] = None,
) -> tuple[list[SessionCard], int]:
    """
    Reposition the rated card and return the new queue and cursor.

    Args:
        queue: Current session queue (left untouched)
        current_index: Cursor position of the card being rated
        rating: User rating for the card
        item_id: Optional id of the rated card, used when the cursor is stale

    Returns:
        (new_queue, new_index)
    """
    if not queue:
        return [], 0

    index = _locate(queue, current_index, item_id)
    if index is None:
        logger.warning(
            "Card %s not found at index %d; advancing without requeue",
            item_id, current_index,
        )
        return list(queue), (current_index + 1) % len(queue)

    remaining = list(queue)
    card = remaining.pop(index)
    target = min(index + requeue_offset(rating), len(remaining))
    remaining.insert(target, replace(card, ratings=card.ratings.incremented(rating)))

    new_index = index if index < len(queue) - 1 else 0
    return remaining, new_index
