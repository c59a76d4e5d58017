"""
Typed pool models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from core.schemas import Item, RatingCounts, Relation


@dataclass
class EligibleItem:
    """
    An item that passed eligibility, with every relation it can be studied through.
    """
    item: Item
    table_id: str
    relations: list[Relation]

    @property
    def item_id(self) -> str:
        return self.item.id


@dataclass
class SessionCard:
    """
    One entry of a session queue.

    `ratings` counts the ratings given to this card during the current
    session only; it starts at zero and is bumped by the requeue engine.
    """
    item: Item
    table_id: str
    relation: Relation
    ratings: RatingCounts = field(default_factory=RatingCounts)

    @property
    def item_id(self) -> str:
        return self.item.id
