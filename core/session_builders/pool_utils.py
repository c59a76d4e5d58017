"""
Pool utilities for session builders.

These helpers provide shared, minimal primitives for ordering and slicing
session pools without enforcing a single composition policy.
"""

from __future__ import annotations
import math
import random
from typing import Callable, TypeVar


T = TypeVar("T")


def fill_in_order(
    pools: dict[str, list[T]],
    order: list[str],
    target_size: int
) -> list[T]:
    """
    Fill a list by walking pools in order until target_size is reached.
    """
    session: list[T] = []
    for name in order:
        for item in pools.get(name, []):
            if len(session) >= target_size:
                return session
            session.append(item)
    return session


def shuffled(items: list[T], rng: random.Random) -> list[T]:
    """
    Return a uniformly shuffled copy (Fisher-Yates via the injected rng).
    """
    result = list(items)
    rng.shuffle(result)
    return result


def merge_saved_order(
    items: list[T],
    saved_ids: list[str],
    rng: random.Random,
    key: Callable[[T], str]
) -> list[T]:
    """
    Restore a saved order and append newly eligible items.

    Saved ids that are still present keep their saved relative order;
    items the saved order has never seen are shuffled onto the end.
    Saved ids that are no longer present are dropped.
    """
    by_id = {key(item): item for item in items}
    restored: list[T] = []
    seen: set[str] = set()
    for item_id in saved_ids:
        if item_id in by_id and item_id not in seen:
            restored.append(by_id[item_id])
            seen.add(item_id)

    saved = set(saved_ids)
    new_items = [item for item in items if key(item) not in saved]
    return restored + shuffled(new_items, rng)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))
