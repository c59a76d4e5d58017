"""
Queue Store - Saved queue persistence

Quick start:
    from core.queue_store import SqlQueueStore, selection_key

    store = SqlQueueStore()
    key = selection_key(["t1", "t2"], ["r1"])
    store.save("flashcard", key, ["w3", "w1", "w2"])
    store.load("flashcard")[key]
"""

from core.queue_store.keys import parse_selection_key, selection_key
from core.queue_store.persistence import (
    InMemoryQueueStore,
    QueueStore,
    SavedQueueMap,
    SqlQueueStore,
)
from core.queue_store.database import get_engine, get_session, init_db, reset_db


__all__ = [
    # Keys
    "selection_key",
    "parse_selection_key",

    # Stores
    "QueueStore",
    "InMemoryQueueStore",
    "SqlQueueStore",
    "SavedQueueMap",

    # Database operations
    "get_engine",
    "get_session",
    "init_db",
    "reset_db",
]
