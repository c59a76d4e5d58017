"""
Queue Persistence Adapter

Reads and writes saved queue orders, namespaced by session type. A saved
queue map is read once when a session starts and written once when it
ends (or is cancelled).
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.schemas import SessionType
from core.queue_store.database import get_engine, get_session, init_db
from core.queue_store.models import SavedQueue

logger = logging.getLogger(__name__)

SavedQueueMap = dict[str, list[str]]


class QueueStore(ABC):
    """Storage for saved queue orders."""

    @abstractmethod
    def load(self, session_type: SessionType) -> SavedQueueMap:
        """Every saved order for one session type, keyed by selection key."""

    @abstractmethod
    def save(self, session_type: SessionType, key: str, item_ids: list[str]) -> None:
        """Replace the saved order of one selection."""

    def load_order(self, session_type: SessionType, key: str) -> Optional[list[str]]:
        return self.load(session_type).get(key)


class InMemoryQueueStore(QueueStore):
    """Dictionary-backed store for tests and embedding."""

    def __init__(self, initial: Optional[dict[str, SavedQueueMap]] = None):
        self._maps: dict[str, SavedQueueMap] = copy.deepcopy(initial) if initial else {}

    def load(self, session_type: SessionType) -> SavedQueueMap:
        saved = self._maps.get(SessionType(session_type).value, {})
        return {key: list(ids) for key, ids in saved.items()}

    def save(self, session_type: SessionType, key: str, item_ids: list[str]) -> None:
        self._maps.setdefault(SessionType(session_type).value, {})[key] = list(item_ids)


class SqlQueueStore(QueueStore):
    """
    SQLAlchemy-backed store (one row per session type and selection key).

    Database errors are logged and re-raised.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or get_engine()
        init_db(self.engine)

    def load(self, session_type: SessionType) -> SavedQueueMap:
        """
        Load every saved order for a session type.

        Args:
            session_type: Session type namespace

        Returns:
            Mapping of selection key to ordered item ids
        """
        session = get_session(self.engine)
        try:
            rows = session.query(SavedQueue).filter(
                SavedQueue.session_type == SessionType(session_type).value
            ).all()
            return {row.selection_key: list(row.item_ids or []) for row in rows}
        except SQLAlchemyError:
            logger.exception("Failed to load saved queues for %s", session_type)
            raise
        finally:
            session.close()

    def save(self, session_type: SessionType, key: str, item_ids: list[str]) -> None:
        """
        Save a queue order (insert or update).

        Args:
            session_type: Session type namespace
            key: Canonical selection key
            item_ids: Ordered item ids, head first
        """
        type_value = SessionType(session_type).value
        session = get_session(self.engine)
        try:
            row = session.query(SavedQueue).filter(
                SavedQueue.session_type == type_value,
                SavedQueue.selection_key == key
            ).first()

            now = datetime.now(timezone.utc)
            if row is None:
                row = SavedQueue(
                    session_type=type_value,
                    selection_key=key,
                    item_ids=list(item_ids),
                    updated_at=now
                )
                session.add(row)
            else:
                row.item_ids = list(item_ids)
                row.updated_at = now

            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Failed to save queue %s for %s", key, type_value)
            raise
        finally:
            session.close()
