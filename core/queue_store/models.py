"""
SQLAlchemy ORM Models for the queue store

Defines the SavedQueue model: one persisted item order per
(session type, selection key).
"""

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SavedQueue(Base):
    """
    Last queue order of a selection for one session type.

    Flashcard and scramble sessions over the same selection keep separate rows.
    """
    __tablename__ = 'saved_queues'

    # Primary key: composite of session_type and selection_key
    session_type = Column(String(50), primary_key=True, nullable=False)
    selection_key = Column(String(1024), primary_key=True, nullable=False)  # "t1:t2|r1:r2"

    # Ordered item ids, head of the queue first
    item_ids = Column(JSON, nullable=False, default=list)

    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<SavedQueue({self.session_type}, {self.selection_key}, {len(self.item_ids or [])} items)>"
