"""
Database - Queue store connection handling

Engine and session helpers for the saved-queue table.
Uses SQLAlchemy ORM; SQLite by default, any SQLAlchemy URL via DATABASE_URL.

This module handles ONLY connections and schema.
Reads and writes live in core.queue_store.persistence.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import get_database_url
from core.queue_store.models import Base

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _create_engine(db_url: str) -> Engine:
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        database = url.database
        if not database or database == ":memory:":
            # One shared connection so every session sees the same in-memory DB
            return create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False
            )
        Path(database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(db_url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def get_engine(db_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Engines are cached per URL.

    Args:
        db_url: Database URL (defaults to the configured one)

    Returns:
        SQLAlchemy Engine instance
    """
    return _create_engine(db_url or get_database_url())


def get_session(engine: Optional[Engine] = None) -> Session:
    """
    Get a SQLAlchemy session for database operations.

    Returns:
        SQLAlchemy Session instance
    """
    SessionLocal = sessionmaker(bind=engine or get_engine(), expire_on_commit=False)
    return SessionLocal()


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize database schema if tables don't exist.

    Safe to call multiple times - only creates tables if they don't exist.
    """
    engine = engine or get_engine()
    existing_tables = inspect(engine).get_table_names()
    if 'saved_queues' not in existing_tables:
        Base.metadata.create_all(engine)
        logger.info("Created saved_queues table")


def reset_db(engine: Optional[Engine] = None) -> None:
    """
    DANGEROUS: Delete all saved queues and recreate tables.

    Only use this for testing or when you want to start fresh.
    """
    engine = engine or get_engine()
    Base.metadata.drop_all(engine)
    logger.warning("All queue store tables dropped")

    # Recreate tables
    init_db(engine)
