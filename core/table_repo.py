"""
JSON repository for the vocabulary library.

Loads and saves the caller-supplied document holding every table and
relation. Table and column editing happens elsewhere; this module only
reads the library for sessions and writes back folded stats.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from core.config import get_library_path
from core.schemas import Library, Relation, VocabTable

logger = logging.getLogger(__name__)


# ---- Load / Save ----

def load_library(path: Optional[Path] = None) -> Library:
    """
    Load the library document.

    Args:
        path: JSON file (defaults to VOCAB_LIBRARY_PATH)

    Returns:
        Library; empty when the file does not exist yet
    """
    path = Path(path or get_library_path())
    if not path.exists():
        logger.info("No library at %s, starting empty", path)
        return Library()

    try:
        return Library.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError:
        logger.exception("Library at %s failed validation", path)
        raise


def save_library(library: Library, path: Optional[Path] = None) -> None:
    """
    Write the library document (pretty-printed JSON).
    """
    path = Path(path or get_library_path())
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(library.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    logger.debug("Saved library with %d tables to %s", len(library.tables), path)


# ---- Lookups ----

def get_table(library: Library, table_id: str) -> Optional[VocabTable]:
    return next((t for t in library.tables if t.id == table_id), None)


def relations_for_tables(library: Library, table_ids: list[str]) -> list[Relation]:
    """Relations belonging to any of the given tables."""
    wanted = set(table_ids)
    return [r for r in library.relations if r.table_id in wanted]


def replace_tables(library: Library, tables: list[VocabTable]) -> Library:
    """
    Return a library whose tables are swapped for updated versions (matched by id).
    """
    updated = {table.id: table for table in tables}
    return library.model_copy(update={
        "tables": [updated.get(table.id, table) for table in library.tables]
    })
