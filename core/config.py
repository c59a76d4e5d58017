"""
Configuration - Environment-driven settings

Reads settings from the environment (and a local .env file when present).
Scheduling parameters live in core.scheduling.constants.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---- Paths ----
REPO_ROOT = Path(__file__).resolve().parent.parent
LOG_DIR = REPO_ROOT / "logs"
DEFAULT_LIBRARY_PATH = REPO_ROOT / "data" / "sample_library.json"

# ---- Database ----
DEFAULT_DB_NAME = "review_queues.db"
TEST_DB_NAME = "test_review_queues.db"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_logging_configured = False


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    Falls back to a SQLite file under logs/. In test mode
    'review_queues' is replaced with 'test_review_queues' in the URL.

    Returns:
        SQLAlchemy database URL
    """
    base_url = os.getenv("DATABASE_URL")
    if not base_url:
        db_name = TEST_DB_NAME if is_test_mode() else DEFAULT_DB_NAME
        return f"sqlite:///{LOG_DIR / db_name}"

    if is_test_mode():
        # Replace production db name with test db name
        return base_url.replace("review_queues", "test_review_queues")
    return base_url


def get_library_path() -> Path:
    """Location of the JSON library holding tables and relations."""
    return Path(os.getenv("VOCAB_LIBRARY_PATH", str(DEFAULT_LIBRARY_PATH)))


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once per process.

    Args:
        level: Log level name (defaults to LOG_LEVEL or INFO)
    """
    global _logging_configured
    if _logging_configured:
        return
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    _logging_configured = True
