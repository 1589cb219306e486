"""Database connection management for feedcomposer."""

import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from feedcomposer.config import get_settings
from feedcomposer.config.defaults import DEFAULT_COMPANIES
from feedcomposer.database.schema import get_schema_sql
from feedcomposer.exceptions import DatabaseBusyError, DatabaseError
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)

_BUSY_MESSAGES = ("database is locked", "database is busy")


def get_db_path() -> Path:
    """Get the database path from settings."""
    return get_settings().database.path


def _translate_error(error: sqlite3.Error) -> DatabaseError:
    """Map a sqlite error to the package's database exceptions."""
    message = str(error).lower()
    if isinstance(error, sqlite3.OperationalError) and any(m in message for m in _BUSY_MESSAGES):
        return DatabaseBusyError(f"Database busy: {error}")
    return DatabaseError(f"Database error: {error}")


@contextmanager
def get_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Get a database connection with context management.

    Every call opens its own connection, so callers on different threads
    never share one.

    Usage:
        with get_connection() as conn:
            cursor = conn.execute("SELECT * FROM reviews")
            rows = cursor.fetchall()
    """
    db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(db_path), timeout=get_settings().database.busy_timeout_seconds)
    except sqlite3.Error as e:
        raise _translate_error(e) from e
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise _translate_error(e) from e
    finally:
        conn.close()


def initialize_database(populate_defaults: bool = True) -> None:
    """
    Initialize the database with schema and optionally the default companies.

    Args:
        populate_defaults: Whether to insert the default company catalogue.
    """
    with get_connection() as conn:
        conn.executescript(get_schema_sql())

        if populate_defaults:
            _populate_default_companies(conn)

    from feedcomposer.database.migrations import migrate

    migrate()


def _populate_default_companies(conn: sqlite3.Connection) -> None:
    """Insert the default companies, skipping slugs already present."""
    for slug, (name, category, logo) in DEFAULT_COMPANIES.items():
        conn.execute(
            """
            INSERT OR IGNORE INTO companies (id, slug, name, category, logo)
            VALUES (?, ?, ?, ?, ?)
            """,
            (str(uuid.uuid4()), slug, name, category, logo),
        )
    logger.debug(f"Populated {len(DEFAULT_COMPANIES)} default companies")


def reset_database() -> None:
    """Reset the database by deleting the file and reinitializing."""
    db_path = get_db_path()
    if db_path.exists():
        db_path.unlink()
    initialize_database(populate_defaults=True)


def database_exists() -> bool:
    """Check if the database file exists."""
    return get_db_path().exists()
