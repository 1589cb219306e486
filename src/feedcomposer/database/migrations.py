"""Versioned schema migrations for the feedcomposer SQLite database.

New databases get the full schema from ``schema.py``; migrations bring
databases created by older releases up to date and record what has been
applied in ``schema_migrations``.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from feedcomposer.database.connection import get_connection
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Migration:
    """A single schema change."""

    version: int
    name: str
    up: Callable[[sqlite3.Connection], None]


_migrations: list[Migration] = []


def migration(version: int, name: str) -> Callable:
    """
    Register a migration function.

    Usage:
        @migration(3, "add_reviews_product_column")
        def migrate_v3(conn):
            conn.execute("ALTER TABLE reviews ADD COLUMN product_id TEXT")
    """

    def decorator(func: Callable[[sqlite3.Connection], None]) -> Callable:
        if any(m.version == version for m in _migrations):
            raise ValueError(f"Duplicate migration version: {version}")
        _migrations.append(Migration(version=version, name=name, up=func))
        return func

    return decorator


MIGRATIONS_SCHEMA = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    applied_at TEXT NOT NULL
);
"""


def _sorted_migrations() -> list[Migration]:
    return sorted(_migrations, key=lambda m: m.version)


def get_applied_versions(conn: sqlite3.Connection) -> set[int]:
    """Return the set of applied migration versions."""
    conn.execute(MIGRATIONS_SCHEMA)
    return {row[0] for row in conn.execute("SELECT version FROM schema_migrations")}


def apply_migration(conn: sqlite3.Connection, mig: Migration) -> None:
    """Run one migration and record it."""
    logger.info(f"Applying migration {mig.version}: {mig.name}")
    mig.up(conn)
    conn.execute(
        "INSERT INTO schema_migrations (version, name, applied_at) VALUES (?, ?, ?)",
        (mig.version, mig.name, datetime.now(timezone.utc).isoformat()),
    )


def migrate(target_version: int | None = None) -> int:
    """
    Apply pending migrations up to ``target_version`` (latest when None).

    All pending migrations run in one transaction; a failure rolls back the
    whole batch.

    Returns:
        Number of migrations applied.
    """
    applied_count = 0

    with get_connection() as conn:
        applied = get_applied_versions(conn)

        for mig in _sorted_migrations():
            if target_version is not None and mig.version > target_version:
                break
            if mig.version in applied:
                continue

            apply_migration(conn, mig)
            applied_count += 1

    if applied_count:
        logger.info(f"Applied {applied_count} migration(s)")
    else:
        logger.debug("Database schema is up to date")

    return applied_count


def get_pending_migrations() -> list[Migration]:
    """Get migrations that have not been applied yet."""
    with get_connection() as conn:
        applied = get_applied_versions(conn)

    return [m for m in _sorted_migrations() if m.version not in applied]


def migration_status() -> dict[str, Any]:
    """Summarize applied and pending migrations."""
    migrations = _sorted_migrations()

    with get_connection() as conn:
        applied = get_applied_versions(conn)

    return {
        "current_version": max(applied) if applied else 0,
        "latest_version": migrations[-1].version if migrations else 0,
        "total_migrations": len(migrations),
        "applied": len(applied),
        "pending": len([m for m in migrations if m.version not in applied]),
    }


# =============================================================================
# Migrations
# =============================================================================


@migration(1, "initial_schema")
def migrate_v1(conn: sqlite3.Connection) -> None:
    """Baseline; the schema itself comes from schema.py."""


@migration(2, "add_feed_filter_indexes")
def migrate_v2(conn: sqlite3.Connection) -> None:
    """Cover the feed's visibility and category-filtered page queries."""
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_reviews_status_created "
        "ON reviews(status, created_at DESC, id)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_reviews_company_created "
        "ON reviews(company_id, created_at DESC, id)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_complaints_company_created "
        "ON complaints(company_id, created_at DESC, id)"
    )
