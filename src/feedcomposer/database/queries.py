"""Database query functions for feedcomposer."""

import sqlite3
from typing import Any

from feedcomposer.database.connection import get_connection
from feedcomposer.database.models import (
    Comment,
    Company,
    Complaint,
    Reaction,
    Review,
    User,
    Vote,
    ms_to_datetime,
)
from feedcomposer.utils.retry import DATABASE_RETRY, with_retry


def _insert_many(conn: sqlite3.Connection, table: str, rows: list[dict[str, Any]]) -> int:
    """Insert dict rows sharing the same columns into ``table``."""
    if not rows:
        return 0
    columns = ", ".join(rows[0].keys())
    placeholders = ", ".join("?" * len(rows[0]))
    conn.executemany(
        f"INSERT OR REPLACE INTO {table} ({columns}) VALUES ({placeholders})",
        [tuple(row.values()) for row in rows],
    )
    return len(rows)


# =============================================================================
# Users & Companies
# =============================================================================


def insert_users_batch(users: list[User]) -> int:
    """Insert multiple users in a single transaction."""
    with get_connection() as conn:
        return _insert_many(conn, "users", [u.to_db_dict() for u in users])


def get_companies(category: str | None = None) -> list[Company]:
    """Get companies, optionally restricted to one category."""
    query = "SELECT * FROM companies"
    params: list[Any] = []

    if category:
        query += " WHERE category = ?"
        params.append(category)

    query += " ORDER BY name"

    with get_connection() as conn:
        cursor = conn.execute(query, params)
        return [Company(**dict(row)) for row in cursor.fetchall()]


# =============================================================================
# Reviews & Complaints (write path)
# =============================================================================


def insert_reviews_batch(reviews: list[Review]) -> int:
    """
    Insert multiple reviews in a single transaction.

    Returns:
        Number of reviews inserted.
    """
    with get_connection() as conn:
        return _insert_many(conn, "reviews", [r.to_db_dict() for r in reviews])


def insert_complaints_batch(complaints: list[Complaint]) -> int:
    """
    Insert multiple complaints in a single transaction.

    Returns:
        Number of complaints inserted.
    """
    with get_connection() as conn:
        return _insert_many(conn, "complaints", [c.to_db_dict() for c in complaints])


def insert_comments_batch(comments: list[Comment]) -> int:
    """Insert multiple comments in a single transaction."""
    with get_connection() as conn:
        return _insert_many(conn, "comments", [c.to_db_dict() for c in comments])


def insert_reactions_batch(reactions: list[Reaction]) -> int:
    """Insert multiple reactions in a single transaction."""
    with get_connection() as conn:
        return _insert_many(conn, "reactions", [r.to_db_dict() for r in reactions])


def insert_votes_batch(votes: list[Vote]) -> int:
    """Insert multiple votes in a single transaction."""
    with get_connection() as conn:
        return _insert_many(conn, "votes", [v.to_db_dict() for v in votes])


# =============================================================================
# Feed reads
# =============================================================================
# Count and fetch for a collection share one FROM/WHERE builder so both see
# exactly the same matching set. Pages are ordered created_at DESC, id ASC.

_AUTHOR_COLUMNS = """
    u.id AS author_id, u.username AS author_username, u.avatar AS author_avatar,
    u.verified AS author_verified, u.reputation AS author_reputation
"""

_COMPANY_COLUMNS = """
    c.id AS company_id, c.name AS company_name, c.slug AS company_slug, c.logo AS company_logo
"""


def _review_feed_from(category: str | None, status: str) -> tuple[str, list[Any]]:
    clause = """
        FROM reviews r
        JOIN users u ON u.id = r.author_id
        LEFT JOIN companies c ON c.id = r.company_id
        WHERE r.status = ?
    """
    params: list[Any] = [status]

    if category:
        clause += " AND c.category = ?"
        params.append(category)

    return clause, params


def _complaint_feed_from(category: str | None) -> tuple[str, list[Any]]:
    clause = """
        FROM complaints p
        JOIN users u ON u.id = p.author_id
        LEFT JOIN companies c ON c.id = p.company_id
        WHERE 1=1
    """
    params: list[Any] = []

    if category:
        clause += " AND c.category = ?"
        params.append(category)

    return clause, params


@with_retry(DATABASE_RETRY)
def count_review_feed(category: str | None = None, status: str = "APPROVED") -> int:
    """Count reviews visible in the feed under the given filter."""
    clause, params = _review_feed_from(category, status)

    with get_connection() as conn:
        return conn.execute(f"SELECT COUNT(*) {clause}", params).fetchone()[0]


@with_retry(DATABASE_RETRY)
def fetch_review_feed(
    offset: int,
    limit: int,
    category: str | None = None,
    status: str = "APPROVED",
) -> list[dict[str, Any]]:
    """
    Fetch one page of feed-ready review rows.

    Each row carries the review columns plus flattened ``author_*`` and
    ``company_*`` summaries and the ``*_count`` engagement aggregates.
    """
    clause, params = _review_feed_from(category, status)
    query = f"""
        SELECT
            r.id, r.title, r.content, r.overall_score, r.helpful_count,
            r.down_vote_count, r.created_at,
            {_AUTHOR_COLUMNS},
            {_COMPANY_COLUMNS},
            (SELECT COUNT(*) FROM votes v
              WHERE v.review_id = r.id AND v.vote_type = 'UP') AS helpful_votes_count,
            (SELECT COUNT(*) FROM comments cm WHERE cm.review_id = r.id) AS comments_count,
            (SELECT COUNT(*) FROM reactions re WHERE re.review_id = r.id) AS reactions_count
        {clause}
        ORDER BY r.created_at DESC, r.id ASC
        LIMIT ? OFFSET ?
    """

    with get_connection() as conn:
        cursor = conn.execute(query, [*params, limit, offset])
        return [dict(row) for row in cursor.fetchall()]


@with_retry(DATABASE_RETRY)
def count_complaint_feed(category: str | None = None) -> int:
    """Count complaints visible in the feed under the given filter."""
    clause, params = _complaint_feed_from(category)

    with get_connection() as conn:
        return conn.execute(f"SELECT COUNT(*) {clause}", params).fetchone()[0]


@with_retry(DATABASE_RETRY)
def fetch_complaint_feed(
    offset: int,
    limit: int,
    category: str | None = None,
) -> list[dict[str, Any]]:
    """Fetch one page of feed-ready complaint rows."""
    clause, params = _complaint_feed_from(category)
    query = f"""
        SELECT
            p.id, p.title, p.content, p.status, p.helpful_count,
            p.down_vote_count, p.created_at,
            {_AUTHOR_COLUMNS},
            {_COMPANY_COLUMNS},
            (SELECT COUNT(*) FROM comments cm WHERE cm.complaint_id = p.id) AS comments_count,
            (SELECT COUNT(*) FROM reactions re WHERE re.complaint_id = p.id) AS reactions_count,
            (SELECT COUNT(*) FROM votes v WHERE v.complaint_id = p.id) AS votes_count
        {clause}
        ORDER BY p.created_at DESC, p.id ASC
        LIMIT ? OFFSET ?
    """

    with get_connection() as conn:
        cursor = conn.execute(query, [*params, limit, offset])
        return [dict(row) for row in cursor.fetchall()]


# =============================================================================
# Content Statistics
# =============================================================================


def get_content_stats(review_status: str = "APPROVED") -> dict[str, Any]:
    """Get totals for the feed collections, overall and per category."""
    with get_connection() as conn:
        stats: dict[str, Any] = {}

        stats["reviews_total"] = conn.execute("SELECT COUNT(*) FROM reviews").fetchone()[0]
        stats["reviews_visible"] = conn.execute(
            "SELECT COUNT(*) FROM reviews WHERE status = ?", (review_status,)
        ).fetchone()[0]
        stats["complaints_total"] = conn.execute("SELECT COUNT(*) FROM complaints").fetchone()[0]
        stats["companies_total"] = conn.execute("SELECT COUNT(*) FROM companies").fetchone()[0]
        stats["users_total"] = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]

        latest = conn.execute(
            """
            SELECT MAX(created_at) FROM (
                SELECT created_at FROM reviews
                UNION ALL
                SELECT created_at FROM complaints
            )
            """
        ).fetchone()[0]
        stats["latest_item_at"] = ms_to_datetime(latest) if latest is not None else None

        cursor = conn.execute(
            """
            SELECT
                c.category AS category,
                (SELECT COUNT(*) FROM reviews r
                  JOIN companies rc ON rc.id = r.company_id
                  WHERE rc.category = c.category AND r.status = ?) AS reviews,
                (SELECT COUNT(*) FROM complaints p
                  JOIN companies pc ON pc.id = p.company_id
                  WHERE pc.category = c.category) AS complaints
            FROM (SELECT DISTINCT category FROM companies WHERE category IS NOT NULL) c
            ORDER BY c.category
            """,
            (review_status,),
        )
        stats["by_category"] = [dict(row) for row in cursor.fetchall()]

        return stats


# =============================================================================
# Content Management
# =============================================================================


def clear_all_content() -> tuple[int, int]:
    """
    Delete all reviews, complaints and their engagement rows.

    Returns:
        Tuple of (reviews_deleted, complaints_deleted)
    """
    with get_connection() as conn:
        conn.execute("DELETE FROM votes")
        conn.execute("DELETE FROM reactions")
        conn.execute("DELETE FROM comments")

        reviews_deleted = conn.execute("DELETE FROM reviews").rowcount
        complaints_deleted = conn.execute("DELETE FROM complaints").rowcount

        return reviews_deleted, complaints_deleted
