"""Database module for feedcomposer."""

from feedcomposer.database.connection import database_exists, get_connection, initialize_database
from feedcomposer.database.models import (
    Comment,
    Company,
    Complaint,
    Reaction,
    Review,
    User,
    Vote,
)
from feedcomposer.database.queries import (
    count_complaint_feed,
    count_review_feed,
    fetch_complaint_feed,
    fetch_review_feed,
    get_content_stats,
    insert_complaints_batch,
    insert_reviews_batch,
)

__all__ = [
    # Connection
    "database_exists",
    "get_connection",
    "initialize_database",
    # Models
    "User",
    "Company",
    "Review",
    "Complaint",
    "Comment",
    "Reaction",
    "Vote",
    # Queries
    "count_complaint_feed",
    "count_review_feed",
    "fetch_complaint_feed",
    "fetch_review_feed",
    "get_content_stats",
    "insert_complaints_batch",
    "insert_reviews_batch",
]
