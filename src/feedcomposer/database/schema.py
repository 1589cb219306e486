"""SQLite schema definitions for feedcomposer."""

SCHEMA_SQL = """
-- ============================================================================
-- Accounts and companies
-- ============================================================================

CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,              -- UUID
    email TEXT NOT NULL,
    username TEXT NOT NULL,
    name TEXT,
    avatar TEXT,
    verified INTEGER DEFAULT 0,
    reputation INTEGER DEFAULT 0,
    created_at INTEGER NOT NULL,      -- Unix epoch milliseconds

    UNIQUE(email),
    UNIQUE(username)
);

CREATE TABLE IF NOT EXISTS companies (
    id TEXT PRIMARY KEY,              -- UUID
    slug TEXT NOT NULL,
    name TEXT NOT NULL,
    category TEXT,                    -- "EXCHANGES", "WALLETS", ...
    logo TEXT,
    description TEXT,

    UNIQUE(slug)
);

CREATE INDEX IF NOT EXISTS idx_companies_category ON companies(category);

-- ============================================================================
-- Feed content tables
-- ============================================================================

CREATE TABLE IF NOT EXISTS reviews (
    id TEXT PRIMARY KEY,              -- UUID
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    overall_score REAL NOT NULL,      -- Mean of criteria scores, 1-5
    criteria_scores TEXT,             -- JSON object of criterion -> score
    status TEXT NOT NULL DEFAULT 'PENDING',  -- PENDING, APPROVED, REJECTED
    helpful_count INTEGER DEFAULT 0,
    down_vote_count INTEGER DEFAULT 0,
    author_id TEXT NOT NULL REFERENCES users(id),
    company_id TEXT REFERENCES companies(id),
    created_at INTEGER NOT NULL,      -- Unix epoch milliseconds, feed sort key
    updated_at INTEGER
);

CREATE INDEX IF NOT EXISTS idx_reviews_created ON reviews(created_at DESC, id);
CREATE INDEX IF NOT EXISTS idx_reviews_company ON reviews(company_id);

CREATE TABLE IF NOT EXISTS complaints (
    id TEXT PRIMARY KEY,              -- UUID
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'OPEN',  -- OPEN, IN_PROGRESS, RESOLVED, CLOSED
    helpful_count INTEGER DEFAULT 0,
    down_vote_count INTEGER DEFAULT 0,
    author_id TEXT NOT NULL REFERENCES users(id),
    company_id TEXT REFERENCES companies(id),
    created_at INTEGER NOT NULL,      -- Unix epoch milliseconds, feed sort key
    updated_at INTEGER
);

CREATE INDEX IF NOT EXISTS idx_complaints_created ON complaints(created_at DESC, id);
CREATE INDEX IF NOT EXISTS idx_complaints_company ON complaints(company_id);

-- ============================================================================
-- Engagement tables (counted into feed items)
-- ============================================================================

CREATE TABLE IF NOT EXISTS comments (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    author_id TEXT NOT NULL REFERENCES users(id),
    review_id TEXT REFERENCES reviews(id),
    complaint_id TEXT REFERENCES complaints(id),
    parent_id TEXT REFERENCES comments(id),
    created_at INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_comments_review ON comments(review_id);
CREATE INDEX IF NOT EXISTS idx_comments_complaint ON comments(complaint_id);

CREATE TABLE IF NOT EXISTS reactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL REFERENCES users(id),
    review_id TEXT REFERENCES reviews(id),
    complaint_id TEXT REFERENCES complaints(id),
    reaction_type TEXT NOT NULL,      -- "like", "insightful", ...
    created_at INTEGER NOT NULL,

    UNIQUE(user_id, review_id, complaint_id, reaction_type)
);

CREATE INDEX IF NOT EXISTS idx_reactions_review ON reactions(review_id);
CREATE INDEX IF NOT EXISTS idx_reactions_complaint ON reactions(complaint_id);

CREATE TABLE IF NOT EXISTS votes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL REFERENCES users(id),
    review_id TEXT REFERENCES reviews(id),
    complaint_id TEXT REFERENCES complaints(id),
    vote_type TEXT NOT NULL,          -- "UP" or "DOWN"
    created_at INTEGER NOT NULL,

    UNIQUE(user_id, review_id, complaint_id)
);

CREATE INDEX IF NOT EXISTS idx_votes_review ON votes(review_id);
CREATE INDEX IF NOT EXISTS idx_votes_complaint ON votes(complaint_id);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
