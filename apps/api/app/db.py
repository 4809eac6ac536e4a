"""Connection pool wrapper and bootstrap DDL."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from psycopg.abc import Query
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

logger = logging.getLogger(__name__)

Params = Sequence[Any] | dict[str, Any]


class Database:
    """Thin gateway over a psycopg pool; every call runs in its own transaction."""

    def __init__(self, conninfo: str, *, min_size: int = 1, max_size: int = 10) -> None:
        self._pool = ConnectionPool(conninfo, min_size=min_size, max_size=max(max_size, min_size), open=False)

    def open(self) -> None:
        self._pool.open(wait=True)

    def close(self) -> None:
        self._pool.close()

    def fetch_one(self, query: Query, params: Optional[Params] = None) -> Optional[dict[str, Any]]:
        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            conn.commit()
        return row

    def fetch_all(self, query: Query, params: Optional[Params] = None) -> list[dict[str, Any]]:
        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
            conn.commit()
        return rows

    def execute(self, query: Query, params: Optional[Params] = None) -> int:
        with self._pool.connection() as conn, conn.cursor() as cur:
            cur.execute(query, params)
            affected = cur.rowcount
            conn.commit()
        return affected


SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS user_sessions (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    token_hash TEXT NOT NULL UNIQUE,
    expires_at TIMESTAMP WITH TIME ZONE NOT NULL,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    last_seen_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_user_sessions_user_id ON user_sessions(user_id);

CREATE TABLE IF NOT EXISTS venture (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    venture_name TEXT NOT NULL CHECK (length(btrim(venture_name)) > 0),
    industry TEXT,
    description TEXT,
    target_audience TEXT,
    unique_value_proposition TEXT,
    key_offerings TEXT[] NOT NULL DEFAULT '{}',
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    UNIQUE (user_id, venture_name)
);

CREATE INDEX IF NOT EXISTS idx_venture_user_id ON venture(user_id);

CREATE TABLE IF NOT EXISTS brand_guide (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    venture_id UUID NOT NULL UNIQUE REFERENCES venture(id) ON DELETE CASCADE,
    tone TEXT NOT NULL CHECK (tone IN ('technical', 'conversational', 'authoritative', 'casual')),
    audience TEXT[] NOT NULL DEFAULT '{}',
    content_pillars TEXT[] NOT NULL DEFAULT '{}',
    negative_keywords TEXT[] NOT NULL DEFAULT '{}',
    posting_frequency INTEGER NOT NULL DEFAULT 3 CHECK (posting_frequency >= 0),
    auto_approval_threshold DOUBLE PRECISION NOT NULL DEFAULT 0.90
        CHECK (auto_approval_threshold BETWEEN 0 AND 1),
    target_platforms TEXT[] NOT NULL DEFAULT '{linkedin,devto,portfolio}',
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS content_draft (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    venture_id UUID REFERENCES venture(id) ON DELETE SET NULL,
    topic TEXT,
    original_text TEXT NOT NULL,
    edited_text TEXT,
    ai_confidence_score DOUBLE PRECISION CHECK (ai_confidence_score BETWEEN 0 AND 1),
    status TEXT NOT NULL DEFAULT 'pending_validation'
        CHECK (status IN ('pending_validation', 'pending_review', 'approved', 'rejected', 'published')),
    scheduled_publish_at TIMESTAMP WITH TIME ZONE,
    hashtags TEXT[] NOT NULL DEFAULT '{}',
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    approved_at TIMESTAMP WITH TIME ZONE,
    published_at TIMESTAMP WITH TIME ZONE
);

CREATE INDEX IF NOT EXISTS idx_content_draft_user_id ON content_draft(user_id);

CREATE TABLE IF NOT EXISTS prospect (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    venture_id UUID NOT NULL REFERENCES venture(id) ON DELETE CASCADE,
    linkedin_url TEXT NOT NULL UNIQUE,
    name TEXT,
    title TEXT,
    company TEXT,
    profile_summary TEXT,
    followers_count INTEGER CHECK (followers_count >= 0),
    avg_post_likes INTEGER CHECK (avg_post_likes >= 0),
    avg_post_comments INTEGER CHECK (avg_post_comments >= 0),
    criticality_score DOUBLE PRECISION CHECK (criticality_score BETWEEN 0 AND 1),
    relevance_score DOUBLE PRECISION CHECK (relevance_score BETWEEN 0 AND 1),
    reach_score DOUBLE PRECISION CHECK (reach_score BETWEEN 0 AND 1),
    proximity_score DOUBLE PRECISION CHECK (proximity_score BETWEEN 0 AND 1),
    reciprocity_score DOUBLE PRECISION CHECK (reciprocity_score BETWEEN 0 AND 1),
    gap_fill_score DOUBLE PRECISION CHECK (gap_fill_score BETWEEN 0 AND 1),
    discovered_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    last_updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_prospect_venture_id ON prospect(venture_id);

CREATE TABLE IF NOT EXISTS outreach_task (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    prospect_id UUID NOT NULL REFERENCES prospect(id) ON DELETE CASCADE,
    phase TEXT NOT NULL CHECK (phase IN ('like', 'comment', 'connect')),
    generated_message TEXT,
    edited_message TEXT,
    status TEXT NOT NULL DEFAULT 'pending_approval',
    scheduled_at TIMESTAMP WITH TIME ZONE,
    executed_at TIMESTAMP WITH TIME ZONE,
    error_message TEXT,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_outreach_task_prospect_id ON outreach_task(prospect_id);

CREATE TABLE IF NOT EXISTS tool (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    tool_name TEXT NOT NULL UNIQUE,
    category TEXT NOT NULL,
    official_url TEXT,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS tier (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    tier_name TEXT NOT NULL UNIQUE,
    description TEXT,
    color_hex TEXT,
    order_index INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS task (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    task_name TEXT NOT NULL UNIQUE,
    description TEXT,
    category TEXT,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS capability_score (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    tool_id UUID NOT NULL REFERENCES tool(id) ON DELETE CASCADE,
    task_id UUID REFERENCES task(id) ON DELETE CASCADE,
    score DOUBLE PRECISION NOT NULL CHECK (score BETWEEN 0 AND 1),
    source TEXT NOT NULL DEFAULT 'self_reported'
        CHECK (source IN ('github_analysis', 'self_reported', 'engagement', 'manual')),
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
    CONSTRAINT capability_score_key UNIQUE NULLS NOT DISTINCT (user_id, tool_id, task_id)
);

CREATE INDEX IF NOT EXISTS idx_capability_score_user_id ON capability_score(user_id);
"""


def initialise_schema(database: Database) -> None:
    """Create the tables the API relies on when they are missing."""

    database.execute(SCHEMA_DDL)
    logger.info("Database schema ensured")
