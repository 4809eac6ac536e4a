"""Prospects tracked per venture and the outreach logged against them."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..enums import OutreachPhase

DEFAULT_OUTREACH_STATUS = "pending_approval"

SCORE_FIELDS = (
    "criticality_score",
    "relevance_score",
    "reach_score",
    "proximity_score",
    "reciprocity_score",
    "gap_fill_score",
)


class Prospect(BaseModel):
    id: UUID
    user_id: str
    venture_id: UUID
    linkedin_url: str
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    profile_summary: Optional[str] = None
    followers_count: Optional[int] = None
    avg_post_likes: Optional[int] = None
    avg_post_comments: Optional[int] = None
    criticality_score: Optional[float] = None
    relevance_score: Optional[float] = None
    reach_score: Optional[float] = None
    proximity_score: Optional[float] = None
    reciprocity_score: Optional[float] = None
    gap_fill_score: Optional[float] = None
    discovered_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None


class OutreachTask(BaseModel):
    """A like/comment/connect action scheduled or logged for a prospect."""

    id: UUID
    prospect_id: UUID
    phase: OutreachPhase
    generated_message: Optional[str] = None
    edited_message: Optional[str] = None
    status: str = Field(DEFAULT_OUTREACH_STATUS)
    scheduled_at: Optional[datetime] = None
    executed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
