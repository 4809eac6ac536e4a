"""Structured outputs produced by the writing and suggestion agents."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..enums import EngagementPotential, WritingTone


class GeneratedDraft(BaseModel):
    """A generated LinkedIn post ready to be stored as a content draft."""

    post_text: str = Field(..., min_length=1)
    character_count: int = Field(..., ge=0)
    alt_text: Optional[str] = None
    suggested_image: Optional[str] = None
    variants: list[str] = Field(default_factory=list)


class VentureInsights(BaseModel):
    industry: str
    target_audience: list[str]
    brand_voice: str
    content_themes: list[str]
    competitors: Optional[list[str]] = None
    mission: Optional[str] = None


class TopicSuggestion(BaseModel):
    topic: str
    rationale: str
    match_score: float = Field(..., ge=0, le=100)
    engagement_potential: EngagementPotential
    suggested_tone: WritingTone


class TopicSuggestionBatch(BaseModel):
    topics: list[TopicSuggestion] = Field(..., min_length=1)


class PostingSchedule(BaseModel):
    optimal_days: list[str]
    optimal_times: list[str]
    reasoning: str


class NextStepBatch(BaseModel):
    steps: list[str] = Field(..., min_length=1)
