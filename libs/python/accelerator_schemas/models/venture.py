"""Venture and brand guide rows as returned by the API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..enums import BrandTone

DEFAULT_POSTING_FREQUENCY = 3
DEFAULT_AUTO_APPROVAL_THRESHOLD = 0.90
DEFAULT_TARGET_PLATFORMS = ("linkedin", "devto", "portfolio")


class Venture(BaseModel):
    """A professional project or brand owned by a single user."""

    id: UUID
    user_id: str
    venture_name: str
    industry: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    unique_value_proposition: Optional[str] = None
    key_offerings: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BrandGuide(BaseModel):
    """Per-venture tone, audience, and content rules (one per venture)."""

    id: UUID
    venture_id: UUID
    tone: BrandTone
    audience: list[str] = Field(default_factory=list)
    content_pillars: list[str] = Field(default_factory=list)
    negative_keywords: list[str] = Field(default_factory=list)
    posting_frequency: int = DEFAULT_POSTING_FREQUENCY
    auto_approval_threshold: float = Field(DEFAULT_AUTO_APPROVAL_THRESHOLD, ge=0, le=1)
    target_platforms: list[str] = Field(default_factory=lambda: list(DEFAULT_TARGET_PLATFORMS))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
