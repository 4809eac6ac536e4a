"""TC3D reference catalogues and per-user capability scores."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..enums import CapabilitySource


class Tool(BaseModel):
    id: UUID
    tool_name: str
    category: str
    official_url: Optional[str] = None
    created_at: Optional[datetime] = None


class Tier(BaseModel):
    id: UUID
    tier_name: str
    description: Optional[str] = None
    color_hex: Optional[str] = None
    order_index: int = 0
    created_at: Optional[datetime] = None


class Task(BaseModel):
    id: UUID
    task_name: str
    description: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None


class CapabilityScore(BaseModel):
    """Score for one (user, tool, task) key; ``task_id`` may be absent."""

    id: UUID
    user_id: str
    tool_id: UUID
    task_id: Optional[UUID] = None
    score: float = Field(..., ge=0, le=1)
    source: CapabilitySource = CapabilitySource.SELF_REPORTED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
