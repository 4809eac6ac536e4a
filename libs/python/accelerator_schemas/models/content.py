"""Content drafts and their approval lifecycle."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..enums import ContentStatus


class ContentDraft(BaseModel):
    """One LinkedIn post candidate, generated or hand-written."""

    id: UUID
    user_id: str
    venture_id: Optional[UUID] = None
    topic: Optional[str] = None
    original_text: str
    edited_text: Optional[str] = None
    ai_confidence_score: Optional[float] = Field(None, ge=0, le=1)
    status: ContentStatus = ContentStatus.PENDING_VALIDATION
    scheduled_publish_at: Optional[datetime] = None
    hashtags: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


CONTENT_TRANSITIONS: Mapping[ContentStatus, frozenset[ContentStatus]] = {
    ContentStatus.PENDING_VALIDATION: frozenset(
        {ContentStatus.PENDING_REVIEW, ContentStatus.APPROVED, ContentStatus.REJECTED}
    ),
    ContentStatus.PENDING_REVIEW: frozenset({ContentStatus.APPROVED, ContentStatus.REJECTED}),
    ContentStatus.REJECTED: frozenset({ContentStatus.PENDING_REVIEW, ContentStatus.APPROVED}),
    ContentStatus.APPROVED: frozenset({ContentStatus.PUBLISHED, ContentStatus.REJECTED}),
    ContentStatus.PUBLISHED: frozenset(),
}

# Columns stamped when a draft enters the given status.
STATUS_TIMESTAMP_COLUMNS: Mapping[ContentStatus, str] = {
    ContentStatus.APPROVED: "approved_at",
    ContentStatus.PUBLISHED: "published_at",
}


class ContentTransitionError(ValueError):
    """Raised when a status change is not permitted by the transition table."""

    def __init__(self, current: ContentStatus, target: ContentStatus, message: str | None = None) -> None:
        self.current = current
        self.target = target
        super().__init__(
            message or f"Cannot move content draft from {current.value} to {target.value}"
        )


def check_transition(current: ContentStatus, target: ContentStatus) -> None:
    """Validate a status change; staying in the same status is always allowed.

    The approve path reports the two terminal-ish states with dedicated
    messages since clients surface them verbatim.
    """

    if current == target and target not in (ContentStatus.APPROVED, ContentStatus.PUBLISHED):
        return
    if target == ContentStatus.APPROVED:
        if current == ContentStatus.APPROVED:
            raise ContentTransitionError(current, target, "Content draft is already approved")
        if current == ContentStatus.PUBLISHED:
            raise ContentTransitionError(current, target, "Content draft is already published")
    if current == ContentStatus.PUBLISHED and target == ContentStatus.PUBLISHED:
        raise ContentTransitionError(current, target, "Content draft is already published")
    if target not in CONTENT_TRANSITIONS.get(current, frozenset()):
        raise ContentTransitionError(current, target)


def is_terminal(status: ContentStatus) -> bool:
    return not CONTENT_TRANSITIONS.get(status)
