"""Enum definitions shared across the API, agents, and store."""

from __future__ import annotations

from enum import Enum


class BrandTone(str, Enum):
    TECHNICAL = "technical"
    CONVERSATIONAL = "conversational"
    AUTHORITATIVE = "authoritative"
    CASUAL = "casual"


class ContentStatus(str, Enum):
    PENDING_VALIDATION = "pending_validation"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"


class OutreachPhase(str, Enum):
    LIKE = "like"
    COMMENT = "comment"
    CONNECT = "connect"


class CapabilitySource(str, Enum):
    GITHUB_ANALYSIS = "github_analysis"
    SELF_REPORTED = "self_reported"
    ENGAGEMENT = "engagement"
    MANUAL = "manual"


class WritingTone(str, Enum):
    """Voice requested from the writing agent (distinct from brand guide tones)."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    INSPIRATIONAL = "inspirational"
    TECHNICAL = "technical"


class EngagementPotential(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AgentKind(str, Enum):
    WRITING = "writing"
    SUGGESTION = "suggestion"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]
