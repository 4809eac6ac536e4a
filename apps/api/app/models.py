"""Request bodies accepted by the API, validated before any persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from accelerator_agents.suggestion import MAX_TOPICS, MIN_TOPICS, VentureContext
from accelerator_schemas.enums import (
    BrandTone,
    CapabilitySource,
    ContentStatus,
    OutreachPhase,
    WritingTone,
)
from accelerator_schemas.models.prospect import DEFAULT_OUTREACH_STATUS, SCORE_FIELDS
from accelerator_schemas.models.venture import (
    DEFAULT_AUTO_APPROVAL_THRESHOLD,
    DEFAULT_POSTING_FREQUENCY,
    DEFAULT_TARGET_PLATFORMS,
)
from accelerator_schemas.utils.validators import (
    clean_string_list,
    ensure_linkedin_url,
    ensure_member,
    ensure_not_blank,
    ensure_unit_interval,
)

# Statuses a draft may be created in; later states go through the transition table.
INITIAL_CONTENT_STATUSES = (ContentStatus.PENDING_VALIDATION, ContentStatus.PENDING_REVIEW)


def _required_text(value: Any, field_name: str) -> Any:
    if value is None or isinstance(value, str):
        return ensure_not_blank(value, field_name=field_name)
    return value


def _optional_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


def _required_member(value: Any, enum_cls, field_name: str) -> Any:
    if value is None or value == "":
        raise ValueError(f"{field_name} is required")
    return ensure_member(value, enum_cls, field_name=field_name)


def _string_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return clean_string_list(value)
    return value


# Ventures -------------------------------------------------------------------


class VentureCreateRequest(BaseModel):
    venture_name: str
    industry: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    unique_value_proposition: Optional[str] = None
    key_offerings: list[str] = Field(default_factory=list)

    @field_validator("venture_name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> Any:
        return _required_text(value, "venture_name")

    @field_validator(
        "industry", "description", "target_audience", "unique_value_proposition", mode="before"
    )
    @classmethod
    def strip_optional(cls, value: Any) -> Any:
        return _optional_text(value)

    @field_validator("key_offerings", mode="before")
    @classmethod
    def clean_offerings(cls, value: Any) -> Any:
        return _string_list(value)


class VentureUpdateRequest(VentureCreateRequest):
    venture_name: Optional[str] = None


# Brand guides ---------------------------------------------------------------


class BrandGuideRequest(BaseModel):
    tone: BrandTone
    audience: list[str]
    content_pillars: list[str] = Field(default_factory=list)
    negative_keywords: list[str] = Field(default_factory=list)
    posting_frequency: int = Field(DEFAULT_POSTING_FREQUENCY, ge=0)
    auto_approval_threshold: float = DEFAULT_AUTO_APPROVAL_THRESHOLD
    target_platforms: list[str] = Field(default_factory=lambda: list(DEFAULT_TARGET_PLATFORMS))

    @field_validator("tone", mode="before")
    @classmethod
    def validate_tone(cls, value: Any) -> Any:
        return _required_member(value, BrandTone, "tone")

    @field_validator("audience", mode="before")
    @classmethod
    def validate_audience(cls, value: Any) -> Any:
        cleaned = _string_list(value)
        if isinstance(cleaned, list) and not cleaned:
            raise ValueError("audience is required")
        return cleaned

    @field_validator("content_pillars", "negative_keywords", mode="before")
    @classmethod
    def clean_lists(cls, value: Any) -> Any:
        return _string_list(value)

    @field_validator("target_platforms", mode="before")
    @classmethod
    def default_platforms(cls, value: Any) -> Any:
        if value is None:
            return list(DEFAULT_TARGET_PLATFORMS)
        return _string_list(value)

    @field_validator("auto_approval_threshold", mode="before")
    @classmethod
    def default_threshold(cls, value: Any) -> Any:
        return DEFAULT_AUTO_APPROVAL_THRESHOLD if value is None else value

    @field_validator("auto_approval_threshold")
    @classmethod
    def validate_threshold(cls, value: float) -> float:
        return ensure_unit_interval(value, field_name="auto_approval_threshold")


# Content drafts -------------------------------------------------------------


class _ContentFields(BaseModel):
    topic: Optional[str] = None
    edited_text: Optional[str] = None
    ai_confidence_score: Optional[float] = None
    scheduled_publish_at: Optional[datetime] = None
    hashtags: list[str] = Field(default_factory=list)

    @field_validator("topic", mode="before")
    @classmethod
    def strip_topic(cls, value: Any) -> Any:
        return _optional_text(value)

    @field_validator("ai_confidence_score")
    @classmethod
    def validate_confidence(cls, value: Optional[float]) -> Optional[float]:
        return ensure_unit_interval(value, field_name="ai_confidence_score")

    @field_validator("hashtags", mode="before")
    @classmethod
    def clean_hashtags(cls, value: Any) -> Any:
        return _string_list(value)


class ContentCreateRequest(_ContentFields):
    venture_id: Optional[UUID] = None
    original_text: str
    status: ContentStatus = ContentStatus.PENDING_VALIDATION

    @field_validator("original_text", mode="before")
    @classmethod
    def validate_text(cls, value: Any) -> Any:
        return _required_text(value, "original_text")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        if value is None:
            return ContentStatus.PENDING_VALIDATION
        status = ensure_member(value, ContentStatus, field_name="status")
        if status not in INITIAL_CONTENT_STATUSES:
            allowed = ", ".join(item.value for item in INITIAL_CONTENT_STATUSES)
            raise ValueError(f"status must be one of: {allowed}")
        return status


class ContentUpdateRequest(_ContentFields):
    original_text: Optional[str] = None
    status: Optional[ContentStatus] = None

    @field_validator("original_text", mode="before")
    @classmethod
    def validate_text(cls, value: Any) -> Any:
        return _required_text(value, "original_text")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        if value is None:
            return None
        return ensure_member(value, ContentStatus, field_name="status")


# Prospects ------------------------------------------------------------------


class _ProspectFields(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    profile_summary: Optional[str] = None
    followers_count: Optional[int] = Field(None, ge=0)
    avg_post_likes: Optional[int] = Field(None, ge=0)
    avg_post_comments: Optional[int] = Field(None, ge=0)
    criticality_score: Optional[float] = None
    relevance_score: Optional[float] = None
    reach_score: Optional[float] = None
    proximity_score: Optional[float] = None
    reciprocity_score: Optional[float] = None
    gap_fill_score: Optional[float] = None

    @field_validator("name", "title", "company", "profile_summary", mode="before")
    @classmethod
    def strip_optional(cls, value: Any) -> Any:
        return _optional_text(value)

    @field_validator(*SCORE_FIELDS)
    @classmethod
    def validate_scores(cls, value: Optional[float], info: ValidationInfo) -> Optional[float]:
        return ensure_unit_interval(value, field_name=info.field_name)


class ProspectCreateRequest(_ProspectFields):
    venture_id: UUID
    linkedin_url: str

    @field_validator("linkedin_url", mode="before")
    @classmethod
    def validate_url(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return ensure_linkedin_url(value)
        return value


class ProspectUpdateRequest(_ProspectFields):
    linkedin_url: Optional[str] = None

    @field_validator("linkedin_url", mode="before")
    @classmethod
    def validate_url(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return ensure_linkedin_url(value)
        return value


class OutreachCreateRequest(BaseModel):
    phase: OutreachPhase
    generated_message: Optional[str] = None
    edited_message: Optional[str] = None
    status: str = DEFAULT_OUTREACH_STATUS
    scheduled_at: Optional[datetime] = None

    @field_validator("phase", mode="before")
    @classmethod
    def validate_phase(cls, value: Any) -> Any:
        return ensure_member(value, OutreachPhase, field_name="phase")

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_OUTREACH_STATUS
        return value.strip() if isinstance(value, str) else value


# TC3D -----------------------------------------------------------------------


class CapabilityUpsertRequest(BaseModel):
    tool_id: UUID
    task_id: Optional[UUID] = None
    score: float
    source: CapabilitySource = CapabilitySource.SELF_REPORTED

    @field_validator("tool_id", mode="before")
    @classmethod
    def require_tool(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("tool_id is required")
        return value

    @field_validator("score", mode="before")
    @classmethod
    def require_score(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("score is required")
        return value

    @field_validator("score")
    @classmethod
    def validate_score(cls, value: float) -> float:
        return ensure_unit_interval(value, field_name="score")

    @field_validator("source", mode="before")
    @classmethod
    def validate_source(cls, value: Any) -> Any:
        if value is None:
            return CapabilitySource.SELF_REPORTED
        return ensure_member(value, CapabilitySource, field_name="source")


# AI -------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    topic: str
    tone: WritingTone = WritingTone.PROFESSIONAL
    brand_voice: Optional[str] = None
    outline: list[str] = Field(default_factory=list)
    max_length: Optional[int] = Field(None, gt=0, le=3000)
    venture_id: Optional[UUID] = None
    stream: bool = False
    save_as_draft: bool = False

    @field_validator("topic", mode="before")
    @classmethod
    def validate_topic(cls, value: Any) -> Any:
        return _required_text(value, "topic")

    @field_validator("tone", mode="before")
    @classmethod
    def validate_tone(cls, value: Any) -> Any:
        if value is None:
            return WritingTone.PROFESSIONAL
        return ensure_member(value, WritingTone, field_name="tone")

    @field_validator("brand_voice", mode="before")
    @classmethod
    def strip_voice(cls, value: Any) -> Any:
        return _optional_text(value)

    @field_validator("outline", mode="before")
    @classmethod
    def clean_outline(cls, value: Any) -> Any:
        return _string_list(value)


class ReviseRequest(BaseModel):
    original_draft: str
    feedback: str

    @field_validator("original_draft", mode="before")
    @classmethod
    def validate_original(cls, value: Any) -> Any:
        return _required_text(value, "original_draft")

    @field_validator("feedback", mode="before")
    @classmethod
    def validate_feedback(cls, value: Any) -> Any:
        return _required_text(value, "feedback")


class AnalyzeVentureRequest(BaseModel):
    venture_name: str
    website: Optional[str] = None
    description: Optional[str] = None

    @field_validator("venture_name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> Any:
        return _required_text(value, "venture_name")

    @field_validator("website", "description", mode="before")
    @classmethod
    def strip_optional(cls, value: Any) -> Any:
        return _optional_text(value)


class VentureContextRequest(BaseModel):
    venture_name: str
    industry: Optional[str] = None
    target_audience: list[str] = Field(default_factory=list)
    website: Optional[str] = None

    @field_validator("venture_name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> Any:
        return _required_text(value, "venture_name")

    @field_validator("industry", "website", mode="before")
    @classmethod
    def strip_optional(cls, value: Any) -> Any:
        return _optional_text(value)

    @field_validator("target_audience", mode="before")
    @classmethod
    def clean_audience(cls, value: Any) -> Any:
        if isinstance(value, str):
            return clean_string_list(value.split(","))
        return _string_list(value)

    def to_context(self) -> VentureContext:
        return VentureContext(
            venture_name=self.venture_name,
            industry=self.industry,
            target_audience=list(self.target_audience),
            website=self.website,
        )


class SuggestTopicsRequest(VentureContextRequest):
    count: int = 5

    @field_validator("count")
    @classmethod
    def validate_count(cls, value: int) -> int:
        if not MIN_TOPICS <= value <= MAX_TOPICS:
            raise ValueError(f"count must be between {MIN_TOPICS} and {MAX_TOPICS}")
        return value


class NextStepsRequest(VentureContextRequest):
    draft: str

    @field_validator("draft", mode="before")
    @classmethod
    def validate_draft(cls, value: Any) -> Any:
        return _required_text(value, "draft")
