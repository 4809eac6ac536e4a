"""Smoke tests for schema models, validators, and the content lifecycle."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from accelerator_schemas import (
    BrandGuide,
    CapabilityScore,
    ContentStatus,
    GeneratedDraft,
    TopicSuggestionBatch,
)
from accelerator_schemas.models.content import (
    ContentTransitionError,
    check_transition,
    is_terminal,
)
from accelerator_schemas.utils.validators import (
    BlankFieldError,
    clean_string_list,
    ensure_linkedin_url,
    ensure_member,
    ensure_not_blank,
    ensure_unit_interval,
)


def test_brand_guide_defaults() -> None:
    guide = BrandGuide(id=uuid4(), venture_id=uuid4(), tone="technical", audience=["CTOs"])
    assert guide.posting_frequency == 3
    assert guide.auto_approval_threshold == 0.90
    assert guide.target_platforms == ["linkedin", "devto", "portfolio"]


def test_capability_score_bounds() -> None:
    CapabilityScore(id=uuid4(), user_id="u", tool_id=uuid4(), score=1.0)
    with pytest.raises(ValidationError):
        CapabilityScore(id=uuid4(), user_id="u", tool_id=uuid4(), score=1.01)


def test_generated_draft_requires_text() -> None:
    with pytest.raises(ValidationError):
        GeneratedDraft(post_text="", character_count=0)


def test_topic_batch_requires_one_topic() -> None:
    with pytest.raises(ValidationError):
        TopicSuggestionBatch(topics=[])


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (ContentStatus.PENDING_VALIDATION, ContentStatus.PENDING_REVIEW),
        (ContentStatus.PENDING_VALIDATION, ContentStatus.APPROVED),
        (ContentStatus.PENDING_REVIEW, ContentStatus.REJECTED),
        (ContentStatus.REJECTED, ContentStatus.PENDING_REVIEW),
        (ContentStatus.APPROVED, ContentStatus.PUBLISHED),
        (ContentStatus.REJECTED, ContentStatus.REJECTED),
    ],
)
def test_allowed_transitions(current: ContentStatus, target: ContentStatus) -> None:
    check_transition(current, target)


def test_published_is_terminal() -> None:
    assert is_terminal(ContentStatus.PUBLISHED)
    assert not is_terminal(ContentStatus.APPROVED)
    with pytest.raises(ContentTransitionError):
        check_transition(ContentStatus.PUBLISHED, ContentStatus.REJECTED)


def test_publish_requires_approval() -> None:
    with pytest.raises(ContentTransitionError) as excinfo:
        check_transition(ContentStatus.PENDING_REVIEW, ContentStatus.PUBLISHED)
    assert "pending_review" in str(excinfo.value)


def test_repeat_approval_messages() -> None:
    with pytest.raises(ContentTransitionError, match="already approved"):
        check_transition(ContentStatus.APPROVED, ContentStatus.APPROVED)
    with pytest.raises(ContentTransitionError, match="already published"):
        check_transition(ContentStatus.PUBLISHED, ContentStatus.APPROVED)


def test_validators() -> None:
    assert ensure_not_blank("  hi ", field_name="topic") == "hi"
    with pytest.raises(BlankFieldError, match="topic is required"):
        ensure_not_blank("   ", field_name="topic")
    assert ensure_unit_interval(0, field_name="score") == 0
    assert ensure_unit_interval(None, field_name="score") is None
    with pytest.raises(ValueError, match="score must be between 0 and 1"):
        ensure_unit_interval(1.0001, field_name="score")
    with pytest.raises(ValueError, match="score must be between 0 and 1"):
        ensure_unit_interval(float("nan"), field_name="score")
    assert clean_string_list([" a ", "", "b"]) == ["a", "b"]


def test_linkedin_url_validation() -> None:
    assert ensure_linkedin_url("https://www.linkedin.com/in/jane") == "https://www.linkedin.com/in/jane"
    with pytest.raises(ValueError, match="must contain linkedin.com"):
        ensure_linkedin_url("https://example.com/jane")


def test_ensure_member_lists_allowed_values() -> None:
    with pytest.raises(ValueError, match="status must be one of: pending_validation"):
        ensure_member("draft", ContentStatus, field_name="status")
    assert ensure_member("approved", ContentStatus, field_name="status") is ContentStatus.APPROVED
