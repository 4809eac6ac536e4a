"""Reusable validation helpers."""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..enums import enum_values

LINKEDIN_HOST_MARKER = "linkedin.com"


class BlankFieldError(ValueError):
    """Raised when a required string is missing or only whitespace."""


def ensure_not_blank(value: str | None, *, field_name: str) -> str:
    """Return ``value`` stripped, rejecting empty or whitespace-only input.

    Args:
        value: Input text to evaluate.
        field_name: Name used in the raised error message.

    Raises:
        BlankFieldError: If nothing remains after stripping.
    """

    cleaned = (value or "").strip()
    if not cleaned:
        raise BlankFieldError(f"{field_name} is required and cannot be empty")
    return cleaned


def ensure_unit_interval(value: float | None, *, field_name: str) -> float | None:
    """Validate that an optional score lies within ``[0, 1]``; NaN is rejected."""

    if value is None:
        return None
    if not 0 <= value <= 1:
        raise ValueError(f"{field_name} must be between 0 and 1")
    return value


def ensure_linkedin_url(value: str, *, field_name: str = "linkedin_url") -> str:
    cleaned = ensure_not_blank(value, field_name=field_name)
    if LINKEDIN_HOST_MARKER not in cleaned.lower():
        raise ValueError(
            f"{field_name} must be a valid LinkedIn profile URL (must contain {LINKEDIN_HOST_MARKER})"
        )
    return cleaned


def ensure_member(value: Any, enum_cls: type[Enum], *, field_name: str) -> Any:
    """Coerce ``value`` into ``enum_cls`` with a message listing the allowed values."""

    if isinstance(value, enum_cls):
        return value
    allowed = enum_values(enum_cls)
    if value not in allowed:
        raise ValueError(f"{field_name} must be one of: {', '.join(allowed)}")
    return enum_cls(value)


def clean_string_list(values: list[str] | None) -> list[str]:
    """Strip entries and drop blanks while preserving order."""

    if not values:
        return []
    cleaned: list[str] = []
    for item in values:
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return cleaned
