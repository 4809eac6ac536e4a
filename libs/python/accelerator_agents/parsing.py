"""Best-effort extraction of JSON payloads from model text."""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


class StructuredOutputError(ValueError):
    """Model text did not contain a payload matching the expected shape."""


def extract_balanced_json(text: str) -> str | None:
    """Return the first balanced top-level JSON object or array in ``text``."""

    if not text:
        return None

    starts = []
    first_obj = text.find("{")
    first_arr = text.find("[")
    if first_obj != -1:
        starts.append((first_obj, "{", "}"))
    if first_arr != -1:
        starts.append((first_arr, "[", "]"))
    if not starts:
        return None

    start_idx, open_ch, close_ch = min(starts, key=lambda item: item[0])
    depth = 0
    in_string = False
    escape = False
    for index in range(start_idx, len(text)):
        ch = text[index]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start_idx : index + 1]
    return None


def _candidates(raw_text: str) -> list[str]:
    text = (raw_text or "").strip()
    if not text:
        return []
    candidates: list[str] = []
    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    candidates.append(text)
    balanced = extract_balanced_json(text)
    if balanced:
        candidates.append(balanced)
    return candidates


def load_json_payload(raw_text: str) -> Any:
    for candidate in _candidates(raw_text):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise StructuredOutputError("Response did not contain a JSON object or array")


def parse_structured(raw_text: str, model_cls: type[T], *, list_field: str | None = None) -> T:
    """Validate the JSON found in ``raw_text`` against ``model_cls``.

    When ``list_field`` is given, a bare JSON array is accepted and wrapped as
    ``{list_field: [...]}`` so list-shaped outputs and schema envelopes share
    one model.
    """

    payload = load_json_payload(raw_text)
    if list_field and isinstance(payload, list):
        payload = {list_field: payload}
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise StructuredOutputError(f"Response did not match {model_cls.__name__}: {exc}") from exc
