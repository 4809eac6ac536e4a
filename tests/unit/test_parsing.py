"""JSON extraction from free-form model output."""

import pytest

from accelerator_agents.parsing import (
    StructuredOutputError,
    extract_balanced_json,
    load_json_payload,
    parse_structured,
)
from accelerator_schemas import NextStepBatch, PostingSchedule


def test_fenced_block_is_preferred() -> None:
    text = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
    assert load_json_payload(text) == {"a": 1}


def test_balanced_object_inside_prose() -> None:
    text = 'Sure! {"note": "braces } in strings", "n": [1, 2]} hope that helps'
    assert extract_balanced_json(text) == '{"note": "braces } in strings", "n": [1, 2]}'
    assert load_json_payload(text)["n"] == [1, 2]


def test_no_json_raises() -> None:
    with pytest.raises(StructuredOutputError):
        load_json_payload("no structure here")
    assert extract_balanced_json("") is None


def test_bare_array_wrapped_in_list_field() -> None:
    batch = parse_structured('["Share it", "Engage"]', NextStepBatch, list_field="steps")
    assert batch.steps == ["Share it", "Engage"]


def test_shape_mismatch_raises() -> None:
    with pytest.raises(StructuredOutputError, match="PostingSchedule"):
        parse_structured('{"optimal_days": ["Monday"]}', PostingSchedule)
