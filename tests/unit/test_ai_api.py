"""API tests for the LLM-backed endpoints and provider error mapping."""

from __future__ import annotations

import json

import pytest

from accelerator_providers import ProviderAuthError, RateLimitError
from accelerator_providers.config import PROVIDER_ENV_VAR
from tests.utils.api import ALICE, BOB_TOKEN, auth, build_client, create_venture
from tests.utils.providers import ScriptedProvider
from tests.utils.store import InMemoryStore

POST = "Remote teams ship faster with clear writing.\n\n#remote #writing #remote"


def _sse_events(text: str) -> list[dict]:
    return [json.loads(line[len("data: ") :]) for line in text.splitlines() if line.startswith("data: ")]


def test_ai_health_needs_no_session() -> None:
    body = build_client().get("/ai/health").json()
    assert body["success"] is True
    assert body["message"] == "AI route is accessible"
    assert "timestamp" in body


def test_generate_requires_session() -> None:
    client = build_client(provider=ScriptedProvider([POST]))
    assert client.post("/ai/generate", json={"topic": "Remote work"}).status_code == 401


def test_generate_returns_draft_and_metadata() -> None:
    provider = ScriptedProvider([POST])
    client = build_client(provider=provider)

    response = client.post("/ai/generate", json={"topic": "Remote work", "tone": "casual"}, headers=auth())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["draft"]["post_text"] == POST
    assert body["draft"]["character_count"] == len(POST)
    assert body["metadata"] == {
        "model": "scripted-model",
        "provider": "scripted",
        "tone": "casual",
        "character_count": len(POST),
    }
    assert "content_id" not in body


def test_generate_validation() -> None:
    client = build_client(provider=ScriptedProvider())
    missing = client.post("/ai/generate", json={}, headers=auth())
    assert missing.status_code == 400
    assert missing.json()["detail"] == "topic is required"

    bad_tone = client.post("/ai/generate", json={"topic": "x", "tone": "angry"}, headers=auth())
    assert bad_tone.json()["detail"] == "tone must be one of: professional, casual, inspirational, technical"

    too_long = client.post("/ai/generate", json={"topic": "x", "max_length": 5000}, headers=auth())
    assert too_long.status_code == 400
    assert too_long.json()["detail"].startswith("max_length")


def test_generate_uses_brand_guide_and_saves_draft() -> None:
    store = InMemoryStore()
    provider = ScriptedProvider([POST])
    client = build_client(store, provider)
    venture = create_venture(client)
    client.post(
        f"/ventures/{venture['id']}/brand-guide",
        json={"tone": "technical", "audience": ["CTOs"], "negative_keywords": ["crypto"]},
        headers=auth(),
    )

    response = client.post(
        "/ai/generate",
        json={"topic": "Remote work", "venture_id": venture["id"], "save_as_draft": True},
        headers=auth(),
    )

    assert response.status_code == 200
    system_prompt = provider.requests[0].messages[0].content
    assert "Brand Voice: technical voice for Acme Labs; audience: CTOs; never mention: crypto" in system_prompt

    content_id = response.json()["content_id"]
    draft = client.get(f"/content/{content_id}", headers=auth()).json()
    assert draft["status"] == "pending_validation"
    assert draft["original_text"] == POST
    assert draft["topic"] == "Remote work"
    assert draft["venture_id"] == venture["id"]
    assert draft["hashtags"] == ["#remote", "#writing"]


def test_generate_for_foreign_venture_is_forbidden() -> None:
    client = build_client(provider=ScriptedProvider([POST]))
    venture = create_venture(client, token=BOB_TOKEN)
    response = client.post(
        "/ai/generate", json={"topic": "x", "venture_id": venture["id"]}, headers=auth()
    )
    assert response.status_code == 403


def test_generate_stream_emits_sse_events() -> None:
    client = build_client(provider=ScriptedProvider(["Hello streaming world"], chunk_size=6))

    response = client.post("/ai/generate", json={"topic": "Streams", "stream": True}, headers=auth())

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    events = _sse_events(response.text)
    assert "".join(event.get("delta", "") for event in events) == "Hello streaming world"
    assert events[-1] == {"done": True}


def test_generate_stream_reports_provider_errors_in_band() -> None:
    error = RateLimitError("Slow down", provider="scripted", retry_after=3)
    client = build_client(provider=ScriptedProvider([error]))

    response = client.post("/ai/generate", json={"topic": "Streams", "stream": True}, headers=auth())

    events = _sse_events(response.text)
    assert events == [{"error": "Slow down", "retryable": True}]


def test_retryable_provider_error_maps_to_503() -> None:
    error = RateLimitError("Slow down", provider="scripted", retry_after=7)
    client = build_client(provider=ScriptedProvider([error]))

    response = client.post("/ai/generate", json={"topic": "Remote work"}, headers=auth())

    assert response.status_code == 503
    assert response.headers["retry-after"] == "7"
    assert response.json() == {
        "success": False,
        "detail": "Slow down",
        "provider": "scripted",
        "retryable": True,
    }


def test_non_retryable_provider_error_maps_to_500() -> None:
    error = ProviderAuthError("Bad key", provider="scripted")
    client = build_client(provider=ScriptedProvider([error]))

    response = client.put(
        "/ai/generate", json={"original_draft": "Old", "feedback": "Better"}, headers=auth()
    )

    assert response.status_code == 500
    assert response.json()["retryable"] is False


def test_missing_provider_configuration_maps_to_500(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROVIDER_ENV_VAR, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = build_client()

    response = client.post("/ai/generate", json={"topic": "Remote work"}, headers=auth())

    assert response.status_code == 500
    assert response.json()["detail"] == "OPENAI_API_KEY is not configured"


def test_revise_returns_draft() -> None:
    client = build_client(provider=ScriptedProvider(["Sharper post"]))
    response = client.put(
        "/ai/generate", json={"original_draft": "Old", "feedback": "Sharper"}, headers=auth()
    )
    assert response.status_code == 200
    assert response.json()["draft"]["post_text"] == "Sharper post"
    assert response.json()["draft"]["alt_text"] == "Revised LinkedIn post"

    missing = client.put("/ai/generate", json={"original_draft": "Old"}, headers=auth())
    assert missing.json()["detail"] == "feedback is required"


def test_analyze_venture() -> None:
    insights = {
        "industry": "Developer tooling",
        "target_audience": ["CTOs"],
        "brand_voice": "Practical",
        "content_themes": ["Automation"],
        "mission": "Ship faster",
    }
    client = build_client(provider=ScriptedProvider([json.dumps(insights)]))
    response = client.post("/ai/analyze-venture", json={"venture_name": "Acme"}, headers=auth())
    assert response.status_code == 200
    assert response.json() == {"success": True, "insights": {**insights, "competitors": None}}


def test_suggest_topics() -> None:
    topic = {
        "topic": "Why docs beat meetings",
        "rationale": "Async teams love it.",
        "match_score": 92,
        "engagement_potential": "high",
        "suggested_tone": "professional",
    }
    provider = ScriptedProvider([json.dumps({"topics": [topic, topic]})])
    client = build_client(provider=provider)

    response = client.post(
        "/ai/suggest-topics",
        json={"venture_name": "Acme", "target_audience": "CTOs, Founders", "count": 1},
        headers=auth(),
    )

    assert response.status_code == 200
    assert len(response.json()["topics"]) == 1
    assert "Target Audience: CTOs, Founders" in provider.requests[0].messages[1].content


def test_suggest_topics_count_bounds() -> None:
    client = build_client(provider=ScriptedProvider())
    response = client.post(
        "/ai/suggest-topics", json={"venture_name": "Acme", "count": 11}, headers=auth()
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "count must be between 1 and 10"


def test_invalid_agent_output_maps_to_502() -> None:
    client = build_client(provider=ScriptedProvider(["nope", "still nope"]))
    response = client.post("/ai/suggest-topics", json={"venture_name": "Acme"}, headers=auth())
    assert response.status_code == 502
    assert response.json() == {"success": False, "detail": "Model returned invalid TopicSuggestionBatch output"}


def test_suggest_schedule_and_next_steps() -> None:
    schedule = {"optimal_days": ["Tuesday"], "optimal_times": ["9:00 AM"], "reasoning": "Mornings."}
    provider = ScriptedProvider([json.dumps(schedule), json.dumps({"steps": ["Post a follow-up"]})])
    client = build_client(provider=provider)

    scheduled = client.post("/ai/suggest-schedule", json={"venture_name": "Acme"}, headers=auth())
    assert scheduled.json() == {"success": True, "schedule": schedule}

    steps = client.post(
        "/ai/next-steps", json={"venture_name": "Acme", "draft": "My post"}, headers=auth()
    )
    assert steps.json() == {"success": True, "next_steps": ["Post a follow-up"]}


def test_invalid_body_answers_400_without_provider_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROVIDER_ENV_VAR, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = build_client()

    missing_topic = client.post("/ai/generate", json={}, headers=auth())
    assert missing_topic.status_code == 400
    assert missing_topic.json()["detail"] == "topic is required"

    bad_count = client.post("/ai/suggest-topics", json={"venture_name": "Acme", "count": 0}, headers=auth())
    assert bad_count.status_code == 400

    foreign = create_venture(client, token=BOB_TOKEN)
    response = client.post("/ai/generate", json={"topic": "x", "venture_id": foreign["id"]}, headers=auth())
    assert response.status_code == 403


def test_generate_binds_route_and_user_to_log_context() -> None:
    provider = ScriptedProvider([POST, "Hello streaming world"])
    client = build_client(provider=provider)

    client.post("/ai/generate", json={"topic": "Remote work"}, headers=auth())
    client.post("/ai/generate", json={"topic": "Streams", "stream": True}, headers=auth())

    plain, streamed = provider.log_contexts
    assert plain["route"] == streamed["route"] == "/ai/generate"
    assert plain["user_id"] == streamed["user_id"] == ALICE
    assert plain["agent"] == "writing"


def test_ai_health_verify_reports_provider_availability() -> None:
    body = build_client(provider=ScriptedProvider(["pong"])).get("/ai/health?verify=true").json()
    assert body["success"] is True
    assert body["provider"] == {"name": "scripted", "model": "scripted-model", "available": True}

    failing = ScriptedProvider([ProviderAuthError("Bad key", provider="scripted")])
    body = build_client(provider=failing).get("/ai/health", params={"verify": "true"}).json()
    assert body["provider"]["available"] is False

    assert "provider" not in build_client(provider=ScriptedProvider()).get("/ai/health").json()


def test_ai_health_verify_reports_missing_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PROVIDER_ENV_VAR, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    response = build_client().get("/ai/health?verify=true")

    assert response.status_code == 200
    assert response.json()["provider"]["available"] is False
    assert response.json()["provider"]["detail"] == "OPENAI_API_KEY is not configured"
