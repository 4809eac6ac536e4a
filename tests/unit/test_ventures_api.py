"""API tests for ventures, brand guides, and session handling."""

from __future__ import annotations

from uuid import uuid4

from tests.utils.api import BOB_TOKEN, auth, build_client, create_venture
from tests.utils.store import InMemoryStore


def test_requests_without_session_are_unauthorized() -> None:
    client = build_client()
    assert client.get("/ventures").status_code == 401
    response = client.get("/ventures", headers=auth("expired-token"))
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


def test_session_cookie_is_accepted() -> None:
    client = build_client()
    response = client.get("/ventures", headers={"Cookie": "accelerator_session=alice-session-token"})
    assert response.status_code == 200


def test_create_and_list_ventures() -> None:
    client = build_client()
    created = create_venture(client, "Acme Labs", industry=" DevTools ", key_offerings=["API", " "])
    assert created["industry"] == "DevTools"
    assert created["key_offerings"] == ["API"]
    create_venture(client, "Second Venture")

    listed = client.get("/ventures", headers=auth()).json()
    assert [item["venture_name"] for item in listed] == ["Second Venture", "Acme Labs"]
    assert client.get("/ventures", headers=auth(BOB_TOKEN)).json() == []


def test_blank_name_is_rejected() -> None:
    client = build_client()
    response = client.post("/ventures", json={"venture_name": "   "}, headers=auth())
    assert response.status_code == 400
    assert response.json()["detail"] == "venture_name is required and cannot be empty"

    missing = client.post("/ventures", json={}, headers=auth())
    assert missing.status_code == 400
    assert missing.json()["detail"] == "venture_name is required"


def test_duplicate_name_conflicts() -> None:
    client = build_client()
    create_venture(client, "Acme Labs")
    response = client.post("/ventures", json={"venture_name": "Acme Labs"}, headers=auth())
    assert response.status_code == 409
    assert response.json()["detail"] == "A venture with this name already exists"
    create_venture(client, "Acme Labs", token=BOB_TOKEN)


def test_foreign_and_missing_ventures() -> None:
    client = build_client()
    venture = create_venture(client)
    foreign = client.get(f"/ventures/{venture['id']}", headers=auth(BOB_TOKEN))
    assert foreign.status_code == 403
    assert foreign.json()["detail"] == "You do not have access to this venture"
    missing = client.get(f"/ventures/{uuid4()}", headers=auth())
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Venture not found"


def test_update_and_delete_venture() -> None:
    client = build_client()
    venture = create_venture(client)
    updated = client.put(
        f"/ventures/{venture['id']}", json={"description": "We build things"}, headers=auth()
    )
    assert updated.status_code == 200
    assert updated.json()["description"] == "We build things"
    assert updated.json()["venture_name"] == "Acme Labs"

    assert client.delete(f"/ventures/{venture['id']}", headers=auth(BOB_TOKEN)).status_code == 403
    assert client.delete(f"/ventures/{venture['id']}", headers=auth()).status_code == 204
    assert client.get(f"/ventures/{venture['id']}", headers=auth()).status_code == 404


def test_brand_guide_upsert() -> None:
    client = build_client()
    venture = create_venture(client)
    path = f"/ventures/{venture['id']}/brand-guide"

    assert client.get(path, headers=auth()).json() is None

    first = client.post(path, json={"tone": "technical", "audience": ["CTOs"]}, headers=auth())
    assert first.status_code == 201
    body = first.json()
    assert body["posting_frequency"] == 3
    assert body["auto_approval_threshold"] == 0.9
    assert body["target_platforms"] == ["linkedin", "devto", "portfolio"]

    second = client.post(
        path, json={"tone": "casual", "audience": ["Founders"], "posting_frequency": 5}, headers=auth()
    )
    assert second.status_code == 200
    assert second.json()["id"] == body["id"]
    assert client.get(path, headers=auth()).json()["tone"] == "casual"


def test_brand_guide_validation() -> None:
    client = build_client()
    venture = create_venture(client)
    path = f"/ventures/{venture['id']}/brand-guide"

    no_tone = client.post(path, json={"audience": ["CTOs"]}, headers=auth())
    assert no_tone.status_code == 400
    assert no_tone.json()["detail"] == "tone is required"

    bad_tone = client.post(path, json={"tone": "loud", "audience": ["CTOs"]}, headers=auth())
    assert bad_tone.json()["detail"] == "tone must be one of: technical, conversational, authoritative, casual"

    no_audience = client.post(path, json={"tone": "casual", "audience": []}, headers=auth())
    assert no_audience.json()["detail"] == "audience is required"

    threshold = client.post(
        path, json={"tone": "casual", "audience": ["x"], "auto_approval_threshold": 1.5}, headers=auth()
    )
    assert threshold.status_code == 400
    assert threshold.json()["detail"] == "auto_approval_threshold must be between 0 and 1"


def test_health_endpoint() -> None:
    client = build_client()
    assert client.get("/health").json() == {"status": "ok", "database": True}


def test_deleting_venture_detaches_drafts_and_drops_prospects() -> None:
    store = InMemoryStore()
    client = build_client(store)
    venture = create_venture(client)
    client.post(f"/ventures/{venture['id']}/brand-guide", json={"tone": "casual", "audience": ["x"]}, headers=auth())
    draft = client.post(
        "/content", json={"original_text": "A post", "venture_id": venture["id"]}, headers=auth()
    ).json()
    prospect = client.post(
        "/prospects",
        json={"venture_id": venture["id"], "linkedin_url": "https://linkedin.com/in/jane"},
        headers=auth(),
    ).json()
    client.post(f"/prospects/{prospect['id']}/outreach", json={"phase": "like"}, headers=auth())

    assert client.delete(f"/ventures/{venture['id']}", headers=auth()).status_code == 204

    kept = client.get(f"/content/{draft['id']}", headers=auth())
    assert kept.status_code == 200
    assert kept.json()["venture_id"] is None
    assert client.get(f"/prospects/{prospect['id']}", headers=auth()).status_code == 404
    assert store.brand_guides == {}
    assert store.outreach == {}


def test_repeating_brand_guide_upsert_is_idempotent() -> None:
    client = build_client()
    venture = create_venture(client)
    path = f"/ventures/{venture['id']}/brand-guide"
    body = {
        "tone": "authoritative",
        "audience": ["CTOs", "Founders"],
        "content_pillars": ["Automation"],
        "negative_keywords": ["crypto"],
        "posting_frequency": 4,
        "auto_approval_threshold": 0.75,
        "target_platforms": ["linkedin"],
    }

    first = client.post(path, json=body, headers=auth())
    second = client.post(path, json=body, headers=auth())

    assert (first.status_code, second.status_code) == (201, 200)
    before, after = first.json(), second.json()
    before.pop("updated_at")
    after.pop("updated_at")
    assert after == before
    assert client.get(path, headers=auth()).json()["id"] == before["id"]
