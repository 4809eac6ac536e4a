"""API tests for prospects and outreach logging."""

from __future__ import annotations

from uuid import uuid4

from tests.utils.api import BOB_TOKEN, auth, build_client, create_venture

PROFILE = "https://www.linkedin.com/in/jane-doe"


def _create(client, venture_id: str, url: str = PROFILE, **fields):
    return client.post(
        "/prospects", json={"venture_id": venture_id, "linkedin_url": url, **fields}, headers=auth()
    )


def test_create_then_duplicate_conflicts() -> None:
    client = build_client()
    venture = create_venture(client)

    first = _create(client, venture["id"], name="Jane", criticality_score=0.8)
    assert first.status_code == 201
    assert first.json()["name"] == "Jane"
    assert first.json()["criticality_score"] == 0.8

    second = _create(client, venture["id"])
    assert second.status_code == 409
    assert second.json()["detail"] == "A prospect with this LinkedIn URL already exists"


def test_linkedin_url_validation() -> None:
    client = build_client()
    venture = create_venture(client)
    response = _create(client, venture["id"], url="https://example.com/jane")
    assert response.status_code == 400
    assert response.json()["detail"] == (
        "linkedin_url must be a valid LinkedIn profile URL (must contain linkedin.com)"
    )
    missing = client.post("/prospects", json={"venture_id": venture["id"]}, headers=auth())
    assert missing.json()["detail"] == "linkedin_url is required"


def test_score_bounds() -> None:
    client = build_client()
    venture = create_venture(client)
    response = _create(client, venture["id"], reach_score=1.2)
    assert response.status_code == 400
    assert response.json()["detail"] == "reach_score must be between 0 and 1"


def test_foreign_venture_is_forbidden() -> None:
    client = build_client()
    venture = create_venture(client, token=BOB_TOKEN)
    assert _create(client, venture["id"]).status_code == 403
    assert _create(client, str(uuid4())).status_code == 404


def test_list_orders_by_criticality() -> None:
    client = build_client()
    venture = create_venture(client)
    _create(client, venture["id"], url="https://linkedin.com/in/a", criticality_score=0.2)
    _create(client, venture["id"], url="https://linkedin.com/in/b")
    _create(client, venture["id"], url="https://linkedin.com/in/c", criticality_score=0.9)

    listed = client.get("/prospects", headers=auth()).json()
    assert [item["linkedin_url"][-1] for item in listed] == ["c", "a", "b"]
    assert client.get("/prospects", headers=auth(BOB_TOKEN)).json() == []


def test_foreign_get_is_not_found_and_update_is_forbidden() -> None:
    client = build_client()
    venture = create_venture(client)
    prospect = _create(client, venture["id"]).json()

    assert client.get(f"/prospects/{prospect['id']}", headers=auth()).status_code == 200
    foreign_get = client.get(f"/prospects/{prospect['id']}", headers=auth(BOB_TOKEN))
    assert foreign_get.status_code == 404
    assert foreign_get.json()["detail"] == "Prospect not found"

    foreign_put = client.put(f"/prospects/{prospect['id']}", json={"name": "X"}, headers=auth(BOB_TOKEN))
    assert foreign_put.status_code == 403
    assert foreign_put.json()["detail"] == "You do not have access to this prospect"


def test_update_and_delete_prospect() -> None:
    client = build_client()
    venture = create_venture(client)
    prospect = _create(client, venture["id"]).json()

    updated = client.put(
        f"/prospects/{prospect['id']}", json={"title": "CTO", "followers_count": 1200}, headers=auth()
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "CTO"
    assert updated.json()["followers_count"] == 1200

    assert client.delete(f"/prospects/{prospect['id']}", headers=auth()).status_code == 204
    assert client.get(f"/prospects/{prospect['id']}", headers=auth()).status_code == 404


def test_outreach_logging() -> None:
    client = build_client()
    venture = create_venture(client)
    prospect = _create(client, venture["id"]).json()
    path = f"/prospects/{prospect['id']}/outreach"

    created = client.post(path, json={"phase": "comment", "generated_message": "Great post!"}, headers=auth())
    assert created.status_code == 201
    assert created.json()["status"] == "pending_approval"
    assert created.json()["phase"] == "comment"
    client.post(path, json={"phase": "connect"}, headers=auth())

    listed = client.get(path, headers=auth()).json()
    assert [item["phase"] for item in listed] == ["connect", "comment"]

    bad_phase = client.post(path, json={"phase": "poke"}, headers=auth())
    assert bad_phase.status_code == 400
    assert bad_phase.json()["detail"] == "phase must be one of: like, comment, connect"

    assert client.get(path, headers=auth(BOB_TOKEN)).status_code == 403
