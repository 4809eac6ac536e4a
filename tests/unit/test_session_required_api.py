"""Writes without a valid session answer 401 and leave the store untouched."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tests.utils.api import auth, build_client, create_venture
from tests.utils.providers import ScriptedProvider
from tests.utils.store import InMemoryStore

MUTATIONS = [
    ("POST", "/ventures", {"venture_name": "Intruder Inc"}),
    ("PUT", "/ventures/{venture}", {"description": "Hijacked"}),
    ("DELETE", "/ventures/{venture}", None),
    ("POST", "/ventures/{venture}/brand-guide", {"tone": "casual", "audience": ["x"]}),
    ("POST", "/content", {"original_text": "Injected"}),
    ("PUT", "/content/{content}", {"edited_text": "Injected"}),
    ("DELETE", "/content/{content}", None),
    ("POST", "/content/{content}/approve", None),
    ("POST", "/content/{content}/reject", None),
    ("POST", "/content/{content}/publish", None),
    ("POST", "/prospects", {"venture_id": "{venture}", "linkedin_url": "https://linkedin.com/in/other"}),
    ("PUT", "/prospects/{prospect}", {"name": "Renamed"}),
    ("DELETE", "/prospects/{prospect}", None),
    ("POST", "/prospects/{prospect}/outreach", {"phase": "like"}),
    ("POST", "/tc3d/capabilities", {"tool_id": "{tool}", "score": 0.5}),
    ("POST", "/ai/generate", {"topic": "Remote work", "save_as_draft": True}),
]

UNAUTHENTICATED = [
    pytest.param({}, id="no-session"),
    pytest.param(auth("expired-token"), id="unknown-session"),
]


def _seeded() -> tuple[InMemoryStore, ScriptedProvider, TestClient, dict[str, str]]:
    store = InMemoryStore()
    provider = ScriptedProvider(["A generated post"])
    client = build_client(store, provider)
    venture = create_venture(client)
    content = client.post("/content", json={"original_text": "A post"}, headers=auth()).json()
    prospect = client.post(
        "/prospects",
        json={"venture_id": venture["id"], "linkedin_url": "https://linkedin.com/in/jane"},
        headers=auth(),
    ).json()
    tool = store.add_tool("ChatGPT")
    ids = {"venture": venture["id"], "content": content["id"], "prospect": prospect["id"], "tool": str(tool.id)}
    return store, provider, client, ids


def _fill(value, ids: dict[str, str]):
    if isinstance(value, str):
        return value.format(**ids)
    if isinstance(value, dict):
        return {key: _fill(item, ids) for key, item in value.items()}
    return value


@pytest.mark.parametrize("headers", UNAUTHENTICATED)
@pytest.mark.parametrize(("method", "path", "body"), MUTATIONS)
def test_mutation_without_session_is_rejected(method: str, path: str, body, headers: dict) -> None:
    store, provider, client, ids = _seeded()
    before = store.snapshot()

    response = client.request(method, _fill(path, ids), json=_fill(body, ids), headers=headers)

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}
    assert store.snapshot() == before
    assert provider.requests == []
