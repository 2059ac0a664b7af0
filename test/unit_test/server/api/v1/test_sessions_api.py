import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _send(client: AsyncClient, text: str) -> str:
    response = await client.post("/api/v1/chat/messages", json={"content": text})
    return response.json()["session_id"]


async def test_new_chat_and_list(client: AsyncClient):
    first_id = await _send(client, "first chat")

    response = await client.post("/api/v1/sessions")
    assert response.status_code == 201
    created = response.json()
    assert created["title"] == "New Chat"
    assert created["active"] is True
    assert len(created["messages"]) == 1

    sessions = (await client.get("/api/v1/sessions")).json()
    assert [s["id"] for s in sessions] == [created["id"], first_id]
    assert [s["active"] for s in sessions] == [True, False]
    assert "messages" not in sessions[0]


async def test_new_chat_twice_reuses_empty_session(client: AsyncClient):
    a = (await client.post("/api/v1/sessions")).json()
    b = (await client.post("/api/v1/sessions")).json()
    assert a["id"] == b["id"]
    assert len((await client.get("/api/v1/sessions")).json()) == 1


async def test_activate_session(client: AsyncClient):
    first_id = await _send(client, "first chat")
    await client.post("/api/v1/sessions")

    response = await client.post(f"/api/v1/sessions/{first_id}/activate")

    assert response.status_code == 200
    assert response.json()["active"] is True
    transcript = (await client.get("/api/v1/chat/messages")).json()
    assert transcript["active_session_id"] == first_id
    assert transcript["messages"][1]["content"] == "first chat"


async def test_delete_session(client: AsyncClient):
    session_id = await _send(client, "to be deleted")

    response = await client.delete(f"/api/v1/sessions/{session_id}")

    assert response.status_code == 204
    assert (await client.get("/api/v1/sessions")).json() == []
    assert (await client.get("/api/v1/chat/messages")).json()["active_session_id"] is None


async def test_unknown_session_is_404(client: AsyncClient):
    response = await client.post("/api/v1/sessions/missing/activate")
    assert response.status_code == 404
    assert response.json()["kind"] == "session"

    response = await client.delete("/api/v1/sessions/missing")
    assert response.status_code == 404
