from __future__ import annotations

from typing import List

import pytest

from clawdesk.agent_core.conversation.sessions import (
    SessionActivated,
    SessionDeleted,
    SessionEvent,
    SessionManager,
)
from clawdesk.agent_core.errors import SessionNotFoundError
from clawdesk.agent_core.inference.prompts import WELCOME_MESSAGE
from clawdesk.agent_core.schemas.domain import Message, MessageRole

pytestmark = pytest.mark.asyncio


@pytest.fixture
def manager(gateway) -> SessionManager:
    return SessionManager(gateway.sessions)


@pytest.fixture
def events(manager: SessionManager) -> List[SessionEvent]:
    received: List[SessionEvent] = []
    manager.subscribe(received.append)
    return received


def _user(text: str) -> Message:
    return Message(role=MessageRole.user, content=text)


async def test_unsaved_view_shows_welcome_message(manager: SessionManager) -> None:
    await manager.load()
    assert manager.active is None
    assert [m.content for m in manager.messages] == [WELCOME_MESSAGE]


async def test_first_message_auto_creates_session(manager: SessionManager, gateway, events) -> None:
    await manager.load()

    session = await manager.record(_user("Create a trending agent"))

    assert manager.active_id == session.id
    assert session.title == "Create a trending agent"
    assert [m.role for m in session.messages] == [MessageRole.assistant, MessageRole.user]
    assert session.id in gateway.sessions.by_id
    assert events == []


async def test_new_chat_creates_session_first_in_list(manager: SessionManager, events) -> None:
    await manager.load()
    first = await manager.record(_user("hello"))

    second = await manager.new_chat()

    assert second.id != first.id
    assert [s.id for s in manager.list()] == [second.id, first.id]
    assert second.title == "New Chat"
    assert [m.content for m in second.messages] == [WELCOME_MESSAGE]
    assert events == [SessionActivated(second.id)]


async def test_new_chat_reuses_active_session_without_user_messages(manager: SessionManager, events) -> None:
    await manager.load()
    session = await manager.new_chat()

    again = await manager.new_chat()

    assert again.id == session.id
    assert len(manager.list()) == 1
    assert events == [SessionActivated(session.id)]


async def test_switch_publishes_activation(manager: SessionManager, events) -> None:
    await manager.load()
    first = await manager.record(_user("one"))
    await manager.new_chat()

    switched = await manager.switch(first.id)

    assert switched.id == first.id
    assert manager.active_id == first.id
    assert events[-1] == SessionActivated(first.id)


async def test_switch_unknown_session_raises(manager: SessionManager) -> None:
    await manager.load()
    with pytest.raises(SessionNotFoundError):
        await manager.switch("missing")


async def test_delete_active_session_resets_view(manager: SessionManager, gateway, events) -> None:
    await manager.load()
    session = await manager.record(_user("one"))

    await manager.delete(session.id)

    assert manager.active is None
    assert manager.list() == []
    assert session.id not in gateway.sessions.by_id
    assert [m.content for m in manager.messages] == [WELCOME_MESSAGE]
    assert events == [SessionDeleted(session.id, was_active=True)]


async def test_delete_inactive_session_keeps_active(manager: SessionManager, events) -> None:
    await manager.load()
    first = await manager.record(_user("one"))
    second = await manager.new_chat()

    await manager.delete(first.id)

    assert manager.active_id == second.id
    assert events[-1] == SessionDeleted(first.id, was_active=False)


async def test_load_restores_saved_sessions(gateway) -> None:
    writer = SessionManager(gateway.sessions)
    await writer.load()
    saved = await writer.record(_user("persist me"))

    reader = SessionManager(gateway.sessions)
    await reader.load()

    assert [s.id for s in reader.list()] == [saved.id]
    assert reader.active is None


async def test_unsubscribe_stops_delivery(manager: SessionManager) -> None:
    received: List[SessionEvent] = []
    unsubscribe = manager.subscribe(received.append)
    unsubscribe()
    await manager.load()
    await manager.new_chat()
    assert received == []
