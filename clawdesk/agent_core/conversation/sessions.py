"""Chat session bookkeeping.

``SessionManager`` owns the ordered session list and the id of the active
session. Sessions are kept in insertion order with new sessions first, and
every mutation is written through to the ``SessionRepository``.

Changes of the active session are published as typed events to explicit
subscribers; the conversation engine subscribes to reset its history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from ..errors import SessionNotFoundError
from ..inference.prompts import WELCOME_MESSAGE
from ..repos.interfaces import SessionRepository
from ..schemas.domain import Message, MessageRole, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionActivated:
    session_id: str


@dataclass(frozen=True)
class SessionDeleted:
    session_id: str
    was_active: bool


SessionEvent = Union[SessionActivated, SessionDeleted]
SessionListener = Callable[[SessionEvent], None]


def welcome_message() -> Message:
    return Message(role=MessageRole.assistant, content=WELCOME_MESSAGE)


class SessionManager:
    def __init__(self, repo: SessionRepository) -> None:
        self._repo = repo
        self._sessions: List[Session] = []
        self._active_id: Optional[str] = None
        self._scratch: List[Message] = [welcome_message()]
        self._listeners: List[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    async def load(self) -> None:
        self._sessions = await self._repo.list()
        self._active_id = None
        self._scratch = [welcome_message()]
        logger.info(f"Loaded {len(self._sessions)} chat sessions")

    def list(self) -> List[Session]:
        return list(self._sessions)

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active(self) -> Optional[Session]:
        if self._active_id is None:
            return None
        return next((s for s in self._sessions if s.id == self._active_id), None)

    @property
    def messages(self) -> List[Message]:
        """Transcript shown to the user: the active session or the unsaved welcome view."""
        active = self.active
        return list(active.messages) if active else list(self._scratch)

    def get(self, session_id: str) -> Session:
        session = next((s for s in self._sessions if s.id == session_id), None)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def new_chat(self) -> Session:
        """Start a fresh chat.

        An active session without user messages is reused and reset to the
        welcome message instead of creating another empty session.
        """
        active = self.active
        if active is not None and active.user_message_count == 0:
            active.messages = [welcome_message()]
            await self._repo.save(active)
            return active

        session = Session(messages=[welcome_message()])
        self._sessions.insert(0, session)
        await self._repo.save(session)
        self._active_id = session.id
        logger.info(f"Created chat session {session.id}")
        self._publish(SessionActivated(session.id))
        return session

    async def ensure_active(self) -> Session:
        """Return the active session, creating one from the unsaved view if needed."""
        active = self.active
        if active is not None:
            return active
        session = Session(messages=list(self._scratch))
        self._sessions.insert(0, session)
        await self._repo.save(session)
        self._active_id = session.id
        logger.info(f"Auto-created chat session {session.id} for the first message")
        return session

    async def record(self, message: Message) -> Session:
        """Append ``message`` to the active session and persist it."""
        session = await self.ensure_active()
        session.append(message)
        await self._repo.save(session)
        return session

    async def switch(self, session_id: str) -> Session:
        session = self.get(session_id)
        self._active_id = session.id
        self._publish(SessionActivated(session.id))
        return session

    async def delete(self, session_id: str) -> None:
        session = self.get(session_id)
        self._sessions.remove(session)
        await self._repo.delete(session.id)
        was_active = self._active_id == session.id
        if was_active:
            self._active_id = None
            self._scratch = [welcome_message()]
        logger.info(f"Deleted chat session {session.id} (active={was_active})")
        self._publish(SessionDeleted(session.id, was_active))
