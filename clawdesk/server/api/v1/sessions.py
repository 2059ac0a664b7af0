"""
Chat Sessions API Endpoints.

Lists, creates, activates and deletes chat sessions. Activating or deleting
the active session resets the assistant's conversation state.
"""

from typing import List

from fastapi import APIRouter

from clawdesk.agent_core.schemas.domain import Session
from clawdesk.server.schemas import SessionRead, SessionSummary
from clawdesk.server.services.deps import AssistantDep

router = APIRouter()


def _summary(session: Session, active_id: str | None) -> SessionSummary:
    return SessionSummary(
        id=session.id,
        title=session.title,
        created_at=session.created_at,
        updated_at=session.updated_at,
        active=session.id == active_id,
    )


def _read(session: Session, active_id: str | None) -> SessionRead:
    return SessionRead(**_summary(session, active_id).model_dump(), messages=session.messages)


@router.get("", response_model=List[SessionSummary], summary="List Chat Sessions")
async def list_sessions(assistant: AssistantDep):
    active_id = assistant.sessions.active_id
    return [_summary(s, active_id) for s in assistant.list_sessions()]


@router.post(
    "",
    response_model=SessionRead,
    status_code=201,
    summary="New Chat",
    description="Start a new chat, reusing the active session if it has no user messages yet.",
)
async def new_chat(assistant: AssistantDep):
    session = await assistant.new_chat()
    return _read(session, assistant.sessions.active_id)


@router.post(
    "/{session_id}/activate",
    response_model=SessionRead,
    summary="Switch Chat Session",
    responses={404: {"description": "Session not found"}},
)
async def activate_session(session_id: str, assistant: AssistantDep):
    session = await assistant.switch_session(session_id)
    return _read(session, assistant.sessions.active_id)


@router.delete(
    "/{session_id}",
    status_code=204,
    summary="Delete Chat Session",
    responses={404: {"description": "Session not found"}},
)
async def delete_session(session_id: str, assistant: AssistantDep):
    await assistant.delete_session(session_id)
