"""
Chat API Endpoints.

Sends user messages to the assistant and reports the active inference mode.
A message sent while no session is active creates a new session.
"""

from fastapi import APIRouter

from clawdesk.core.logging_config import get_logger
from clawdesk.server.schemas import ChatMessageCreate, ChatReplyRead, ModeRead, TranscriptRead
from clawdesk.server.services.deps import AssistantDep

logger = get_logger(__name__)
router = APIRouter()


@router.post(
    "/messages",
    response_model=ChatReplyRead,
    summary="Send Chat Message",
    description="Run one chat turn and return the assistant reply.",
)
async def send_message(message: ChatMessageCreate, assistant: AssistantDep):
    logger.debug(f"Chat message received ({len(message.content)} chars)")
    reply = await assistant.send_message(message.content)
    return ChatReplyRead(session_id=reply.session_id, title=reply.title, reply=reply.reply)


@router.get(
    "/messages",
    response_model=TranscriptRead,
    summary="Get Transcript",
    description="Messages of the active session, or the welcome view when no session is active.",
)
async def get_transcript(assistant: AssistantDep):
    return TranscriptRead(active_session_id=assistant.sessions.active_id, messages=assistant.transcript())


@router.get(
    "/mode",
    response_model=ModeRead,
    summary="Get Inference Mode",
)
async def get_mode(assistant: AssistantDep):
    info = assistant.mode_info()
    return ModeRead(mode=info.mode, model_name=info.model_name)
