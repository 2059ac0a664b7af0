"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the client and the server.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from clawdesk.agent_core.runtime.models import DispatchPath
from clawdesk.agent_core.schemas.domain import (
    ApprovalItem,
    ApprovalStatus,
    InferenceMode,
    LogStatus,
    Message,
)


class ChatMessageCreate(BaseModel):
    """Schema for sending a chat message to the assistant."""

    content: str = Field(
        ...,
        min_length=1,
        description="The user's message.",
        examples=["Create a trending agent"],
    )


class ChatReplyRead(BaseModel):
    """The assistant's reply to one chat turn."""

    session_id: str = Field(..., description="The session the turn was recorded in.")
    title: str = Field(..., description="The session title after this turn.")
    reply: str = Field(..., description="The assistant reply text.")


class ModeRead(BaseModel):
    """Active inference mode and model display name."""

    mode: InferenceMode
    model_name: str


class SessionSummary(BaseModel):
    """Chat session without its messages."""

    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    active: bool = False


class SessionRead(SessionSummary):
    messages: List[Message] = Field(default_factory=list)


class TranscriptRead(BaseModel):
    """The active session id (if any) and the transcript shown to the user."""

    active_session_id: Optional[str] = None
    messages: List[Message]


class AgentCreate(BaseModel):
    """
    Schema for creating an agent from the form.

    ``tools`` accepts a list or a comma-separated string such as ``"browser,cron"``.
    """

    name: str = Field(..., min_length=1, examples=["Trending Topics Agent"])
    role: str = Field(default="", examples=["Content Creator"])
    goal: str = Field(default="", examples=["Search trending OpenClaw topics, write LinkedIn post"])
    tools: List[str] | str = Field(default_factory=list, examples=["browser,cron"])
    schedule: str = Field(default="", description="Cron expression.", examples=["0 9 * * *"])
    sandbox: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Trending Topics Agent",
                "role": "Content Creator",
                "goal": "Search trending OpenClaw topics, write LinkedIn post",
                "tools": "browser,cron",
                "schedule": "0 9 * * *",
                "sandbox": False,
            }
        }
    )


class AgentRead(BaseModel):
    id: str
    name: str
    role: str
    goal: str
    tools: List[str]
    schedule: str
    sandbox: bool
    requires_approval: bool
    schedule_text: str = Field(..., description="Preset label for the schedule, or the raw expression.")
    next_run: str = Field(..., description="Rough next-run hint for the schedule.")


class RunResultRead(BaseModel):
    """What an agent run recorded."""

    status: LogStatus
    path: Optional[DispatchPath] = None
    log_id: Optional[str] = None
    approval_id: Optional[str] = None
    error: Optional[str] = None


class ApprovalDecisionSubmit(BaseModel):
    decision: ApprovalStatus = Field(..., description="approved or rejected", examples=[ApprovalStatus.approved])


class ApprovalList(BaseModel):
    items: List[ApprovalItem]
    pending_count: int


class LLMSettingsUpdate(BaseModel):
    """Select a hosted provider for the assistant."""

    provider: InferenceMode = Field(..., examples=[InferenceMode.openai])
    api_key: str = Field(default="", description="Provider API key; ignored for local.")
    model: Optional[str] = Field(default=None, examples=["gpt-4o-mini"])


class DoctorRead(BaseModel):
    success: bool
    output: str
    stdout: str
    stderr: str
    exit_code: int
