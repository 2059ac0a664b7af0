from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Sequence
from uuid import uuid4

from pydantic import Field, field_validator

from .base import BaseSchema, FrozenSchema

SYSTEM_AGENT_ID = "system"
BROWSER_TOOL = "browser"
DEFAULT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 35
ELLIPSIS = "…"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


class MessageRole(str, Enum):
    user = "user"
    assistant = "assistant"


class InferenceMode(str, Enum):
    local = "local"
    openai = "openai"
    anthropic = "anthropic"


class LogStatus(str, Enum):
    success = "success"
    error = "error"
    info = "info"


class ApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApprovalStatus.pending


class SettingKey(str, Enum):
    """The only setting keys the conversation engine reads or writes."""

    llm_provider = "llm_provider"
    llm_api_key = "llm_api_key"
    llm_model = "llm_model"


class ApprovalActionType(str, Enum):
    agent_creation = "agent_creation"
    agent_execution = "agent_execution"


class Message(FrozenSchema):
    role: MessageRole
    content: str

    def as_payload(self) -> dict[str, str]:
        """Return the ``{role, content}`` dict used by chat APIs."""
        return {"role": self.role.value, "content": self.content}


def derive_title(messages: Sequence[Message], max_len: int = TITLE_MAX_LENGTH) -> str:
    """Derive a chat title from the first user message.

    The text is trimmed and cut to ``max_len`` characters; a single ellipsis
    is appended only when something was cut off.
    """
    first = next((m for m in messages if m.role == MessageRole.user), None)
    if first is None:
        return DEFAULT_TITLE
    text = first.content.strip()
    return text[:max_len] + ELLIPSIS if len(text) > max_len else text


class Session(BaseSchema):
    id: str = Field(default_factory=_new_id)
    title: str = DEFAULT_TITLE
    messages: List[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @property
    def user_message_count(self) -> int:
        return sum(1 for m in self.messages if m.role == MessageRole.user)

    def append(self, message: Message) -> None:
        self.messages.append(message)
        self.title = derive_title(self.messages)
        self.updated_at = _utc_now()


class AgentConfig(BaseSchema):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    role: str = ""
    goal: str = ""
    tools: List[str] = Field(default_factory=list, description="Capability tags, e.g. 'browser', 'cron'")
    schedule: str = Field(default="", description="Cron expression; empty means manual runs only")
    sandbox: bool = False

    @field_validator("tools", mode="before")
    @classmethod
    def _normalize_tools(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        tags: List[str] = []
        for raw in value:
            tag = str(raw).strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    @property
    def requires_approval(self) -> bool:
        """Browser automation is the only capability gated behind human approval."""
        return BROWSER_TOOL in self.tools


class LogEntry(FrozenSchema):
    id: str = Field(default_factory=_new_id)
    agent_id: str = SYSTEM_AGENT_ID
    action: str
    status: LogStatus
    output: str = ""
    error: str = ""
    created_at: datetime = Field(default_factory=_utc_now)


class ApprovalItem(BaseSchema):
    id: str = Field(default_factory=_new_id)
    agent_id: Optional[str] = None
    action_type: str
    content_preview: str = ""
    status: ApprovalStatus = ApprovalStatus.pending
    created_at: datetime = Field(default_factory=_utc_now)
