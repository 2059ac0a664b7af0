"""Domain schemas shared by the conversation engine, dispatcher and approval workflow."""

from .base import BaseSchema, FrozenSchema
from .domain import (
    AgentConfig,
    ApprovalActionType,
    ApprovalItem,
    ApprovalStatus,
    InferenceMode,
    LogEntry,
    LogStatus,
    Message,
    MessageRole,
    Session,
    SettingKey,
    derive_title,
)

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "AgentConfig",
    "ApprovalActionType",
    "ApprovalItem",
    "ApprovalStatus",
    "InferenceMode",
    "LogEntry",
    "LogStatus",
    "Message",
    "MessageRole",
    "Session",
    "SettingKey",
    "derive_title",
]
