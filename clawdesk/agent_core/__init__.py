"""Agent core: conversation engine, execution dispatcher and approval workflow.

The outer surfaces (HTTP API, tests) talk to ``AssistantService``; the core
only depends on the repository Protocols in ``repos.interfaces``.
"""

from .factory import AssistantRuntime, build_assistant, build_assistant_service
from .service import AssistantDeps, AssistantService, ChatReply, ModeInfo

__all__ = [
    "AssistantDeps",
    "AssistantRuntime",
    "AssistantService",
    "ChatReply",
    "ModeInfo",
    "build_assistant",
    "build_assistant_service",
]
