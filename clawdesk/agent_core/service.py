from __future__ import annotations

"""Application service for the assistant.

``AssistantService`` is the single context object the outer surfaces talk
to. It owns no decision logic of its own: chat turns go to the
``ConversationEngine``, agent runs to the ``ExecutionDispatcher`` and
approval decisions to the ``ApprovalWorkflow``. What it adds is the
bookkeeping around them:

- chat sessions (recording both sides of a turn, new/switch/delete),
- the agent form path (create, demo presets, delete) with its audit logs,
- log and approval listings with status filters,
- the ``openclaw doctor`` diagnostic.

A full chat turn (session bookkeeping plus engine) is serialized by the
service's own ``asyncio.Lock``.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from .conversation.engine import ConversationEngine
from .conversation.sessions import SessionManager
from .errors import AgentNotFoundError
from .presets import PresetKind, preset
from .repos.interfaces import PersistenceGateway
from .runtime.approvals import ApprovalWorkflow
from .runtime.dispatcher import ExecutionDispatcher
from .runtime.models import DispatchResult
from .schemas.domain import (
    SYSTEM_AGENT_ID,
    AgentConfig,
    ApprovalItem,
    ApprovalStatus,
    InferenceMode,
    LogEntry,
    LogStatus,
    Message,
    MessageRole,
    Session,
)
from .shell.openclaw import OpenClawCli
from .shell.runner import CommandResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssistantDeps:
    """Dependency bundle for ``AssistantService``."""

    gateway: PersistenceGateway
    engine: ConversationEngine
    sessions: SessionManager
    dispatcher: ExecutionDispatcher
    approvals: ApprovalWorkflow
    cli: OpenClawCli


@dataclass(frozen=True)
class ChatReply:
    session_id: str
    title: str
    reply: str


@dataclass(frozen=True)
class ModeInfo:
    mode: InferenceMode
    model_name: str


class AssistantService:
    def __init__(self, deps: AssistantDeps) -> None:
        self._deps = deps
        self._turn_lock = asyncio.Lock()
        self._unsubscribe = deps.sessions.subscribe(deps.engine.handle_session_event)

    @property
    def engine(self) -> ConversationEngine:
        return self._deps.engine

    @property
    def sessions(self) -> SessionManager:
        return self._deps.sessions

    async def start(self) -> None:
        """Restore the provider selection and the saved chat sessions."""
        await self._deps.engine.initialize()
        await self._deps.sessions.load()
        logger.info(f"Assistant ready (mode={self._deps.engine.get_mode().value})")

    def close(self) -> None:
        self._unsubscribe()

    # Chat

    async def send_message(self, text: str) -> ChatReply:
        """Run one chat turn, creating a session for the first message if needed."""
        text = text.strip()
        if not text:
            raise ValueError("Message must not be empty")
        async with self._turn_lock:
            await self._deps.sessions.record(Message(role=MessageRole.user, content=text))
            reply = await self._deps.engine.send_message(text)
            session = await self._deps.sessions.record(Message(role=MessageRole.assistant, content=reply))
        return ChatReply(session_id=session.id, title=session.title, reply=reply)

    def transcript(self) -> List[Message]:
        return self._deps.sessions.messages

    def list_sessions(self) -> List[Session]:
        return self._deps.sessions.list()

    async def new_chat(self) -> Session:
        async with self._turn_lock:
            return await self._deps.sessions.new_chat()

    async def switch_session(self, session_id: str) -> Session:
        async with self._turn_lock:
            return await self._deps.sessions.switch(session_id)

    async def delete_session(self, session_id: str) -> None:
        async with self._turn_lock:
            await self._deps.sessions.delete(session_id)

    # Agents

    async def list_agents(self) -> List[AgentConfig]:
        return await self._deps.gateway.agents.list()

    async def get_agent(self, agent_id: str) -> AgentConfig:
        agent = await self._deps.gateway.agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    async def create_agent(self, config: AgentConfig) -> AgentConfig:
        return await self._create(config, f"Created agent: {config.name}")

    async def create_demo_agent(self, kind: PresetKind | str) -> AgentConfig:
        config = preset(PresetKind(kind))
        return await self._create(config, f"Created demo agent: {config.name}")

    async def _create(self, config: AgentConfig, action: str) -> AgentConfig:
        agent_id = await self._deps.gateway.agents.create(config)
        await self._deps.gateway.logs.add(
            SYSTEM_AGENT_ID,
            action,
            LogStatus.success,
            config.model_dump_json(exclude={"id"}),
            "",
        )
        logger.info(f"{action} ({agent_id})")
        return config.model_copy(update={"id": agent_id})

    async def delete_agent(self, agent_id: str) -> None:
        agent = await self.get_agent(agent_id)
        await self._deps.gateway.agents.delete(agent_id)
        await self._deps.gateway.logs.add(SYSTEM_AGENT_ID, f"Deleted agent: {agent.name}", LogStatus.info, "", "")

    async def run_agent(self, agent_id: str) -> DispatchResult:
        agent = await self.get_agent(agent_id)
        return await self._deps.dispatcher.run(agent)

    # Approvals and logs

    async def list_approvals(self, status: Optional[ApprovalStatus] = None) -> List[ApprovalItem]:
        items = await self._deps.approvals.list()
        if status is None:
            return items
        return [item for item in items if item.status is ApprovalStatus(status)]

    async def pending_approval_count(self) -> int:
        return len(await self._deps.approvals.pending())

    async def resolve_approval(self, approval_id: str, decision: ApprovalStatus | str) -> ApprovalItem:
        return await self._deps.approvals.resolve(approval_id, decision)

    async def list_logs(self, limit: int = 100, status: Optional[LogStatus] = None) -> List[LogEntry]:
        entries = await self._deps.gateway.logs.list(limit)
        if status is None:
            return entries
        return [entry for entry in entries if entry.status is LogStatus(status)]

    # LLM settings and diagnostics

    def mode_info(self) -> ModeInfo:
        return ModeInfo(mode=self._deps.engine.get_mode(), model_name=self._deps.engine.model_name)

    async def switch_provider(self, provider: InferenceMode | str, api_key: str, model: Optional[str] = None) -> ModeInfo:
        await self._deps.engine.switch_provider(provider, api_key, model)
        return self.mode_info()

    async def switch_to_local(self) -> ModeInfo:
        await self._deps.engine.switch_to_local()
        return self.mode_info()

    async def run_doctor(self) -> CommandResult:
        """Run ``openclaw doctor`` and log its outcome."""
        result = await self._deps.cli.doctor()
        await self._deps.gateway.logs.add(
            SYSTEM_AGENT_ID,
            "Ran openclaw doctor",
            LogStatus.success if result.success else LogStatus.error,
            result.stdout,
            result.stderr,
        )
        return result
