from __future__ import annotations

"""Convenience factories for wiring the agent core.

``build_assistant`` assembles an ``AssistantService`` from a
``PersistenceGateway`` and collaborators, which is what tests use with
in-memory repositories. ``build_assistant_service`` is the default
application wiring: SQL persistence from ``Settings.database_url``, a shared
``httpx.AsyncClient`` for remote inference and the real OpenClaw CLI.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from ..core.config import Settings
from .conversation.engine import ConversationEngine
from .conversation.sessions import SessionManager
from .conversation.setup import SetupSequence
from .inference.local import LocalInference
from .inference.remote import AnthropicChatBackend, OpenAIChatBackend
from .repos.interfaces import PersistenceGateway
from .repos.sql import build_sql_gateway, create_all, create_engine, create_sessionmaker
from .runtime.approvals import ApprovalWorkflow
from .runtime.dispatcher import ExecutionDispatcher
from .schemas.domain import InferenceMode
from .service import AssistantDeps, AssistantService
from .shell.openclaw import OpenClawCli


def build_assistant(
    *,
    gateway: PersistenceGateway,
    cli: OpenClawCli,
    http_client: httpx.AsyncClient,
    settings: Settings,
    setup: Optional[SetupSequence] = None,
) -> AssistantService:
    """Wire an ``AssistantService`` around an existing gateway."""
    setup = setup or SetupSequence(logs=gateway.logs, cli=cli, config=settings.setup)
    local = LocalInference(gateway=gateway, setup=setup)
    remotes = {
        InferenceMode.openai: OpenAIChatBackend(
            client=http_client,
            base_url=settings.openai.base_url,
            model=settings.openai.model,
            timeout=settings.inference_timeout_seconds,
            history_window=settings.history_window,
        ),
        InferenceMode.anthropic: AnthropicChatBackend(
            client=http_client,
            base_url=settings.anthropic.base_url,
            model=settings.anthropic.model,
            api_version=settings.anthropic.api_version,
            timeout=settings.inference_timeout_seconds,
            history_window=settings.history_window,
        ),
    }
    engine = ConversationEngine(settings=gateway.settings, logs=gateway.logs, local=local, remotes=remotes)
    dispatcher = ExecutionDispatcher(logs=gateway.logs, approvals=gateway.approvals)
    approvals = ApprovalWorkflow(approvals=gateway.approvals, logs=gateway.logs, dispatcher=dispatcher)
    return AssistantService(
        AssistantDeps(
            gateway=gateway,
            engine=engine,
            sessions=SessionManager(gateway.sessions),
            dispatcher=dispatcher,
            approvals=approvals,
            cli=cli,
        )
    )


@dataclass
class AssistantRuntime:
    """An assistant together with the resources that must be closed on shutdown."""

    assistant: AssistantService
    db_engine: AsyncEngine
    http_client: httpx.AsyncClient

    async def aclose(self) -> None:
        self.assistant.close()
        await self.http_client.aclose()
        await self.db_engine.dispose()


async def build_assistant_service(settings: Settings) -> AssistantRuntime:
    """Create tables, wire the default collaborators and start the assistant."""
    db_engine = create_engine(settings.database_url)
    await create_all(db_engine)
    gateway = build_sql_gateway(session_factory=create_sessionmaker(db_engine))
    http_client = httpx.AsyncClient(timeout=settings.inference_timeout_seconds)
    assistant = build_assistant(
        gateway=gateway,
        cli=OpenClawCli(timeout=settings.shell_timeout_seconds),
        http_client=http_client,
        settings=settings,
    )
    await assistant.start()
    return AssistantRuntime(assistant=assistant, db_engine=db_engine, http_client=http_client)
