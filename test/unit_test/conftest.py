from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from clawdesk.agent_core.conversation.setup import SetupSequence
from clawdesk.agent_core.factory import build_assistant
from clawdesk.agent_core.repos.interfaces import PersistenceGateway
from clawdesk.agent_core.schemas.domain import (
    AgentConfig,
    ApprovalItem,
    ApprovalStatus,
    LogEntry,
    LogStatus,
    Session,
)
from clawdesk.agent_core.service import AssistantService
from clawdesk.agent_core.shell.openclaw import OpenClawCli
from clawdesk.agent_core.shell.runner import CommandResult
from clawdesk.core.config import SetupConfig, Settings


class _SettingsRepo:
    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.fail_get = False
        self.fail_delete = False

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise RuntimeError("settings store unavailable")
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value

    async def delete(self, key: str) -> None:
        if self.fail_delete:
            raise RuntimeError("settings store unavailable")
        self.values.pop(key, None)


class _AgentsRepo:
    def __init__(self) -> None:
        self.by_id: Dict[str, AgentConfig] = {}
        self.fail_create = False

    async def create(self, config: AgentConfig) -> str:
        if self.fail_create:
            raise RuntimeError("disk full")
        agent_id = str(uuid4())
        self.by_id[agent_id] = config.model_copy(update={"id": agent_id})
        return agent_id

    async def get(self, agent_id: str) -> Optional[AgentConfig]:
        return self.by_id.get(agent_id)

    async def list(self) -> List[AgentConfig]:
        return list(reversed(list(self.by_id.values())))

    async def delete(self, agent_id: str) -> None:
        self.by_id.pop(agent_id, None)


class _LogsRepo:
    def __init__(self) -> None:
        self.entries: List[LogEntry] = []
        self.fail_next = 0

    async def add(self, agent_id: str, action: str, status: LogStatus, output: str = "", error: str = "") -> str:
        if self.fail_next:
            self.fail_next -= 1
            raise RuntimeError("log store unavailable")
        entry = LogEntry(agent_id=agent_id, action=action, status=status, output=output, error=error)
        self.entries.append(entry)
        return entry.id

    async def list(self, limit: int = 100) -> List[LogEntry]:
        return list(reversed(self.entries))[:limit]

    def actions(self) -> List[str]:
        return [e.action for e in self.entries]


class _ApprovalsRepo:
    def __init__(self) -> None:
        self.by_id: Dict[str, ApprovalItem] = {}
        self.fail_add = False
        self.fail_update = False
        self.updates: List[Tuple[str, ApprovalStatus]] = []

    async def add(self, agent_id: str, action_type: str, content_preview: str) -> str:
        if self.fail_add:
            raise RuntimeError("approval store unavailable")
        item = ApprovalItem(agent_id=agent_id, action_type=action_type, content_preview=content_preview)
        self.by_id[item.id] = item
        return item.id

    async def get(self, approval_id: str) -> Optional[ApprovalItem]:
        item = self.by_id.get(approval_id)
        return item.model_copy() if item else None

    async def update_status(self, approval_id: str, status: ApprovalStatus) -> bool:
        if self.fail_update:
            raise RuntimeError("approval store unavailable")
        item = self.by_id.get(approval_id)
        if item is None or item.status is not ApprovalStatus.pending:
            return False
        item.status = status
        self.updates.append((approval_id, status))
        return True

    async def list(self) -> List[ApprovalItem]:
        return [item.model_copy() for item in reversed(list(self.by_id.values()))]


class _SessionsRepo:
    def __init__(self) -> None:
        self.by_id: Dict[str, Session] = {}
        self.saves = 0

    async def list(self) -> List[Session]:
        return [s.model_copy(deep=True) for s in self.by_id.values()]

    async def save(self, session: Session) -> None:
        self.saves += 1
        self.by_id[session.id] = session.model_copy(deep=True)

    async def delete(self, session_id: str) -> None:
        self.by_id.pop(session_id, None)


class _Runner:
    """Scripted command runner recording every invocation."""

    def __init__(self, *, success: bool = True, stdout: str = "ok", stderr: str = "") -> None:
        self.calls: List[Tuple[str, List[str]]] = []
        self.result = CommandResult(success=success, stdout=stdout, stderr=stderr, exit_code=0 if success else 1)

    async def __call__(self, program: str, args: List[str], timeout: Optional[float] = None) -> CommandResult:
        self.calls.append((program, list(args)))
        return self.result


@pytest.fixture
def gateway() -> PersistenceGateway:
    return PersistenceGateway(
        settings=_SettingsRepo(),
        agents=_AgentsRepo(),
        logs=_LogsRepo(),
        approvals=_ApprovalsRepo(),
        sessions=_SessionsRepo(),
    )


@pytest.fixture
def runner() -> _Runner:
    return _Runner()


@pytest.fixture
def cli(runner: _Runner) -> OpenClawCli:
    return OpenClawCli(runner=runner, spawner=runner)


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def setup_sequence(gateway: PersistenceGateway, cli: OpenClawCli, sleeps: List[float]) -> SetupSequence:
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return SetupSequence(logs=gateway.logs, cli=cli, config=SetupConfig(), sleep=_sleep)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        OPENAI_BASE_URL="http://mock/openai/v1",
        ANTHROPIC_BASE_URL="http://mock/anthropic/v1",
        CLAWDESK_INFERENCE_TIMEOUT=5.0,
    )


@pytest.fixture
def provider_replies() -> Dict[str, httpx.Response]:
    """Responses served by the mock provider transport, keyed by URL path."""
    return {}


@pytest_asyncio.fixture
async def http_client(provider_replies: Dict[str, httpx.Response]):
    def handler(request: httpx.Request) -> httpx.Response:
        reply = provider_replies.get(request.url.path)
        if reply is None:
            return httpx.Response(503, text="no scripted reply")
        return reply

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest_asyncio.fixture
async def assistant(
    gateway: PersistenceGateway,
    cli: OpenClawCli,
    http_client: httpx.AsyncClient,
    test_settings: Settings,
    setup_sequence: SetupSequence,
) -> AssistantService:
    svc = build_assistant(
        gateway=gateway,
        cli=cli,
        http_client=http_client,
        settings=test_settings,
        setup=setup_sequence,
    )
    await svc.start()
    yield svc
    svc.close()
