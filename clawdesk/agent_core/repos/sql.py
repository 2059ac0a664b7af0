from __future__ import annotations

"""SQLAlchemy async repository implementations.

This module provides a SQL-backed persistence implementation for the
repository interfaces defined in ``clawdesk.agent_core.repos.interfaces``.

Usage
-----

Typical wiring (tests or application setup):

- Create an async engine with ``create_engine``.
- Create tables with ``create_all``.
- Create a session factory with ``create_sessionmaker``.
- Build the gateway with ``build_sql_gateway``.

Transaction model
-----------------

Each repository method opens an ``AsyncSession``, performs its operation, and
commits. Approval resolution is a single conditional ``UPDATE`` so two
concurrent resolutions of the same item cannot both succeed.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..schemas.domain import (
    AgentConfig,
    ApprovalItem,
    ApprovalStatus,
    LogEntry,
    LogStatus,
    Message,
    Session,
)
from .interfaces import (
    AgentRepository,
    ApprovalRepository,
    LogRepository,
    PersistenceGateway,
    SessionRepository,
    SettingsRepository,
)
from .models import AgentRow, ApprovalRow, Base, ChatSessionRow, ExecutionLogRow, SettingRow


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    SQLite URLs are normalized to the ``aiosqlite`` driver so a plain
    ``sqlite:///clawdesk.db`` from the environment works unchanged.
    """
    url = re.sub(r"^sqlite(?:\+[a-z0-9_]+)?://", "sqlite+aiosqlite://", db_url, count=1)
    return create_async_engine(url)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _agent_from_row(row: AgentRow) -> AgentConfig:
    return AgentConfig(
        id=row.id,
        name=row.name,
        role=row.role,
        goal=row.goal,
        tools=list(row.tools or []),
        schedule=row.schedule,
        sandbox=row.sandbox,
    )


def _approval_from_row(row: ApprovalRow) -> ApprovalItem:
    return ApprovalItem(
        id=row.id,
        agent_id=row.agent_id,
        action_type=row.action_type,
        content_preview=row.content_preview,
        status=ApprovalStatus(row.status),
        created_at=row.created_at,
    )


@dataclass(frozen=True)
class SqlSettingsRepository(SettingsRepository):
    """SQL implementation of ``SettingsRepository``."""

    session_factory: async_sessionmaker[AsyncSession]

    async def get(self, key: str) -> Optional[str]:
        async with self.session_factory() as s:
            row = await s.get(SettingRow, key)
            return row.value if row is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self.session_factory() as s:
            await s.merge(SettingRow(key=key, value=value))
            await s.commit()

    async def delete(self, key: str) -> None:
        async with self.session_factory() as s:
            await s.execute(delete(SettingRow).where(SettingRow.key == key))
            await s.commit()


@dataclass(frozen=True)
class SqlAgentRepository(AgentRepository):
    """SQL implementation of ``AgentRepository``."""

    session_factory: async_sessionmaker[AsyncSession]

    async def create(self, config: AgentConfig) -> str:
        """
        Persist a new agent record.

        Args:
            config: The agent configuration to insert.

        Returns:
            The generated agent id.
        """
        agent_id = _new_id()
        async with self.session_factory() as s:
            s.add(
                AgentRow(
                    id=agent_id,
                    name=config.name,
                    role=config.role,
                    goal=config.goal,
                    tools=list(config.tools),
                    schedule=config.schedule,
                    sandbox=config.sandbox,
                    created_at=_utc_now(),
                )
            )
            await s.commit()
        return agent_id

    async def get(self, agent_id: str) -> Optional[AgentConfig]:
        async with self.session_factory() as s:
            row = await s.get(AgentRow, agent_id)
            return _agent_from_row(row) if row is not None else None

    async def list(self) -> list[AgentConfig]:
        async with self.session_factory() as s:
            result = await s.execute(select(AgentRow).order_by(AgentRow.created_at.desc()))
            return [_agent_from_row(row) for row in result.scalars().all()]

    async def delete(self, agent_id: str) -> None:
        async with self.session_factory() as s:
            await s.execute(delete(AgentRow).where(AgentRow.id == agent_id))
            await s.commit()


@dataclass(frozen=True)
class SqlLogRepository(LogRepository):
    """SQL implementation of ``LogRepository`` (append-only)."""

    session_factory: async_sessionmaker[AsyncSession]

    async def add(
        self,
        agent_id: str,
        action: str,
        status: LogStatus,
        output: str = "",
        error: str = "",
    ) -> str:
        """
        Append a new log entry to the store.

        Returns:
            The generated log entry id.
        """
        entry = LogEntry(agent_id=agent_id, action=action, status=status, output=output or "", error=error or "")
        async with self.session_factory() as s:
            s.add(
                ExecutionLogRow(
                    id=entry.id,
                    agent_id=entry.agent_id,
                    action=entry.action,
                    status=entry.status.value,
                    output=entry.output,
                    error=entry.error,
                    created_at=entry.created_at,
                )
            )
            await s.commit()
        return entry.id

    async def list(self, limit: int = 100) -> list[LogEntry]:
        async with self.session_factory() as s:
            stmt = select(ExecutionLogRow).order_by(ExecutionLogRow.created_at.desc()).limit(limit)
            result = await s.execute(stmt)
            return [
                LogEntry(
                    id=row.id,
                    agent_id=row.agent_id,
                    action=row.action,
                    status=LogStatus(row.status),
                    output=row.output,
                    error=row.error,
                    created_at=row.created_at,
                )
                for row in result.scalars().all()
            ]


@dataclass(frozen=True)
class SqlApprovalRepository(ApprovalRepository):
    """SQL implementation of ``ApprovalRepository``."""

    session_factory: async_sessionmaker[AsyncSession]

    async def add(self, agent_id: str, action_type: str, content_preview: str) -> str:
        """
        Create a new pending approval record.

        Returns:
            The generated approval id.
        """
        item = ApprovalItem(agent_id=agent_id, action_type=action_type, content_preview=content_preview)
        async with self.session_factory() as s:
            s.add(
                ApprovalRow(
                    id=item.id,
                    agent_id=item.agent_id,
                    action_type=item.action_type,
                    content_preview=item.content_preview,
                    status=item.status.value,
                    created_at=item.created_at,
                )
            )
            await s.commit()
        return item.id

    async def get(self, approval_id: str) -> Optional[ApprovalItem]:
        async with self.session_factory() as s:
            row = await s.get(ApprovalRow, approval_id)
            return _approval_from_row(row) if row is not None else None

    async def update_status(self, approval_id: str, status: ApprovalStatus) -> bool:
        """
        Resolve a pending approval with a single conditional UPDATE.

        Args:
            approval_id: The approval identifier.
            status: The terminal status to store.

        Returns:
            True if the row was still pending and is now resolved.
        """
        async with self.session_factory() as s:
            stmt = (
                update(ApprovalRow)
                .where(ApprovalRow.id == approval_id, ApprovalRow.status == ApprovalStatus.pending.value)
                .values(status=status.value, resolved_at=_utc_now())
            )
            result = await s.execute(stmt)
            await s.commit()
            return result.rowcount == 1

    async def list(self) -> list[ApprovalItem]:
        async with self.session_factory() as s:
            result = await s.execute(select(ApprovalRow).order_by(ApprovalRow.created_at.desc()))
            return [_approval_from_row(row) for row in result.scalars().all()]


@dataclass(frozen=True)
class SqlSessionRepository(SessionRepository):
    """SQL implementation of ``SessionRepository``."""

    session_factory: async_sessionmaker[AsyncSession]

    async def list(self) -> list[Session]:
        async with self.session_factory() as s:
            result = await s.execute(select(ChatSessionRow).order_by(ChatSessionRow.updated_at.desc()))
            return [
                Session(
                    id=row.id,
                    title=row.title,
                    messages=[Message.model_validate(m) for m in row.messages or []],
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                )
                for row in result.scalars().all()
            ]

    async def save(self, session: Session) -> None:
        async with self.session_factory() as s:
            await s.merge(
                ChatSessionRow(
                    id=session.id,
                    title=session.title,
                    messages=[m.as_payload() for m in session.messages],
                    created_at=session.created_at,
                    updated_at=session.updated_at,
                )
            )
            await s.commit()

    async def delete(self, session_id: str) -> None:
        async with self.session_factory() as s:
            await s.execute(delete(ChatSessionRow).where(ChatSessionRow.id == session_id))
            await s.commit()


def build_sql_gateway(*, session_factory: async_sessionmaker[AsyncSession]) -> PersistenceGateway:
    """Build a ``PersistenceGateway`` whose repositories share ``session_factory``."""
    return PersistenceGateway(
        settings=SqlSettingsRepository(session_factory),
        agents=SqlAgentRepository(session_factory),
        logs=SqlLogRepository(session_factory),
        approvals=SqlApprovalRepository(session_factory),
        sessions=SqlSessionRepository(session_factory),
    )
