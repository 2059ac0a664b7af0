from __future__ import annotations

"""SQLAlchemy ORM models for clawdesk persistence.

These ORM models define the SQL schema used by the SQL repository
implementation in ``clawdesk.agent_core.repos.sql``.

Design
------

- Agents hold the user-defined automation configuration.
- Execution logs form an append-only audit timeline.
- The approval queue holds actions awaiting a human decision.
- Settings are a flat key/value table.
- Chat sessions store their message list as JSON.

Table names are prefixed with ``cd_`` to avoid collisions in shared databases.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class AgentRow(Base):
    """Row model for ``cd_agents``.

    ``tools`` is stored as a JSON list of capability tags.
    """

    __tablename__ = "cd_agents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(255), default="")
    goal: Mapped[str] = mapped_column(Text, default="")
    tools: Mapped[List[str]] = mapped_column(JSON, default=list)
    schedule: Mapped[str] = mapped_column(String(128), default="")
    sandbox: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class ExecutionLogRow(Base):
    """Row model for ``cd_execution_logs`` (append-only)."""

    __tablename__ = "cd_execution_logs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    agent_id: Mapped[str] = mapped_column(String(64), index=True)
    action: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(16), index=True)
    output: Mapped[str] = mapped_column(Text, default="")
    error: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)


class SettingRow(Base):
    """Row model for ``cd_settings``."""

    __tablename__ = "cd_settings"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text)


class ApprovalRow(Base):
    """Row model for ``cd_approval_queue``.

    ``status`` only ever moves from ``pending`` to ``approved``/``rejected``;
    ``resolved_at`` is set by that single transition.
    """

    __tablename__ = "cd_approval_queue"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    agent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    action_type: Mapped[str] = mapped_column(String(64))
    content_preview: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(16), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class ChatSessionRow(Base):
    """Row model for ``cd_chat_sessions``.

    ``messages`` is a JSON list of ``{role, content}`` objects in order.
    """

    __tablename__ = "cd_chat_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    messages: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
