from __future__ import annotations

"""Repository interface contracts.

The conversation engine, execution dispatcher and approval workflow depend on
these Protocols instead of concrete persistence implementations.

Contract guidelines
-------------------

- All methods are async.
- Implementations must not leak database sessions/transactions to callers.
- The log repository is append-only: entries are never edited or deleted.
- ``ApprovalRepository.update_status`` is a compare-and-set: it only moves an
  item out of ``pending`` and reports whether it did.
- Deleting an unknown key/record is a no-op.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from ..schemas.domain import (
    AgentConfig,
    ApprovalItem,
    ApprovalStatus,
    LogEntry,
    LogStatus,
    Session,
)


class SettingsRepository(Protocol):
    """Flat key/value settings store."""

    async def get(self, key: str) -> Optional[str]:
        """
        Read a setting.

        Args:
            key: Setting key.

        Returns:
            The stored value, or None when the key is absent.
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Insert or replace a setting."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a setting if present."""
        ...


class AgentRepository(Protocol):
    """Persist agent configurations."""

    async def create(self, config: AgentConfig) -> str:
        """
        Persist a new agent.

        Args:
            config: Agent configuration; its ``id`` is ignored and generated.

        Returns:
            The generated agent id.
        """
        ...

    async def get(self, agent_id: str) -> Optional[AgentConfig]:
        """Retrieve an agent by id, or None."""
        ...

    async def list(self) -> list[AgentConfig]:
        """List agents, newest first."""
        ...

    async def delete(self, agent_id: str) -> None:
        """Delete an agent if present."""
        ...


class LogRepository(Protocol):
    """Append-only execution log store."""

    async def add(
        self,
        agent_id: str,
        action: str,
        status: LogStatus,
        output: str = "",
        error: str = "",
    ) -> str:
        """
        Append a log entry.

        Args:
            agent_id: Agent the entry belongs to, or ``"system"``.
            action: Short description of what happened.
            status: success, error or info.
            output: Multi-line report text.
            error: Error text for ``error`` entries.

        Returns:
            The generated log entry id.
        """
        ...

    async def list(self, limit: int = 100) -> list[LogEntry]:
        """List the most recent entries, newest first."""
        ...


class ApprovalRepository(Protocol):
    """Store approval items and their resolution."""

    async def add(self, agent_id: str, action_type: str, content_preview: str) -> str:
        """
        Create a new ``pending`` approval item.

        Returns:
            The generated approval id.
        """
        ...

    async def get(self, approval_id: str) -> Optional[ApprovalItem]:
        """Retrieve an approval item by id, or None."""
        ...

    async def update_status(self, approval_id: str, status: ApprovalStatus) -> bool:
        """
        Move an item from ``pending`` to ``status``.

        The update only applies while the stored status is still ``pending``.

        Returns:
            True if this call performed the transition, False otherwise.
        """
        ...

    async def list(self) -> list[ApprovalItem]:
        """List all approval items, newest first."""
        ...


class SessionRepository(Protocol):
    """Persist chat sessions and their message logs."""

    async def list(self) -> list[Session]:
        """List sessions, most recently updated first."""
        ...

    async def save(self, session: Session) -> None:
        """Insert or replace a session."""
        ...

    async def delete(self, session_id: str) -> None:
        """Delete a session if present."""
        ...


@dataclass(frozen=True)
class PersistenceGateway:
    """Bundle of the repositories the core reads from and writes to."""

    settings: SettingsRepository
    agents: AgentRepository
    logs: LogRepository
    approvals: ApprovalRepository
    sessions: SessionRepository
