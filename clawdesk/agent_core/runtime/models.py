from __future__ import annotations

"""Dispatcher result types and LangGraph state.

- ``DispatchPath`` names the three branches of the run decision tree.
- ``DispatchResult`` is what callers of ``ExecutionDispatcher.run`` see.
- ``_DispatchState`` is the mutable state passed between LangGraph nodes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NotRequired, Optional, Required, TypedDict

from ..schemas.domain import AgentConfig, LogStatus


class DispatchPath(str, Enum):
    simulate = "simulate"
    queue_for_approval = "queue_for_approval"
    auto_execute = "auto_execute"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one agent run.

    ``path`` is None when the run failed before or while taking a branch;
    the failure is then described by ``error`` and an ``error`` log entry.
    """

    status: LogStatus
    path: Optional[DispatchPath] = None
    log_id: Optional[str] = None
    approval_id: Optional[str] = None
    error: Optional[str] = None


class _DispatchState(TypedDict):
    """Mutable LangGraph state for a single agent run.

    Required keys:

    - ``agent``: the agent being run.

    Optional keys (written by nodes):

    - ``path``: branch chosen by the classify node.
    - ``log_id`` / ``approval_id``: records written by the branch node.
    """

    agent: Required[AgentConfig]
    path: NotRequired[DispatchPath]
    log_id: NotRequired[str]
    approval_id: NotRequired[str]
