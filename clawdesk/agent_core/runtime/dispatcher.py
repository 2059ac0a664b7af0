from __future__ import annotations

"""LangGraph execution dispatcher.

``ExecutionDispatcher`` decides what running an agent means and records the
outcome. All execution is simulated; the only effects are log entries and
approval items.

Decision tree
-------------

- ``sandbox`` agents are simulated: a dry-run report is logged as
  ``success`` with the ``[SANDBOX]`` action prefix.
- Agents with the ``browser`` capability are gated: a ``pending``
  ``agent_execution`` approval item is created together with an ``info``
  log entry, and nothing is executed until the item is approved.
- Every other agent is auto-executed and logged as ``success``.

Any exception raised while running is turned into an ``error`` log entry and
never propagates to the caller.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from langgraph.graph import END, StateGraph

from ..repos.interfaces import ApprovalRepository, LogRepository
from ..schemas.domain import SYSTEM_AGENT_ID, AgentConfig, ApprovalActionType, LogStatus
from .models import DispatchPath, DispatchResult, _DispatchState
from .outputs import (
    build_approved_output,
    build_auto_execute_output,
    build_preview,
    build_sandbox_output,
)

logger = logging.getLogger(__name__)

QUEUED_OUTPUT = "Action submitted to approval queue. Go to Logs → Approvals tab to review."


def classify(agent: AgentConfig) -> DispatchPath:
    """Pick the branch for ``agent``; sandbox wins over approval gating."""
    if agent.sandbox:
        return DispatchPath.simulate
    if agent.requires_approval:
        return DispatchPath.queue_for_approval
    return DispatchPath.auto_execute


class ExecutionDispatcher:
    def __init__(
        self,
        *,
        logs: LogRepository,
        approvals: ApprovalRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._logs = logs
        self._approvals = approvals
        self._clock = clock
        self._graph = self._build_graph()

    def _build_graph(self):
        """Build and compile the LangGraph state machine."""
        g: StateGraph = StateGraph(_DispatchState)
        g.add_node("classify", self._node_classify)
        g.add_node(DispatchPath.simulate.value, self._node_simulate)
        g.add_node(DispatchPath.queue_for_approval.value, self._node_queue_for_approval)
        g.add_node(DispatchPath.auto_execute.value, self._node_auto_execute)

        g.set_entry_point("classify")
        g.add_conditional_edges(
            "classify",
            self._route_after_classify,
            {path.value: path.value for path in DispatchPath},
        )
        for path in DispatchPath:
            g.add_edge(path.value, END)
        return g.compile()

    async def run(self, agent: AgentConfig) -> DispatchResult:
        """Run ``agent`` once and return what was recorded."""
        agent_id = agent.id or SYSTEM_AGENT_ID
        logger.info(f"Running agent {agent_id}: {agent.name}")
        try:
            state = await self._graph.ainvoke({"agent": agent})
        except Exception as e:
            logger.warning(f"Agent run failed for {agent_id} ({agent.name}): {e}")
            log_id = await self._record_failure(agent_id, agent.name, e)
            return DispatchResult(status=LogStatus.error, log_id=log_id, error=str(e))

        path = DispatchPath(state["path"])
        status = LogStatus.info if path is DispatchPath.queue_for_approval else LogStatus.success
        return DispatchResult(
            status=status,
            path=path,
            log_id=state.get("log_id"),
            approval_id=state.get("approval_id"),
        )

    async def execute_approved(self, agent_id: Optional[str], preview: str) -> str:
        """Record the execution of an approved item; returns the log id."""
        output = build_approved_output(preview, self._clock())
        return await self._logs.add(agent_id or SYSTEM_AGENT_ID, "Approved & Executed", LogStatus.success, output, "")

    async def _record_failure(self, agent_id: str, name: str, error: Exception) -> Optional[str]:
        try:
            return await self._logs.add(agent_id, f"Error running: {name}", LogStatus.error, "", str(error))
        except Exception as log_error:
            logger.error(f"Could not record failed run of {agent_id}: {log_error}")
            return None

    async def _node_classify(self, state: _DispatchState) -> _DispatchState:
        state["path"] = classify(state["agent"])
        return state

    async def _node_simulate(self, state: _DispatchState) -> _DispatchState:
        agent = state["agent"]
        state["log_id"] = await self._logs.add(
            agent.id or SYSTEM_AGENT_ID,
            f"[SANDBOX] Dry-run: {agent.name}",
            LogStatus.success,
            build_sandbox_output(agent.name, agent.goal, self._clock()),
            "",
        )
        return state

    async def _node_queue_for_approval(self, state: _DispatchState) -> _DispatchState:
        agent = state["agent"]
        agent_id = agent.id or SYSTEM_AGENT_ID
        state["approval_id"] = await self._approvals.add(
            agent_id,
            ApprovalActionType.agent_execution.value,
            build_preview(agent),
        )
        state["log_id"] = await self._logs.add(
            agent_id,
            f"Queued for approval: {agent.name}",
            LogStatus.info,
            QUEUED_OUTPUT,
            "",
        )
        logger.info(f"Queued agent {agent_id} for approval ({state['approval_id']})")
        return state

    async def _node_auto_execute(self, state: _DispatchState) -> _DispatchState:
        agent = state["agent"]
        state["log_id"] = await self._logs.add(
            agent.id or SYSTEM_AGENT_ID,
            f"Executed: {agent.name}",
            LogStatus.success,
            build_auto_execute_output(agent, self._clock()),
            "",
        )
        return state

    def _route_after_classify(self, state: _DispatchState) -> str:
        return DispatchPath(state["path"]).value
