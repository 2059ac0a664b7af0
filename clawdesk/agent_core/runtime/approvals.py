"""Human approval workflow.

Approval items move ``pending -> approved | rejected`` exactly once. The
status change is written first through the repository's compare-and-set,
and only the caller that wins that transition writes the resolution log, so
each resolution produces at most one log entry.
"""

from __future__ import annotations

import logging
from typing import List

from ..errors import ApprovalAlreadyResolvedError, ApprovalNotFoundError
from ..repos.interfaces import ApprovalRepository, LogRepository
from ..schemas.domain import SYSTEM_AGENT_ID, ApprovalItem, ApprovalStatus, LogStatus
from .dispatcher import ExecutionDispatcher

logger = logging.getLogger(__name__)

REJECTED_ACTION = "Approval rejected — action skipped"


class ApprovalWorkflow:
    def __init__(
        self,
        *,
        approvals: ApprovalRepository,
        logs: LogRepository,
        dispatcher: ExecutionDispatcher,
    ) -> None:
        self._approvals = approvals
        self._logs = logs
        self._dispatcher = dispatcher

    async def list(self) -> List[ApprovalItem]:
        return await self._approvals.list()

    async def pending(self) -> List[ApprovalItem]:
        return [item for item in await self._approvals.list() if item.status is ApprovalStatus.pending]

    async def resolve(self, approval_id: str, decision: ApprovalStatus | str) -> ApprovalItem:
        """
        Approve or reject a pending item.

        Args:
            approval_id: The approval identifier.
            decision: ``approved`` or ``rejected``.

        Returns:
            The item with its new terminal status.

        Raises:
            ValueError: If ``decision`` is not a terminal status.
            ApprovalNotFoundError: If no item has this id.
            ApprovalAlreadyResolvedError: If the item already left ``pending``,
                including when a concurrent resolution won the transition.
        """
        decision = ApprovalStatus(decision)
        if not decision.is_terminal:
            raise ValueError(f"Approval decision must be approved or rejected, got {decision.value}")

        item = await self._approvals.get(approval_id)
        if item is None:
            raise ApprovalNotFoundError(approval_id)
        if item.status.is_terminal:
            raise ApprovalAlreadyResolvedError(approval_id, item.status.value)

        if not await self._approvals.update_status(approval_id, decision):
            raise ApprovalAlreadyResolvedError(approval_id)

        agent_id = item.agent_id or SYSTEM_AGENT_ID
        if decision is ApprovalStatus.approved:
            await self._dispatcher.execute_approved(agent_id, item.content_preview)
        else:
            await self._logs.add(
                agent_id,
                REJECTED_ACTION,
                LogStatus.info,
                f"Action was reviewed and rejected by user.\nOriginal request: {item.content_preview}",
                "",
            )
        logger.info(f"Approval {approval_id} resolved as {decision.value}")
        return item.model_copy(update={"status": decision})
