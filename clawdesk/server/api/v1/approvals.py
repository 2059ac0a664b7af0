"""
Approvals API Endpoints.

This module provides endpoints for the human approval queue. It allows
listing approval items and submitting decisions (approve/reject).
"""

from typing import Optional

from fastapi import APIRouter

from clawdesk.agent_core.schemas.domain import ApprovalItem, ApprovalStatus
from clawdesk.server.schemas import ApprovalDecisionSubmit, ApprovalList
from clawdesk.server.services.deps import AssistantDep

router = APIRouter()


@router.get(
    "",
    response_model=ApprovalList,
    summary="List Approvals",
    description="List approval items, optionally filtered by status, with the pending count.",
)
async def list_approvals(assistant: AssistantDep, status: Optional[ApprovalStatus] = None):
    items = await assistant.list_approvals(status)
    return ApprovalList(items=items, pending_count=await assistant.pending_approval_count())


@router.post(
    "/{approval_id}",
    response_model=ApprovalItem,
    summary="Submit Approval Decision",
    description="Approve or reject a pending approval item.",
    responses={
        404: {"description": "Approval not found"},
        409: {"description": "Approval already resolved"},
        422: {"description": "Decision is not approved or rejected"},
    },
)
async def submit_approval(approval_id: str, submission: ApprovalDecisionSubmit, assistant: AssistantDep):
    """
    Submit approval decision.

    Resolves a pending approval item. Approving records the simulated
    execution; rejecting records that the action was skipped.
    """
    return await assistant.resolve_approval(approval_id, submission.decision)
