"""
Execution Logs API Endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from clawdesk.agent_core.schemas.domain import LogEntry, LogStatus
from clawdesk.server.services.deps import AssistantDep

router = APIRouter()


@router.get(
    "",
    response_model=List[LogEntry],
    summary="List Execution Logs",
    description="Most recent log entries first, optionally filtered by status.",
)
async def list_logs(
    assistant: AssistantDep,
    limit: int = Query(default=100, ge=1, le=1000),
    status: Optional[LogStatus] = None,
):
    return await assistant.list_logs(limit=limit, status=status)
