"""Agent runs: the execution dispatcher, approval workflow and canned reports."""

from .approvals import ApprovalWorkflow
from .dispatcher import ExecutionDispatcher, classify
from .models import DispatchPath, DispatchResult
from .outputs import AgentKind, build_preview, detect_agent_type

__all__ = [
    "AgentKind",
    "ApprovalWorkflow",
    "DispatchPath",
    "DispatchResult",
    "ExecutionDispatcher",
    "build_preview",
    "classify",
    "detect_agent_type",
]
