"""Error types raised by the agent core.

Purpose:
- Provide typed exceptions for the few failures that callers must be able to
  tell apart (unknown records, terminal approvals, remote inference errors).
- Expose HTTP-oriented context (status code, response body) for remote
  inference failures so they can be logged before being absorbed.

Usage:
- ``InferenceError`` never reaches the user: the conversation engine catches
  it and falls back to local inference.
- The lookup errors are raised by the application service and mapped to
  HTTP status codes by the server.
"""

from __future__ import annotations

from typing import Any, Optional


class ClawdeskError(Exception):
    """Base error for all clawdesk failures."""


class InferenceError(ClawdeskError):
    """A remote inference call failed.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code when the provider answered with non-2xx.
        details: Response body text or the underlying transport error.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class RecordNotFoundError(ClawdeskError):
    """Raised when a record referenced by id does not exist."""

    kind = "record"

    def __init__(self, record_id: str) -> None:
        super().__init__(f"{self.kind} not found: {record_id}")
        self.record_id = record_id


class AgentNotFoundError(RecordNotFoundError):
    kind = "agent"


class SessionNotFoundError(RecordNotFoundError):
    kind = "session"


class ApprovalNotFoundError(RecordNotFoundError):
    kind = "approval"


class ApprovalAlreadyResolvedError(ClawdeskError):
    """Raised when resolving an approval that already left ``pending``.

    Args:
        approval_id: The approval identifier.
        status: The terminal status the item currently holds, when known.
    """

    def __init__(self, approval_id: str, status: Optional[str] = None) -> None:
        suffix = f" ({status})" if status else ""
        super().__init__(f"approval already resolved: {approval_id}{suffix}")
        self.approval_id = approval_id
        self.status = status
