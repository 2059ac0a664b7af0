from __future__ import annotations

import pytest
from pydantic import ValidationError

from clawdesk.agent_core.schemas.domain import (
    DEFAULT_TITLE,
    AgentConfig,
    ApprovalItem,
    ApprovalStatus,
    LogEntry,
    LogStatus,
    Message,
    MessageRole,
    Session,
    derive_title,
)


def _user(text: str) -> Message:
    return Message(role=MessageRole.user, content=text)


def _assistant(text: str) -> Message:
    return Message(role=MessageRole.assistant, content=text)


def test_title_defaults_without_user_message() -> None:
    assert derive_title([]) == DEFAULT_TITLE
    assert derive_title([_assistant("Welcome!")]) == "New Chat"


def test_title_uses_first_user_message_trimmed() -> None:
    messages = [_assistant("hi"), _user("  Set up OpenClaw  "), _user("second")]
    assert derive_title(messages) == "Set up OpenClaw"


def test_title_truncates_to_35_chars_with_single_ellipsis() -> None:
    text = "Create a trending agent that posts every morning"
    title = derive_title([_user(text)])
    assert title == text[:35] + "…"
    assert len(title) == 36


def test_title_of_exactly_35_chars_is_not_truncated() -> None:
    text = "x" * 35
    assert derive_title([_user(text)]) == text


def test_message_is_frozen() -> None:
    msg = _user("hello")
    with pytest.raises(ValidationError):
        msg.content = "changed"  # type: ignore[misc]


def test_session_append_updates_title_and_timestamp() -> None:
    session = Session(messages=[_assistant("welcome")])
    before = session.updated_at
    assert session.title == DEFAULT_TITLE
    assert session.user_message_count == 0

    session.append(_user("Schedule my agent daily"))

    assert session.title == "Schedule my agent daily"
    assert session.user_message_count == 1
    assert session.updated_at >= before


def test_agent_tools_accept_comma_separated_string() -> None:
    agent = AgentConfig(name="A", tools="Browser, cron,browser,,")
    assert agent.tools == ["browser", "cron"]
    assert agent.requires_approval is True


def test_agent_without_browser_does_not_require_approval() -> None:
    agent = AgentConfig(name="A", tools=["cron"])
    assert agent.requires_approval is False


def test_agent_name_is_required() -> None:
    with pytest.raises(ValidationError):
        AgentConfig(name="")


def test_approval_status_terminal_flags() -> None:
    assert ApprovalStatus.pending.is_terminal is False
    assert ApprovalStatus.approved.is_terminal is True
    assert ApprovalStatus.rejected.is_terminal is True
    assert ApprovalItem(action_type="agent_execution").status is ApprovalStatus.pending


def test_log_entry_defaults_to_system_agent() -> None:
    entry = LogEntry(action="x", status=LogStatus.info)
    assert entry.agent_id == "system"
    assert entry.output == "" and entry.error == ""
