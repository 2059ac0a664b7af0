from __future__ import annotations

import httpx
import pytest

from clawdesk.agent_core.errors import AgentNotFoundError, SessionNotFoundError
from clawdesk.agent_core.inference import prompts
from clawdesk.agent_core.runtime.models import DispatchPath
from clawdesk.agent_core.schemas.domain import (
    AgentConfig,
    ApprovalStatus,
    InferenceMode,
    LogStatus,
    MessageRole,
)
from clawdesk.agent_core.service import AssistantService

pytestmark = pytest.mark.asyncio


async def test_first_message_creates_titled_session(assistant: AssistantService) -> None:
    reply = await assistant.send_message("  help  ")

    assert reply.reply == prompts.HELP
    assert reply.title == "help"
    (session,) = assistant.list_sessions()
    assert session.id == reply.session_id
    assert [m.role for m in assistant.transcript()] == [
        MessageRole.assistant,
        MessageRole.user,
        MessageRole.assistant,
    ]


async def test_empty_message_is_rejected(assistant: AssistantService) -> None:
    with pytest.raises(ValueError):
        await assistant.send_message("   ")


async def test_chat_draft_then_confirm_creates_agent_and_approval(assistant: AssistantService, gateway) -> None:
    await assistant.send_message("Create the trending topics template")
    reply = await assistant.send_message("yes, create it")

    assert "Agent Created Successfully" in reply.reply
    (agent,) = await assistant.list_agents()
    assert agent.name == "Trending Topics Agent"
    (approval,) = await assistant.list_approvals()
    assert approval.action_type == "agent_creation"
    assert await assistant.pending_approval_count() == 1


async def test_remote_provider_reply_is_recorded(
    assistant: AssistantService, provider_replies, gateway
) -> None:
    provider_replies["/openai/v1/chat/completions"] = httpx.Response(
        200, json={"choices": [{"message": {"content": "Hi from OpenAI"}}]}
    )
    info = await assistant.switch_provider("openai", "sk-test")
    assert info.mode is InferenceMode.openai
    assert info.model_name == "gpt-4o-mini"

    reply = await assistant.send_message("hello")

    assert reply.reply == "Hi from OpenAI"


async def test_remote_outage_falls_back_to_local(assistant: AssistantService) -> None:
    await assistant.switch_provider("anthropic", "sk-test")
    reply = await assistant.send_message("status")
    assert reply.reply == prompts.STATUS


async def test_switch_to_local_reports_local_model(assistant: AssistantService, gateway) -> None:
    await assistant.switch_provider("openai", "sk-test", "gpt-4o")
    info = await assistant.switch_to_local()
    assert info.mode is InferenceMode.local
    assert info.model_name == "Phi-3 Mini (Local)"
    assert gateway.settings.values == {}


async def test_new_chat_clears_engine_history(assistant: AssistantService) -> None:
    await assistant.send_message("hello")
    assert assistant.engine.state.history

    session = await assistant.new_chat()

    assert assistant.engine.state.history == []
    assert assistant.list_sessions()[0].id == session.id


async def test_switch_and_delete_sessions(assistant: AssistantService) -> None:
    first = await assistant.send_message("one")
    await assistant.new_chat()

    switched = await assistant.switch_session(first.session_id)
    assert switched.id == first.session_id

    await assistant.delete_session(first.session_id)
    assert first.session_id not in [s.id for s in assistant.list_sessions()]
    with pytest.raises(SessionNotFoundError):
        await assistant.switch_session(first.session_id)


async def test_create_agent_logs_configuration(assistant: AssistantService, gateway) -> None:
    created = await assistant.create_agent(AgentConfig(name="Digest", goal="Summarize", tools="cron"))

    assert created.id is not None
    assert (await assistant.get_agent(created.id)).name == "Digest"
    entry = gateway.logs.entries[-1]
    assert entry.action == "Created agent: Digest"
    assert '"goal":"Summarize"' in entry.output
    assert '"id"' not in entry.output


async def test_demo_agents_use_templates(assistant: AssistantService, gateway) -> None:
    agent = await assistant.create_demo_agent("hashtag")
    assert agent.name == "Hashtag Promoter Agent"
    assert agent.schedule == "0 */1 * * *"
    assert gateway.logs.actions()[-1] == "Created demo agent: Hashtag Promoter Agent"


async def test_delete_unknown_agent_raises(assistant: AssistantService) -> None:
    with pytest.raises(AgentNotFoundError):
        await assistant.delete_agent("missing")


async def test_delete_agent_logs_info(assistant: AssistantService, gateway) -> None:
    agent = await assistant.create_agent(AgentConfig(name="Temp"))
    await assistant.delete_agent(agent.id)
    assert await assistant.list_agents() == []
    assert gateway.logs.entries[-1].status is LogStatus.info
    assert gateway.logs.actions()[-1] == "Deleted agent: Temp"


async def test_run_then_approve_demo_agent(assistant: AssistantService, gateway) -> None:
    agent = await assistant.create_demo_agent("trending")

    result = await assistant.run_agent(agent.id)
    assert result.path is DispatchPath.queue_for_approval

    pending = await assistant.list_approvals(ApprovalStatus.pending)
    assert [a.id for a in pending] == [result.approval_id]

    resolved = await assistant.resolve_approval(result.approval_id, "approved")
    assert resolved.status is ApprovalStatus.approved
    assert await assistant.pending_approval_count() == 0
    assert gateway.logs.actions()[-1] == "Approved & Executed"


async def test_list_logs_filters_by_status(assistant: AssistantService) -> None:
    agent = await assistant.create_agent(AgentConfig(name="Digest"))
    await assistant.run_agent(agent.id)
    await assistant.delete_agent(agent.id)

    info = await assistant.list_logs(status=LogStatus.info)
    assert [e.action for e in info] == ["Deleted agent: Digest"]
    assert len(await assistant.list_logs(limit=2)) == 2


async def test_run_doctor_logs_outcome(assistant: AssistantService, gateway, runner) -> None:
    result = await assistant.run_doctor()

    assert result.success is True
    assert runner.calls[-1] == ("openclaw", ["doctor"])
    entry = gateway.logs.entries[-1]
    assert entry.action == "Ran openclaw doctor"
    assert entry.status is LogStatus.success
    assert entry.output == "ok"


async def test_failed_turn_still_records_assistant_reply(assistant: AssistantService, gateway) -> None:
    await assistant.send_message("setup")
    gateway.logs.fail_next = 1

    reply = await assistant.send_message("yes")

    assert reply.reply == prompts.TURN_FAILED.format(error="log store unavailable")
    transcript = assistant.transcript()
    assert transcript[-2].role is MessageRole.user
    assert transcript[-1].role is MessageRole.assistant
    assert transcript[-1].content == reply.reply
