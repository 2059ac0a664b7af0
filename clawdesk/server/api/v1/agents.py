"""
Agents API Endpoints.

CRUD for agent configurations, one-click demo agents and agent runs. A run
is simulated: it records a log entry, or an approval item for agents with
the ``browser`` capability.
"""

from typing import List

from fastapi import APIRouter

from clawdesk.agent_core.presets import PresetKind
from clawdesk.agent_core.schedules import cron_to_text, next_run_hint
from clawdesk.agent_core.schemas.domain import AgentConfig
from clawdesk.core.logging_config import get_logger
from clawdesk.server.schemas import AgentCreate, AgentRead, RunResultRead
from clawdesk.server.services.deps import AssistantDep

logger = get_logger(__name__)
router = APIRouter()


def _read(agent: AgentConfig) -> AgentRead:
    return AgentRead(
        id=agent.id or "",
        name=agent.name,
        role=agent.role,
        goal=agent.goal,
        tools=agent.tools,
        schedule=agent.schedule,
        sandbox=agent.sandbox,
        requires_approval=agent.requires_approval,
        schedule_text=cron_to_text(agent.schedule),
        next_run=next_run_hint(agent.schedule),
    )


@router.get("", response_model=List[AgentRead], summary="List Agents")
async def list_agents(assistant: AssistantDep):
    return [_read(a) for a in await assistant.list_agents()]


@router.post("", response_model=AgentRead, status_code=201, summary="Create Agent")
async def create_agent(agent_in: AgentCreate, assistant: AssistantDep):
    agent = await assistant.create_agent(AgentConfig.model_validate(agent_in.model_dump()))
    return _read(agent)


@router.post(
    "/demo/{kind}",
    response_model=AgentRead,
    status_code=201,
    summary="Create Demo Agent",
    description="Create one of the built-in demo agents (trending or hashtag).",
)
async def create_demo_agent(kind: PresetKind, assistant: AssistantDep):
    return _read(await assistant.create_demo_agent(kind))


@router.get(
    "/{agent_id}",
    response_model=AgentRead,
    summary="Get Agent",
    responses={404: {"description": "Agent not found"}},
)
async def get_agent(agent_id: str, assistant: AssistantDep):
    return _read(await assistant.get_agent(agent_id))


@router.delete(
    "/{agent_id}",
    status_code=204,
    summary="Delete Agent",
    responses={404: {"description": "Agent not found"}},
)
async def delete_agent(agent_id: str, assistant: AssistantDep):
    await assistant.delete_agent(agent_id)


@router.post(
    "/{agent_id}/run",
    response_model=RunResultRead,
    summary="Run Agent",
    description="Run an agent once: sandbox dry-run, queue for approval, or auto-execute.",
    responses={404: {"description": "Agent not found"}},
)
async def run_agent(agent_id: str, assistant: AssistantDep):
    result = await assistant.run_agent(agent_id)
    logger.info(f"Agent {agent_id} run finished with status {result.status.value}")
    return RunResultRead(
        status=result.status,
        path=result.path,
        log_id=result.log_id,
        approval_id=result.approval_id,
        error=result.error,
    )
