"""
LLM Settings API Endpoints.

Selects the inference provider, returns to the local rule table, and runs the
``openclaw doctor`` diagnostic.
"""

from fastapi import APIRouter

from clawdesk.agent_core.schemas.domain import InferenceMode
from clawdesk.server.schemas import DoctorRead, LLMSettingsUpdate, ModeRead
from clawdesk.server.services.deps import AssistantDep

router = APIRouter()


@router.get("/llm", response_model=ModeRead, summary="Get LLM Settings")
async def get_llm_settings(assistant: AssistantDep):
    info = assistant.mode_info()
    return ModeRead(mode=info.mode, model_name=info.model_name)


@router.put(
    "/llm",
    response_model=ModeRead,
    summary="Update LLM Settings",
    description="Switch to a hosted provider (requires an API key) or back to local inference.",
    responses={422: {"description": "Missing API key for a hosted provider"}},
)
async def update_llm_settings(update: LLMSettingsUpdate, assistant: AssistantDep):
    if update.provider is InferenceMode.local:
        info = await assistant.switch_to_local()
    else:
        info = await assistant.switch_provider(update.provider, update.api_key, update.model or None)
    return ModeRead(mode=info.mode, model_name=info.model_name)


@router.delete("/llm", response_model=ModeRead, summary="Use Local Model")
async def reset_llm_settings(assistant: AssistantDep):
    info = await assistant.switch_to_local()
    return ModeRead(mode=info.mode, model_name=info.model_name)


@router.post(
    "/doctor",
    response_model=DoctorRead,
    summary="Run OpenClaw Doctor",
    description="Run `openclaw doctor` and record the outcome in the execution log.",
)
async def run_doctor(assistant: AssistantDep):
    result = await assistant.run_doctor()
    return DoctorRead(
        success=result.success,
        output=result.stdout or result.stderr or "No output",
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.exit_code,
    )
