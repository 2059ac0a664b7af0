"""
Assistant Dependency.

Provides the application's ``AssistantService`` to API endpoints. The service
is created by the application lifespan (or injected by tests) and stored on
``app.state``.
"""

from typing import Annotated

from fastapi import Depends, Request

from clawdesk.agent_core.service import AssistantService


def get_assistant(request: Request) -> AssistantService:
    return request.app.state.assistant


AssistantDep = Annotated[AssistantService, Depends(get_assistant)]
