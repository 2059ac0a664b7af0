"""
Main Application Entry Point.

This module builds the FastAPI application, configures middleware (CORS),
registers exception handlers and includes all API routers. The assistant is
created in the application lifespan, or injected by the caller through
``create_app(assistant=...)``.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clawdesk import __version__
from clawdesk.agent_core.factory import build_assistant_service
from clawdesk.agent_core.service import AssistantService
from clawdesk.core.config import settings
from clawdesk.core.logging_config import get_logger, setup_logging

from .api.v1 import agents, approvals, chat, health, logs, sessions
from .api.v1 import settings as settings_api
from .core import constant
from .exception_handlers import setup_exception_handlers

# Initialize logging
setup_logging()
logger = get_logger(__name__)


def create_app(assistant: Optional[AssistantService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        assistant: A ready assistant to serve. When omitted, the lifespan
            builds one from ``settings`` and closes its resources on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan events."""
        logger.info("Starting up clawdesk server...")
        runtime = None
        if assistant is None:
            runtime = await build_assistant_service(settings)
            app.state.assistant = runtime.assistant
            logger.info(f"Assistant initialized with database {settings.database_url}")

        yield

        logger.info("Shutting down clawdesk server...")
        if runtime is not None:
            await runtime.aclose()

    app = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        clawdesk API

        Local API for the OpenClaw desktop assistant: chat with the assistant,
        manage agents and chat sessions, review the approval queue and execution
        logs, and configure the inference provider.
        """,
        version=__version__,
        openapi_url=f"{constant.API_V1_STR}/openapi.json",
        docs_url=f"{constant.API_V1_STR}/docs",
        redoc_url=f"{constant.API_V1_STR}/redoc",
        lifespan=lifespan,
    )
    if assistant is not None:
        app.state.assistant = assistant

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(chat.router, prefix=f"{constant.API_V1_STR}/chat", tags=["chat"])
    app.include_router(sessions.router, prefix=f"{constant.API_V1_STR}/sessions", tags=["sessions"])
    app.include_router(agents.router, prefix=f"{constant.API_V1_STR}/agents", tags=["agents"])
    app.include_router(approvals.router, prefix=f"{constant.API_V1_STR}/approvals", tags=["approvals"])
    app.include_router(logs.router, prefix=f"{constant.API_V1_STR}/logs", tags=["logs"])
    app.include_router(settings_api.router, prefix=f"{constant.API_V1_STR}/settings", tags=["settings"])
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.server_host, port=settings.server_port, log_level=settings.log_level.lower())
