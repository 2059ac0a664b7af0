"""
Exception Handlers for the FastAPI Application.

Domain errors raised by the assistant are mapped to client errors
(404 for unknown records, 409 for approvals that were already resolved,
422 for invalid values). Every other unhandled exception is logged with an
error id, request context and traceback, and answered with a 500 carrying
that id.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from clawdesk.agent_core.errors import ApprovalAlreadyResolvedError, RecordNotFoundError
from clawdesk.core.logging_config import get_logger

logger = get_logger(__name__)


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc), "kind": exc.kind, "id": exc.record_id})


async def already_resolved_handler(request: Request, exc: ApprovalAlreadyResolvedError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "id": exc.approval_id, "status": exc.status},
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: invalid value: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(ApprovalAlreadyResolvedError, already_resolved_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
