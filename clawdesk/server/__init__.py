"""
clawdesk Server Package.

This package exposes the assistant over a local HTTP API, replacing the
desktop panels with endpoints for chat, sessions, agents, logs, approvals
and LLM settings.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Server constants.
    exception_handlers: Mapping of domain errors and unexpected failures to responses.
    schemas: Pydantic schemas for API request/response validation.
    services: Dependency providers for endpoints.
"""
