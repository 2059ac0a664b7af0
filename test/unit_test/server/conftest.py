from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clawdesk.agent_core.service import AssistantService
from clawdesk.server.main import create_app


@pytest_asyncio.fixture
async def client(assistant: AssistantService) -> AsyncGenerator[AsyncClient, None]:
    """API client bound to an app serving the in-memory assistant."""
    app = create_app(assistant=assistant)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
