"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_service: Builds a real AgentService around fake Agno agents
    - service: Default service streaming a short two-fragment reply
    - async_client: HTTPX client wired to the app, using ``service``
"""

from collections.abc import AsyncGenerator, Iterator
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from brandchat.agent.chat_agent import AgentService, get_agent_service
from brandchat.agent.config import AgentConfig
from brandchat.api import app
from tests.fakes import FakeRunAgent, ServiceFactory


@pytest.fixture
def make_service() -> ServiceFactory:
    """Return a factory for services whose agents are fakes.

    Returns:
        Callable accepting ``chat_agent``, ``suggest_agent``, ``api_key``
        and ``timeout`` keyword arguments.
    """

    def factory(
        chat_agent: FakeRunAgent | None = None,
        suggest_agent: FakeRunAgent | None = None,
        api_key: str = "test-key-1234567890",
        timeout: float = 5.0,
    ) -> AgentService:
        config = AgentConfig(
            provider="gemini",
            api_key=api_key,
            model_name="gemini-2.0-flash",
            timeout=timeout,
        )
        with (
            patch("brandchat.agent.chat_agent.Agent"),
            patch("brandchat.agent.chat_agent.Gemini"),
        ):
            service = AgentService(config=config)
        service._chat_agent = chat_agent or FakeRunAgent(fragments=["Hello", " world"])
        service._suggest_agent = suggest_agent or FakeRunAgent(reply="[]")
        return service

    return factory


@pytest.fixture
def service(make_service: ServiceFactory) -> AgentService:
    """Default service used by ``async_client``."""
    return make_service()


@pytest.fixture
def override_service(service: AgentService) -> Iterator[AgentService]:
    """Serve ``service`` from the app's dependency."""
    app.dependency_overrides[get_agent_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(override_service: AgentService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
