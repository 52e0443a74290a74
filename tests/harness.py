"""Fixture factories for unit, integration and end-to-end tests.

Settings come from the environment (or .env) exactly as in production;
only the infrastructure components are swapped for in-memory versions.
"""

import httpx
import pytest_asyncio

from fieldops.interface.api.app import create_app
from fieldops.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Fixture yielding a request-scoped container.

    Each test gets its own container, so in-memory stores start empty.

    Usage:
        # Unit tests: everything mocked
        unit_env = create_env_fixture()

        # Integration tests: real PostgreSQL, assumed to be running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_issue(unit_env):
            service = await unit_env.get(InviteService)
    """

    @pytest_asyncio.fixture
    async def _environment():
        container = build_test_container(unmock)
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _environment


def create_http_fixtures(unmock: set[Component] | None = None):
    """Fixtures for HTTP tests: an app container and a client bound to it.

    The test seeds stores through the container and calls the API with the
    client; both share one event loop.

    Usage:
        container, client = create_http_fixtures()
    """

    @pytest_asyncio.fixture
    async def _container():
        container = build_test_container(unmock)
        yield container
        await container.close()

    @pytest_asyncio.fixture
    async def _client(container):
        transport = httpx.ASGITransport(app=create_app(container))
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _container, _client
