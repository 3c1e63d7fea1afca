"""Shared pytest fixtures for GenesisDB client tests."""

import httpx
import pytest
from httpx import ASGITransport

from genesisdb import Client, ClientConfig
from tests.fake_server import create_app


@pytest.fixture
def config():
    """Configuration pointing at the fake server."""
    return ClientConfig(api_url="http://genesisdb.test", api_version="v1", auth_token="test-token")


@pytest.fixture
def fake_app():
    """Fresh in-memory GenesisDB stand-in."""
    return create_app(auth_token="test-token")


@pytest.fixture
async def client(config, fake_app):
    """Client wired to the fake server through ASGITransport."""
    async with httpx.AsyncClient(transport=ASGITransport(app=fake_app)) as http:
        yield Client(config, http_client=http)


@pytest.fixture
async def mock_client(config):
    """Factory: Client whose requests go to a MockTransport handler."""
    http_clients: list[httpx.AsyncClient] = []

    def factory(handler) -> Client:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http)
        return Client(config, http_client=http)

    yield factory
    for http in http_clients:
        await http.aclose()
