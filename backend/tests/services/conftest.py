"""Service test fixtures — in-memory provenance services + FastAPI test client.

Invariants:
    - Every test gets fresh stores, a fresh event bus and a fresh access policy
    - get_services dependency overridden so routes see the test's service graph

Design Decisions:
    - Services built through build_services(): the same wiring path as startup,
      only the Settings object differs per test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from proofpot.core.domain_types import AccessMode
from proofpot.main import app
from proofpot.services.provenance_context import build_services, get_services
from tests.services.provenance_fixtures import make_settings


@pytest.fixture
def services():
    return build_services(make_settings())


@pytest.fixture
def open_services():
    return build_services(make_settings(
        access_mode=AccessMode.OPEN, administrator_address=None,
    ))


async def _client_for(provenance):
    app.dependency_overrides[get_services] = lambda: provenance
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def client(services):
    """FastAPI test client bound to the owner-gated service graph."""
    async for ac in _client_for(services):
        yield ac


@pytest.fixture
async def open_client(open_services):
    """FastAPI test client bound to the open-access service graph."""
    async for ac in _client_for(open_services):
        yield ac
