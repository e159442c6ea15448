"""
Shared fixtures: a fresh app (and store) per test, driven over ASGI.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from library_mock.config import Settings
from library_mock.server import create_app
from library_mock.state import MockStateStore


@pytest.fixture
def store():
    return MockStateStore()


@pytest.fixture
def app(store):
    return create_app(store, Settings())


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def org001():
    return {"org-id": "org-001"}


@pytest.fixture
def org002():
    return {"org-id": "org-002"}


@pytest.fixture
def bearer():
    return {"Authorization": "Bearer test-token"}
