"""API test fixtures — FastAPI test client over the in-memory store.

Invariants:
    - get_content_store dependency overridden with the per-test FakeContentStore
    - Lifespan is not run: no real store client is ever created

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises routing, validation and
      error handlers exactly as served
"""

import pytest
from httpx import ASGITransport, AsyncClient

from retrieval_gateway.infrastructure.store_client import get_content_store
from retrieval_gateway.main import app


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_content_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
