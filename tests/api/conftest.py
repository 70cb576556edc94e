"""API test fixtures — FastAPI test client over the in-memory test DB.

Invariants:
    - get_db dependency overridden to use the test DB session factory
    - Lifespan is NOT run: the schema comes from the test_engine fixture

Design Decisions:
    - httpx ASGITransport: exercises routing, dependencies and error handlers in-process
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.infrastructure.database import get_db
from taskboard.main import app


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def member(client):
    res = await client.post("/api/v1/team-members", json={
        "name": "Alice Moyo", "email": "alice@example.com", "role": "Developer",
    })
    assert res.status_code == 201
    return res.json()
