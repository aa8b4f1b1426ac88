"""API test fixtures - FastAPI app wired to a per-test in-memory database.

Invariants:
    - app.state.controller and the process-wide db_manager point at the test DB
    - Both are restored after the test
    - The lifespan does not run under ASGITransport, so wiring happens here
"""

import pytest
from httpx import ASGITransport, AsyncClient

import app.infrastructure.database as db_module
from app.main import app
from app.services.chat_controller import ChatController


@pytest.fixture
async def client(db):
    original_manager = db_module.db_manager
    db_module.db_manager = db
    app.state.controller = ChatController(db)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.controller = None
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(client):
    res = await client.post("/api/user/login", json={"username": "alice"})
    assert res.status_code == 200
    return res.json()["success"]
