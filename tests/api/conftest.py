"""Fixtures for API tests: the app over a migrated temporary database."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from outletstock.api.main import app
from outletstock.application.services import reset_services


@pytest.fixture
async def client(migrated_pool) -> AsyncGenerator[AsyncClient, None]:
    reset_services()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    reset_services()
