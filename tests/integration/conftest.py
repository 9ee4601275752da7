"""Fixtures for API tests: the real router over an in-memory database."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from votesmart_api.api.router import create_router
from votesmart_api.core.config import Settings, get_settings
from votesmart_api.core.dependencies import get_async_session


@pytest.fixture
def app(settings: Settings, session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """API routers wired to the test database and settings."""

    async def _session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app = FastAPI()
    app.include_router(create_router(settings))
    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def outsider_headers(outsider_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {outsider_token}"}


@pytest.fixture
async def initialized_client(client: AsyncClient, admin_headers: dict[str, str]) -> AsyncClient:
    """Client for a registry whose master account is the admin."""
    resp = await client.post("/api/v1/registry/init", json={}, headers=admin_headers)
    assert resp.status_code == 201
    return client
