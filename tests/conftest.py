"""Shared test fixtures for async database, sessions, settings, and caller tokens."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import votesmart_api.models  # noqa: F401
from votesmart_api.core.config import Settings
from votesmart_api.core.security import create_access_token
from votesmart_api.models.base import Base
from votesmart_api.models.registry_state import RegistryState
from votesmart_api.services.access_service import initialize_registry

TEST_SECRET = "test-secret-key-not-for-production"
ADMIN = "registry-admin"
OUTSIDER = "curious.voter"


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide the required settings to anything that calls get_settings()."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_SECRET)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        max_batch_size=25,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine with all registry tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Per-test async session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def initialized_registry(async_session: AsyncSession) -> RegistryState:
    """Registry bootstrapped with ADMIN as master account."""
    return await initialize_registry(async_session, caller_id=ADMIN)


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Bearer token for the master account."""
    return create_access_token(ADMIN, secret_key=settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def outsider_token(settings: Settings) -> str:
    """Bearer token for an account that is not the master."""
    return create_access_token(OUTSIDER, secret_key=settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
