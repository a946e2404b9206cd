"""Pytest fixtures for engine, provider and API testing."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tradinta_discovery.api.app import app
from tradinta_discovery.config import Settings
from tradinta_discovery.db.base import Base, get_session_factory
from tradinta_discovery.providers.base import Providers
from tradinta_discovery.services.discovery import DiscoveryEngine

from factories import Marketplace, StaticProviders


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the local environment."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        default_page_size=12,
        max_page_size=100,
        default_moq_range=50,
    )


@pytest.fixture
def market() -> Marketplace:
    """Empty marketplace; tests add sellers and products."""
    return Marketplace()


@pytest.fixture
def providers(market: Marketplace) -> Providers:
    """Providers bundle serving the marketplace fixture."""
    static = StaticProviders(market)
    return Providers(
        catalog=static,
        sellers=static,
        interactions=static,
        moderation=static,
        placements=static,
    )


@pytest.fixture
def engine(providers: Providers, test_settings: Settings) -> DiscoveryEngine:
    """Discovery engine over the marketplace fixture."""
    return DiscoveryEngine(providers, settings=test_settings)


# --- Database ---


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a fresh SQLite file.

    A file (not :memory:) so that the concurrent sessions opened by the
    providers all see the same data. Overrides the app's factory dependency.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    app.dependency_overrides[get_session_factory] = lambda: factory

    try:
        yield factory
    finally:
        app.dependency_overrides.clear()
        await engine.dispose()
