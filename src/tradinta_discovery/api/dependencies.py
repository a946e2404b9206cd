"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tradinta_discovery.db.base import get_session_factory
from tradinta_discovery.providers.sql import build_sql_providers
from tradinta_discovery.services.discovery import DiscoveryEngine, RequestContext


def get_engine(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DiscoveryEngine:
    """Discovery engine reading from the configured database."""
    return DiscoveryEngine(build_sql_providers(session_factory))


def get_request_context(
    x_viewer_id: str | None = Header(None, description="Authenticated viewer id"),
    user_agent: str | None = Header(None),
) -> RequestContext:
    """Request context built from the inbound headers."""
    return RequestContext(
        viewer_id=x_viewer_id or None,
        user_agent=user_agent or "unknown",
    )
