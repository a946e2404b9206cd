"""FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tradinta_discovery.api.routers import discovery
from tradinta_discovery.config import get_settings
from tradinta_discovery.errors import InvalidSearchOptionsError, RankingUnavailableError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="tradinta-discovery API",
    description="Marketplace product discovery and ranking API",
    version="0.1.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(discovery.router, prefix=settings.api_prefix)


@app.exception_handler(InvalidSearchOptionsError)
async def invalid_options_handler(
    request: Request, exc: InvalidSearchOptionsError
) -> JSONResponse:
    """Bad request options are a client error."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.problems},
    )


@app.exception_handler(RankingUnavailableError)
async def ranking_unavailable_handler(
    request: Request, exc: RankingUnavailableError
) -> JSONResponse:
    """Provider failure, distinct from an empty result."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Ranking unavailable", "provider": exc.provider},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
