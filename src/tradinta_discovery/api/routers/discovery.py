"""Discovery API endpoints.

Endpoints:
- GET /products/ranked - ranked, filtered, paginated products
- GET /search - ranked products plus matching sellers
- GET /categories/{category_id}/featured - category card content
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tradinta_discovery.api.dependencies import get_engine, get_request_context
from tradinta_discovery.ranking.models import (
    Channel,
    FeaturedItem,
    PaginatedProducts,
    SearchResults,
)
from tradinta_discovery.services.discovery import DiscoveryEngine, RequestContext

router = APIRouter(tags=["discovery"])


@router.get("/products/ranked", response_model=PaginatedProducts)
async def list_ranked_products(
    q: str = Query("", description="Free-text query"),
    category: str = Query("all", description="Exact category, or 'all'"),
    verified_only: bool = Query(False),
    min_price: float | None = Query(None),
    max_price: float | None = Query(None),
    moq: int | None = Query(None, description="Target MOQ"),
    moq_range: int | None = Query(None, description="Tolerance around the target MOQ"),
    min_rating: float | None = Query(None),
    page: int = Query(1, description="1-based page number"),
    page_size: int | None = Query(None),
    channel: Channel = Query(Channel.STANDARD),
    engine: DiscoveryEngine = Depends(get_engine),
    context: RequestContext = Depends(get_request_context),
) -> PaginatedProducts:
    """Rank the catalog for this request.

    Results are sorted by TradRank descending. No matches is a normal
    response with ``total_count == 0``.
    """
    options: dict[str, Any] = {
        "query": q,
        "category": category,
        "verified_only": verified_only,
        "min_price": min_price,
        "max_price": max_price,
        "moq": moq,
        "moq_range": moq_range,
        "min_rating": min_rating,
        "page": page,
        "page_size": page_size,
        "channel": channel,
    }
    return await engine.get_ranked_products(
        {key: value for key, value in options.items() if value is not None},
        context,
    )


@router.get("/search", response_model=SearchResults)
async def search(
    q: str = Query("", description="Search term"),
    engine: DiscoveryEngine = Depends(get_engine),
    context: RequestContext = Depends(get_request_context),
) -> SearchResults:
    """Search products and sellers."""
    return await engine.search(q, context)


@router.get("/categories/{category_id}/featured", response_model=list[FeaturedItem])
async def get_featured_category_content(
    category_id: str,
    engine: DiscoveryEngine = Depends(get_engine),
    context: RequestContext = Depends(get_request_context),
) -> list[FeaturedItem]:
    """Pinned spotlight content for a category, or its default image."""
    category = await engine.providers.catalog.get_category(category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )

    return await engine.get_featured_category_content(category, context)
