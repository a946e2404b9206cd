"""Sorting and page slicing of ranked products."""

import math

from tradinta_discovery.ranking.models import PaginatedProducts, RankedProduct


def sort_ranked(products: list[RankedProduct]) -> list[RankedProduct]:
    """Order by score descending, product id ascending on ties."""
    return sorted(products, key=lambda ranked: (-ranked.score, ranked.product.id))


def paginate(
    products: list[RankedProduct],
    page: int,
    page_size: int,
) -> PaginatedProducts:
    """Sort the full ranked set and slice one 1-based page.

    A page past the last one is empty, not an error.
    """
    ordered = sort_ranked(products)
    total_count = len(ordered)
    start = (page - 1) * page_size

    return PaginatedProducts(
        products=ordered[start : start + page_size],
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size),
        page=page,
        page_size=page_size,
    )
