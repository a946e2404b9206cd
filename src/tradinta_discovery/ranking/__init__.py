"""Product ranking module."""

from tradinta_discovery.ranking.filters import (
    FilterResult,
    apply_hard_filters,
    matches_query,
    resolve_comparison_price,
    resolve_effective_moq,
)
from tradinta_discovery.ranking.models import (
    Channel,
    EntityType,
    PaginatedProducts,
    PlacementOverride,
    Product,
    RankedProduct,
    RankingWeights,
    SearchOptions,
    Seller,
    VerificationStatus,
)
from tradinta_discovery.ranking.pagination import paginate, sort_ranked
from tradinta_discovery.ranking.placement import (
    active_overrides,
    category_spotlight_slot,
    find_slot,
    pinned_ids,
)
from tradinta_discovery.ranking.scorer import (
    CandidateSignals,
    calculate_points,
    score_product,
)

__all__ = [
    # Models
    "Channel",
    "EntityType",
    "PaginatedProducts",
    "PlacementOverride",
    "Product",
    "RankedProduct",
    "RankingWeights",
    "SearchOptions",
    "Seller",
    "VerificationStatus",
    # Filters
    "FilterResult",
    "apply_hard_filters",
    "matches_query",
    "resolve_comparison_price",
    "resolve_effective_moq",
    # Scorer
    "CandidateSignals",
    "calculate_points",
    "score_product",
    # Pagination
    "paginate",
    "sort_ranked",
    # Placement
    "active_overrides",
    "category_spotlight_slot",
    "find_slot",
    "pinned_ids",
]
