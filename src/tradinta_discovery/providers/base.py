"""Read interfaces the discovery engine consumes.

Each provider is a narrow, async, read-only view over externally owned
data. Providers raise on infrastructure failure (store unreachable); they
return empty/None for "not found".
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from tradinta_discovery.ranking.models import (
    MarketingPlan,
    ModerationStatus,
    PlacementOverride,
    Product,
    ProductCategory,
    Seller,
)


class CatalogProvider(Protocol):
    """Published products and categories."""

    async def list_published_products(self) -> list[Product]: ...

    async def get_product_by_id(self, product_id: str) -> Optional[Product]: ...

    async def get_category(self, category_id: str) -> Optional[ProductCategory]: ...


class SellerDirectory(Protocol):
    """Seller trust and plan metadata."""

    async def get_sellers_by_ids(self, seller_ids: set[str]) -> dict[str, Seller]:
        """Sellers keyed by id. An empty ``seller_ids`` returns all sellers."""
        ...

    async def get_seller_by_id(self, seller_id: str) -> Optional[Seller]: ...

    async def find_seller(self, identifier: str) -> Optional[Seller]:
        """Seller matched on shop id or slug (lowercased) or on exact id."""
        ...

    async def get_active_marketing_plan(
        self, seller_id: str, now: datetime
    ) -> Optional[MarketingPlan]:
        """The seller's plan, or None if absent or expired at ``now``."""
        ...

    async def search_sellers(self, query: str, limit: int) -> list[Seller]: ...


class InteractionProvider(Protocol):
    """A viewer's follows and wishlist."""

    async def get_followed_seller_ids(self, viewer_id: str) -> list[str]: ...

    async def get_wishlisted_product_ids(self, viewer_id: str) -> list[str]: ...


class ModerationProvider(Protocol):
    """Demotion flags and report counts."""

    async def get_product_moderation_status(self, product_id: str) -> ModerationStatus: ...

    async def count_unresolved_reports(self, product_id: str) -> int: ...


class PlacementDirectory(Protocol):
    """Manual curation overrides (ad slots)."""

    async def list_placement_overrides(self) -> list[PlacementOverride]:
        """All stored overrides, expired ones included."""
        ...


@dataclass(frozen=True)
class Providers:
    """Bundle of the data providers one engine reads from."""

    catalog: CatalogProvider
    sellers: SellerDirectory
    interactions: InteractionProvider
    moderation: ModerationProvider
    placements: PlacementDirectory
