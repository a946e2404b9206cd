"""In-memory marketplace and model factories shared by the tests."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tradinta_discovery.ranking.models import (
    MarketingPlan,
    ModerationStatus,
    PlacementOverride,
    PriceVariant,
    Product,
    ProductCategory,
    Seller,
    VerificationStatus,
)


@dataclass
class Marketplace:
    """Canned marketplace data served by StaticProviders."""

    products: list[Product] = field(default_factory=list)
    sellers: dict[str, Seller] = field(default_factory=dict)
    plans: dict[str, MarketingPlan] = field(default_factory=dict)  # by seller id
    follows: dict[str, list[str]] = field(default_factory=dict)  # viewer -> sellers
    wishlists: dict[str, list[str]] = field(default_factory=dict)  # viewer -> products
    demoted_products: set[str] = field(default_factory=set)
    reports: dict[str, int] = field(default_factory=dict)
    overrides: list[PlacementOverride] = field(default_factory=list)
    categories: dict[str, ProductCategory] = field(default_factory=dict)

    def add_seller(self, seller: Seller) -> Seller:
        self.sellers[seller.id] = seller
        return seller

    def add_product(self, product: Product) -> Product:
        self.products.append(product)
        return product


class StaticProviders:
    """Implements every provider interface over a Marketplace."""

    def __init__(self, market: Marketplace):
        self.market = market

    # Catalog
    async def list_published_products(self) -> list[Product]:
        return list(self.market.products)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.market.products if p.id == product_id), None)

    async def get_category(self, category_id: str) -> Optional[ProductCategory]:
        return self.market.categories.get(category_id)

    # Sellers
    async def get_sellers_by_ids(self, seller_ids: set[str]) -> dict[str, Seller]:
        if not seller_ids:
            return dict(self.market.sellers)
        return {sid: s for sid, s in self.market.sellers.items() if sid in seller_ids}

    async def get_seller_by_id(self, seller_id: str) -> Optional[Seller]:
        return self.market.sellers.get(seller_id)

    async def find_seller(self, identifier: str) -> Optional[Seller]:
        lower = identifier.lower()
        for seller in sorted(self.market.sellers.values(), key=lambda s: s.id):
            if lower in (seller.shop_id, seller.slug) or seller.id == identifier:
                return seller
        return None

    async def get_active_marketing_plan(
        self, seller_id: str, now: datetime
    ) -> Optional[MarketingPlan]:
        return self.market.plans.get(seller_id)

    async def search_sellers(self, query: str, limit: int) -> list[Seller]:
        matches = [s for s in self.market.sellers.values() if query in s.search_keywords]
        return matches[:limit]

    # Interactions
    async def get_followed_seller_ids(self, viewer_id: str) -> list[str]:
        return list(self.market.follows.get(viewer_id, []))

    async def get_wishlisted_product_ids(self, viewer_id: str) -> list[str]:
        return list(self.market.wishlists.get(viewer_id, []))

    # Moderation
    async def get_product_moderation_status(self, product_id: str) -> ModerationStatus:
        return ModerationStatus(is_demoted=product_id in self.market.demoted_products)

    async def count_unresolved_reports(self, product_id: str) -> int:
        return self.market.reports.get(product_id, 0)

    # Placements
    async def list_placement_overrides(self) -> list[PlacementOverride]:
        return list(self.market.overrides)


def make_product(product_id: str, seller_id: Optional[str] = "seller-1", **kwargs) -> Product:
    """Product with sensible defaults for tests."""
    data = {
        "name": f"Product {product_id}",
        "category": "building-materials",
        "variants": [PriceVariant(price=100.0)],
        "moq": 10,
        "rating": 0.0,
        "review_count": 0,
    }
    data.update(kwargs)
    return Product(id=product_id, seller_id=seller_id, **data)


def make_seller(seller_id: str = "seller-1", **kwargs) -> Seller:
    """Seller with sensible defaults for tests."""
    data = {
        "shop_name": f"Shop {seller_id}",
        "slug": seller_id,
        "verification_status": VerificationStatus.UNSUBMITTED,
    }
    data.update(kwargs)
    return Seller(id=seller_id, **data)


