"""Database module."""

from tradinta_discovery.db.base import get_session_factory
from tradinta_discovery.db.models import (
    AdSlot,
    Category,
    Follow,
    MarketingPlan,
    Product,
    Report,
    Seller,
    WishlistItem,
)

__all__ = [
    "get_session_factory",
    "AdSlot",
    "Category",
    "Follow",
    "MarketingPlan",
    "Product",
    "Report",
    "Seller",
    "WishlistItem",
]
