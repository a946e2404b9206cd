"""Data providers read by the discovery engine."""

from tradinta_discovery.providers.base import (
    CatalogProvider,
    InteractionProvider,
    ModerationProvider,
    PlacementDirectory,
    Providers,
    SellerDirectory,
)
from tradinta_discovery.providers.sql import build_sql_providers

__all__ = [
    "CatalogProvider",
    "InteractionProvider",
    "ModerationProvider",
    "PlacementDirectory",
    "Providers",
    "SellerDirectory",
    "build_sql_providers",
]
