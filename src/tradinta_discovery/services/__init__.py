"""Business logic services."""

from tradinta_discovery.services.discovery import DiscoveryEngine, RequestContext

__all__ = [
    "DiscoveryEngine",
    "RequestContext",
]
