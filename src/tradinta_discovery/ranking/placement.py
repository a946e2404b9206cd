"""Placement override (ad slot) resolution."""

from collections.abc import Iterable
from datetime import datetime

from tradinta_discovery.ranking.models import EntityType, PlacementOverride

CATEGORY_SPOTLIGHT_PREFIX = "category-spotlight-"


def category_spotlight_slot(category_id: str) -> str:
    """Slot id of a category's spotlight card."""
    return f"{CATEGORY_SPOTLIGHT_PREFIX}{category_id}"


def active_overrides(
    overrides: Iterable[PlacementOverride],
    now: datetime,
) -> list[PlacementOverride]:
    """Drop overrides whose expiry has passed.

    Stale overrides may still be stored; they must never be consulted.
    """
    return [override for override in overrides if override.is_active(now)]


def pinned_ids(
    overrides: Iterable[PlacementOverride],
    entity_type: EntityType,
) -> set[str]:
    """IDs pinned by any override of the given entity type."""
    return {
        entity.id
        for override in overrides
        if override.entity_type == entity_type
        for entity in override.pinned_entities
    }


def find_slot(
    overrides: Iterable[PlacementOverride],
    slot_id: str,
) -> PlacementOverride | None:
    """The override stored under ``slot_id``, if any."""
    for override in overrides:
        if override.id == slot_id:
            return override
    return None
