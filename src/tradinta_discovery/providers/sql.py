"""SQLAlchemy-backed implementations of the provider interfaces.

Every call opens its own short-lived session so that the engine can issue
lookups concurrently (an AsyncSession must not be shared across tasks).

Usage:
    providers = build_sql_providers(async_session_maker)
    engine = DiscoveryEngine(providers)
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tradinta_discovery.db import models as db
from tradinta_discovery.providers.base import Providers
from tradinta_discovery.ranking.models import (
    MarketingPlan,
    ModerationStatus,
    PinnedEntity,
    PlacementOverride,
    PriceVariant,
    Product,
    ProductCategory,
    Seller,
    SuspensionDetails,
)
from tradinta_discovery.timeutils import as_utc

logger = logging.getLogger(__name__)

PUBLISHED = "published"

# Report states that no longer count against a product
CLOSED_REPORT_STATUSES = ("Resolved", "Dismissed")

# Upper bound of the star rating
MAX_RATING = 5.0


def _clamp_rating(rating: Optional[float]) -> Optional[float]:
    if rating is None:
        return None
    return min(rating, MAX_RATING)


def product_from_row(row: db.Product) -> Product:
    """Convert a product row to the engine's read model."""
    return Product(
        id=row.id,
        name=row.name or "",
        slug=row.slug or "",
        category=row.category or "",
        image_url=row.image_url or "",
        variants=[PriceVariant.model_validate(v) for v in row.variants or []],
        moq=row.moq,
        rating=_clamp_rating(row.rating),
        review_count=row.review_count,
        seller_id=row.seller_id,
        search_keywords=[kw.lower() for kw in row.search_keywords or []],
        list_on_direct=bool(row.list_on_direct),
        is_demoted=bool(row.is_demoted),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def seller_from_row(row: db.Seller) -> Seller:
    """Convert a seller row to the engine's read model."""
    suspension = None
    if row.is_suspended or row.suspension_reason:
        suspension = SuspensionDetails(
            is_suspended=bool(row.is_suspended),
            reason=row.suspension_reason or "",
            prohibitions=list(row.suspension_prohibitions or []),
            public_disclaimer=bool(row.public_disclaimer),
        )

    return Seller(
        id=row.id,
        shop_id=row.shop_id or "",
        shop_name=row.shop_name or "",
        slug=row.slug or "",
        location=row.location or "",
        lead_time=row.lead_time or "",
        moq=row.moq,
        verification_status=row.verification_status,
        suspension_details=suspension,
        is_demoted=bool(row.is_demoted),
        marketing_plan_id=row.marketing_plan_id,
        plan_expires_at=as_utc(row.plan_expires_at),
        search_keywords=[kw.lower() for kw in row.search_keywords or []],
    )


def override_from_row(row: db.AdSlot) -> PlacementOverride:
    """Convert an ad slot row to a placement override."""
    return PlacementOverride(
        id=row.id,
        entity_type=row.entity_type,
        pinned_entities=[
            PinnedEntity.model_validate(entity) for entity in row.pinned_entities or []
        ],
        expires_at=as_utc(row.expires_at),
    )


class SqlCatalogProvider:
    """Catalog reads from the products and categories tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_published_products(self) -> list[Product]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(db.Product).where(db.Product.status == PUBLISHED)
            )
            rows = result.scalars().all()

        products = []
        for row in rows:
            try:
                products.append(product_from_row(row))
            except ValidationError as e:
                # Malformed documents are skipped, never fatal
                logger.warning(f"Skipping malformed product {row.id}: {e}")
        return products

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        async with self.session_factory() as session:
            row = await session.get(db.Product, product_id)
        if row is None:
            return None
        try:
            return product_from_row(row)
        except ValidationError as e:
            logger.warning(f"Malformed product {product_id}: {e}")
            return None

    async def get_category(self, category_id: str) -> Optional[ProductCategory]:
        async with self.session_factory() as session:
            row = await session.get(db.Category, category_id)
        if row is None:
            return None
        return ProductCategory(id=row.id, name=row.name, image_url=row.image_url)


class SqlSellerDirectory:
    """Seller reads from the sellers and marketing_plans tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_sellers_by_ids(self, seller_ids: set[str]) -> dict[str, Seller]:
        query = select(db.Seller)
        if seller_ids:
            query = query.where(db.Seller.id.in_(seller_ids))

        async with self.session_factory() as session:
            result = await session.execute(query)
            rows = result.scalars().all()

        return {row.id: seller_from_row(row) for row in rows}

    async def get_seller_by_id(self, seller_id: str) -> Optional[Seller]:
        async with self.session_factory() as session:
            row = await session.get(db.Seller, seller_id)
        return seller_from_row(row) if row is not None else None

    async def find_seller(self, identifier: str) -> Optional[Seller]:
        lower = identifier.lower()
        query = (
            select(db.Seller)
            .where(
                or_(
                    db.Seller.shop_id == lower,
                    db.Seller.slug == lower,
                    db.Seller.id == identifier,
                )
            )
            .order_by(db.Seller.id)
            .limit(1)
        )
        async with self.session_factory() as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
        return seller_from_row(row) if row is not None else None

    async def get_active_marketing_plan(
        self, seller_id: str, now: datetime
    ) -> Optional[MarketingPlan]:
        async with self.session_factory() as session:
            seller = await session.get(db.Seller, seller_id)
            if seller is None or not seller.marketing_plan_id:
                return None

            expires_at = as_utc(seller.plan_expires_at)
            if expires_at is not None and expires_at < now:
                return None

            plan = await session.get(db.MarketingPlan, seller.marketing_plan_id)

        if plan is None:
            return None
        return MarketingPlan(id=plan.id, name=plan.name, features=list(plan.features or []))

    async def search_sellers(self, query: str, limit: int) -> list[Seller]:
        needle = query.lower()
        async with self.session_factory() as session:
            result = await session.execute(select(db.Seller).order_by(db.Seller.id))
            rows = result.scalars().all()

        sellers = [seller_from_row(row) for row in rows]
        return [s for s in sellers if needle in s.search_keywords][:limit]


class SqlInteractionProvider:
    """Follow and wishlist reads."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_followed_seller_ids(self, viewer_id: str) -> list[str]:
        if not viewer_id:
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(db.Follow.seller_id).where(db.Follow.viewer_id == viewer_id)
            )
            return list(result.scalars().all())

    async def get_wishlisted_product_ids(self, viewer_id: str) -> list[str]:
        if not viewer_id:
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(db.WishlistItem.product_id).where(
                    db.WishlistItem.viewer_id == viewer_id
                )
            )
            return list(result.scalars().all())


class SqlModerationProvider:
    """Moderation reads from products and reports."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_product_moderation_status(self, product_id: str) -> ModerationStatus:
        async with self.session_factory() as session:
            result = await session.execute(
                select(db.Product.is_demoted).where(db.Product.id == product_id)
            )
            is_demoted = result.scalar_one_or_none()
        return ModerationStatus(is_demoted=bool(is_demoted))

    async def count_unresolved_reports(self, product_id: str) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count())
                .select_from(db.Report)
                .where(
                    db.Report.reference_id == product_id,
                    db.Report.status.not_in(CLOSED_REPORT_STATUSES),
                )
            )
            return int(result.scalar_one())


class SqlPlacementDirectory:
    """Ad slot reads."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_placement_overrides(self) -> list[PlacementOverride]:
        async with self.session_factory() as session:
            result = await session.execute(select(db.AdSlot))
            rows = result.scalars().all()

        overrides = []
        for row in rows:
            try:
                overrides.append(override_from_row(row))
            except ValidationError as e:
                logger.warning(f"Ignoring malformed ad slot {row.id}: {e}")
        return overrides


def build_sql_providers(session_factory: async_sessionmaker[AsyncSession]) -> Providers:
    """Wire every provider to the same session factory."""
    return Providers(
        catalog=SqlCatalogProvider(session_factory),
        sellers=SqlSellerDirectory(session_factory),
        interactions=SqlInteractionProvider(session_factory),
        moderation=SqlModerationProvider(session_factory),
        placements=SqlPlacementDirectory(session_factory),
    )
