#!/usr/bin/env python3
"""Seed the database with a small marketplace for trying the engine."""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from tradinta_discovery.db.base import async_session_maker
from tradinta_discovery.db.models import (
    AdSlot,
    Category,
    Follow,
    MarketingPlan,
    Product,
    Report,
    Seller,
)
from tradinta_discovery.ranking.models import EntityType, VerificationStatus

NOW = datetime.now(timezone.utc)

MARKETING_PLANS = [
    {"id": "lift", "name": "Lift", "features": ["Search boost"]},
    {"id": "flow", "name": "Flow", "features": ["Search boost", "Category spotlight"]},
    {"id": "surge", "name": "Surge", "features": ["Search boost", "Homepage placement"]},
]

CATEGORIES = [
    {
        "id": "building-materials",
        "name": "Building Materials",
        "image_url": "https://images.unsplash.com/photo-1504307651254-35680f356dfd?w=800",
    },
    {
        "id": "packaging",
        "name": "Packaging",
        "image_url": "https://images.unsplash.com/photo-1606857521015-7f9fcf423740?w=800",
    },
]

SELLERS = [
    {
        "id": "seller-savannah",
        "shop_id": "savannah",
        "shop_name": "Savannah Cement Works",
        "slug": "savannah-cement-works",
        "location": "Athi River, Kenya",
        "lead_time": "3-5 days",
        "moq": 50,
        "verification_status": VerificationStatus.VERIFIED,
        "search_keywords": ["cement", "savannah", "building"],
    },
    {
        "id": "seller-rift",
        "shop_id": "riftpack",
        "shop_name": "Rift Valley Packaging",
        "slug": "rift-valley-packaging",
        "location": "Nakuru, Kenya",
        "lead_time": "7 days",
        "moq": 500,
        "verification_status": VerificationStatus.PENDING_ADMIN,
        "marketing_plan_id": "surge",
        "plan_expires_at": NOW + timedelta(days=30),
        "search_keywords": ["packaging", "cartons"],
    },
    {
        "id": "seller-coast",
        "shop_id": "coaststeel",
        "shop_name": "Coast Steel Mills",
        "slug": "coast-steel-mills",
        "location": "Mombasa, Kenya",
        "lead_time": "10 days",
        "verification_status": VerificationStatus.VERIFIED,
        "is_suspended": True,
        "suspension_reason": "Counterfeit certification",
    },
]

PRODUCTS = [
    {
        "id": "prod-cement-425",
        "seller_id": "seller-savannah",
        "name": "Portland Cement 42.5N (50kg)",
        "slug": "portland-cement-42-5n",
        "category": "building-materials",
        "status": "published",
        "variants": [{"price": 780, "retail_price": 850, "stock": 12000}],
        "moq": 100,
        "rating": 4.7,
        "review_count": 88,
        "search_keywords": ["cement", "portland", "42.5n"],
        "list_on_direct": True,
    },
    {
        "id": "prod-cartons",
        "seller_id": "seller-rift",
        "name": "Corrugated Shipping Cartons",
        "slug": "corrugated-shipping-cartons",
        "category": "packaging",
        "status": "published",
        "variants": [{"price": 45, "stock": 50000}],
        "moq": 1000,
        "rating": 3.9,
        "review_count": 12,
        "search_keywords": ["cartons", "boxes", "packaging"],
    },
    {
        "id": "prod-rebar",
        "seller_id": "seller-coast",
        "name": "Y12 Deformed Steel Bar",
        "slug": "y12-deformed-steel-bar",
        "category": "building-materials",
        "status": "published",
        "variants": [{"price": 1150, "stock": 800}],
        "moq": 20,
        "rating": 4.9,
        "review_count": 140,
        "search_keywords": ["steel", "rebar", "y12"],
    },
]

AD_SLOTS = [
    {
        "id": "category-spotlight-building-materials",
        "entity_type": EntityType.PRODUCT,
        "pinned_entities": [{"id": "prod-cement-425", "entity_type": "product"}],
        "expires_at": NOW + timedelta(days=14),
    },
]


async def seed() -> None:
    """Seed the database with the sample marketplace."""
    async with async_session_maker() as session:
        for model, rows in (
            (MarketingPlan, MARKETING_PLANS),
            (Category, CATEGORIES),
            (Seller, SELLERS),
            (Product, PRODUCTS),
            (AdSlot, AD_SLOTS),
        ):
            for data in rows:
                if await session.get(model, data["id"]) is not None:
                    print(f"{model.__name__} '{data['id']}' already exists, skipping...")
                    continue
                session.add(model(**data))
                print(f"Created {model.__name__}: {data['id']}")
            # Parents must exist before children reference them
            await session.flush()

        existing_follow = await session.execute(
            select(Follow).where(
                Follow.viewer_id == "buyer-demo",
                Follow.seller_id == "seller-savannah",
            )
        )
        if existing_follow.scalar_one_or_none() is None:
            session.add(Follow(viewer_id="buyer-demo", seller_id="seller-savannah"))
            session.add(Report(reference_id="prod-cartons", reason="Misleading photos"))

        await session.commit()
        print("\nSeeding complete!")


if __name__ == "__main__":
    asyncio.run(seed())
