"""Database models for the marketplace read side.

These tables are owned by the catalog, seller and moderation admin flows.
The discovery engine only reads them.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from tradinta_discovery.db.base import Base
from tradinta_discovery.ranking.models import EntityType, VerificationStatus


def _new_id() -> str:
    return uuid.uuid4().hex


class MarketingPlan(Base):
    """Paid marketing plan (lift, flow, surge)."""

    __tablename__ = "marketing_plans"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), default="")
    features: Mapped[list[str]] = mapped_column(JSON, default=list)

    def __repr__(self) -> str:
        return f"<MarketingPlan {self.id}>"


class Seller(Base):
    """Seller (manufacturer) profile."""

    __tablename__ = "sellers"

    id: Mapped[str] = mapped_column(String(128), primary_key=True, default=_new_id)
    shop_id: Mapped[str] = mapped_column(String(64), default="", index=True)
    shop_name: Mapped[str] = mapped_column(String(255), default="")
    slug: Mapped[str] = mapped_column(String(255), default="", index=True)

    # Defaults inherited by products
    location: Mapped[str] = mapped_column(String(255), default="")
    lead_time: Mapped[str] = mapped_column(String(100), default="")
    moq: Mapped[int | None] = mapped_column(nullable=True)

    # Trust
    verification_status: Mapped[VerificationStatus] = mapped_column(
        Enum(
            VerificationStatus,
            native_enum=False,
            length=32,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=VerificationStatus.UNSUBMITTED,
    )

    # Suspension
    is_suspended: Mapped[bool] = mapped_column(Boolean, default=False)
    suspension_reason: Mapped[str] = mapped_column(Text, default="")
    suspension_prohibitions: Mapped[list[str]] = mapped_column(JSON, default=list)
    public_disclaimer: Mapped[bool] = mapped_column(Boolean, default=False)

    # Moderation
    is_demoted: Mapped[bool] = mapped_column(Boolean, default=False)

    # Marketing
    marketing_plan_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("marketing_plans.id"),
        nullable=True,
    )
    plan_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    search_keywords: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    # Relationships
    products: Mapped[list["Product"]] = relationship(back_populates="seller")

    def __repr__(self) -> str:
        return f"<Seller {self.slug}: {self.shop_name}>"


class Product(Base):
    """Catalog product."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(128), primary_key=True, default=_new_id)
    seller_id: Mapped[str | None] = mapped_column(
        String(128),
        ForeignKey("sellers.id"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(500), default="")
    slug: Mapped[str] = mapped_column(String(255), default="", index=True)
    category: Mapped[str] = mapped_column(String(100), default="", index=True)
    image_url: Mapped[str] = mapped_column(String(1000), default="")

    # published, draft or archived
    status: Mapped[str] = mapped_column(String(20), default="draft", index=True)

    # Pricing: list of {price, retail_price, stock, channel_stock}
    variants: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    moq: Mapped[int | None] = mapped_column(nullable=True)

    # Reputation
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int | None] = mapped_column(nullable=True)

    # Discovery
    search_keywords: Mapped[list[str]] = mapped_column(JSON, default=list)
    list_on_direct: Mapped[bool] = mapped_column(Boolean, default=False)

    # Moderation
    is_demoted: Mapped[bool] = mapped_column(Boolean, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    seller: Mapped["Seller | None"] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product {self.slug}: {self.name}>"


class AdSlot(Base):
    """Placement override pinning entities to a promotional slot."""

    __tablename__ = "ad_slots"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    entity_type: Mapped[EntityType] = mapped_column(
        Enum(
            EntityType,
            native_enum=False,
            length=16,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=EntityType.PRODUCT,
    )
    # List of {id, entity_type}
    pinned_entities: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<AdSlot {self.id}>"


class Follow(Base):
    """Viewer following a seller."""

    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("viewer_id", "seller_id"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    viewer_id: Mapped[str] = mapped_column(String(128), index=True)
    seller_id: Mapped[str] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )


class WishlistItem(Base):
    """Product saved to a viewer's wishlist."""

    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("viewer_id", "product_id"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    viewer_id: Mapped[str] = mapped_column(String(128), index=True)
    product_id: Mapped[str] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )


class Report(Base):
    """Abuse or policy report filed against an entity."""

    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    report_type: Mapped[str] = mapped_column(String(32), default="Product")
    reference_id: Mapped[str] = mapped_column(String(128), index=True)
    reason: Mapped[str] = mapped_column(String(255), default="")
    details: Mapped[str] = mapped_column(Text, default="")
    # Open, Under Review, Resolved, Dismissed
    status: Mapped[str] = mapped_column(String(32), default="Open", index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )


class Category(Base):
    """Browsable product category."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), default="")
    image_url: Mapped[str] = mapped_column(String(1000), default="")
