"""Data models for product ranking."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Category value that disables the category filter
ALL_CATEGORIES = "all"


class VerificationStatus(str, Enum):
    """Seller verification lifecycle."""

    UNSUBMITTED = "Unsubmitted"
    PENDING_LEGAL = "Pending Legal"
    PENDING_ADMIN = "Pending Admin"
    ACTION_REQUIRED = "Action Required"
    VERIFIED = "Verified"
    RESTRICTED = "Restricted"
    SUSPENDED = "Suspended"


class Channel(str, Enum):
    """Listing channel a ranking request is scoped to."""

    STANDARD = "standard"  # B2B / wholesale
    DIRECT = "direct"  # B2C, "Tradinta Direct"


class EntityType(str, Enum):
    """Kind of entity a placement override can pin."""

    PRODUCT = "product"
    SELLER = "seller"


class PriceVariant(BaseModel):
    """One sellable variant of a product."""

    model_config = ConfigDict(frozen=True)

    price: float = Field(0.0, ge=0, description="Wholesale (base) price")
    retail_price: Optional[float] = Field(None, ge=0, description="Consumer price")
    stock: int = Field(0, ge=0)
    channel_stock: dict[str, int] = Field(default_factory=dict)


class Product(BaseModel):
    """Published catalog product as seen by the engine."""

    model_config = ConfigDict(frozen=True)

    # Identification
    id: str
    name: str = ""
    slug: str = ""
    category: str = ""
    image_url: str = ""

    # Pricing
    variants: list[PriceVariant] = Field(default_factory=list)
    moq: Optional[int] = Field(None, ge=0, description="Minimum order quantity")

    # Reputation
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)

    # Ownership
    seller_id: Optional[str] = Field(None, description="Owning seller, None if malformed")

    # Discovery
    search_keywords: list[str] = Field(default_factory=list)
    list_on_direct: bool = Field(False, description="Listed on the direct channel")
    is_demoted: bool = Field(False, description="Product-level moderation flag")

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SuspensionDetails(BaseModel):
    """Suspension state of a seller."""

    model_config = ConfigDict(frozen=True)

    is_suspended: bool = False
    reason: str = ""
    prohibitions: list[str] = Field(default_factory=list)
    public_disclaimer: bool = False


class Seller(BaseModel):
    """Seller (manufacturer) trust and plan context."""

    model_config = ConfigDict(frozen=True)

    id: str
    shop_id: str = ""
    shop_name: str = ""
    slug: str = ""
    location: str = ""
    lead_time: str = ""
    moq: Optional[int] = Field(None, ge=0, description="Default MOQ for products")

    verification_status: VerificationStatus = VerificationStatus.UNSUBMITTED
    suspension_details: Optional[SuspensionDetails] = None
    is_demoted: bool = Field(False, description="Seller-level moderation flag")

    marketing_plan_id: Optional[str] = None
    plan_expires_at: Optional[datetime] = None

    search_keywords: list[str] = Field(default_factory=list)

    @property
    def is_suspended(self) -> bool:
        return bool(self.suspension_details and self.suspension_details.is_suspended)

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED


class MarketingPlan(BaseModel):
    """Paid marketing plan a seller can hold."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    features: list[str] = Field(default_factory=list)


class PinnedEntity(BaseModel):
    """An entity pinned by a placement override."""

    model_config = ConfigDict(frozen=True)

    id: str
    entity_type: EntityType = EntityType.PRODUCT


class PlacementOverride(BaseModel):
    """Manual curation override (ad slot)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Slot identifier, e.g. homepage-featured")
    entity_type: EntityType = EntityType.PRODUCT
    pinned_entities: list[PinnedEntity] = Field(default_factory=list)
    expires_at: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        """True unless the override has an expiry at or before ``now``."""
        return self.expires_at is None or self.expires_at > now

    def pins(self, entity_type: EntityType, entity_id: str) -> bool:
        """True if this override pins the given entity."""
        if self.entity_type != entity_type:
            return False
        return any(entity.id == entity_id for entity in self.pinned_entities)


class ModerationStatus(BaseModel):
    """Per-product moderation state."""

    model_config = ConfigDict(frozen=True)

    is_demoted: bool = False


class ViewerContext(BaseModel):
    """Personalization context of the viewer making the request."""

    model_config = ConfigDict(frozen=True)

    viewer_id: str
    followed_seller_ids: frozenset[str] = frozenset()
    wishlisted_product_ids: frozenset[str] = frozenset()


class ProductCategory(BaseModel):
    """Browsable product category."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    image_url: str = ""


class SearchOptions(BaseModel):
    """Options accepted by a ranking request. Every field is optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    viewer_id: Optional[str] = None
    query: str = ""
    category: str = ALL_CATEGORIES
    verified_only: bool = False

    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)

    moq: Optional[int] = Field(None, ge=0, description="Target MOQ")
    moq_range: Optional[int] = Field(
        None, ge=0, description="Tolerance around the target MOQ (settings default if None)"
    )

    min_rating: Optional[float] = Field(None, ge=0, le=5)

    page: int = Field(1, ge=1, description="1-based page number")
    page_size: Optional[int] = Field(None, ge=1, description="Settings default if None")

    channel: Channel = Channel.STANDARD

    product_ids: Optional[frozenset[str]] = Field(
        None, description="Restrict candidates to these product IDs"
    )

    @property
    def is_direct(self) -> bool:
        return self.channel == Channel.DIRECT


class RankedProduct(BaseModel):
    """A product enriched with its rank and seller display fields."""

    model_config = ConfigDict(frozen=True)

    product: Product
    score: float = Field(..., description="TradRank, unbounded")
    is_sponsored: bool = False
    score_breakdown: dict[str, float] = Field(default_factory=dict)

    # Denormalized seller fields
    seller_name: str = ""
    seller_slug: str = ""
    seller_location: str = ""
    lead_time: str = ""
    seller_moq: Optional[int] = None
    is_verified: bool = False
    shop_id: str = ""

    @property
    def id(self) -> str:
        return self.product.id


class PaginatedProducts(BaseModel):
    """One page of a ranking."""

    products: list[RankedProduct]
    total_count: int
    total_pages: int
    page: int
    page_size: int


class FeaturedItem(BaseModel):
    """Content shown on a category card."""

    image_url: str
    href: str
    seller_name: Optional[str] = None
    seller_slug: Optional[str] = None


class SearchResults(BaseModel):
    """Combined product and seller search."""

    products: list[RankedProduct] = Field(default_factory=list)
    sellers: list[Seller] = Field(default_factory=list)


class RankingWeights(BaseModel):
    """Tunable weights of the additive rank function."""

    manual_override: float = Field(20000, description="Pinned by a placement override")

    # Sponsorship tiers, keyed by marketing plan id
    sponsorship_tier_1: float = Field(2000, description="'lift' and unrecognized plans")
    sponsorship_tier_2: float = Field(5000, description="'flow' plan")
    sponsorship_tier_3: float = Field(10000, description="'surge' plan")

    verified_seller: float = Field(500, description="Seller status is exactly Verified")
    rating: float = Field(50, description="Points per star")
    review_count: float = Field(1, description="Points per review")
    follows_seller: float = Field(200, description="Viewer follows the seller")
    in_wishlist: float = Field(100, description="Product is in the viewer's wishlist")
    demotion_penalty: float = Field(-5000, description="Per demotion flag (product, seller)")
    unresolved_report: float = Field(-100, description="Per unresolved report")

    def sponsorship_bonus(self, plan_id: str) -> float:
        """Bonus for an active plan, tier chosen by plan id."""
        tiers = {
            "flow": self.sponsorship_tier_2,
            "surge": self.sponsorship_tier_3,
        }
        return tiers.get(plan_id, self.sponsorship_tier_1)
