"""Additive rank function (TradRank) for eligible products.

Scoring terms, summed with no normalization or capping:
| Term                 | Default weight          |
|----------------------|-------------------------|
| Manual override pin  | +20000                  |
| Sponsorship plan     | +2000 / +5000 / +10000  |
| Verified seller      | +500                    |
| Rating               | +50 per star            |
| Review count         | +1 per review           |
| Product demoted      | -5000                   |
| Seller demoted       | -5000                   |
| Unresolved reports   | -100 per report         |
| Viewer follows seller| +200                    |
| Product wishlisted   | +100                    |

A product is "sponsored" when the override or plan term applied.
"""

from dataclasses import dataclass
from typing import Optional

from tradinta_discovery.ranking.models import (
    MarketingPlan,
    ModerationStatus,
    Product,
    RankedProduct,
    RankingWeights,
    Seller,
    ViewerContext,
)


@dataclass(frozen=True)
class CandidateSignals:
    """Side signals gathered for one candidate.

    ``None`` means the lookup was not available; the matching term is zero.
    """

    is_pinned: bool = False
    marketing_plan: Optional[MarketingPlan] = None
    moderation: Optional[ModerationStatus] = None
    unresolved_reports: Optional[int] = None
    viewer: Optional[ViewerContext] = None


def calculate_points(
    product: Product,
    seller: Seller,
    signals: CandidateSignals,
    weights: RankingWeights | None = None,
) -> tuple[float, dict[str, float]]:
    """Calculate the TradRank of a product.

    Args:
        product: Eligible product
        seller: Product's seller
        signals: Auxiliary lookups for this candidate
        weights: Ranking weights (defaults if None)

    Returns:
        Tuple of (score, breakdown_dict). Only terms that applied appear
        in the breakdown.
    """
    if weights is None:
        weights = RankingWeights()

    breakdown: dict[str, float] = {}

    # --- Curation & Sponsorship ---
    if signals.is_pinned:
        breakdown["manual_override"] = weights.manual_override

    if signals.marketing_plan is not None:
        breakdown["sponsorship"] = weights.sponsorship_bonus(signals.marketing_plan.id)

    # --- Trust & Quality ---
    if seller.is_verified:
        breakdown["verified_seller"] = weights.verified_seller

    if product.rating:
        breakdown["rating"] = product.rating * weights.rating

    if product.review_count:
        breakdown["review_count"] = product.review_count * weights.review_count

    # --- Moderation ---
    # A failed moderation lookup contributes nothing
    if signals.moderation is not None and signals.moderation.is_demoted:
        breakdown["product_demoted"] = weights.demotion_penalty

    # Seller demotion cascades to every product of the seller
    if seller.is_demoted:
        breakdown["seller_demoted"] = weights.demotion_penalty

    if signals.unresolved_reports:
        breakdown["unresolved_reports"] = (
            signals.unresolved_reports * weights.unresolved_report
        )

    # --- Personalization ---
    if signals.viewer is not None:
        if seller.id in signals.viewer.followed_seller_ids:
            breakdown["follows_seller"] = weights.follows_seller
        if product.id in signals.viewer.wishlisted_product_ids:
            breakdown["in_wishlist"] = weights.in_wishlist

    total = sum(breakdown.values())
    return total, breakdown


def score_product(
    product: Product,
    seller: Seller,
    signals: CandidateSignals | None = None,
    weights: RankingWeights | None = None,
) -> RankedProduct:
    """Score a product and compose its ranked read model.

    This is the main entry point for scoring an eligible product.

    Args:
        product: Eligible product
        seller: Product's seller
        signals: Auxiliary lookups (all neutral if None)
        weights: Ranking weights

    Returns:
        RankedProduct with score, sponsorship flag and seller display fields
    """
    if signals is None:
        signals = CandidateSignals()

    score, breakdown = calculate_points(product, seller, signals, weights)

    return RankedProduct(
        product=product,
        score=score,
        is_sponsored="manual_override" in breakdown or "sponsorship" in breakdown,
        score_breakdown=breakdown,
        seller_name=seller.shop_name,
        seller_slug=seller.slug,
        seller_location=seller.location,
        lead_time=seller.lead_time,
        seller_moq=seller.moq,
        is_verified=seller.is_verified,
        shop_id=seller.shop_id,
    )
