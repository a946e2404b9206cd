"""Hard filters deciding which products are eligible for a request.

A product that fails any hard filter is dropped before scoring. Checks run
cheapest first and stop at the first failure:

- Product has a seller reference that resolves in the seller directory
- Seller is not suspended (Restricted sellers are NOT filtered)
- Product is in the requested candidate set (when one is given)
- Direct channel requests only see products listed on that channel
- Category matches exactly (unless "all")
- Verified-only requests need status exactly Verified
- Comparison price inside [min_price, max_price]
- Effective MOQ inside [moq - range, moq + range] (standard channel only)
- Rating at or above the minimum
- Query matches the name or a search keyword
"""

from dataclasses import dataclass, field

from tradinta_discovery.ranking.models import (
    ALL_CATEGORIES,
    Channel,
    Product,
    SearchOptions,
    Seller,
)

# MOQ assumed when neither product nor seller defines one
DEFAULT_MOQ = 1


@dataclass
class FilterResult:
    """Result of applying hard filters to a product."""

    passed: bool
    reasons: list[str] = field(default_factory=list)

    def add_rejection(self, reason: str) -> None:
        """Add a rejection reason."""
        self.passed = False
        self.reasons.append(reason)


def resolve_comparison_price(product: Product, channel: Channel) -> float:
    """Price used for range filtering.

    Retail price of the first variant on the direct channel when it has one,
    otherwise its wholesale price. No variants at all resolves to 0.
    """
    if not product.variants:
        return 0.0
    variant = product.variants[0]
    if channel == Channel.DIRECT and variant.retail_price:
        return variant.retail_price
    return variant.price


def resolve_effective_moq(product: Product, seller: Seller | None = None) -> int:
    """Product MOQ, falling back to the seller default, then to 1."""
    if product.moq:
        return product.moq
    if seller is not None and seller.moq:
        return seller.moq
    return DEFAULT_MOQ


def matches_query(product: Product, query: str) -> bool:
    """Case-insensitive match on product name or search keywords."""
    needle = query.lower()
    if needle in product.name.lower():
        return True
    return any(needle in keyword for keyword in product.search_keywords)


def apply_hard_filters(
    product: Product,
    seller: Seller | None,
    options: SearchOptions,
    moq_range: int,
) -> FilterResult:
    """Apply all hard filters to a candidate product.

    Args:
        product: Candidate product
        seller: Seller resolved from the directory, None if missing
        options: Request options
        moq_range: Tolerance around ``options.moq``

    Returns:
        FilterResult with pass/fail and the first rejection reason
    """
    result = FilterResult(passed=True)

    # --- Seller Filters ---

    if not product.seller_id:
        result.add_rejection("Product has no seller reference")
        return result

    if seller is None:
        result.add_rejection(f"Seller {product.seller_id} not found")
        return result

    if seller.is_suspended:
        result.add_rejection(f"Seller {seller.id} is suspended")
        return result

    # --- Scope Filters ---

    if options.product_ids is not None and product.id not in options.product_ids:
        result.add_rejection("Product not in requested set")
        return result

    if options.is_direct and not product.list_on_direct:
        result.add_rejection("Product not listed on the direct channel")
        return result

    if options.category != ALL_CATEGORIES and product.category != options.category:
        result.add_rejection(
            f"Category {product.category!r} != requested {options.category!r}"
        )
        return result

    if options.verified_only and not seller.is_verified:
        result.add_rejection(
            f"Seller status {seller.verification_status.value} is not Verified"
        )
        return result

    # --- Pricing Filters ---

    price = resolve_comparison_price(product, options.channel)

    if options.min_price is not None and price < options.min_price:
        result.add_rejection(f"Price {price:.2f} < minimum {options.min_price:.2f}")
        return result

    if options.max_price is not None and price > options.max_price:
        result.add_rejection(f"Price {price:.2f} > maximum {options.max_price:.2f}")
        return result

    # --- MOQ Filter (standard channel only) ---

    if options.moq is not None and not options.is_direct:
        effective_moq = resolve_effective_moq(product, seller)
        lower = max(0, options.moq - moq_range)
        upper = options.moq + moq_range
        if not lower <= effective_moq <= upper:
            result.add_rejection(f"MOQ {effective_moq} outside [{lower}, {upper}]")
            return result

    # --- Quality Filters ---

    rating = product.rating or 0.0
    if options.min_rating is not None and rating < options.min_rating:
        result.add_rejection(f"Rating {rating} < minimum {options.min_rating}")
        return result

    # --- Text Filter ---

    if options.query and not matches_query(product, options.query):
        result.add_rejection(f"No match for query {options.query!r}")
        return result

    return result
