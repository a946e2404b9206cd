"""Discovery Engine - fetches, filters, scores and ranks products.

Single source of truth for any caller that needs a sorted product list.
Every call recomputes the ranking from current data:

1. Validate the request options (nothing is fetched for a bad request)
2. Fetch catalog, sellers, viewer follows/wishlist and ad slots in parallel
3. Drop ineligible candidates with the hard filters
4. Batch-fetch plans, moderation status and report counts for survivors
5. Score, sort and slice the requested page

Usage:
    engine = DiscoveryEngine(build_sql_providers(async_session_maker))
    page = await engine.get_ranked_products({"query": "cement", "page": 2})
    print(f"{page.total_count} products over {page.total_pages} pages")
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import ValidationError

from tradinta_discovery.config import Settings, get_settings
from tradinta_discovery.errors import InvalidSearchOptionsError, RankingUnavailableError
from tradinta_discovery.providers.base import Providers
from tradinta_discovery.ranking.filters import apply_hard_filters
from tradinta_discovery.ranking.models import (
    EntityType,
    FeaturedItem,
    PaginatedProducts,
    Product,
    ProductCategory,
    RankedProduct,
    RankingWeights,
    SearchOptions,
    SearchResults,
    Seller,
    ViewerContext,
)
from tradinta_discovery.ranking.pagination import paginate
from tradinta_discovery.ranking.placement import (
    active_overrides,
    category_spotlight_slot,
    find_slot,
    pinned_ids,
)
from tradinta_discovery.ranking.scorer import CandidateSignals, score_product
from tradinta_discovery.timeutils import utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upper bound of distinct ids accepted by get_products_by_ids
MAX_PRODUCT_IDS = 30

# Sellers returned alongside products by search()
MAX_SELLER_RESULTS = 10

# Page size used by the admin product lookup
LOOKUP_PAGE_SIZE = 20


@dataclass(frozen=True)
class RequestContext:
    """Per-request inputs that are not search options.

    Built by the API layer from the inbound request and passed in
    explicitly, so the engine never reads ambient request state.
    """

    viewer_id: Optional[str] = None
    user_agent: str = "unknown"
    now: datetime = field(default_factory=utc_now)


class DiscoveryEngine:
    """Ranks the published catalog per request.

    Usage:
        engine = DiscoveryEngine(providers)
        page = await engine.get_ranked_products(SearchOptions(category="cement"))
    """

    def __init__(
        self,
        providers: Providers,
        weights: Optional[RankingWeights] = None,
        settings: Optional[Settings] = None,
        max_concurrent_lookups: int = 8,
    ):
        """Initialize the engine.

        Args:
            providers: Data providers to read from.
            weights: Ranking weights (defaults if None).
            settings: Application settings (cached settings if None).
            max_concurrent_lookups: Cap on in-flight per-candidate lookups.
        """
        self.providers = providers
        self.weights = weights or RankingWeights()
        self.settings = settings or get_settings()
        self.max_concurrent_lookups = max_concurrent_lookups

    # --- Request validation ---

    def build_options(
        self,
        options: SearchOptions | Mapping[str, Any] | None,
    ) -> SearchOptions:
        """Validate raw options into SearchOptions.

        Raises:
            InvalidSearchOptionsError: If any option is invalid.
        """
        if options is None:
            options = SearchOptions()
        elif not isinstance(options, SearchOptions):
            try:
                options = SearchOptions.model_validate(dict(options))
            except ValidationError as e:
                problems = [
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]
                raise InvalidSearchOptionsError(problems) from e

        page_size = self._page_size(options)
        if page_size > self.settings.max_page_size:
            raise InvalidSearchOptionsError(
                [f"page_size: {page_size} exceeds maximum {self.settings.max_page_size}"]
            )

        return options

    def _page_size(self, options: SearchOptions) -> int:
        if options.page_size is None:
            return self.settings.default_page_size
        return options.page_size

    def _moq_range(self, options: SearchOptions) -> int:
        if options.moq_range is None:
            return self.settings.default_moq_range
        return options.moq_range

    # --- Provider access ---

    async def _fetch(self, provider: str, call: Awaitable[T]) -> T:
        """Await a required provider call, failing the whole request on error."""
        try:
            return await call
        except Exception as e:
            logger.error(f"Provider {provider} failed: {e}")
            raise RankingUnavailableError(
                f"Ranking unavailable: {provider} failed", provider=provider
            ) from e

    async def _lookup_all(
        self,
        signal: str,
        ids: Iterable[str],
        lookup: Callable[[str], Awaitable[T]],
        semaphore: asyncio.Semaphore,
    ) -> dict[str, Optional[T]]:
        """Run one auxiliary lookup per distinct id, concurrently.

        A failed lookup maps to None so the matching score term is zero.
        """
        ordered_ids = sorted(set(ids))

        async def _limited(entity_id: str) -> T:
            async with semaphore:
                return await lookup(entity_id)

        results = await asyncio.gather(
            *(_limited(entity_id) for entity_id in ordered_ids),
            return_exceptions=True,
        )

        values: dict[str, Optional[T]] = {}
        failed = 0
        for entity_id, result in zip(ordered_ids, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                failed += 1
                logger.warning(f"Failed to get {signal} for {entity_id}: {result}")
                values[entity_id] = None
            else:
                values[entity_id] = result

        if failed:
            logger.info(f"{signal}: {failed}/{len(ordered_ids)} lookups degraded to neutral")
        return values

    async def _fetch_all(self, *calls: Awaitable[Any]) -> list[Any]:
        """Await required provider calls concurrently.

        The first failure cancels the calls still in flight and is re-raised.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(call) for call in calls]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]
        return [task.result() for task in tasks]

    async def _viewer_ids(
        self,
        signal: str,
        lookup: Callable[[str], Awaitable[list[str]]],
        viewer_id: Optional[str],
    ) -> list[str]:
        """A viewer's follows or wishlist. Failure degrades to no bonus."""
        if not viewer_id:
            return []
        try:
            return list(await lookup(viewer_id))
        except Exception as e:
            logger.warning(f"Failed to get {signal} for viewer {viewer_id}: {e}")
            return []

    # --- Ranking ---

    async def get_ranked_products(
        self,
        options: SearchOptions | Mapping[str, Any] | None = None,
        context: Optional[RequestContext] = None,
    ) -> PaginatedProducts:
        """Fetch, filter, score and rank products.

        Args:
            options: Search, filter and pagination options.
            context: Request context (anonymous, current time if None).

        Returns:
            The requested page with total count and page count.

        Raises:
            InvalidSearchOptionsError: Before any fetch, for bad options.
            RankingUnavailableError: If a required provider fails.
        """
        options = self.build_options(options)
        context = context or RequestContext()
        viewer_id = options.viewer_id or context.viewer_id
        page_size = self._page_size(options)
        moq_range = self._moq_range(options)

        # Step 1: Data ingestion (parallel)
        interactions = self.providers.interactions
        (
            products,
            sellers,
            followed_ids,
            wishlisted_ids,
            overrides,
        ) = await self._fetch_all(
            self._fetch("catalog", self.providers.catalog.list_published_products()),
            self._fetch("sellers", self.providers.sellers.get_sellers_by_ids(set())),
            self._viewer_ids("follows", interactions.get_followed_seller_ids, viewer_id),
            self._viewer_ids(
                "wishlist", interactions.get_wishlisted_product_ids, viewer_id
            ),
            self._fetch("placements", self.providers.placements.list_placement_overrides()),
        )

        viewer = None
        if viewer_id:
            viewer = ViewerContext(
                viewer_id=viewer_id,
                followed_seller_ids=frozenset(followed_ids),
                wishlisted_product_ids=frozenset(wishlisted_ids),
            )

        pinned = pinned_ids(active_overrides(overrides, context.now), EntityType.PRODUCT)

        # Step 2: Hard filtering
        eligible: list[tuple[Product, Seller]] = []
        for product in products:
            seller = sellers.get(product.seller_id) if product.seller_id else None
            result = apply_hard_filters(product, seller, options, moq_range)
            if not result.passed:
                logger.debug(f"Filtered {product.id}: {result.reasons[0]}")
                continue
            eligible.append((product, seller))

        # Step 3: Auxiliary signals (batched per distinct id)
        plans, moderation, reports = await self._gather_signals(eligible, context.now)

        # Step 4: Scoring
        ranked: list[RankedProduct] = []
        for product, seller in eligible:
            signals = CandidateSignals(
                is_pinned=product.id in pinned,
                marketing_plan=plans.get(seller.id),
                moderation=moderation.get(product.id),
                unresolved_reports=reports.get(product.id),
                viewer=viewer,
            )
            ranked.append(score_product(product, seller, signals, self.weights))

        # Step 5: Sorting & pagination
        page = paginate(ranked, options.page, page_size)

        logger.info(
            f"Ranked {len(products)} candidates: {page.total_count} eligible, "
            f"page {page.page}/{page.total_pages} ({len(page.products)} items)"
        )
        return page

    async def _gather_signals(
        self,
        eligible: list[tuple[Product, Seller]],
        now: datetime,
    ) -> tuple[dict, dict, dict]:
        """Fetch plan, moderation and report signals for eligible candidates."""
        if not eligible:
            return {}, {}, {}

        seller_ids = {seller.id for _, seller in eligible}
        product_ids = {product.id for product, _ in eligible}
        semaphore = asyncio.Semaphore(self.max_concurrent_lookups)
        sellers = self.providers.sellers
        moderation = self.providers.moderation

        async def _plan(seller_id: str):
            return await sellers.get_active_marketing_plan(seller_id, now)

        return await asyncio.gather(
            self._lookup_all("marketing plan", seller_ids, _plan, semaphore),
            self._lookup_all(
                "moderation status",
                product_ids,
                moderation.get_product_moderation_status,
                semaphore,
            ),
            self._lookup_all(
                "report count",
                product_ids,
                moderation.count_unresolved_reports,
                semaphore,
            ),
        )

    # --- Lookups built on the ranking ---

    async def search(
        self,
        query: str,
        context: Optional[RequestContext] = None,
    ) -> SearchResults:
        """Search products (ranked) and sellers (by keyword).

        An empty query returns empty results without touching the store.
        """
        clean_query = query.lower().strip()
        if not clean_query:
            return SearchResults()

        ranked, sellers = await self._fetch_all(
            self.get_ranked_products(SearchOptions(query=clean_query), context),
            self._fetch(
                "sellers",
                self.providers.sellers.search_sellers(clean_query, MAX_SELLER_RESULTS),
            ),
        )
        return SearchResults(products=ranked.products, sellers=sellers)

    async def lookup_product(
        self,
        query: str,
        context: Optional[RequestContext] = None,
    ) -> Optional[RankedProduct]:
        """Find a single product by exact id or name fragment."""
        lower_query = query.lower().strip()
        if not lower_query:
            return None

        ranked = await self.get_ranked_products(
            SearchOptions(query=lower_query, page_size=LOOKUP_PAGE_SIZE), context
        )
        for item in ranked.products:
            if item.id.lower() == lower_query or lower_query in item.product.name.lower():
                return item
        return None

    async def lookup_seller(self, query: str) -> Optional[Seller]:
        """Find a single seller by shop id, slug or id, then by keyword."""
        identifier = query.strip()
        if not identifier:
            return None

        sellers = self.providers.sellers
        seller = await self._fetch("sellers", sellers.find_seller(identifier))
        if seller is not None:
            return seller

        matches = await self._fetch(
            "sellers", sellers.search_sellers(identifier.lower(), 1)
        )
        return matches[0] if matches else None

    async def get_products_by_ids(
        self,
        product_ids: Iterable[str],
        context: Optional[RequestContext] = None,
    ) -> list[RankedProduct]:
        """Rank a specific set of products (at most 30 distinct ids)."""
        unique_ids = list(dict.fromkeys(pid for pid in product_ids if pid))[:MAX_PRODUCT_IDS]
        if not unique_ids:
            return []

        ranked = await self.get_ranked_products(
            SearchOptions(product_ids=frozenset(unique_ids), page_size=len(unique_ids)),
            context,
        )
        return ranked.products

    async def get_featured_category_content(
        self,
        category: ProductCategory,
        context: Optional[RequestContext] = None,
    ) -> list[FeaturedItem]:
        """Content for a category card: pinned products or the default image.

        The override wins only while at least one pinned product still
        resolves (product and its seller exist).
        """
        context = context or RequestContext()
        href = f"/category/{category.id}"

        overrides = await self._fetch(
            "placements", self.providers.placements.list_placement_overrides()
        )
        slot = find_slot(
            active_overrides(overrides, context.now),
            category_spotlight_slot(category.id),
        )

        if slot is not None and slot.pinned_entities:
            entity_ids = [
                entity.id
                for entity in slot.pinned_entities
                if entity.entity_type == EntityType.PRODUCT
            ]
            items = await asyncio.gather(
                *(self._featured_item(entity_id, href) for entity_id in entity_ids)
            )
            valid_items = [item for item in items if item is not None]
            if valid_items:
                return valid_items

        return [FeaturedItem(image_url=category.image_url, href=href)]

    async def _featured_item(self, product_id: str, href: str) -> Optional[FeaturedItem]:
        try:
            product = await self.providers.catalog.get_product_by_id(product_id)
            if product is None or not product.seller_id:
                return None
            seller = await self.providers.sellers.get_seller_by_id(product.seller_id)
        except Exception as e:
            logger.warning(f"Failed to resolve pinned product {product_id}: {e}")
            return None

        if seller is None:
            return None
        return FeaturedItem(
            image_url=product.image_url,
            href=href,
            seller_name=seller.shop_name,
            seller_slug=seller.slug,
        )
