"""Command-line interface for running the discovery engine."""

import argparse
import asyncio
import json
import logging
import sys

from tradinta_discovery.config import get_settings
from tradinta_discovery.errors import InvalidSearchOptionsError, RankingUnavailableError
from tradinta_discovery.ranking.models import Channel, PaginatedProducts, SearchOptions


def create_example_options() -> SearchOptions:
    """Example options: verified cement suppliers near a 100-bag MOQ."""
    return SearchOptions(
        query="cement",
        category="building-materials",
        verified_only=True,
        min_price=500,
        max_price=1500,
        moq=100,
        moq_range=50,
        min_rating=3.5,
        page=1,
        page_size=12,
        channel=Channel.STANDARD,
    )


def build_engine():
    """Engine over the configured database."""
    from tradinta_discovery.db.base import async_session_maker
    from tradinta_discovery.providers.sql import build_sql_providers
    from tradinta_discovery.services.discovery import DiscoveryEngine

    return DiscoveryEngine(build_sql_providers(async_session_maker))


def print_page(page: PaginatedProducts, show_breakdown: bool) -> None:
    """Print a ranked page as a table."""
    print(
        f"Page {page.page}/{page.total_pages} "
        f"({page.total_count} matching products)"
    )
    print(f"{'=' * 60}")

    if not page.products:
        print("No products match these options.")
        return

    start = (page.page - 1) * page.page_size
    for position, item in enumerate(page.products, start=start + 1):
        badge = " [Sponsored]" if item.is_sponsored else ""
        print(f"{position:>3}. {item.product.name}{badge}")
        print(f"     score {item.score:>10.1f}  seller {item.seller_name or '-'}")
        if show_breakdown:
            for term, points in item.score_breakdown.items():
                print(f"       {term:18}: {points:+.1f}")


def rank_command(args: argparse.Namespace) -> int:
    """Run a ranking against the database."""
    options = {
        "query": args.query,
        "category": args.category,
        "verified_only": args.verified_only,
        "min_price": args.min_price,
        "max_price": args.max_price,
        "moq": args.moq,
        "moq_range": args.moq_range,
        "min_rating": args.min_rating,
        "page": args.page,
        "page_size": args.page_size,
        "channel": Channel.DIRECT if args.direct else Channel.STANDARD,
        "viewer_id": args.viewer,
    }
    options = {key: value for key, value in options.items() if value is not None}

    engine = build_engine()
    try:
        page = asyncio.run(engine.get_ranked_products(options))
    except InvalidSearchOptionsError as e:
        for problem in e.problems:
            print(f"Invalid option - {problem}", file=sys.stderr)
        return 2
    except RankingUnavailableError as e:
        print(f"Ranking unavailable ({e.provider})", file=sys.stderr)
        return 1

    print_page(page, args.breakdown)
    return 0


def featured_command(args: argparse.Namespace) -> int:
    """Show the spotlight content of a category."""
    engine = build_engine()

    async def _run():
        category = await engine.providers.catalog.get_category(args.category)
        if category is None:
            return None
        return await engine.get_featured_category_content(category)

    items = asyncio.run(_run())
    if items is None:
        print(f"Unknown category: {args.category}", file=sys.stderr)
        return 1

    for item in items:
        seller = f" ({item.seller_name})" if item.seller_name else ""
        print(f"{item.image_url} -> {item.href}{seller}")
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tradinta-discovery",
        description="Tradinta Discovery Engine",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Rank command
    rank_parser = subparsers.add_parser("rank", help="Rank products")
    rank_parser.add_argument("--query", type=str, help="Free-text query")
    rank_parser.add_argument("--category", type=str, help="Exact category")
    rank_parser.add_argument(
        "--verified-only", action="store_true", default=None, help="Verified sellers only"
    )
    rank_parser.add_argument("--min-price", type=float, help="Minimum price")
    rank_parser.add_argument("--max-price", type=float, help="Maximum price")
    rank_parser.add_argument("--moq", type=int, help="Target MOQ")
    rank_parser.add_argument("--moq-range", type=int, help="MOQ tolerance")
    rank_parser.add_argument("--min-rating", type=float, help="Minimum rating")
    rank_parser.add_argument("--page", type=int, help="Page number (1-based)")
    rank_parser.add_argument("--page-size", type=int, help="Products per page")
    rank_parser.add_argument("--direct", action="store_true", help="Direct (B2C) channel")
    rank_parser.add_argument("--viewer", type=str, help="Viewer id for personalization")
    rank_parser.add_argument(
        "--breakdown", action="store_true", help="Show per-term score breakdown"
    )

    # Featured command
    featured_parser = subparsers.add_parser("featured", help="Category spotlight content")
    featured_parser.add_argument("category", type=str, help="Category id")

    # Example command
    example_parser = subparsers.add_parser("example", help="Show example search options JSON")
    example_parser.add_argument("--pretty", action="store_true", help="Pretty print JSON")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_settings().log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "rank":
        return rank_command(args)
    elif args.command == "featured":
        return featured_command(args)
    elif args.command == "example":
        data = create_example_options().model_dump(mode="json", exclude_none=True)
        print(json.dumps(data, indent=2 if args.pretty else None))
    else:
        parser.print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
