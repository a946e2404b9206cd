"""Tests for sorting and pagination."""

import math

import pytest

from tradinta_discovery.ranking import paginate, sort_ranked
from tradinta_discovery.ranking.models import RankedProduct

from factories import make_product


def ranked(product_id: str, score: float) -> RankedProduct:
    return RankedProduct(product=make_product(product_id), score=score)


@pytest.fixture
def catalog() -> list[RankedProduct]:
    """25 products with a few tied scores."""
    return [ranked(f"p{i:02d}", float(i // 3)) for i in range(25)]


class TestSortRanked:
    def test_descending_by_score(self, catalog) -> None:
        scores = [item.score for item in sort_ranked(catalog)]
        assert scores == sorted(scores, reverse=True)

    def test_ties_broken_by_product_id(self) -> None:
        items = [ranked("c", 5), ranked("a", 5), ranked("b", 5), ranked("z", 9)]
        assert [item.id for item in sort_ranked(items)] == ["z", "a", "b", "c"]

    def test_negative_scores_sort_last(self) -> None:
        items = [ranked("neg", -4800), ranked("pos", 850), ranked("zero", 0)]
        assert [item.id for item in sort_ranked(items)] == ["pos", "zero", "neg"]


class TestPaginate:
    def test_counts(self, catalog) -> None:
        page = paginate(catalog, page=1, page_size=10)
        assert page.total_count == 25
        assert page.total_pages == 3
        assert len(page.products) == 10

    def test_pages_cover_everything_once(self, catalog) -> None:
        page_size = 7
        first = paginate(catalog, page=1, page_size=page_size)
        seen: list[str] = []
        for number in range(1, first.total_pages + 1):
            seen.extend(item.id for item in paginate(catalog, number, page_size).products)

        assert len(seen) == first.total_count
        assert len(set(seen)) == len(seen)
        assert first.total_pages == math.ceil(25 / page_size)

    def test_last_page_is_partial(self, catalog) -> None:
        page = paginate(catalog, page=3, page_size=10)
        assert len(page.products) == 5

    def test_page_past_end_is_empty(self, catalog) -> None:
        page = paginate(catalog, page=99, page_size=10)
        assert page.products == []
        assert page.total_count == 25
        assert page.total_pages == 3

    def test_empty_input(self) -> None:
        page = paginate([], page=1, page_size=12)
        assert page.products == []
        assert page.total_count == 0
        assert page.total_pages == 0
