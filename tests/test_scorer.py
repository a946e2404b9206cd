"""Tests for the additive rank function.

Expected values are hand-calculated from the default weight table.
"""

import pytest

from tradinta_discovery.ranking import (
    CandidateSignals,
    RankingWeights,
    calculate_points,
    score_product,
)
from tradinta_discovery.ranking.models import (
    MarketingPlan,
    ModerationStatus,
    VerificationStatus,
    ViewerContext,
)

from factories import make_product, make_seller


@pytest.fixture
def weights() -> RankingWeights:
    return RankingWeights()


class TestRankingWeights:
    """Tests for sponsorship tiers."""

    @pytest.mark.parametrize(
        "plan_id,expected",
        [("lift", 2000), ("flow", 5000), ("surge", 10000), ("legacy-gold", 2000)],
    )
    def test_sponsorship_tiers(self, weights, plan_id, expected) -> None:
        assert weights.sponsorship_bonus(plan_id) == expected

    def test_tiers_ascend(self, weights) -> None:
        assert (
            weights.sponsorship_tier_1
            < weights.sponsorship_tier_2
            < weights.sponsorship_tier_3
            < weights.manual_override
        )


class TestCalculatePoints:
    """Individual terms."""

    def test_neutral_product_scores_zero(self, weights) -> None:
        score, breakdown = calculate_points(
            make_product("p1"), make_seller(), CandidateSignals(), weights
        )
        assert score == 0
        assert breakdown == {}

    def test_rating_and_reviews_are_linear(self, weights) -> None:
        product = make_product("p1", rating=4.8, review_count=37)
        score, breakdown = calculate_points(product, make_seller(), CandidateSignals(), weights)
        assert breakdown["rating"] == pytest.approx(240)
        assert breakdown["review_count"] == 37
        assert score == pytest.approx(277)

    def test_verified_bonus_only_for_verified(self, weights) -> None:
        verified = make_seller(verification_status=VerificationStatus.VERIFIED)
        pending = make_seller(verification_status=VerificationStatus.PENDING_ADMIN)
        product = make_product("p1")
        assert calculate_points(product, verified, CandidateSignals(), weights)[0] == 500
        assert calculate_points(product, pending, CandidateSignals(), weights)[0] == 0

    def test_reports_penalty(self, weights) -> None:
        score, _ = calculate_points(
            make_product("p1"), make_seller(), CandidateSignals(unresolved_reports=3), weights
        )
        assert score == -300

    def test_missing_signals_are_neutral(self, weights) -> None:
        signals = CandidateSignals(marketing_plan=None, moderation=None, unresolved_reports=None)
        score, breakdown = calculate_points(make_product("p1"), make_seller(), signals, weights)
        assert score == 0
        assert breakdown == {}

    def test_stored_demotion_ignored_when_moderation_lookup_missing(self, weights) -> None:
        product = make_product("p1", is_demoted=True)
        score, breakdown = calculate_points(product, make_seller(), CandidateSignals(), weights)
        assert score == 0
        assert "product_demoted" not in breakdown

    def test_personalization_requires_viewer(self, weights) -> None:
        product = make_product("p1")
        seller = make_seller("seller-1")
        viewer = ViewerContext(
            viewer_id="buyer",
            followed_seller_ids=frozenset({"seller-1"}),
            wishlisted_product_ids=frozenset({"p1"}),
        )
        with_viewer, breakdown = calculate_points(
            product, seller, CandidateSignals(viewer=viewer), weights
        )
        anonymous, _ = calculate_points(product, seller, CandidateSignals(), weights)
        assert with_viewer == 300
        assert breakdown == {"follows_seller": 200, "in_wishlist": 100}
        assert anonymous == 0

    def test_custom_weights(self) -> None:
        weights = RankingWeights(rating=10, verified_seller=0)
        seller = make_seller(verification_status=VerificationStatus.VERIFIED)
        score, _ = calculate_points(
            make_product("p1", rating=5), seller, CandidateSignals(), weights
        )
        assert score == 50


class TestModerationComposability:
    """Demotion penalties stack."""

    def score(self, product_demoted: bool, seller_demoted: bool) -> float:
        product = make_product("p1", rating=4.5, review_count=20)
        seller = make_seller(is_demoted=seller_demoted)
        signals = CandidateSignals(moderation=ModerationStatus(is_demoted=product_demoted))
        return calculate_points(product, seller, signals)[0]

    def test_both_lower_than_one_lower_than_none(self) -> None:
        neither = self.score(False, False)
        product_only = self.score(True, False)
        seller_only = self.score(False, True)
        both = self.score(True, True)

        assert both < product_only < neither
        assert both < seller_only < neither
        assert neither - both == 10_000

    def test_penalty_can_drive_score_negative(self) -> None:
        assert self.score(True, True) < 0


class TestPinning:
    """Manual override dominance."""

    def test_pinned_beats_identical_unpinned(self) -> None:
        product = make_product("p1", rating=2, review_count=3)
        seller = make_seller()
        pinned, _ = calculate_points(product, seller, CandidateSignals(is_pinned=True))
        unpinned, _ = calculate_points(product, seller, CandidateSignals())
        assert pinned > unpinned

    def test_pinned_beats_best_organic_product(self) -> None:
        weak = make_product("weak", rating=0, review_count=0)
        strong = make_product("strong", rating=5, review_count=500)
        verified = make_seller(verification_status=VerificationStatus.VERIFIED)
        viewer = ViewerContext(
            viewer_id="v",
            followed_seller_ids=frozenset({verified.id}),
            wishlisted_product_ids=frozenset({"strong"}),
        )
        pinned, _ = calculate_points(weak, make_seller(), CandidateSignals(is_pinned=True))
        organic, _ = calculate_points(
            strong,
            verified,
            CandidateSignals(marketing_plan=MarketingPlan(id="surge"), viewer=viewer),
        )
        assert pinned > organic


class TestScoreProduct:
    """Composed ranked read model."""

    def test_seller_fields_denormalized(self) -> None:
        seller = make_seller(
            "seller-9",
            shop_name="Savannah Cement",
            slug="savannah-cement",
            location="Athi River",
            lead_time="3 days",
            moq=50,
            shop_id="sav",
            verification_status=VerificationStatus.VERIFIED,
        )
        ranked = score_product(make_product("p1", seller_id="seller-9"), seller)
        assert ranked.id == "p1"
        assert ranked.seller_name == "Savannah Cement"
        assert ranked.seller_slug == "savannah-cement"
        assert ranked.seller_location == "Athi River"
        assert ranked.lead_time == "3 days"
        assert ranked.seller_moq == 50
        assert ranked.shop_id == "sav"
        assert ranked.is_verified is True

    def test_sponsored_by_plan(self) -> None:
        ranked = score_product(
            make_product("p1"), make_seller(), CandidateSignals(marketing_plan=MarketingPlan(id="lift"))
        )
        assert ranked.is_sponsored is True
        assert ranked.score == 2000

    def test_sponsored_by_pin(self) -> None:
        ranked = score_product(make_product("p1"), make_seller(), CandidateSignals(is_pinned=True))
        assert ranked.is_sponsored is True

    def test_verification_alone_is_not_sponsorship(self) -> None:
        seller = make_seller(verification_status=VerificationStatus.VERIFIED)
        ranked = score_product(make_product("p1", rating=5), seller)
        assert ranked.is_sponsored is False

    def test_plan_beats_quality_scenario(self) -> None:
        """A (verified, 5 stars, 100 reviews) vs B (surge plan, 3 stars) vs C (demoted, 4 stars)."""
        a = score_product(
            make_product("A", rating=5, review_count=100),
            make_seller("sa", verification_status=VerificationStatus.VERIFIED),
        )
        b = score_product(
            make_product("B", rating=3, review_count=0),
            make_seller("sb", verification_status=VerificationStatus.PENDING_ADMIN),
            CandidateSignals(marketing_plan=MarketingPlan(id="surge")),
        )
        c = score_product(
            make_product("C", rating=4),
            make_seller("sc"),
            CandidateSignals(moderation=ModerationStatus(is_demoted=True)),
        )

        assert a.score == 850
        assert b.score == 10150
        assert c.score == -4800
        assert b.score > a.score > c.score
