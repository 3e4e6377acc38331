"""Unit tests for domain.scoring module."""

import pytest

from finrisk.config import Settings
from finrisk.domain.scoring import (
    capped_mean,
    category_scores,
    renormalized_weighted_mean,
    weighted_sum,
)
from finrisk.schemas.ratio import Ratio, RatioCategory, RatioStatus


def _ratio(category: RatioCategory, status: RatioStatus) -> Ratio:
    return Ratio(
        name="x",
        category=category,
        value=1.0,
        status=status,
        formula="a / b",
        description="test ratio",
    )


class TestCategoryScores:
    """Test per-category status point averages."""

    def test_mixed_statuses_average(self):
        ratios = [
            _ratio(RatioCategory.LIQUIDITY, RatioStatus.GOOD),
            _ratio(RatioCategory.LIQUIDITY, RatioStatus.WARNING),
            _ratio(RatioCategory.LIQUIDITY, RatioStatus.CRITICAL),
        ]
        scores = category_scores(ratios, Settings())
        assert scores.liquidity == pytest.approx(60.0)

    def test_empty_category_scores_zero(self):
        ratios = [_ratio(RatioCategory.PROFITABILITY, RatioStatus.GOOD)]
        scores = category_scores(ratios, Settings())
        assert scores.profitability == 100.0
        assert scores.liquidity == 0.0
        assert scores.leverage == 0.0
        assert scores.efficiency == 0.0

    def test_custom_status_points(self):
        s = Settings(status_points={"Good": 10.0, "Warning": 5.0, "Critical": 1.0})
        ratios = [_ratio(RatioCategory.EFFICIENCY, RatioStatus.WARNING)]
        assert category_scores(ratios, s).efficiency == 5.0


class TestWeightedSum:
    def test_basic(self):
        assert weighted_sum({"a": 100, "b": 50}, {"a": 0.4, "b": 0.6}) == pytest.approx(70.0)

    def test_extra_score_keys_are_ignored(self):
        assert weighted_sum({"a": 100, "z": 1000}, {"a": 0.5}) == 50.0


class TestRenormalizedWeightedMean:
    """A missing category must not drag the aggregate toward zero."""

    def test_equal_weights(self):
        assert renormalized_weighted_mean([(10, 0.5), (40, 0.5)]) == 25.0

    def test_weights_need_not_sum_to_one(self):
        assert renormalized_weighted_mean([(80, 0.3), (20, 0.3)]) == pytest.approx(50.0)

    def test_empty_is_zero(self):
        assert renormalized_weighted_mean([]) == 0.0

    def test_accepts_generator(self):
        pairs = ((s, 1.0) for s in (10, 20, 30))
        assert renormalized_weighted_mean(pairs) == pytest.approx(20.0)


class TestCappedMean:
    def test_zeros_are_counted(self):
        assert capped_mean([0, 90, 0, 80]) == 42.5

    def test_capped(self):
        assert capped_mean([150, 150]) == 100.0

    def test_empty(self):
        assert capped_mean([]) == 0.0
