"""Unit tests for financial math utilities."""

import math

import pytest

from finrisk.utils.financial_math import (
    growth_rate,
    ieee_divide,
    mean,
    population_stddev,
    ratio,
    round_half_up,
)


# ── growth_rate ──────────────────────────────────────────────────────────

class TestGrowthRate:
    def test_positive_growth(self):
        assert growth_rate(115, 100) == pytest.approx(0.15)

    def test_negative_growth(self):
        assert growth_rate(85, 100) == pytest.approx(-0.15)

    def test_zero_growth(self):
        assert growth_rate(100, 100) == 0.0

    def test_zero_base_returns_none(self):
        assert growth_rate(100, 0) is None

    def test_large_growth(self):
        assert growth_rate(300, 100) == 2.0


# ── ratio / ieee_divide ──────────────────────────────────────────────────

class TestRatio:
    def test_basic_ratio(self):
        assert ratio(30, 100) == 0.3

    def test_zero_denominator_returns_none(self):
        assert ratio(30, 0) is None

    def test_negative_numerator(self):
        assert ratio(-10, 100) == -0.1


class TestIeeeDivide:
    def test_regular_division(self):
        assert ieee_divide(1, 4) == 0.25

    def test_positive_over_zero_is_inf(self):
        assert ieee_divide(5, 0) == math.inf

    def test_negative_over_zero_is_minus_inf(self):
        assert ieee_divide(-5, 0) == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(ieee_divide(0, 0))


# ── mean / population_stddev ────────────────────────────────────────────

class TestStatistics:
    def test_mean(self):
        assert mean([10, 20, 30]) == 20.0

    def test_mean_empty(self):
        assert mean([]) == 0.0

    def test_population_stddev_divides_by_n(self):
        # sample stddev of [1, 3] would be sqrt(2)
        assert population_stddev([1, 3]) == 1.0

    def test_population_stddev_constant_series(self):
        assert population_stddev([0.1, 0.1, 0.1]) == pytest.approx(0.0)

    def test_population_stddev_empty(self):
        assert population_stddev([]) == 0.0


# ── round_half_up ────────────────────────────────────────────────────────

class TestRoundHalfUp:
    def test_half_rounds_away_from_zero(self):
        assert round_half_up(2.5) == 3.0
        assert round_half_up(-2.5) == -3.0

    def test_two_decimals(self):
        assert round_half_up(1.005, 2) == 1.01
        assert round_half_up(2.555, 2) == 2.56

    def test_builtin_round_differs(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3.0

    def test_non_finite_passes_through(self):
        assert round_half_up(math.inf, 2) == math.inf
        assert math.isnan(round_half_up(math.nan, 2))
