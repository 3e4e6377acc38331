"""Tests for Z-Score, revenue forecasting and profitability trend."""

import math

import pytest

from finrisk.config import Settings
from finrisk.engines.forecaster import Forecaster, next_period
from finrisk.errors import InsufficientHistoryError, MissingRequiredFieldError
from finrisk.schemas.forecast import BankruptcyRisk, ProfitabilityTrend, ZScoreZone
from finrisk.schemas.statement import FinancialStatement
from tests.fixtures import make_statement


# ── Z-Score ──────────────────────────────────────────────────────────────

class TestZScore:
    def test_reference_statement_is_grey(self, forecaster, healthy_statement):
        # 1.2*0.2 + 1.4*0.3 + 3.3*0.12 + 0.6*1.5 + 1.0*0.6 = 2.556
        result = forecaster.calculate_z_score(healthy_statement)
        assert result.z_score == 2.56
        assert result.zone == ZScoreZone.GREY
        assert result.bankruptcy_risk == BankruptcyRisk.MEDIUM

    def test_components(self, forecaster, healthy_statement):
        c = forecaster.calculate_z_score(healthy_statement).components
        assert c.working_capital_ratio == pytest.approx(0.2)
        assert c.retained_earnings_ratio == pytest.approx(0.3)
        assert c.ebit_ratio == pytest.approx(0.12)
        assert c.equity_to_liabilities_ratio == pytest.approx(1.5)
        assert c.sales_ratio == pytest.approx(0.6)

    def test_safe_zone(self, forecaster):
        s = make_statement(
            current_assets=3_000_000,
            current_liabilities=500_000,
            retained_earnings=2_000_000,
            ebit=1_000_000,
            revenue=5_000_000,
        )
        result = forecaster.calculate_z_score(s)
        assert result.z_score > 2.99
        assert result.zone == ZScoreZone.SAFE
        assert result.bankruptcy_risk == BankruptcyRisk.LOW

    def test_distress_zone(self, forecaster):
        s = make_statement(
            current_assets=500_000,
            current_liabilities=2_000_000,
            retained_earnings=100_000,
            ebit=50_000,
            revenue=500_000,
            liabilities=4_500_000,
        )
        result = forecaster.calculate_z_score(s)
        assert result.z_score <= 1.81
        assert result.zone == ZScoreZone.DISTRESS
        assert result.bankruptcy_risk == BankruptcyRisk.HIGH

    def test_net_income_stands_in_for_missing_inputs(self, forecaster):
        s = make_statement(retained_earnings=None, ebit=None)
        c = forecaster.calculate_z_score(s).components
        assert c.retained_earnings_ratio == pytest.approx(0.09)
        assert c.ebit_ratio == pytest.approx(0.09)

    def test_zero_liabilities_zeroes_equity_component(self, forecaster):
        c = forecaster.calculate_z_score(make_statement(liabilities=0)).components
        assert c.equity_to_liabilities_ratio == 0.0

    def test_zero_assets_propagates_nan(self, forecaster):
        s = FinancialStatement(period="1402", assets=0, liabilities=0)
        result = forecaster.calculate_z_score(s)
        assert math.isnan(result.z_score)
        assert result.zone == ZScoreZone.DISTRESS

    def test_zero_assets_propagates_infinity(self, forecaster):
        s = FinancialStatement(
            period="1402", assets=0, liabilities=5,
            current_assets=100, retained_earnings=10, ebit=10, revenue=10,
        )
        assert forecaster.calculate_z_score(s).z_score == math.inf

    def test_missing_liabilities_raises(self, forecaster):
        with pytest.raises(MissingRequiredFieldError):
            forecaster.calculate_z_score(FinancialStatement(period="1402", assets=1.0))


# ── period labels ────────────────────────────────────────────────────────

class TestNextPeriod:
    @pytest.mark.parametrize("last,ahead,expected", [
        ("1400-Q4", 1, "1401-Q1"),
        ("1400-Q4", 2, "1401-Q2"),
        ("1402-Q1", 3, "1402-Q4"),
        ("1402-Q2", 5, "1403-Q3"),
        ("1402", 1, "1403"),
        ("FY-latest", 3, "Future+3"),
    ])
    def test_labels(self, last, ahead, expected):
        assert next_period(last, ahead) == expected


# ── revenue forecast ─────────────────────────────────────────────────────

class TestForecastRevenue:
    def test_single_statement_raises(self, forecaster, healthy_statement):
        with pytest.raises(InsufficientHistoryError) as exc_info:
            forecaster.forecast_revenue([healthy_statement])
        assert exc_info.value.required == 2
        assert exc_info.value.available == 1

    def test_periods_without_revenue_do_not_count(self, forecaster, healthy_statement):
        other = make_statement(period="1402-Q2", revenue=0)
        with pytest.raises(InsufficientHistoryError):
            forecaster.forecast_revenue([healthy_statement, other])

    def test_periods_ahead_must_be_positive(self, forecaster, quarterly_history):
        with pytest.raises(ValueError):
            forecaster.forecast_revenue(quarterly_history, periods_ahead=0)

    def test_four_quarters_two_ahead(self, forecaster, quarterly_history):
        forecasts = forecaster.forecast_revenue(quarterly_history, periods_ahead=2)
        assert [f.period for f in forecasts] == ["1401-Q1", "1401-Q2"]

    def test_constant_growth_projection(self, forecaster, quarterly_history):
        forecasts = forecaster.forecast_revenue(quarterly_history, periods_ahead=2)
        assert forecasts[0].growth_rate == pytest.approx(0.1)
        assert forecasts[0].predicted_revenue == pytest.approx(1_464_100, abs=1)
        assert forecasts[1].predicted_revenue == pytest.approx(1_610_510, abs=1)

    def test_constant_growth_has_tight_interval(self, forecaster, quarterly_history):
        f = forecaster.forecast_revenue(quarterly_history)[0]
        assert f.confidence_interval.lower <= f.predicted_revenue <= f.confidence_interval.upper
        assert f.confidence_interval.upper - f.confidence_interval.lower <= 2

    def test_volatile_growth_widens_interval(self, forecaster):
        history = [
            make_statement(period="1400-Q1", revenue=1_000_000),
            make_statement(period="1400-Q2", revenue=1_200_000),  # +20%
            make_statement(period="1400-Q3", revenue=1_200_000),  # 0%
        ]
        f = forecaster.forecast_revenue(history)[0]
        # mean 10%, population stddev 10%, interval ±2σ
        assert f.predicted_revenue == pytest.approx(1_320_000, abs=1)
        assert f.confidence_interval.lower == pytest.approx(1_056_000, abs=1)
        assert f.confidence_interval.upper == pytest.approx(1_584_000, abs=1)

    def test_confidence_multiplier_is_configurable(self):
        history = [
            make_statement(period="1400-Q1", revenue=1_000_000),
            make_statement(period="1400-Q2", revenue=1_200_000),
            make_statement(period="1400-Q3", revenue=1_200_000),
        ]
        f = Forecaster(Settings(confidence_multiplier=1.0)).forecast_revenue(history)[0]
        assert f.confidence_interval.upper == pytest.approx(1_452_000, abs=1)

    def test_input_order_does_not_matter(self, forecaster, quarterly_history):
        shuffled = forecaster.forecast_revenue(quarterly_history)
        ordered = forecaster.forecast_revenue(sorted(quarterly_history, key=lambda s: s.period))
        assert shuffled == ordered


# ── profitability trend ──────────────────────────────────────────────────

def _margins(*net_incomes):
    return [
        make_statement(period=f"1401-Q{i}", revenue=1_000_000, net_income=ni)
        for i, ni in enumerate(net_incomes, start=1)
    ]


class TestProfitabilityTrend:
    def test_improving(self, forecaster):
        assert forecaster.predict_profitability_trend(_margins(100_000, 120_000, 150_000)) \
            == ProfitabilityTrend.IMPROVING

    def test_declining(self, forecaster):
        assert forecaster.predict_profitability_trend(_margins(150_000, 120_000, 100_000)) \
            == ProfitabilityTrend.DECLINING

    def test_flat_margins_are_stable(self, forecaster, quarterly_history):
        assert forecaster.predict_profitability_trend(quarterly_history) == ProfitabilityTrend.STABLE

    def test_small_moves_are_ignored(self, forecaster):
        assert forecaster.predict_profitability_trend(_margins(100_000, 104_000, 108_000)) \
            == ProfitabilityTrend.STABLE

    def test_tie_is_stable(self, forecaster):
        assert forecaster.predict_profitability_trend(_margins(100_000, 150_000, 100_000)) \
            == ProfitabilityTrend.STABLE

    def test_fewer_than_three_periods_is_stable(self, forecaster):
        assert forecaster.predict_profitability_trend(_margins(100_000, 200_000)) \
            == ProfitabilityTrend.STABLE
