"""Tests for historical trends and industry benchmarks."""

import pytest

from finrisk.config import Settings
from finrisk.engines.trend_analyzer import TrendAnalyzer
from finrisk.schemas.trend import BenchmarkStatus, TrendDirection
from tests.fixtures import make_statement


def _by_metric(items):
    return {i.metric: i for i in items}


class TestMetricTrends:
    def test_metrics_in_fixed_order(self, trend_analyzer, quarterly_history):
        trends = trend_analyzer.analyze_metric_trends(quarterly_history)
        assert [t.metric for t in trends] == [
            "Revenue", "Profit Margin", "Assets", "Debt Ratio", "ROE",
        ]

    def test_revenue_increasing(self, trend_analyzer, quarterly_history):
        revenue = _by_metric(trend_analyzer.analyze_metric_trends(quarterly_history))["Revenue"]
        assert [p.period for p in revenue.data] == ["1400-Q1", "1400-Q2", "1400-Q3", "1400-Q4"]
        assert revenue.average_growth == 10.0
        assert revenue.change_rate == 33.1
        assert revenue.trend == TrendDirection.INCREASING

    def test_flat_series_stable(self, trend_analyzer, quarterly_history):
        trends = _by_metric(trend_analyzer.analyze_metric_trends(quarterly_history))
        for metric in ("Profit Margin", "Assets", "Debt Ratio"):
            assert trends[metric].trend == TrendDirection.STABLE
            assert trends[metric].average_growth == 0.0
        assert trends["Debt Ratio"].data[0].value == pytest.approx(40.0)

    def test_roe_uses_derived_equity(self, trend_analyzer, quarterly_history):
        roe = _by_metric(trend_analyzer.analyze_metric_trends(quarterly_history))["ROE"]
        # net income 100k on equity 2.4M
        assert roe.data[0].value == pytest.approx(100_000 / 2_400_000 * 100)
        assert roe.trend == TrendDirection.INCREASING

    def test_decreasing(self, trend_analyzer):
        history = [
            make_statement(period="1401-Q1", revenue=3_000_000),
            make_statement(period="1401-Q2", revenue=2_700_000),
        ]
        revenue = trend_analyzer.analyze_metric_trends(history)[0]
        assert revenue.average_growth == -10.0
        assert revenue.trend == TrendDirection.DECREASING

    def test_non_positive_start(self, trend_analyzer):
        history = [
            make_statement(period="1401-Q1", revenue=1_000_000, net_income=-50_000),
            make_statement(period="1401-Q2", revenue=1_000_000, net_income=50_000),
            make_statement(period="1401-Q3", revenue=1_000_000, net_income=100_000),
        ]
        margin = _by_metric(trend_analyzer.analyze_metric_trends(history))["Profit Margin"]
        # only the 5% -> 10% step has a positive base
        assert margin.average_growth == 100.0
        assert margin.change_rate == 0.0

    def test_empty_series(self, trend_analyzer):
        history = [make_statement(period="1401-Q1", revenue=None)]
        revenue = trend_analyzer.analyze_metric_trends(history)[0]
        assert revenue.data == []
        assert revenue.trend == TrendDirection.STABLE
        assert revenue.change_rate == 0.0
        assert revenue.average_growth == 0.0

    def test_threshold_is_configurable(self, quarterly_history):
        analyzer = TrendAnalyzer(Settings(trend_growth_threshold=15.0))
        assert analyzer.analyze_metric_trends(quarterly_history)[0].trend == TrendDirection.STABLE


class TestCompareWithIndustry:
    def test_default_benchmarks(self, trend_analyzer, healthy_statement):
        comparisons = _by_metric(trend_analyzer.compare_with_industry(healthy_statement, {}))
        assert list(comparisons) == ["Current Ratio", "Debt to Equity", "Profit Margin", "ROE"]

        assert comparisons["Current Ratio"].difference == pytest.approx(33.33)
        assert comparisons["Current Ratio"].status == BenchmarkStatus.ABOVE
        assert comparisons["Debt to Equity"].company_value == 0.67
        assert comparisons["Debt to Equity"].status == BenchmarkStatus.BELOW
        assert comparisons["Profit Margin"].difference == pytest.approx(50.0)
        assert comparisons["ROE"].status == BenchmarkStatus.EQUAL

    def test_supplied_benchmark_overrides_default(self, trend_analyzer, healthy_statement):
        comparisons = _by_metric(
            trend_analyzer.compare_with_industry(healthy_statement, {"currentRatio": 2.0})
        )
        assert comparisons["Current Ratio"].industry_average == 2.0
        assert comparisons["Current Ratio"].status == BenchmarkStatus.EQUAL
        assert comparisons["Profit Margin"].industry_average == 10.0

    def test_within_five_percent_is_equal(self, trend_analyzer, healthy_statement):
        comparisons = _by_metric(
            trend_analyzer.compare_with_industry(healthy_statement, {"profitMargin": 14.5})
        )
        assert comparisons["Profit Margin"].status == BenchmarkStatus.EQUAL

    def test_skips_uncomputable_metrics(self, trend_analyzer):
        s = make_statement(current_assets=None, net_income=None)
        comparisons = trend_analyzer.compare_with_industry(s)
        assert [c.metric for c in comparisons] == ["Debt to Equity"]


class TestGenerateReport:
    def test_without_benchmarks(self, trend_analyzer, quarterly_history):
        report = trend_analyzer.generate_report(7, quarterly_history)
        assert report.company_id == 7
        assert report.period == "1400-Q4"
        assert len(report.trends) == 5
        assert report.benchmarks == []
        assert "Revenue: Increasing" in report.summary
        assert "Industry comparison" not in report.summary

    def test_benchmarks_use_latest_period(self, trend_analyzer, quarterly_history):
        report = trend_analyzer.generate_report(7, quarterly_history, {"currentRatio": 1.5})
        current = _by_metric(report.benchmarks)["Current Ratio"]
        assert current.company_value == pytest.approx(1.67)
        assert "Industry comparison" in report.summary

    def test_empty_history(self, trend_analyzer):
        report = trend_analyzer.generate_report(None, [])
        assert report.period == "N/A"
        assert all(t.data == [] for t in report.trends)
