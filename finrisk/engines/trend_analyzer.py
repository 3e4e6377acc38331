"""Historical metric trends and industry benchmark comparison.

Each metric series only contains the periods where the metric can be
computed; a company with a gap in its history simply has a shorter series.
"""

import logging
from typing import Callable, Mapping, Optional, Sequence

from finrisk.config import Settings
from finrisk.domain.fields import require_all
from finrisk.schemas.statement import FinancialStatement
from finrisk.schemas.trend import (
    BenchmarkComparison,
    BenchmarkStatus,
    TrendAnalysis,
    TrendDirection,
    TrendPoint,
    TrendReport,
)
from finrisk.utils.financial_math import mean, round_half_up

logger = logging.getLogger(__name__)

_TREND_ICON = {
    TrendDirection.INCREASING: "📈",
    TrendDirection.DECREASING: "📉",
    TrendDirection.STABLE: "➡️",
}

_BENCHMARK_ICON = {
    BenchmarkStatus.ABOVE: "✅",
    BenchmarkStatus.BELOW: "⚠️",
    BenchmarkStatus.EQUAL: "➖",
}


def _equity(s: FinancialStatement) -> Optional[float]:
    if s.equity is not None:
        return s.equity
    if s.assets is None or s.liabilities is None:
        return None
    return s.assets - s.liabilities


# ── per-statement metric extractors (None = not computable) ──────────


def _revenue(s: FinancialStatement) -> Optional[float]:
    return s.revenue if s.revenue is not None and s.revenue > 0 else None


def _profit_margin_pct(s: FinancialStatement) -> Optional[float]:
    values = require_all(s, "net_income", "revenue", positive=("revenue",))
    if values is None:
        return None
    net_income, revenue = values
    return net_income / revenue * 100


def _assets(s: FinancialStatement) -> Optional[float]:
    return s.assets if s.assets is not None and s.assets > 0 else None


def _debt_ratio_pct(s: FinancialStatement) -> Optional[float]:
    values = require_all(s, "liabilities", "assets", positive=("assets",))
    if values is None:
        return None
    liabilities, assets = values
    return liabilities / assets * 100


def _roe_pct(s: FinancialStatement) -> Optional[float]:
    equity = _equity(s)
    if s.net_income is None or equity is None or equity <= 0:
        return None
    return s.net_income / equity * 100


TREND_METRICS: tuple[tuple[str, Callable[[FinancialStatement], Optional[float]]], ...] = (
    ("Revenue", _revenue),
    ("Profit Margin", _profit_margin_pct),
    ("Assets", _assets),
    ("Debt Ratio", _debt_ratio_pct),
    ("ROE", _roe_pct),
)


class TrendAnalyzer:
    """Period-over-period trends for a company plus benchmark comparison."""

    def __init__(self, settings: Settings):
        self.settings = settings

    # ── trends ───────────────────────────────────────────────────────

    def analyze_metric_trends(
        self, statements: Sequence[FinancialStatement]
    ) -> list[TrendAnalysis]:
        return [
            self._trend(name, extract, statements) for name, extract in TREND_METRICS
        ]

    def _trend(
        self,
        metric: str,
        extract: Callable[[FinancialStatement], Optional[float]],
        statements: Sequence[FinancialStatement],
    ) -> TrendAnalysis:
        points: list[TrendPoint] = []
        for s in statements:
            value = extract(s)
            if value is not None:
                points.append(TrendPoint(period=s.period, value=value))
        points.sort(key=lambda p: p.period)

        if not points:
            return TrendAnalysis(
                metric=metric,
                data=[],
                trend=TrendDirection.STABLE,
                change_rate=0.0,
                average_growth=0.0,
            )

        growth = [
            (cur.value - prev.value) / prev.value * 100
            for prev, cur in zip(points, points[1:])
            if prev.value > 0
        ]
        average_growth = mean(growth)

        first, last = points[0].value, points[-1].value
        change_rate = (last - first) / first * 100 if first > 0 else 0.0

        threshold = self.settings.trend_growth_threshold
        if average_growth > threshold:
            direction = TrendDirection.INCREASING
        elif average_growth < -threshold:
            direction = TrendDirection.DECREASING
        else:
            direction = TrendDirection.STABLE

        return TrendAnalysis(
            metric=metric,
            data=points,
            trend=direction,
            change_rate=round_half_up(change_rate, 2),
            average_growth=round_half_up(average_growth, 2),
        )

    # ── benchmarks ───────────────────────────────────────────────────

    def compare_with_industry(
        self,
        statement: FinancialStatement,
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> list[BenchmarkComparison]:
        """Compare *statement* against industry averages.

        Missing or zero benchmark keys fall back to the configured defaults.
        """
        statement.require_mandatory()
        defaults = self.settings.default_industry_benchmarks
        benchmarks = benchmarks or {}

        def industry(key: str) -> float:
            return benchmarks.get(key) or defaults[key]

        s = statement
        comparisons: list[BenchmarkComparison] = []

        liquidity = require_all(
            s, "current_assets", "current_liabilities", nonzero=("current_liabilities",),
        )
        if liquidity is not None:
            comparisons.append(self._compare(
                "Current Ratio", liquidity[0] / liquidity[1], industry("currentRatio"),
            ))

        equity = s.book_equity
        if equity > 0:
            comparisons.append(self._compare(
                "Debt to Equity", s.liabilities / equity, industry("debtToEquity"),
            ))

        margin = _profit_margin_pct(s)
        if margin is not None:
            comparisons.append(self._compare("Profit Margin", margin, industry("profitMargin")))

        roe = _roe_pct(s)
        if roe is not None:
            comparisons.append(self._compare("ROE", roe, industry("roe")))

        return comparisons

    def _compare(self, metric: str, company: float, industry: float) -> BenchmarkComparison:
        difference = (company - industry) / industry * 100
        if abs(difference) < self.settings.benchmark_equal_band:
            status = BenchmarkStatus.EQUAL
        elif difference > 0:
            status = BenchmarkStatus.ABOVE
        else:
            status = BenchmarkStatus.BELOW

        return BenchmarkComparison(
            metric=metric,
            company_value=round_half_up(company, 2),
            industry_average=round_half_up(industry, 2),
            difference=round_half_up(difference, 2),
            status=status,
        )

    # ── report ───────────────────────────────────────────────────────

    def generate_report(
        self,
        company_id: Optional[int],
        statements: Sequence[FinancialStatement],
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> TrendReport:
        """Trends over *statements*; benchmarks against the latest period when given."""
        ordered = sorted(statements, key=lambda s: s.period)
        trends = self.analyze_metric_trends(ordered)

        comparisons: list[BenchmarkComparison] = []
        if benchmarks is not None and ordered:
            comparisons = self.compare_with_industry(ordered[-1], benchmarks)

        return TrendReport(
            company_id=company_id,
            period=ordered[-1].period if ordered else "N/A",
            trends=trends,
            benchmarks=comparisons,
            summary=self._summary(trends, comparisons),
        )

    @staticmethod
    def _summary(
        trends: list[TrendAnalysis], benchmarks: list[BenchmarkComparison]
    ) -> str:
        lines = ["📊 Trend analysis:"]
        for t in trends:
            if t.data:
                lines.append(
                    f"{_TREND_ICON[t.trend]} {t.metric}: {t.trend.value} "
                    f"({t.average_growth:.1f}% average growth)"
                )

        if benchmarks:
            lines.append("")
            lines.append("🎯 Industry comparison:")
            for b in benchmarks:
                lines.append(
                    f"{_BENCHMARK_ICON[b.status]} {b.metric}: {b.company_value:.2f} "
                    f"(industry: {b.industry_average:.2f})"
                )

        return "\n".join(lines)
