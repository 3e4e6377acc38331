"""Bankruptcy prediction and revenue / profitability forecasting.

Z-Score works on a single statement; the forecasting methods take a
company's history in any order and sort it by period label first.
"""

import logging
import math
import re
from typing import Sequence

from finrisk.config import Settings
from finrisk.errors import InsufficientHistoryError
from finrisk.schemas.forecast import (
    BankruptcyRisk,
    ConfidenceInterval,
    ProfitabilityTrend,
    RevenueForecast,
    ZScoreComponents,
    ZScoreResult,
    ZScoreZone,
)
from finrisk.schemas.statement import FinancialStatement
from finrisk.utils.financial_math import (
    growth_rate,
    ieee_divide,
    mean,
    population_stddev,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Altman (private-firm variant, book equity in place of market value)
Z_WEIGHTS = (1.2, 1.4, 3.3, 0.6, 1.0)
Z_SAFE_ABOVE = 2.99
Z_DISTRESS_AT_OR_BELOW = 1.81

MIN_FORECAST_PERIODS = 2
MIN_TREND_PERIODS = 3

_PERIOD_RE = re.compile(r"(\d{4})(?:-Q(\d))?")


def next_period(last_period: str, periods_ahead: int) -> str:
    """Label of the period *periods_ahead* after *last_period*.

    Examples:
        >>> next_period("1400-Q4", 1)
        '1401-Q1'
        >>> next_period("1402-Q2", 5)
        '1403-Q3'
        >>> next_period("1402", 2)
        '1404'
        >>> next_period("FY-latest", 1)
        'Future+1'
    """
    match = _PERIOD_RE.search(last_period)
    if not match:
        return f"Future+{periods_ahead}"

    year = int(match.group(1))
    if match.group(2):
        total_quarters = int(match.group(2)) - 1 + periods_ahead
        return f"{year + total_quarters // 4}-Q{total_quarters % 4 + 1}"
    return str(year + periods_ahead)


class Forecaster:
    """Altman Z-Score, revenue forecasts and profitability trend."""

    def __init__(self, settings: Settings):
        self.settings = settings

    # ── bankruptcy prediction ────────────────────────────────────────

    def calculate_z_score(self, statement: FinancialStatement) -> ZScoreResult:
        """Altman Z-Score.

        Zero total assets produce non-finite components (IEEE semantics);
        the result is reported as-is, and a NaN score lands in Distress.
        """
        statement.require_mandatory()
        s = statement
        total_assets = s.assets

        working_capital = (s.current_assets or 0) - (s.current_liabilities or 0)
        retained = _first_present(s.retained_earnings, s.net_income)
        ebit = _first_present(s.ebit, s.net_income)
        sales = s.revenue if s.revenue is not None else 0.0

        components = ZScoreComponents(
            working_capital_ratio=ieee_divide(working_capital, total_assets),
            retained_earnings_ratio=ieee_divide(retained, total_assets),
            ebit_ratio=ieee_divide(ebit, total_assets),
            equity_to_liabilities_ratio=(
                s.book_equity / s.liabilities if s.liabilities != 0 else 0.0
            ),
            sales_ratio=ieee_divide(sales, total_assets),
        )
        raw = sum(
            w * c for w, c in zip(
                Z_WEIGHTS,
                (
                    components.working_capital_ratio,
                    components.retained_earnings_ratio,
                    components.ebit_ratio,
                    components.equity_to_liabilities_ratio,
                    components.sales_ratio,
                ),
            )
        )
        z = round_half_up(raw, 2)

        if z > Z_SAFE_ABOVE:
            zone, risk = ZScoreZone.SAFE, BankruptcyRisk.LOW
            explanation = "The company is in the safe zone; bankruptcy risk is low."
        elif z > Z_DISTRESS_AT_OR_BELOW:
            zone, risk = ZScoreZone.GREY, BankruptcyRisk.MEDIUM
            explanation = "The company is in the grey zone; monitor closely and improve financial performance."
        else:
            zone, risk = ZScoreZone.DISTRESS, BankruptcyRisk.HIGH
            explanation = "🚨 The company is in the distress zone; bankruptcy risk is high and corrective action is urgent."

        if not math.isfinite(z):
            logger.warning("Non-finite Z-Score for %s (total assets=%s)", s.period, total_assets)

        return ZScoreResult(
            z_score=z,
            zone=zone,
            bankruptcy_risk=risk,
            explanation=explanation,
            components=components,
        )

    # ── revenue forecast ─────────────────────────────────────────────

    def forecast_revenue(
        self, statements: Sequence[FinancialStatement], periods_ahead: int = 1
    ) -> list[RevenueForecast]:
        """Project revenue forward at the mean historical growth rate.

        Raises:
            InsufficientHistoryError: fewer than 2 periods with positive revenue.
            ValueError: ``periods_ahead`` < 1.
        """
        if periods_ahead < 1:
            raise ValueError(f"periods_ahead must be at least 1, got {periods_ahead}")

        history = sorted(
            (s for s in statements if s.revenue is not None and s.revenue > 0),
            key=lambda s: s.period,
        )
        if len(history) < MIN_FORECAST_PERIODS:
            raise InsufficientHistoryError(MIN_FORECAST_PERIODS, len(history))

        growth_rates = [
            growth_rate(cur.revenue, prev.revenue)
            for prev, cur in zip(history, history[1:])
        ]
        avg_growth = mean(growth_rates)
        std_dev = population_stddev(growth_rates)

        last_revenue = history[-1].revenue
        last_period = history[-1].period
        multiplier = self.settings.confidence_multiplier

        forecasts: list[RevenueForecast] = []
        for i in range(1, periods_ahead + 1):
            predicted = last_revenue * (1 + avg_growth) ** i
            margin = predicted * std_dev * multiplier
            forecasts.append(RevenueForecast(
                period=next_period(last_period, i),
                predicted_revenue=round_half_up(predicted),
                confidence_interval=ConfidenceInterval(
                    lower=round_half_up(predicted - margin),
                    upper=round_half_up(predicted + margin),
                ),
                growth_rate=avg_growth,
                methodology="Mean historical growth rate with a ±2σ (≈95%) confidence interval",
            ))
        return forecasts

    # ── profitability trend ──────────────────────────────────────────

    def predict_profitability_trend(
        self, statements: Sequence[FinancialStatement]
    ) -> ProfitabilityTrend:
        """Count >5% relative margin moves up vs down across adjacent periods."""
        history = sorted(
            (
                s for s in statements
                if s.net_income is not None and s.revenue is not None and s.revenue > 0
            ),
            key=lambda s: s.period,
        )
        if len(history) < MIN_TREND_PERIODS:
            return ProfitabilityTrend.STABLE

        tolerance = self.settings.profitability_trend_tolerance
        margins = [s.net_income / s.revenue for s in history]
        improving = declining = 0
        for prev, cur in zip(margins, margins[1:]):
            if cur > prev * (1 + tolerance):
                improving += 1
            if cur < prev * (1 - tolerance):
                declining += 1

        if improving > declining:
            return ProfitabilityTrend.IMPROVING
        if declining > improving:
            return ProfitabilityTrend.DECLINING
        return ProfitabilityTrend.STABLE


def _first_present(*values) -> float:
    for v in values:
        if v is not None:
            return v
    return 0.0
