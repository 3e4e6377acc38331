"""Heuristic fraud detection on a single statement and its prior period.

Five independent analyzers each return an indicator.  An analyzer whose
inputs are missing abstains with score 0; abstentions still count in the
overall mean so they stay neutral rather than disappearing.
"""

import logging
import math
from typing import Optional, Sequence

from finrisk.config import Settings
from finrisk.domain.benford import BENFORD_EXPECTED, benford_chi_square
from finrisk.domain.fields import require_all
from finrisk.domain.levels import Rung, climb_above, climb_below, level_for_score
from finrisk.domain.scoring import capped_mean
from finrisk.schemas.common import RiskLevel
from finrisk.schemas.fraud import (
    AccrualDetails,
    AssetInflationDetails,
    BenfordDetails,
    EarningsQualityDetails,
    FraudAnalysis,
    FraudFlag,
    FraudIndicator,
    ReceivableGrowthDetails,
)
from finrisk.schemas.statement import FinancialStatement
from finrisk.utils.financial_math import growth_rate

logger = logging.getLogger(__name__)

NO_FLAG = (0.0, RiskLevel.LOW)

# Fields that count as Benford samples when present and strictly positive.
BENFORD_FIELDS = (
    "assets",
    "liabilities",
    "current_assets",
    "current_liabilities",
    "revenue",
    "net_income",
    "cash",
    "inventory",
    "accounts_receivable",
)

# CFO / net income, lowest threshold first
EARNINGS_QUALITY_RUNGS = (
    Rung(0.5, 90, RiskLevel.CRITICAL),
    Rung(0.8, 60, RiskLevel.HIGH),
    Rung(1.0, 30, RiskLevel.MEDIUM),
)

# AR growth / sales growth
RECEIVABLE_GROWTH_RUNGS = (
    Rung(2.0, 85, RiskLevel.CRITICAL),
    Rung(1.5, 65, RiskLevel.HIGH),
    Rung(1.2, 40, RiskLevel.MEDIUM),
)

# fixed-asset growth minus revenue growth
ASSET_INFLATION_RUNGS = (
    Rung(0.30, 75, RiskLevel.CRITICAL),
    Rung(0.20, 55, RiskLevel.HIGH),
    Rung(0.15, 35, RiskLevel.MEDIUM),
)

# |accrual ratio|
ACCRUAL_RUNGS = (
    Rung(0.15, 80, RiskLevel.CRITICAL),
    Rung(0.12, 60, RiskLevel.HIGH),
    Rung(0.10, 35, RiskLevel.MEDIUM),
)


class FraudDetector:
    """Run the fraud heuristics and aggregate them into one fraud score."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def analyze(
        self,
        statement: FinancialStatement,
        previous_statements: Optional[Sequence[FinancialStatement]] = None,
    ) -> FraudAnalysis:
        """Analyze *statement*; ``previous_statements[0]`` is the prior period."""
        statement.require_mandatory()

        indicators: list[FraudIndicator] = [
            self._benford_law(statement),
            self._quality_of_earnings(statement),
        ]
        if previous_statements:
            previous = previous_statements[0]
            indicators.append(self._receivable_growth(statement, previous))
            indicators.append(self._asset_inflation(statement, previous))
        indicators.append(self._accrual_ratio(statement))

        overall = capped_mean([i.score for i in indicators])
        flagged = [i for i in indicators if i.score > 0]
        for i in flagged:
            logger.debug(
                "Fraud flag %s for %s: score=%s severity=%s",
                i.flag_type.value, statement.period, i.score, i.severity.value,
            )

        return FraudAnalysis(
            statement_id=statement.statement_id,
            period=statement.period,
            overall_fraud_score=overall,
            indicators=flagged,
            risk_level=level_for_score(overall, self.settings),
        )

    # ── analyzers ────────────────────────────────────────────────────

    def _benford_law(self, s: FinancialStatement) -> FraudIndicator:
        """Leading-digit distribution vs Benford's Law (chi-square, 8 dof)."""
        samples = [
            v for v in (getattr(s, name) for name in BENFORD_FIELDS)
            if v is not None and v > 0 and math.isfinite(v)
        ]
        if len(samples) < self.settings.benford_min_samples:
            return self._abstain(
                FraudFlag.BENFORD_LAW,
                "Not enough figures for a Benford's Law analysis.",
                "Provide more statement figures.",
                details=BenfordDetails(sample_size=len(samples)),
            )

        chi_square, observed = benford_chi_square(samples)
        critical = self.settings.benford_critical_value
        score, severity = climb_above(
            chi_square,
            (
                Rung(critical * 2, 80, RiskLevel.CRITICAL),
                Rung(critical * 1.5, 60, RiskLevel.HIGH),
                Rung(critical, 40, RiskLevel.MEDIUM),
            ),
            NO_FLAG,
        )
        deviates = chi_square > critical

        return FraudIndicator(
            flag_type=FraudFlag.BENFORD_LAW,
            severity=severity,
            score=score,
            description=(
                "Leading-digit distribution deviates from Benford's Law; figures may have been manipulated."
                if deviates
                else "Leading-digit distribution looks natural."
            ),
            details=BenfordDetails(
                sample_size=len(samples),
                chi_square=chi_square,
                critical_value=critical,
                observed_distribution=observed,
                expected_distribution=list(BENFORD_EXPECTED),
            ),
            recommendation=(
                "Review the reported figures and their sources in detail."
                if deviates
                else "No issue detected."
            ),
        )

    def _quality_of_earnings(self, s: FinancialStatement) -> FraudIndicator:
        """Operating cash flow / net income below 1 is a red flag."""
        values = require_all(s, "operating_cf", "net_income", nonzero=("net_income",))
        if values is None:
            return self._abstain(
                FraudFlag.QUALITY_OF_EARNINGS,
                "Not enough data to assess quality of earnings.",
                "Operating cash flow and net income are required.",
            )
        operating_cf, net_income = values

        ratio = operating_cf / net_income
        score, severity = climb_below(ratio, EARNINGS_QUALITY_RUNGS, NO_FLAG)
        description = {
            RiskLevel.CRITICAL: "Very low earnings quality: operating cash flow is under 50% of net income.",
            RiskLevel.HIGH: "Low earnings quality: cash flow is weak relative to reported profit.",
            RiskLevel.MEDIUM: "Moderate earnings quality: operating cash flow is below net income.",
            RiskLevel.LOW: "Good earnings quality: profit is backed by operating cash flow.",
        }[severity]

        return FraudIndicator(
            flag_type=FraudFlag.QUALITY_OF_EARNINGS,
            severity=severity,
            score=score,
            description=description,
            details=EarningsQualityDetails(
                ratio=ratio, operating_cf=operating_cf, net_income=net_income,
            ),
            recommendation=(
                "Investigate the sources of profit and why they are not converting to cash."
                if score > 0
                else "Healthy."
            ),
        )

    def _receivable_growth(
        self, current: FinancialStatement, previous: FinancialStatement
    ) -> FraudIndicator:
        """AR growing much faster than sales suggests aggressive revenue recognition."""
        cur = require_all(current, "accounts_receivable", "revenue")
        prev = require_all(
            previous, "accounts_receivable", "revenue",
            nonzero=("accounts_receivable", "revenue"),
        )
        if cur is None or prev is None:
            return self._abstain(
                FraudFlag.RECEIVABLE_GROWTH,
                "Not enough data to analyze receivable growth.",
                "Receivables and revenue for both periods are required.",
            )

        ar_growth = growth_rate(cur[0], prev[0])
        sales_growth = growth_rate(cur[1], prev[1])
        if sales_growth == 0:
            return self._abstain(
                FraudFlag.RECEIVABLE_GROWTH,
                "Sales growth is zero; receivable growth cannot be compared.",
                "Investigate why sales did not grow.",
                details=ReceivableGrowthDetails(ar_growth=ar_growth, sales_growth=sales_growth),
            )

        ratio = ar_growth / sales_growth
        score, severity = climb_above(ratio, RECEIVABLE_GROWTH_RUNGS, NO_FLAG)
        description = {
            RiskLevel.CRITICAL: "Abnormal receivable growth; possible fraudulent revenue recognition.",
            RiskLevel.HIGH: "Receivables are growing much faster than sales.",
            RiskLevel.MEDIUM: "Receivables are growing faster than sales.",
            RiskLevel.LOW: "Receivable growth is in line with sales.",
        }[severity]

        return FraudIndicator(
            flag_type=FraudFlag.RECEIVABLE_GROWTH,
            severity=severity,
            score=score,
            description=description,
            details=ReceivableGrowthDetails(
                ar_growth=ar_growth, sales_growth=sales_growth, ratio=ratio,
            ),
            recommendation=(
                "Review credit policy and the collectability of receivables."
                if score > 0
                else "Normal."
            ),
        )

    def _asset_inflation(
        self, current: FinancialStatement, previous: FinancialStatement
    ) -> FraudIndicator:
        """Fixed assets outgrowing revenue by more than 15 points is a warning."""
        cur = require_all(current, "fixed_assets", "revenue")
        prev = require_all(
            previous, "fixed_assets", "revenue",
            nonzero=("fixed_assets", "revenue"),
        )
        if cur is None or prev is None:
            return self._abstain(
                FraudFlag.ASSET_INFLATION,
                "Not enough data to analyze asset inflation.",
                "Fixed assets and revenue for both periods are required.",
            )

        fa_growth = growth_rate(cur[0], prev[0])
        revenue_growth = growth_rate(cur[1], prev[1])
        difference = fa_growth - revenue_growth
        score, severity = climb_above(difference, ASSET_INFLATION_RUNGS, NO_FLAG)
        description = {
            RiskLevel.CRITICAL: "Abnormal fixed-asset growth; possible artificial asset inflation.",
            RiskLevel.HIGH: "Fixed assets are growing much faster than revenue.",
            RiskLevel.MEDIUM: "Fixed-asset growth is higher than expected.",
            RiskLevel.LOW: "Fixed-asset growth is proportionate to revenue.",
        }[severity]

        return FraudIndicator(
            flag_type=FraudFlag.ASSET_INFLATION,
            severity=severity,
            score=score,
            description=description,
            details=AssetInflationDetails(
                fixed_asset_growth=fa_growth,
                revenue_growth=revenue_growth,
                difference=difference,
            ),
            recommendation=(
                "Review fixed-asset valuation and depreciation policy."
                if score > 0
                else "Normal."
            ),
        )

    def _accrual_ratio(self, s: FinancialStatement) -> FraudIndicator:
        """(Net income - CFO) / total assets; large magnitudes signal manipulation."""
        values = require_all(s, "net_income", "operating_cf", "assets", nonzero=("assets",))
        if values is None:
            return self._abstain(
                FraudFlag.ACCRUAL_RATIO,
                "Not enough data to compute the accrual ratio.",
                "Net income, operating cash flow and total assets are required.",
            )
        net_income, operating_cf, assets = values

        accrual = (net_income - operating_cf) / assets
        score, severity = climb_above(abs(accrual), ACCRUAL_RUNGS, NO_FLAG)
        description = {
            RiskLevel.CRITICAL: "Very high accrual ratio; strong sign of earnings management.",
            RiskLevel.HIGH: "High accrual ratio; possible earnings management.",
            RiskLevel.MEDIUM: "Accrual ratio is above the desirable range.",
            RiskLevel.LOW: "Accrual ratio is within the normal range.",
        }[severity]

        return FraudIndicator(
            flag_type=FraudFlag.ACCRUAL_RATIO,
            severity=severity,
            score=score,
            description=description,
            details=AccrualDetails(
                accrual_ratio=accrual,
                net_income=net_income,
                operating_cf=operating_cf,
                total_assets=assets,
            ),
            recommendation=(
                "Review accrual items and accounting policies in detail."
                if score > 0
                else "Normal."
            ),
        )

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _abstain(
        flag: FraudFlag,
        description: str,
        recommendation: str,
        details=None,
    ) -> FraudIndicator:
        return FraudIndicator(
            flag_type=flag,
            severity=RiskLevel.LOW,
            score=0,
            description=description,
            details=details,
            recommendation=recommendation,
        )
