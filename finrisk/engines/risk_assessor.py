"""Risk assessment across four categories for a single statement.

Financial, liquidity and operational risk are always assessed (abstaining
with score 0 when inputs are missing); market risk is only produced when
revenue is reported.  The overall score renormalizes the category weights
over the assessments actually produced.
"""

import logging
import math
from typing import Optional

from finrisk.config import Settings
from finrisk.domain.fields import require_all
from finrisk.domain.levels import Rung, climb_above, climb_below, level_for_score
from finrisk.domain.scoring import renormalized_weighted_mean
from finrisk.schemas.common import RiskLevel
from finrisk.schemas.risk import (
    FinancialRiskMetrics,
    LiquidityRiskMetrics,
    MarketRiskMetrics,
    OperationalRiskMetrics,
    RiskAssessment,
    RiskReport,
    RiskType,
)
from finrisk.schemas.statement import FinancialStatement
from finrisk.utils.financial_math import ratio

logger = logging.getLogger(__name__)

# debt / equity, highest threshold first
SOLVENCY_RUNGS = (
    Rung(5.0, 95, RiskLevel.CRITICAL),
    Rung(3.0, 75, RiskLevel.HIGH),
    Rung(2.0, 45, RiskLevel.MEDIUM),
)

# current ratio, lowest threshold first
LIQUIDITY_RUNGS = (
    Rung(0.8, 90, RiskLevel.CRITICAL),
    Rung(1.0, 70, RiskLevel.HIGH),
    Rung(1.5, 40, RiskLevel.MEDIUM),
)

# operating expenses / revenue
OPEX_RUNGS = (
    Rung(0.90, 85, RiskLevel.CRITICAL),
    Rung(0.75, 65, RiskLevel.HIGH),
    Rung(0.60, 40, RiskLevel.MEDIUM),
)

# revenue / assets
MARKET_RUNGS = (
    Rung(0.3, 70, RiskLevel.HIGH),
    Rung(0.5, 45, RiskLevel.MEDIUM),
)

UNPROFITABLE_PENALTY = 20

_LEVEL_ICON = {
    RiskLevel.CRITICAL: "🔴",
    RiskLevel.HIGH: "🟠",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.LOW: "🟢",
}


class RiskAssessor:
    """Score financial, liquidity, operational and market risk."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def assess_risks(self, statement: FinancialStatement) -> RiskReport:
        statement.require_mandatory()

        assessments = [
            self._financial_risk(statement),
            self._liquidity_risk(statement),
            self._operational_risk(statement),
        ]
        market = self._market_risk(statement)
        if market is not None:
            assessments.append(market)

        weights = self.settings.risk_category_weights
        overall = renormalized_weighted_mean(
            (a.score, weights.get(a.risk_type.value, 0.25)) for a in assessments
        )
        level = level_for_score(overall, self.settings)

        return RiskReport(
            statement_id=statement.statement_id,
            period=statement.period,
            overall_risk_score=overall,
            risk_level=level,
            assessments=assessments,
            summary=self._summary(assessments, overall, level),
        )

    # ── assessors ────────────────────────────────────────────────────

    def _financial_risk(self, s: FinancialStatement) -> RiskAssessment:
        """Solvency via debt-to-equity; non-positive equity is treated as infinite leverage."""
        equity = s.book_equity
        debt_to_equity = s.liabilities / equity if equity > 0 else math.inf

        score, level = climb_above(debt_to_equity, SOLVENCY_RUNGS, (15, RiskLevel.LOW))
        explanation = {
            RiskLevel.CRITICAL: "Debt-to-equity is very high; severe insolvency risk.",
            RiskLevel.HIGH: "Debt-to-equity is high; significant financial risk.",
            RiskLevel.MEDIUM: "Debt-to-equity is moderate; needs monitoring.",
            RiskLevel.LOW: "Debt-to-equity is healthy; low financial risk.",
        }[level]

        return RiskAssessment(
            risk_type=RiskType.FINANCIAL,
            score=score,
            level=level,
            explanation=explanation,
            recommendation=(
                "Maintain the current capital structure."
                if level == RiskLevel.LOW
                else "Reduce debt and strengthen equity."
            ),
            metrics=FinancialRiskMetrics(
                debt_to_equity=debt_to_equity,
                total_liabilities=s.liabilities,
                equity=equity,
            ),
        )

    def _liquidity_risk(self, s: FinancialStatement) -> RiskAssessment:
        values = require_all(
            s, "current_assets", "current_liabilities", nonzero=("current_liabilities",),
        )
        if values is None:
            return self._abstain(
                RiskType.LIQUIDITY,
                "Not enough data to assess liquidity risk.",
                "Collect current assets and current liabilities.",
            )
        current_assets, current_liabilities = values

        current_ratio = current_assets / current_liabilities
        cash_ratio = ratio(s.cash, current_liabilities) if s.cash is not None else None

        score, level = climb_below(current_ratio, LIQUIDITY_RUNGS, (15, RiskLevel.LOW))
        explanation = {
            RiskLevel.CRITICAL: "Very low liquidity; serious risk of failing to meet obligations.",
            RiskLevel.HIGH: "Low liquidity; short-term obligations may be hard to pay.",
            RiskLevel.MEDIUM: "Moderate liquidity; room for improvement.",
            RiskLevel.LOW: "Adequate liquidity to meet obligations.",
        }[level]

        return RiskAssessment(
            risk_type=RiskType.LIQUIDITY,
            score=score,
            level=level,
            explanation=explanation,
            recommendation=(
                "Maintain current liquidity levels."
                if level == RiskLevel.LOW
                else "Increase liquidity and reduce short-term liabilities."
            ),
            metrics=LiquidityRiskMetrics(
                current_ratio=current_ratio,
                cash_ratio=cash_ratio,
                current_assets=current_assets,
                current_liabilities=current_liabilities,
            ),
        )

    def _operational_risk(self, s: FinancialStatement) -> RiskAssessment:
        values = require_all(s, "operating_expenses", "revenue", nonzero=("revenue",))
        if values is None:
            return self._abstain(
                RiskType.OPERATIONAL,
                "Not enough data to assess operational risk.",
                "Collect operating expenses and revenue.",
            )
        operating_expenses, revenue = values

        opex_ratio = operating_expenses / revenue
        operating_margin = s.ebit / revenue if s.ebit is not None else None

        score, level = climb_above(opex_ratio, OPEX_RUNGS, (15, RiskLevel.LOW))
        explanation = {
            RiskLevel.CRITICAL: "Operating expenses are very high; operating margin is negative or razor thin.",
            RiskLevel.HIGH: "Operating expenses are high; low operating efficiency.",
            RiskLevel.MEDIUM: "Operating expenses are moderate; optimization is advisable.",
            RiskLevel.LOW: "Operating expenses are under control.",
        }[level]

        return RiskAssessment(
            risk_type=RiskType.OPERATIONAL,
            score=score,
            level=level,
            explanation=explanation,
            recommendation=(
                "Maintain current operating efficiency."
                if level == RiskLevel.LOW
                else "Cut costs and improve operating processes."
            ),
            metrics=OperationalRiskMetrics(
                opex_ratio=opex_ratio,
                operating_margin=operating_margin,
                operating_expenses=operating_expenses,
                revenue=revenue,
            ),
        )

    def _market_risk(self, s: FinancialStatement) -> Optional[RiskAssessment]:
        """Revenue generation relative to assets, penalized for losses."""
        values = require_all(s, "revenue", "assets", nonzero=("assets",))
        if values is None:
            return None
        revenue, assets = values

        revenue_to_assets = revenue / assets
        net_margin = ratio(s.net_income, revenue) if s.net_income is not None else None

        score, level = climb_below(revenue_to_assets, MARKET_RUNGS, (20, RiskLevel.LOW))
        explanation = {
            RiskLevel.HIGH: "Low revenue generation relative to assets; high market risk.",
            RiskLevel.MEDIUM: "Moderate revenue generation; sensitive to market changes.",
            RiskLevel.LOW: "Adequate revenue generation; acceptable market risk.",
        }[level]

        if net_margin is not None and net_margin < 0:
            score += UNPROFITABLE_PENALTY
            if score >= 70:
                level = RiskLevel.CRITICAL
            elif score >= 50:
                level = RiskLevel.HIGH
            else:
                level = RiskLevel.MEDIUM

        return RiskAssessment(
            risk_type=RiskType.MARKET,
            score=min(100, score),
            level=level,
            explanation=explanation,
            recommendation=(
                "Protect market share and keep diversifying."
                if level == RiskLevel.LOW
                else "Invest in marketing and diversify the product range."
            ),
            metrics=MarketRiskMetrics(
                revenue_to_assets=revenue_to_assets,
                net_margin=net_margin,
                revenue=revenue,
                assets=assets,
            ),
        )

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _abstain(risk_type: RiskType, explanation: str, recommendation: str) -> RiskAssessment:
        logger.debug("Risk assessment %s abstained: %s", risk_type.value, explanation)
        return RiskAssessment(
            risk_type=risk_type,
            score=0,
            level=RiskLevel.LOW,
            explanation=explanation,
            recommendation=recommendation,
        )

    @staticmethod
    def _summary(assessments: list[RiskAssessment], overall: float, level: RiskLevel) -> str:
        lines = [f"📊 Overall risk: {level.value} (score {overall:.1f})", ""]
        for a in assessments:
            lines.append(f"{_LEVEL_ICON[a.level]} {a.risk_type.value}: {a.explanation}")
        return "\n".join(lines)
