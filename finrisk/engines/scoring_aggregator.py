"""Weighted final score, credit-style rating and recommendation text.

Formula (default weights)::

    final = 0.20*liquidity + 0.20*leverage + 0.30*profitability
          + 0.20*efficiency + 0.10*(100 - fraud_score)
"""

import logging
from typing import Optional, Sequence

from finrisk.config import Settings
from finrisk.domain.levels import rating_for_score
from finrisk.domain.scoring import weighted_sum
from finrisk.engines.fraud_detector import FraudDetector
from finrisk.engines.ratio_engine import RatioEngine
from finrisk.schemas.statement import FinancialStatement
from finrisk.schemas.scoring import WeightedScore
from finrisk.utils.financial_math import round_half_up

logger = logging.getLogger(__name__)

_TIER_MESSAGES = (
    (80.0, "✅ The company shows excellent financial performance."),
    (60.0, "🟡 The company shows above-average financial performance."),
    (40.0, "🟠 The company shows weak financial performance."),
)
_CRISIS_MESSAGE = "🔴 The company is in a critical financial position."

_WEAKNESS_MESSAGES = (
    ("liquidity", "⚠️ Liquidity: ability to pay short-term obligations is weak."),
    ("leverage", "⚠️ Leverage: debt levels are high and concerning."),
    ("profitability", "⚠️ Profitability: margins are low and need improvement."),
    ("efficiency", "⚠️ Efficiency: assets are not being used effectively."),
    ("fraud_risk", "🚨 Fraud risk: suspicious fraud indicators were detected."),
)

_STRENGTH_MESSAGES = (
    ("profitability", "✅ Excellent profitability"),
    ("liquidity", "✅ Strong liquidity"),
)


class ScoringAggregator:
    """Combine ratio category scores and the fraud score into one rating."""

    def __init__(
        self,
        ratio_engine: RatioEngine,
        fraud_detector: FraudDetector,
        settings: Settings,
    ):
        self.ratios = ratio_engine
        self.fraud = fraud_detector
        self.settings = settings

    def calculate_weighted_score(
        self,
        statement: FinancialStatement,
        previous_statements: Optional[Sequence[FinancialStatement]] = None,
    ) -> WeightedScore:
        ratio_analysis = self.ratios.analyze(statement)
        fraud_analysis = self.fraud.analyze(statement, previous_statements)

        cs = ratio_analysis.category_scores
        indices = {
            "liquidity": cs.liquidity,
            "leverage": cs.leverage,
            "profitability": cs.profitability,
            "efficiency": cs.efficiency,
            "fraud_risk": 100 - fraud_analysis.overall_fraud_score,
        }
        final_score = round_half_up(weighted_sum(indices, self.settings.final_score_weights), 2)
        rating = rating_for_score(final_score, self.settings)

        logger.debug(
            "Weighted score for %s: %.2f (%s)", statement.period, final_score, rating.value,
        )

        return WeightedScore(
            final_score=final_score,
            liquidity_index=round_half_up(indices["liquidity"], 2),
            leverage_index=round_half_up(indices["leverage"], 2),
            profitability_index=round_half_up(indices["profitability"], 2),
            efficiency_index=round_half_up(indices["efficiency"], 2),
            fraud_risk_index=round_half_up(indices["fraud_risk"], 2),
            rating=rating,
            recommendation=self._recommendation(final_score, indices),
        )

    def _recommendation(self, final_score: float, indices: dict[str, float]) -> str:
        lines: list[str] = []

        for lower_bound, message in _TIER_MESSAGES:
            if final_score >= lower_bound:
                lines.append(message)
                break
        else:
            lines.append(_CRISIS_MESSAGE)

        for key, message in _WEAKNESS_MESSAGES:
            if indices[key] < self.settings.weak_index_threshold:
                lines.append(message)

        for key, message in _STRENGTH_MESSAGES:
            if indices[key] >= self.settings.strong_index_threshold:
                lines.append(message)

        return "\n".join(lines)
