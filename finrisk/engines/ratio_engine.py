"""Financial ratio engine: categorized ratios and category scores.

A ratio is emitted only when every field it needs is present and its
denominator is usable; otherwise it is simply omitted.
"""

import logging

from finrisk.config import Settings
from finrisk.domain.ratios import RATIOS, classify
from finrisk.domain.scoring import category_scores, weighted_sum
from finrisk.schemas.ratio import CategoryScores, Ratio, RatioAnalysis
from finrisk.schemas.statement import FinancialStatement

logger = logging.getLogger(__name__)


class RatioEngine:
    """Compute liquidity, leverage, profitability and efficiency ratios."""

    def __init__(self, settings: Settings):
        self.settings = settings

    # ── main entry points ────────────────────────────────────────────

    def compute_ratios(self, statement: FinancialStatement) -> list[Ratio]:
        statement.require_mandatory()

        ratios: list[Ratio] = []
        for key, defn in RATIOS.items():
            value = defn.compute(statement)
            if value is None:
                logger.debug("Ratio %s skipped for %s: inputs unavailable", key, statement.period)
                continue
            ratios.append(Ratio(
                name=defn.name,
                category=defn.category,
                value=value,
                ideal_value=defn.ideal_value,
                status=classify(defn, value),
                formula=defn.formula,
                description=defn.description,
            ))
        return ratios

    def category_scores(self, ratios: list[Ratio]) -> CategoryScores:
        return category_scores(ratios, self.settings)

    def overall_score(self, scores: CategoryScores) -> float:
        """Weighted sum with the ratio-engine weights (profitability 0.4)."""
        return weighted_sum(scores.model_dump(), self.settings.ratio_category_weights)

    def analyze(self, statement: FinancialStatement) -> RatioAnalysis:
        """Ratios, category scores and overall score in one record."""
        ratios = self.compute_ratios(statement)
        scores = self.category_scores(ratios)
        return RatioAnalysis(
            statement_id=statement.statement_id,
            company_name=statement.company_name,
            period=statement.period,
            ratios=ratios,
            category_scores=scores,
            overall_score=self.overall_score(scores),
        )
