"""Company-level assessment: runs every engine over a company's history.

The latest period is scored; earlier periods feed the fraud comparisons,
forecasts and trend report.  ``assess_portfolio`` fans the same work out
over many companies on a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional, Sequence

from finrisk.config import Settings
from finrisk.engines.forecaster import Forecaster
from finrisk.engines.fraud_detector import FraudDetector
from finrisk.engines.ratio_engine import RatioEngine
from finrisk.engines.risk_assessor import RiskAssessor
from finrisk.engines.scoring_aggregator import ScoringAggregator
from finrisk.engines.trend_analyzer import TrendAnalyzer
from finrisk.errors import InsufficientHistoryError
from finrisk.logging_config import assessment_context, get_logger
from finrisk.schemas.assessment import CompanyAssessment
from finrisk.schemas.statement import FinancialStatement

logger = get_logger(__name__)


class AssessmentService:
    def __init__(
        self,
        settings: Settings,
        ratio_engine: RatioEngine,
        fraud_detector: FraudDetector,
        risk_assessor: RiskAssessor,
        forecaster: Forecaster,
        scoring_aggregator: ScoringAggregator,
        trend_analyzer: TrendAnalyzer,
    ):
        self.settings = settings
        self.ratios = ratio_engine
        self.fraud = fraud_detector
        self.risks = risk_assessor
        self.forecaster = forecaster
        self.scoring = scoring_aggregator
        self.trends = trend_analyzer

    def assess_company(
        self,
        statements: Sequence[FinancialStatement],
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> CompanyAssessment:
        """Score the latest of *statements* in the context of the rest.

        Raises:
            InsufficientHistoryError: *statements* is empty.
            MissingRequiredFieldError: the latest statement lacks assets or liabilities.
        """
        if not statements:
            raise InsufficientHistoryError(1, 0)

        ordered = sorted(statements, key=lambda s: s.period)
        latest = ordered[-1]
        previous = ordered[-2::-1]  # newest first

        with assessment_context(company_id=latest.company_id, period=latest.period):
            logger.info("assessment_started", periods=len(ordered))
            assessment = self._assess(latest, previous, ordered, benchmarks)
            logger.info(
                "assessment_completed",
                final_score=assessment.weighted_score.final_score,
                rating=assessment.weighted_score.rating.value,
            )
        return assessment

    def _assess(
        self,
        latest: FinancialStatement,
        previous: Sequence[FinancialStatement],
        ordered: Sequence[FinancialStatement],
        benchmarks: Optional[Mapping[str, float]],
    ) -> CompanyAssessment:
        try:
            forecasts = self.forecaster.forecast_revenue(ordered)
        except InsufficientHistoryError as exc:
            logger.info("revenue_forecast_skipped", available=exc.available)
            forecasts = []

        return CompanyAssessment(
            company_id=latest.company_id,
            company_name=latest.company_name,
            period=latest.period,
            periods_analyzed=[s.period for s in ordered],
            ratio_analysis=self.ratios.analyze(latest),
            fraud_analysis=self.fraud.analyze(latest, previous),
            risk_report=self.risks.assess_risks(latest),
            z_score=self.forecaster.calculate_z_score(latest),
            weighted_score=self.scoring.calculate_weighted_score(latest, previous),
            revenue_forecasts=forecasts,
            profitability_trend=self.forecaster.predict_profitability_trend(ordered),
            trend_report=self.trends.generate_report(latest.company_id, ordered, benchmarks),
        )

    def assess_portfolio(
        self,
        portfolio: Sequence[Sequence[FinancialStatement]],
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> list[CompanyAssessment]:
        """Assess many companies in parallel; results follow input order."""
        results: list[CompanyAssessment] = []
        with ThreadPoolExecutor(max_workers=self.settings.batch_max_workers) as executor:
            futures = [
                executor.submit(self.assess_company, statements, benchmarks)
                for statements in portfolio
            ]
            for index, fut in enumerate(futures):
                try:
                    results.append(fut.result())
                except Exception as exc:
                    logger.error(
                        "portfolio_assessment_failed",
                        index=index,
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    raise
        logger.info("portfolio_assessment_completed", companies=len(results))
        return results
