"""Assessment facade: single entry point for all external interfaces.

The CLI (run_pipeline.py) and any other outer layer should use this
instead of wiring engines directly.  If the internal wiring changes (new
engines, different weights) only the container needs updating and every
consumer is insulated.

Usage::

    facade = AssessmentFacade()          # uses Settings() from env / .env
    ratios = facade.compute_ratios({"period": "1402-Q1", "assets": 1e7, ...})
    report = facade.assess_company([q1, q2, q3, q4])
    facade.close()
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from dependency_injector import providers

from finrisk.config import Settings
from finrisk.container import AppContainer
from finrisk.logging_config import get_logger
from finrisk.schemas.statement import FinancialStatement

logger = get_logger(__name__)

StatementInput = Union[FinancialStatement, Mapping[str, Any]]


def _to_statement(data: StatementInput) -> FinancialStatement:
    if isinstance(data, FinancialStatement):
        return data
    return FinancialStatement.model_validate(data)


def _to_statements(items: Optional[Iterable[StatementInput]]) -> List[FinancialStatement]:
    return [_to_statement(item) for item in items or ()]


class AssessmentFacade:
    """High-level API for the scoring pipeline.

    Accepts statements as schemas or plain mappings and returns plain
    dicts (``model_dump``), never engine objects.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._container = AppContainer()
        if settings is not None:
            self._container.settings.override(providers.Object(settings))
        self._settings = self._container.settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    # SINGLE-STATEMENT ANALYSIS
    # ══════════════════════════════════════════════════════════════════

    def compute_ratios(self, statement: StatementInput) -> List[Dict[str, Any]]:
        engine = self._container.ratio_engine()
        return [r.model_dump() for r in engine.compute_ratios(_to_statement(statement))]

    def analyze_ratios(self, statement: StatementInput) -> Dict[str, Any]:
        """Ratios plus category scores and the ratio-engine overall score."""
        return self._container.ratio_engine().analyze(_to_statement(statement)).model_dump()

    def analyze_statement(
        self,
        statement: StatementInput,
        previous_statements: Optional[Iterable[StatementInput]] = None,
    ) -> Dict[str, Any]:
        """Fraud analysis; ``previous_statements`` are ordered newest first."""
        detector = self._container.fraud_detector()
        result = detector.analyze(
            _to_statement(statement), _to_statements(previous_statements),
        )
        return result.model_dump()

    def assess_risks(self, statement: StatementInput) -> Dict[str, Any]:
        return self._container.risk_assessor().assess_risks(_to_statement(statement)).model_dump()

    def calculate_z_score(self, statement: StatementInput) -> Dict[str, Any]:
        return self._container.forecaster().calculate_z_score(_to_statement(statement)).model_dump()

    def calculate_weighted_score(
        self,
        statement: StatementInput,
        previous_statements: Optional[Iterable[StatementInput]] = None,
    ) -> Dict[str, Any]:
        aggregator = self._container.scoring_aggregator()
        result = aggregator.calculate_weighted_score(
            _to_statement(statement), _to_statements(previous_statements),
        )
        return result.model_dump()

    # ══════════════════════════════════════════════════════════════════
    # HISTORY-BASED ANALYSIS
    # ══════════════════════════════════════════════════════════════════

    def forecast_revenue(
        self, statements: Iterable[StatementInput], periods_ahead: int = 1
    ) -> List[Dict[str, Any]]:
        forecaster = self._container.forecaster()
        forecasts = forecaster.forecast_revenue(_to_statements(statements), periods_ahead)
        return [f.model_dump() for f in forecasts]

    def predict_profitability_trend(self, statements: Iterable[StatementInput]) -> str:
        forecaster = self._container.forecaster()
        return forecaster.predict_profitability_trend(_to_statements(statements)).value

    def generate_trend_report(
        self,
        statements: Iterable[StatementInput],
        benchmarks: Optional[Mapping[str, float]] = None,
        company_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        analyzer = self._container.trend_analyzer()
        report = analyzer.generate_report(company_id, _to_statements(statements), benchmarks)
        return report.model_dump()

    def assess_company(
        self,
        statements: Iterable[StatementInput],
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> Dict[str, Any]:
        service = self._container.assessment_service()
        return service.assess_company(_to_statements(statements), benchmarks).model_dump()

    def assess_portfolio(
        self,
        portfolio: Iterable[Iterable[StatementInput]],
        benchmarks: Optional[Mapping[str, float]] = None,
    ) -> List[Dict[str, Any]]:
        service = self._container.assessment_service()
        companies = [_to_statements(statements) for statements in portfolio]
        logger.info("portfolio_requested", companies=len(companies))
        return [a.model_dump() for a in service.assess_portfolio(companies, benchmarks)]

    # ── lifecycle ─────────────────────────────────────────────────────

    def close(self) -> None:
        """Drop any settings override on the container."""
        self._container.settings.reset_override()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
