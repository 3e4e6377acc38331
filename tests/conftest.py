"""Shared test fixtures.

Every engine is pure, so tests build fresh engines from a default
``Settings()`` and feed them in-memory statements.
"""

import pytest

from finrisk.config import Settings
from finrisk.engines.forecaster import Forecaster
from finrisk.engines.fraud_detector import FraudDetector
from finrisk.engines.ratio_engine import RatioEngine
from finrisk.engines.risk_assessor import RiskAssessor
from finrisk.engines.scoring_aggregator import ScoringAggregator
from finrisk.engines.trend_analyzer import TrendAnalyzer
from finrisk.schemas.statement import FinancialStatement
from tests.fixtures import make_statement


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def healthy_statement() -> FinancialStatement:
    return make_statement()


@pytest.fixture()
def quarterly_history() -> list[FinancialStatement]:
    """1400-Q1..Q4 with revenue growing exactly 10% per quarter (shuffled)."""
    revenues = {
        "1400-Q1": 1_000_000,
        "1400-Q2": 1_100_000,
        "1400-Q3": 1_210_000,
        "1400-Q4": 1_331_000,
    }
    statements = [
        FinancialStatement(
            statement_id=i,
            company_id=7,
            company_name="Growth Co.",
            period=period,
            assets=4_000_000,
            liabilities=1_600_000,
            current_assets=1_500_000,
            current_liabilities=900_000,
            revenue=revenue,
            net_income=revenue / 10,
            operating_cf=revenue / 8,
        )
        for i, (period, revenue) in enumerate(revenues.items(), start=1)
    ]
    return [statements[2], statements[0], statements[3], statements[1]]


@pytest.fixture()
def ratio_engine(settings) -> RatioEngine:
    return RatioEngine(settings)


@pytest.fixture()
def fraud_detector(settings) -> FraudDetector:
    return FraudDetector(settings)


@pytest.fixture()
def risk_assessor(settings) -> RiskAssessor:
    return RiskAssessor(settings)


@pytest.fixture()
def forecaster(settings) -> Forecaster:
    return Forecaster(settings)


@pytest.fixture()
def scoring_aggregator(ratio_engine, fraud_detector, settings) -> ScoringAggregator:
    return ScoringAggregator(ratio_engine, fraud_detector, settings)


@pytest.fixture()
def trend_analyzer(settings) -> TrendAnalyzer:
    return TrendAnalyzer(settings)
