"""Dependency Injection Container.

Wires the scoring settings, the engines and the assessment service using
dependency-injector.

Usage::

    from finrisk.container import AppContainer

    container = AppContainer()
    service = container.assessment_service()
    report = service.assess_company(statements)

    # Alternate thresholds (tests, what-if runs)
    container.settings.override(providers.Object(Settings(benford_min_samples=3)))
"""

from dependency_injector import containers, providers

from finrisk.config import Settings
from finrisk.engines.forecaster import Forecaster
from finrisk.engines.fraud_detector import FraudDetector
from finrisk.engines.ratio_engine import RatioEngine
from finrisk.engines.risk_assessor import RiskAssessor
from finrisk.engines.scoring_aggregator import ScoringAggregator
from finrisk.engines.trend_analyzer import TrendAnalyzer
from finrisk.services.assessment_service import AssessmentService


class AppContainer(containers.DeclarativeContainer):
    """Application Dependency Injection Container.

    - Configuration (Settings)
    - Engines (pure scoring logic)
    - Services (orchestration)
    """

    # ══════════════════════════════════════════════════════════════════
    # CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    settings = providers.Singleton(Settings)

    # ══════════════════════════════════════════════════════════════════
    # ENGINES (Business Logic Layer)
    # ══════════════════════════════════════════════════════════════════

    ratio_engine = providers.Factory(
        RatioEngine,
        settings=settings,
    )

    fraud_detector = providers.Factory(
        FraudDetector,
        settings=settings,
    )

    risk_assessor = providers.Factory(
        RiskAssessor,
        settings=settings,
    )

    forecaster = providers.Factory(
        Forecaster,
        settings=settings,
    )

    scoring_aggregator = providers.Factory(
        ScoringAggregator,
        ratio_engine=ratio_engine,
        fraud_detector=fraud_detector,
        settings=settings,
    )

    trend_analyzer = providers.Factory(
        TrendAnalyzer,
        settings=settings,
    )

    # ══════════════════════════════════════════════════════════════════
    # SERVICES (Orchestration Layer)
    # ══════════════════════════════════════════════════════════════════

    assessment_service = providers.Factory(
        AssessmentService,
        settings=settings,
        ratio_engine=ratio_engine,
        fraud_detector=fraud_detector,
        risk_assessor=risk_assessor,
        forecaster=forecaster,
        scoring_aggregator=scoring_aggregator,
        trend_analyzer=trend_analyzer,
    )
