"""Core scoring engines."""

from finrisk.engines.forecaster import Forecaster
from finrisk.engines.fraud_detector import FraudDetector
from finrisk.engines.ratio_engine import RatioEngine
from finrisk.engines.risk_assessor import RiskAssessor
from finrisk.engines.scoring_aggregator import ScoringAggregator
from finrisk.engines.trend_analyzer import TrendAnalyzer

__all__ = [
    "RatioEngine",
    "FraudDetector",
    "RiskAssessor",
    "Forecaster",
    "ScoringAggregator",
    "TrendAnalyzer",
]
