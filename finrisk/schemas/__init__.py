"""Pydantic schemas for pipeline inputs and results."""

from finrisk.schemas.assessment import CompanyAssessment
from finrisk.schemas.common import RiskLevel
from finrisk.schemas.forecast import (
    BankruptcyRisk,
    ConfidenceInterval,
    ProfitabilityTrend,
    RevenueForecast,
    ZScoreComponents,
    ZScoreResult,
    ZScoreZone,
)
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
from finrisk.schemas.ratio import CategoryScores, Ratio, RatioAnalysis, RatioCategory, RatioStatus
from finrisk.schemas.risk import (
    FinancialRiskMetrics,
    LiquidityRiskMetrics,
    MarketRiskMetrics,
    OperationalRiskMetrics,
    RiskAssessment,
    RiskReport,
    RiskType,
)
from finrisk.schemas.scoring import Rating, WeightedScore
from finrisk.schemas.statement import FinancialStatement
from finrisk.schemas.trend import (
    BenchmarkComparison,
    BenchmarkStatus,
    TrendAnalysis,
    TrendDirection,
    TrendPoint,
    TrendReport,
)

__all__ = [
    "FinancialStatement",
    "RiskLevel",
    "Ratio", "RatioAnalysis", "RatioCategory", "RatioStatus", "CategoryScores",
    "FraudAnalysis", "FraudFlag", "FraudIndicator",
    "BenfordDetails", "EarningsQualityDetails", "ReceivableGrowthDetails",
    "AssetInflationDetails", "AccrualDetails",
    "RiskAssessment", "RiskReport", "RiskType",
    "FinancialRiskMetrics", "LiquidityRiskMetrics",
    "OperationalRiskMetrics", "MarketRiskMetrics",
    "ZScoreResult", "ZScoreComponents", "ZScoreZone", "BankruptcyRisk",
    "RevenueForecast", "ConfidenceInterval", "ProfitabilityTrend",
    "Rating", "WeightedScore",
    "TrendAnalysis", "TrendPoint", "TrendDirection",
    "BenchmarkComparison", "BenchmarkStatus", "TrendReport",
    "CompanyAssessment",
]
