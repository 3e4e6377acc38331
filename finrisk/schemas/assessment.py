"""Company-level assessment report."""

from typing import Optional

from pydantic import BaseModel

from finrisk.schemas.forecast import ProfitabilityTrend, RevenueForecast, ZScoreResult
from finrisk.schemas.fraud import FraudAnalysis
from finrisk.schemas.ratio import RatioAnalysis
from finrisk.schemas.risk import RiskReport
from finrisk.schemas.scoring import WeightedScore
from finrisk.schemas.trend import TrendReport


class CompanyAssessment(BaseModel):
    """Everything the pipeline produces for a company's latest period."""

    company_id: Optional[int] = None
    company_name: Optional[str] = None
    period: str
    periods_analyzed: list[str]

    ratio_analysis: RatioAnalysis
    fraud_analysis: FraudAnalysis
    risk_report: RiskReport
    z_score: ZScoreResult
    weighted_score: WeightedScore

    revenue_forecasts: list[RevenueForecast] = []  # empty with < 2 valid periods
    profitability_trend: ProfitabilityTrend
    trend_report: TrendReport

    model_config = {"frozen": True}
