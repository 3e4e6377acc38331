"""Bankruptcy-prediction and forecasting schemas."""

from enum import Enum

from pydantic import BaseModel


class ZScoreZone(str, Enum):
    SAFE = "Safe"
    GREY = "Grey"
    DISTRESS = "Distress"


class BankruptcyRisk(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ProfitabilityTrend(str, Enum):
    IMPROVING = "Improving"
    STABLE = "Stable"
    DECLINING = "Declining"


class ZScoreComponents(BaseModel):
    working_capital_ratio: float  # WC / TA
    retained_earnings_ratio: float  # RE / TA
    ebit_ratio: float  # EBIT / TA
    equity_to_liabilities_ratio: float  # book equity / TL
    sales_ratio: float  # Sales / TA

    model_config = {"frozen": True}


class ZScoreResult(BaseModel):
    """Altman Z-Score.  Non-finite when total assets is zero."""

    z_score: float
    zone: ZScoreZone
    bankruptcy_risk: BankruptcyRisk
    explanation: str
    components: ZScoreComponents

    model_config = {"frozen": True}


class ConfidenceInterval(BaseModel):
    lower: float
    upper: float

    model_config = {"frozen": True}


class RevenueForecast(BaseModel):
    period: str
    predicted_revenue: float
    confidence_interval: ConfidenceInterval
    growth_rate: float  # mean fractional growth per period
    methodology: str

    model_config = {"frozen": True}
