"""Risk assessment schemas."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from finrisk.schemas.common import RiskLevel


class RiskType(str, Enum):
    FINANCIAL = "Financial"
    LIQUIDITY = "Liquidity"
    OPERATIONAL = "Operational"
    MARKET = "Market"


class _Metrics(BaseModel):
    model_config = {"frozen": True}


class FinancialRiskMetrics(_Metrics):
    kind: Literal["financial"] = "financial"
    debt_to_equity: float  # +inf when equity <= 0
    total_liabilities: float
    equity: float
    threshold: float = 2.0


class LiquidityRiskMetrics(_Metrics):
    kind: Literal["liquidity"] = "liquidity"
    current_ratio: float
    cash_ratio: Optional[float] = None
    current_assets: float
    current_liabilities: float
    threshold: float = 1.5


class OperationalRiskMetrics(_Metrics):
    kind: Literal["operational"] = "operational"
    opex_ratio: float
    operating_margin: Optional[float] = None
    operating_expenses: float
    revenue: float
    threshold: float = 0.6


class MarketRiskMetrics(_Metrics):
    kind: Literal["market"] = "market"
    revenue_to_assets: float
    net_margin: Optional[float] = None
    revenue: float
    assets: float


RiskMetrics = Annotated[
    Union[
        FinancialRiskMetrics,
        LiquidityRiskMetrics,
        OperationalRiskMetrics,
        MarketRiskMetrics,
    ],
    Field(discriminator="kind"),
]


class RiskAssessment(BaseModel):
    risk_type: RiskType
    score: float = Field(ge=0, le=100)
    level: RiskLevel
    explanation: str
    recommendation: str
    metrics: Optional[RiskMetrics] = None  # None when the assessor abstained

    model_config = {"frozen": True}


class RiskReport(BaseModel):
    statement_id: Optional[int] = None
    period: str
    overall_risk_score: float
    risk_level: RiskLevel
    assessments: list[RiskAssessment]
    summary: str

    model_config = {"frozen": True}
