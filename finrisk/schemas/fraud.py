"""Fraud indicator schemas.

Each heuristic carries its own details record; ``FraudDetails`` is a
discriminated union keyed on ``kind`` so consumers can dispatch on the
check that produced an indicator without inspecting an untyped bag.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from finrisk.schemas.common import RiskLevel


class FraudFlag(str, Enum):
    BENFORD_LAW = "Benford's Law"
    QUALITY_OF_EARNINGS = "Quality of Earnings"
    RECEIVABLE_GROWTH = "Receivable Growth"
    ASSET_INFLATION = "Asset Inflation"
    ACCRUAL_RATIO = "Accrual Ratio"


class _Details(BaseModel):
    model_config = {"frozen": True}


class BenfordDetails(_Details):
    kind: Literal["benford"] = "benford"
    sample_size: int
    chi_square: Optional[float] = None
    critical_value: Optional[float] = None
    observed_distribution: list[float] = []  # percent, digits 1–9
    expected_distribution: list[float] = []  # percent, digits 1–9


class EarningsQualityDetails(_Details):
    kind: Literal["quality_of_earnings"] = "quality_of_earnings"
    ratio: float
    operating_cf: float
    net_income: float
    threshold: float = 1.0


class ReceivableGrowthDetails(_Details):
    kind: Literal["receivable_growth"] = "receivable_growth"
    ar_growth: float
    sales_growth: float
    ratio: Optional[float] = None  # None when sales growth is zero
    threshold: float = 1.2


class AssetInflationDetails(_Details):
    kind: Literal["asset_inflation"] = "asset_inflation"
    fixed_asset_growth: float
    revenue_growth: float
    difference: float
    threshold: float = 0.15


class AccrualDetails(_Details):
    kind: Literal["accrual_ratio"] = "accrual_ratio"
    accrual_ratio: float
    net_income: float
    operating_cf: float
    total_assets: float
    threshold: float = 0.10


FraudDetails = Annotated[
    Union[
        BenfordDetails,
        EarningsQualityDetails,
        ReceivableGrowthDetails,
        AssetInflationDetails,
        AccrualDetails,
    ],
    Field(discriminator="kind"),
]


class FraudIndicator(BaseModel):
    flag_type: FraudFlag
    severity: RiskLevel
    score: float = Field(ge=0, le=100)
    description: str
    details: Optional[FraudDetails] = None  # None when the check abstained
    recommendation: str

    model_config = {"frozen": True}


class FraudAnalysis(BaseModel):
    statement_id: Optional[int] = None
    period: str
    overall_fraud_score: float  # 0 = no fraud signal, 100 = strong signal
    indicators: list[FraudIndicator]  # flagged (score > 0) only
    risk_level: RiskLevel

    model_config = {"frozen": True}
