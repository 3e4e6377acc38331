"""Financial ratio schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class RatioCategory(str, Enum):
    LIQUIDITY = "Liquidity"
    LEVERAGE = "Leverage"
    PROFITABILITY = "Profitability"
    EFFICIENCY = "Efficiency"


class RatioStatus(str, Enum):
    GOOD = "Good"
    WARNING = "Warning"
    CRITICAL = "Critical"


class Ratio(BaseModel):
    name: str
    category: RatioCategory
    value: float
    ideal_value: Optional[float] = None
    status: RatioStatus
    formula: str
    description: str

    model_config = {"frozen": True}


class CategoryScores(BaseModel):
    """0–100 score per ratio category (0 when the category has no ratios)."""

    liquidity: float = 0.0
    leverage: float = 0.0
    profitability: float = 0.0
    efficiency: float = 0.0

    model_config = {"frozen": True}


class RatioAnalysis(BaseModel):
    """Complete ratio analysis for a single statement."""

    statement_id: Optional[int] = None
    company_name: Optional[str] = None
    period: str
    ratios: list[Ratio]
    category_scores: CategoryScores
    overall_score: float

    model_config = {"frozen": True}
