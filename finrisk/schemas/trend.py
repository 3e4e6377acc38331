"""Historical trend and industry benchmark schemas."""

from enum import Enum

from pydantic import BaseModel


class TrendDirection(str, Enum):
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


class BenchmarkStatus(str, Enum):
    ABOVE = "Above"
    BELOW = "Below"
    EQUAL = "Equal"


class TrendPoint(BaseModel):
    period: str
    value: float

    model_config = {"frozen": True}


class TrendAnalysis(BaseModel):
    metric: str
    data: list[TrendPoint]
    trend: TrendDirection
    change_rate: float  # % first → last
    average_growth: float  # mean % growth per period

    model_config = {"frozen": True}


class BenchmarkComparison(BaseModel):
    metric: str
    company_value: float
    industry_average: float
    difference: float  # % above/below industry
    status: BenchmarkStatus

    model_config = {"frozen": True}


class TrendReport(BaseModel):
    company_id: int | None = None
    period: str
    trends: list[TrendAnalysis]
    benchmarks: list[BenchmarkComparison]
    summary: str

    model_config = {"frozen": True}
