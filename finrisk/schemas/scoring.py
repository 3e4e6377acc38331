"""Weighted score schemas."""

from enum import Enum

from pydantic import BaseModel


class Rating(str, Enum):
    AAA = "AAA"
    AA = "AA"
    A = "A"
    BBB = "BBB"
    BB = "BB"
    B = "B"
    CCC = "CCC"
    CC = "CC"
    C = "C"
    D = "D"


class WeightedScore(BaseModel):
    final_score: float  # 0–100
    liquidity_index: float
    leverage_index: float
    profitability_index: float
    efficiency_index: float
    fraud_risk_index: float  # 100 - overall fraud score, higher is better
    rating: Rating
    recommendation: str

    model_config = {"frozen": True}
