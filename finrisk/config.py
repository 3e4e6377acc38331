"""Scoring configuration loaded from environment variables.

Every threshold, weight and band the engines use lives here so an
alternate ``Settings(...)`` can be injected for deterministic testing.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

# Check if .env file exists and is readable
_env_file = None
try:
    env_path = Path(".env")
    if env_path.exists() and os.access(env_path, os.R_OK):
        _env_file = ".env"
except (OSError, PermissionError):
    pass


class Settings(BaseSettings):
    """All configuration for the finrisk scoring pipeline.

    Values are loaded from ``FINRISK_``-prefixed environment variables or a
    .env file.  Dict- and list-valued settings accept JSON in the
    environment (e.g. ``FINRISK_RATING_BANDS='[[95, "AAA"], ...]'``).
    """

    # Application
    app_name: str = "finrisk"
    log_level: str = "INFO"
    json_logs: bool = False
    engine_log_level: Optional[str] = None  # None: inherit log_level

    # Ratio status → category points
    status_points: dict[str, float] = {
        "Good": 100.0,
        "Warning": 60.0,
        "Critical": 20.0,
    }

    # RatioEngine overall score (distinct from the final-score weights)
    ratio_category_weights: dict[str, float] = {
        "liquidity": 0.2,
        "leverage": 0.2,
        "profitability": 0.4,
        "efficiency": 0.2,
    }

    # Fraud detection
    benford_critical_value: float = 15.51  # chi-square, 8 dof, 95%
    benford_min_samples: int = 5

    # Shared score → level mapping (fraud and risk aggregates)
    critical_level_threshold: float = 70.0
    high_level_threshold: float = 50.0
    medium_level_threshold: float = 30.0

    # RiskAssessor aggregation
    risk_category_weights: dict[str, float] = {
        "Financial": 0.30,
        "Liquidity": 0.30,
        "Operational": 0.25,
        "Market": 0.15,
    }

    # Forecasting
    confidence_multiplier: float = 2.0  # ≈ 95% interval
    profitability_trend_tolerance: float = 0.05  # 5% relative margin move

    # ScoringAggregator
    final_score_weights: dict[str, float] = {
        "liquidity": 0.20,
        "leverage": 0.20,
        "profitability": 0.30,
        "efficiency": 0.20,
        "fraud_risk": 0.10,
    }
    rating_bands: list[tuple[float, str]] = [
        (95.0, "AAA"),
        (90.0, "AA"),
        (80.0, "A"),
        (70.0, "BBB"),
        (60.0, "BB"),
        (50.0, "B"),
        (40.0, "CCC"),
        (30.0, "CC"),
        (20.0, "C"),
    ]
    weak_index_threshold: float = 50.0
    strong_index_threshold: float = 80.0

    # Trend analysis
    trend_growth_threshold: float = 2.0  # percent per period
    benchmark_equal_band: float = 5.0  # percent difference
    default_industry_benchmarks: dict[str, float] = {
        "currentRatio": 1.5,
        "debtToEquity": 1.0,
        "profitMargin": 10.0,
        "roe": 15.0,
    }

    # Portfolio batching
    batch_max_workers: int = 4

    model_config = {
        "env_prefix": "FINRISK_",
        "env_file": _env_file,
        "env_file_encoding": "utf-8",
        "env_file_ignore_empty": True,
    }
