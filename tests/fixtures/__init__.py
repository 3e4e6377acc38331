"""Statement builders and JSON fixture loading for offline tests."""

import json
from pathlib import Path
from typing import Any

from finrisk.schemas.statement import FinancialStatement

FIXTURES_DIR = Path(__file__).resolve().parent

# Realistic mid-size company, one quarter.
HEALTHY_Q1 = dict(
    statement_id=1,
    company_id=1,
    company_name="Sample Industrial Co.",
    period="1402-Q1",
    assets=5_000_000,
    liabilities=2_000_000,
    equity=3_000_000,
    current_assets=2_000_000,
    current_liabilities=1_000_000,
    inventory=500_000,
    cash=300_000,
    retained_earnings=1_500_000,
    revenue=3_000_000,
    cogs=2_000_000,
    ebit=600_000,
    interest_expense=100_000,
    net_income=450_000,
    operating_cf=500_000,
)


def make_statement(**overrides) -> FinancialStatement:
    """HEALTHY_Q1 with *overrides* applied; pass ``field=None`` to drop a field."""
    return FinancialStatement(**{**HEALTHY_Q1, **overrides})


def load_fixture(name: str) -> Any:
    """Load a JSON fixture file by name."""
    path = FIXTURES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    return json.loads(path.read_text())
