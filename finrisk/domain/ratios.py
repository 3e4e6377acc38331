"""Domain model for financial ratios.

This is the **single source of truth** for:
- Ratio formulas and the fields they require
- Status thresholds (Good / Warning / Critical)
- Ratio categories

Usage:
    from finrisk.domain.ratios import RATIOS, classify

    defn = RATIOS["current_ratio"]
    value = defn.compute(statement)      # None when it cannot be computed
    status = classify(defn, value)       # RatioStatus.GOOD
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from finrisk.domain.fields import require_all
from finrisk.schemas.ratio import RatioCategory, RatioStatus
from finrisk.schemas.statement import FinancialStatement


@dataclass(frozen=True)
class RatioDefinition:
    """Metadata and formula for one financial ratio."""

    name: str
    category: RatioCategory
    formula: str
    description: str
    good: float
    warning: float
    compute: Callable[[FinancialStatement], Optional[float]]
    higher_is_better: bool = True
    ideal_value: Optional[float] = None


# ══════════════════════════════════════════════════════════════════════════
# FORMULAS
# ══════════════════════════════════════════════════════════════════════════


def _over(numerator: str, denominator: str, positive_denominator: bool = False):
    """Build ``numerator / denominator`` that returns None when not computable."""

    def compute(s: FinancialStatement) -> Optional[float]:
        if positive_denominator:
            values = require_all(s, numerator, denominator, positive=(denominator,))
        else:
            values = require_all(s, numerator, denominator, nonzero=(denominator,))
        if values is None:
            return None
        num, den = values
        return num / den

    return compute


def _quick_ratio(s: FinancialStatement) -> Optional[float]:
    values = require_all(
        s, "current_assets", "inventory", "current_liabilities",
        nonzero=("current_liabilities",),
    )
    if values is None:
        return None
    current_assets, inventory, current_liabilities = values
    return (current_assets - inventory) / current_liabilities


def _over_equity(numerator: str):
    """``numerator / equity`` where equity may be derived; equity must be > 0."""

    def compute(s: FinancialStatement) -> Optional[float]:
        num = getattr(s, numerator)
        equity = s.book_equity
        if num is None or equity <= 0:
            return None
        return num / equity

    return compute


# ══════════════════════════════════════════════════════════════════════════
# RATIO REGISTRY (evaluation order = output order)
# ══════════════════════════════════════════════════════════════════════════

RATIOS: Dict[str, RatioDefinition] = {
    # ── Liquidity ─────────────────────────────────────────────────────
    "current_ratio": RatioDefinition(
        name="Current Ratio",
        category=RatioCategory.LIQUIDITY,
        formula="Current Assets / Current Liabilities",
        description="Ability to cover short-term obligations",
        good=1.5,
        warning=1.0,
        ideal_value=1.5,
        compute=_over("current_assets", "current_liabilities"),
    ),
    "quick_ratio": RatioDefinition(
        name="Quick Ratio",
        category=RatioCategory.LIQUIDITY,
        formula="(Current Assets - Inventory) / Current Liabilities",
        description="Immediate liquidity excluding inventory",
        good=1.0,
        warning=0.5,
        ideal_value=1.0,
        compute=_quick_ratio,
    ),
    "cash_ratio": RatioDefinition(
        name="Cash Ratio",
        category=RatioCategory.LIQUIDITY,
        formula="Cash / Current Liabilities",
        description="Ability to pay current liabilities from cash on hand",
        good=0.2,
        warning=0.1,
        ideal_value=0.2,
        compute=_over("cash", "current_liabilities"),
    ),
    # ── Leverage ──────────────────────────────────────────────────────
    "debt_to_equity": RatioDefinition(
        name="Debt to Equity",
        category=RatioCategory.LEVERAGE,
        formula="Total Liabilities / Equity",
        description="Liabilities carried per unit of shareholders' equity",
        good=2.0,
        warning=3.0,
        higher_is_better=False,
        ideal_value=2.0,
        compute=_over_equity("liabilities"),
    ),
    "debt_ratio": RatioDefinition(
        name="Debt Ratio",
        category=RatioCategory.LEVERAGE,
        formula="Total Liabilities / Total Assets",
        description="Share of assets financed by debt",
        good=0.5,
        warning=0.7,
        higher_is_better=False,
        ideal_value=0.5,
        compute=_over("liabilities", "assets"),
    ),
    "times_interest_earned": RatioDefinition(
        name="Times Interest Earned",
        category=RatioCategory.LEVERAGE,
        formula="EBIT / Interest Expense",
        description="Ability to service interest expense from operating profit",
        good=2.0,
        warning=1.0,
        ideal_value=2.0,
        compute=_over("ebit", "interest_expense", positive_denominator=True),
    ),
    # ── Profitability ─────────────────────────────────────────────────
    "net_profit_margin": RatioDefinition(
        name="Net Profit Margin",
        category=RatioCategory.PROFITABILITY,
        formula="Net Income / Revenue",
        description="Share of revenue kept as net profit",
        good=0.10,
        warning=0.05,
        compute=_over("net_income", "revenue", positive_denominator=True),
    ),
    "return_on_assets": RatioDefinition(
        name="Return on Assets (ROA)",
        category=RatioCategory.PROFITABILITY,
        formula="Net Income / Total Assets",
        description="Profit generated per unit of assets",
        good=0.05,
        warning=0.02,
        compute=_over("net_income", "assets", positive_denominator=True),
    ),
    "return_on_equity": RatioDefinition(
        name="Return on Equity (ROE)",
        category=RatioCategory.PROFITABILITY,
        formula="Net Income / Equity",
        description="Profit generated per unit of shareholders' equity",
        good=0.15,
        warning=0.08,
        compute=_over_equity("net_income"),
    ),
    "gross_profit_margin": RatioDefinition(
        name="Gross Profit Margin",
        category=RatioCategory.PROFITABILITY,
        formula="Gross Profit / Revenue",
        description="Share of revenue left after cost of goods sold",
        good=0.30,
        warning=0.20,
        compute=_over("gross_profit", "revenue", positive_denominator=True),
    ),
    # ── Efficiency ────────────────────────────────────────────────────
    "asset_turnover": RatioDefinition(
        name="Asset Turnover",
        category=RatioCategory.EFFICIENCY,
        formula="Revenue / Total Assets",
        description="Revenue generated per unit of assets",
        good=1.0,
        warning=0.5,
        compute=_over("revenue", "assets", positive_denominator=True),
    ),
    "inventory_turnover": RatioDefinition(
        name="Inventory Turnover",
        category=RatioCategory.EFFICIENCY,
        formula="COGS / Inventory",
        description="How many times inventory is sold through per period",
        good=5.0,
        warning=3.0,
        compute=_over("cogs", "inventory", positive_denominator=True),
    ),
    "receivables_turnover": RatioDefinition(
        name="Receivables Turnover",
        category=RatioCategory.EFFICIENCY,
        formula="Revenue / Accounts Receivable",
        description="How quickly receivables are collected",
        good=8.0,
        warning=5.0,
        compute=_over("revenue", "accounts_receivable", positive_denominator=True),
    ),
}


# ══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════════════════


def classify(defn: RatioDefinition, value: float) -> RatioStatus:
    """Map a ratio value to its status; boundaries are inclusive on the Good side.

    Examples:
        >>> classify(RATIOS["current_ratio"], 1.5)
        <RatioStatus.GOOD: 'Good'>
        >>> classify(RATIOS["debt_ratio"], 0.7)
        <RatioStatus.WARNING: 'Warning'>
        >>> classify(RATIOS["debt_ratio"], 0.71)
        <RatioStatus.CRITICAL: 'Critical'>
    """
    if defn.higher_is_better:
        if value >= defn.good:
            return RatioStatus.GOOD
        if value >= defn.warning:
            return RatioStatus.WARNING
        return RatioStatus.CRITICAL

    if value <= defn.good:
        return RatioStatus.GOOD
    if value <= defn.warning:
        return RatioStatus.WARNING
    return RatioStatus.CRITICAL
