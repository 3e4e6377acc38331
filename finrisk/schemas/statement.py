"""Financial statement input schema."""

from typing import Optional

from pydantic import BaseModel

from finrisk.errors import MissingRequiredFieldError


class FinancialStatement(BaseModel):
    """One period of a company's statements.

    ``None`` means *unknown*, never zero.  Only ``assets`` and
    ``liabilities`` are mandatory; they are typed optional so partially
    extracted records can still be built and validated, and every engine
    calls :meth:`require_mandatory` before computing.
    """

    statement_id: Optional[int] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    period: str  # "1402-Q1" or "1402"

    # Balance Sheet
    assets: Optional[float] = None
    liabilities: Optional[float] = None
    equity: Optional[float] = None
    current_assets: Optional[float] = None
    current_liabilities: Optional[float] = None
    fixed_assets: Optional[float] = None
    inventory: Optional[float] = None
    cash: Optional[float] = None
    accounts_receivable: Optional[float] = None
    retained_earnings: Optional[float] = None

    # Income Statement
    revenue: Optional[float] = None
    cogs: Optional[float] = None
    gross_profit: Optional[float] = None
    operating_expenses: Optional[float] = None
    ebit: Optional[float] = None
    ebitda: Optional[float] = None
    interest_expense: Optional[float] = None
    tax_expense: Optional[float] = None
    net_income: Optional[float] = None

    # Cash Flow Statement
    operating_cf: Optional[float] = None
    investing_cf: Optional[float] = None
    financing_cf: Optional[float] = None

    model_config = {"frozen": True, "from_attributes": True}

    def require_mandatory(self) -> None:
        """Raise :class:`MissingRequiredFieldError` if assets/liabilities are absent."""
        for name in ("assets", "liabilities"):
            if getattr(self, name) is None:
                raise MissingRequiredFieldError(name, self.period)

    @property
    def book_equity(self) -> float:
        """Reported equity, or ``assets - liabilities`` when not reported."""
        if self.equity is not None:
            return self.equity
        return self.assets - self.liabilities
