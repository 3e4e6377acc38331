"""Hard failures raised to callers of the scoring pipeline.

Missing optional data is *not* an error: analyzers abstain with a
zero-scored result instead.  Only the conditions below are raised.
"""

from typing import Optional


class FinRiskError(Exception):
    """Base class for every error the pipeline raises."""


class MissingRequiredFieldError(FinRiskError):
    """A statement is missing ``assets`` or ``liabilities``."""

    def __init__(self, field: str, period: Optional[str] = None):
        self.field = field
        self.period = period
        where = f" for period {period!r}" if period else ""
        super().__init__(f"Financial statement{where} is missing required field '{field}'")


class InsufficientHistoryError(FinRiskError):
    """Not enough valid historical periods to run a series computation."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"At least {required} usable periods are required; got {available}"
        )
