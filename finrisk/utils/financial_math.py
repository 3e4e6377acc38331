"""Pure financial calculation utilities.

Every function here is stateless and thoroughly tested.
Used by all of the scoring engines.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence


def growth_rate(current: float, previous: float) -> Optional[float]:
    """Fractional period-over-period growth.

    Returns None when previous is zero (undefined growth).

    >>> growth_rate(115, 100)
    0.15
    >>> growth_rate(50, 100)
    -0.5
    >>> growth_rate(100, 0) is None
    True
    """
    if previous == 0:
        return None
    return (current - previous) / previous


def ratio(numerator: float, denominator: float) -> Optional[float]:
    """Plain quotient, or None when the denominator is zero.

    >>> ratio(30, 100)
    0.3
    >>> ratio(10, 0) is None
    True
    """
    if denominator == 0:
        return None
    return numerator / denominator


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics instead of raising.

    Used where a zero denominator is a documented boundary that must
    propagate as a non-finite value (Z-Score with zero total assets).

    >>> ieee_divide(1, 4)
    0.25
    >>> ieee_divide(5, 0)
    inf
    >>> ieee_divide(-5, 0)
    -inf
    >>> math.isnan(ieee_divide(0, 0))
    True
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence.

    >>> mean([10, 20, 30])
    20.0
    >>> mean([])
    0.0
    """
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_stddev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N); 0.0 for an empty sequence.

    >>> population_stddev([0.1, 0.1, 0.1])
    0.0
    >>> population_stddev([1, 3])
    1.0
    """
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero; non-finite values pass through unchanged.

    Python's built-in ``round`` uses banker's rounding, which would make a
    value like 2.5 round down.

    >>> round_half_up(2.5)
    3.0
    >>> round_half_up(1.005, 2)
    1.01
    >>> round_half_up(-2.5)
    -3.0
    >>> round_half_up(float("inf"))
    inf
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
