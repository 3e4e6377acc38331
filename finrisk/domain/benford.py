"""Benford's Law first-digit statistics.

Usage:
    from finrisk.domain.benford import benford_chi_square

    chi2, observed_pct = benford_chi_square([1_250_000, 930_000, 180_000, ...])
"""

import math
from typing import Sequence

# Expected share (%) of each leading digit 1–9 in naturally occurring data.
BENFORD_EXPECTED: tuple[float, ...] = (30.1, 17.6, 12.5, 9.7, 7.9, 6.7, 5.8, 5.1, 4.6)


def leading_digit(value: float) -> int:
    """First significant decimal digit of a non-zero number.

    Examples:
        >>> leading_digit(4_500_000)
        4
        >>> leading_digit(0.0321)
        3
        >>> leading_digit(-72.5)
        7
    """
    value = abs(value)
    if value == 0 or not math.isfinite(value):
        raise ValueError(f"No leading digit for {value!r}")
    digit = int(value / 10 ** math.floor(math.log10(value)))
    # log10 rounding can land a hair below an exact power of ten
    return min(max(digit, 1), 9)


def digit_counts(values: Sequence[float]) -> list[int]:
    """Occurrences of each leading digit 1–9 (index 0 ↔ digit 1)."""
    counts = [0] * 9
    for v in values:
        counts[leading_digit(v) - 1] += 1
    return counts


def benford_chi_square(values: Sequence[float]) -> tuple[float, list[float]]:
    """Chi-square statistic of *values* against Benford's distribution.

    Returns ``(chi_square, observed_percentages)``; the percentages are per
    digit 1–9 and sum to 100.

    Examples:
        >>> chi2, observed = benford_chi_square([1, 1, 1, 1, 1])
        >>> round(chi2, 2), observed[0]
        (11.61, 100.0)
    """
    total = len(values)
    if total == 0:
        raise ValueError("Benford analysis needs at least one value")

    counts = digit_counts(values)
    chi_square = 0.0
    for observed, expected_pct in zip(counts, BENFORD_EXPECTED):
        expected = expected_pct / 100 * total
        chi_square += (observed - expected) ** 2 / expected

    observed_pct = [count / total * 100 for count in counts]
    return chi_square, observed_pct
