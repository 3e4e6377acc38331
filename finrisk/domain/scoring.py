"""All scoring formulas: category points, weighted sums, renormalized means.

Usage:
    from finrisk.domain.scoring import category_scores, weighted_sum

    scores = category_scores(ratios, settings)   # CategoryScores(liquidity=100.0, ...)
    overall = weighted_sum(scores.model_dump(), settings.ratio_category_weights)
"""

from typing import Iterable, Mapping, Sequence

from finrisk.config import Settings
from finrisk.schemas.ratio import CategoryScores, Ratio, RatioCategory
from finrisk.utils.financial_math import mean


def category_scores(ratios: Sequence[Ratio], settings: Settings) -> CategoryScores:
    """Average status points per ratio category.

    Each status maps to points (Good=100, Warning=60, Critical=20 by
    default); a category with no ratios scores 0.

    Examples:
        >>> category_scores([], Settings()).liquidity
        0.0
    """
    points: dict[RatioCategory, list[float]] = {c: [] for c in RatioCategory}
    for r in ratios:
        points[r.category].append(settings.status_points[r.status.value])

    return CategoryScores(
        liquidity=mean(points[RatioCategory.LIQUIDITY]),
        leverage=mean(points[RatioCategory.LEVERAGE]),
        profitability=mean(points[RatioCategory.PROFITABILITY]),
        efficiency=mean(points[RatioCategory.EFFICIENCY]),
    )


def weighted_sum(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Sum of ``scores[k] * weights[k]`` over the weight keys.

    Examples:
        >>> weighted_sum({"a": 100, "b": 50}, {"a": 0.4, "b": 0.6})
        70.0
    """
    return sum(scores[key] * weight for key, weight in weights.items())


def renormalized_weighted_mean(pairs: Iterable[tuple[float, float]]) -> float:
    """Weighted mean over ``(score, weight)`` pairs actually present.

    Weights are divided by their own sum, so a missing category does not
    drag the result toward zero.  Returns 0.0 when there are no pairs.

    Examples:
        >>> renormalized_weighted_mean([(10, 0.5), (40, 0.5)])
        25.0
        >>> renormalized_weighted_mean([])
        0.0
    """
    total_score = 0.0
    total_weight = 0.0
    for score, weight in pairs:
        total_score += score * weight
        total_weight += weight
    return total_score / total_weight if total_weight > 0 else 0.0


def capped_mean(scores: Sequence[float], cap: float = 100.0) -> float:
    """Arithmetic mean of *scores*, capped at *cap*; 0.0 when empty.

    Examples:
        >>> capped_mean([0, 90, 0, 80])
        42.5
    """
    return min(cap, mean(scores))
