"""Score → level and score → rating rules.

Threshold ladders used by the fraud and risk heuristics, plus the shared
mapping from an aggregate 0–100 score to a risk level and from a final
score to a letter rating.

Usage:
    from finrisk.domain.levels import Rung, climb_above, level_for_score

    score, level = climb_above(ratio, QOE_RUNGS, default=(0.0, RiskLevel.LOW))
    overall_level = level_for_score(62.5, settings)   # RiskLevel.HIGH
"""

from typing import NamedTuple, Sequence

from finrisk.config import Settings
from finrisk.schemas.common import RiskLevel
from finrisk.schemas.scoring import Rating


class Rung(NamedTuple):
    """One step of a threshold ladder: crossing ``threshold`` yields (score, level)."""

    threshold: float
    score: float
    level: RiskLevel


def climb_above(
    value: float, rungs: Sequence[Rung], default: tuple[float, RiskLevel]
) -> tuple[float, RiskLevel]:
    """First rung whose threshold *value* strictly exceeds, else *default*.

    Rungs must be ordered from the highest threshold down.

    Examples:
        >>> rungs = [Rung(2.0, 85, RiskLevel.CRITICAL), Rung(1.5, 65, RiskLevel.HIGH)]
        >>> climb_above(1.7, rungs, (0, RiskLevel.LOW))
        (65, <RiskLevel.HIGH: 'High'>)
        >>> climb_above(1.5, rungs, (0, RiskLevel.LOW))
        (0, <RiskLevel.LOW: 'Low'>)
    """
    for rung in rungs:
        if value > rung.threshold:
            return rung.score, rung.level
    return default


def climb_below(
    value: float, rungs: Sequence[Rung], default: tuple[float, RiskLevel]
) -> tuple[float, RiskLevel]:
    """First rung whose threshold *value* is strictly below, else *default*.

    Rungs must be ordered from the lowest threshold up.

    Examples:
        >>> rungs = [Rung(0.8, 90, RiskLevel.CRITICAL), Rung(1.0, 70, RiskLevel.HIGH)]
        >>> climb_below(0.9, rungs, (15, RiskLevel.LOW))
        (70, <RiskLevel.HIGH: 'High'>)
    """
    for rung in rungs:
        if value < rung.threshold:
            return rung.score, rung.level
    return default


def level_for_score(score: float, settings: Settings) -> RiskLevel:
    """Map an aggregate 0–100 score to a level (≥70 / ≥50 / ≥30 by default).

    Examples:
        >>> s = Settings()
        >>> level_for_score(70, s), level_for_score(49.9, s), level_for_score(0, s)
        (<RiskLevel.CRITICAL: 'Critical'>, <RiskLevel.MEDIUM: 'Medium'>, <RiskLevel.LOW: 'Low'>)
    """
    if score >= settings.critical_level_threshold:
        return RiskLevel.CRITICAL
    if score >= settings.high_level_threshold:
        return RiskLevel.HIGH
    if score >= settings.medium_level_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def rating_for_score(score: float, settings: Settings) -> Rating:
    """Credit-style rating: the first band whose lower bound *score* reaches.

    Bands are checked from the highest lower bound down, so the result is
    monotonic non-decreasing in *score*.

    Examples:
        >>> s = Settings()
        >>> rating_for_score(95.0, s), rating_for_score(94.9, s), rating_for_score(19.99, s)
        (<Rating.AAA: 'AAA'>, <Rating.AA: 'AA'>, <Rating.D: 'D'>)
    """
    for lower_bound, label in sorted(settings.rating_bands, key=lambda b: b[0], reverse=True):
        if score >= lower_bound:
            return Rating(label)
    return Rating.D
