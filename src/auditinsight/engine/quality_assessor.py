"""
Quality Assessor

Maps (average deviation, critical count, submission count) to a quality
label and a 0-100 score. Pure and reusable at any granularity: the
assembler calls it once for the run and the pattern analyzer once per
group.
"""
from __future__ import annotations

import math

from ..config import DEFAULT_THRESHOLDS, QualityThresholds
from ..models import QualityRating


def critical_rate(critical_count: int, total: int) -> float:
    return critical_count / total


def assess_review_quality(
    average_deviation: float,
    critical_count: int,
    total: int,
    thresholds: QualityThresholds = DEFAULT_THRESHOLDS.quality,
) -> QualityRating:
    """
    Rate agreement quality. Ceilings are nested and checked in order;
    the first one that both metrics clear wins.
    """
    rate = critical_rate(critical_count, total)
    bands = (
        (QualityRating.EXCELLENT, thresholds.excellent),
        (QualityRating.GOOD, thresholds.good),
        (QualityRating.FAIR, thresholds.fair),
    )
    for rating, band in bands:
        if average_deviation <= band.max_avg_deviation and rate <= band.max_critical_rate:
            return rating
    return QualityRating.POOR


def calculate_quality_score(
    average_deviation: float,
    critical_count: int,
    total: int,
    thresholds: QualityThresholds = DEFAULT_THRESHOLDS.quality,
) -> int:
    """
    Numeric quality score in [0, 100].

    Independent of the label: 60 points fall off at 2 per deviation point
    and 40 points fall off with the critical percentage. Halves round up.
    """
    rate = critical_rate(critical_count, total)
    deviation_score = max(
        0.0,
        thresholds.deviation_points - average_deviation * thresholds.deviation_penalty_per_point,
    )
    critical_score = max(0.0, thresholds.critical_points - rate * 100)
    return math.floor(deviation_score + critical_score + 0.5)
