"""
Narrative Generator

Turns computed statistics, quality, and detected risks into performance
signals, a fixed three-sentence summary, and a capped recommendation list.
"""
from __future__ import annotations

from typing import Sequence

from ..config import DEFAULT_THRESHOLDS, NarrativeThresholds, SignalThresholds
from ..models import (
    DeviationStats,
    ImpactLevel,
    PerformanceSignal,
    QualityRating,
    RiskIndicator,
    RiskType,
    SignalType,
)


# =============================================================================
# Recommendation Text
# =============================================================================

QUALITY_RECOMMENDATIONS: dict[QualityRating, tuple[str, ...]] = {
    QualityRating.EXCELLENT: (),
    QualityRating.GOOD: (),
    QualityRating.FAIR: (
        "Review scoring criteria and consider process refinements.",
    ),
    QualityRating.POOR: (
        "Implement immediate review process improvements and system calibration.",
        "Consider additional training for reviewers and AI model fine-tuning.",
    ),
}

RISK_RECOMMENDATIONS: dict[RiskType, str] = {
    RiskType.SCORE_INFLATION: (
        "Investigate potential score inflation and review scoring standards."
    ),
    RiskType.AI_BIAS: (
        "Analyze AI model bias and consider retraining with balanced datasets."
    ),
    RiskType.REVIEWER_PATTERN: (
        "Review override patterns and provide additional reviewer training."
    ),
    RiskType.SKILL_GAP: (
        "Address skill gaps through targeted training and support."
    ),
}

CRITICAL_SIGNAL_RECOMMENDATION = (
    "Prioritize addressing critical performance signals immediately."
)

FALLBACK_RECOMMENDATIONS = (
    "Continue monitoring and maintain current review processes.",
    "Consider periodic system audits to ensure ongoing quality.",
)


# =============================================================================
# Performance Signals
# =============================================================================

def generate_performance_signals(
    stats: DeviationStats,
    critical_count: int,
    total: int,
    thresholds: SignalThresholds = DEFAULT_THRESHOLDS.signal,
) -> list[PerformanceSignal]:
    """
    Independent threshold checks; several signals can fire together.

    Order: positive, warning, critical.
    """
    signals: list[PerformanceSignal] = []

    if stats.average < thresholds.excellent_avg_deviation:
        signals.append(PerformanceSignal(
            type=SignalType.POSITIVE,
            message="Excellent scoring consistency across all submissions",
            impact=ImpactLevel.HIGH,
            data={"averageDeviation": stats.average},
        ))

    if critical_count == 0:
        signals.append(PerformanceSignal(
            type=SignalType.POSITIVE,
            message="No critical deviations detected",
            impact=ImpactLevel.MEDIUM,
            data={"criticalCount": 0},
        ))

    if thresholds.moderate_avg_deviation < stats.average <= thresholds.high_avg_deviation:
        signals.append(PerformanceSignal(
            type=SignalType.WARNING,
            message="Moderate deviation rate detected",
            impact=ImpactLevel.MEDIUM,
            data={"averageDeviation": stats.average},
        ))

    if critical_count > total * thresholds.elevated_critical_rate:
        signals.append(PerformanceSignal(
            type=SignalType.WARNING,
            message="Elevated critical deviation rate",
            impact=ImpactLevel.HIGH,
            data={"criticalRate": critical_count / total},
        ))

    if stats.average > thresholds.high_avg_deviation:
        signals.append(PerformanceSignal(
            type=SignalType.CRITICAL,
            message="High deviation rate requiring immediate attention",
            impact=ImpactLevel.HIGH,
            data={"averageDeviation": stats.average},
        ))

    if stats.max > thresholds.extreme_max_deviation:
        signals.append(PerformanceSignal(
            type=SignalType.CRITICAL,
            message="Extreme deviation detected in individual submissions",
            impact=ImpactLevel.HIGH,
            data={"maxDeviation": stats.max},
        ))

    return signals


# =============================================================================
# Summary
# =============================================================================

def generate_insight_summary(
    review_quality: QualityRating,
    stats: DeviationStats,
    critical_submissions: Sequence[str],
    total: int,
    thresholds: NarrativeThresholds = DEFAULT_THRESHOLDS.narrative,
) -> list[str]:
    """Exactly three sentences: quality, critical count, closing remark."""
    summary = [
        f"This audit run shows {review_quality.value} review quality with an average "
        f"deviation of {stats.average:.1f} points between user and AI scores."
    ]

    if critical_submissions:
        share = len(critical_submissions) / total * 100
        summary.append(
            f"Critical deviations were detected in {len(critical_submissions)} submissions, "
            f"representing {share:.1f}% of all submissions."
        )
    else:
        summary.append(
            "No critical deviations were detected, indicating good scoring "
            "consistency across the audit."
        )

    if stats.average < thresholds.consistent_avg_deviation:
        summary.append(
            "The scoring system demonstrates excellent consistency and reliability."
        )
    elif stats.average > thresholds.discrepancy_avg_deviation:
        summary.append(
            "Significant scoring discrepancies suggest the need for review process "
            "improvements or system calibration."
        )
    else:
        summary.append(
            "Moderate deviations indicate normal variance with some areas for improvement."
        )

    return summary


# =============================================================================
# Recommendations
# =============================================================================

def generate_recommendations(
    review_quality: QualityRating,
    risk_indicators: Sequence[RiskIndicator],
    performance_signals: Sequence[PerformanceSignal],
    thresholds: NarrativeThresholds = DEFAULT_THRESHOLDS.narrative,
) -> list[str]:
    """
    Ordered recommendations, truncated to the configured cap.

    The fallback pair is only used when nothing else applied.
    """
    recommendations: list[str] = list(QUALITY_RECOMMENDATIONS[review_quality])

    for indicator in risk_indicators:
        recommendations.append(RISK_RECOMMENDATIONS[indicator.type])

    if any(s.type == SignalType.CRITICAL for s in performance_signals):
        recommendations.append(CRITICAL_SIGNAL_RECOMMENDATION)

    if not recommendations:
        recommendations.extend(FALLBACK_RECOMMENDATIONS)

    return recommendations[:thresholds.max_recommendations]
