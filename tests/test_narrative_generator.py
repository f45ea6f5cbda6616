"""
Tests for the narrative generator.

Tests cover:
- Performance signal rules and their co-occurrence
- The fixed three-sentence insight summary
- Recommendation ordering, fallback and truncation
- Exhaustive enum-keyed recommendation mappings
"""
import pytest

from auditinsight.config import NarrativeThresholds
from auditinsight.engine.narrative_generator import (
    CRITICAL_SIGNAL_RECOMMENDATION,
    FALLBACK_RECOMMENDATIONS,
    QUALITY_RECOMMENDATIONS,
    RISK_RECOMMENDATIONS,
    generate_insight_summary,
    generate_performance_signals,
    generate_recommendations,
)
from auditinsight.models import (
    DeviationStats,
    ImpactLevel,
    PerformanceSignal,
    QualityRating,
    RiskIndicator,
    RiskSeverity,
    RiskType,
    SignalType,
)


def _stats(average, maximum=None):
    maximum = average if maximum is None else maximum
    return DeviationStats(average=average, max=maximum, min=0, median=average)


def _risk(risk_type):
    return RiskIndicator(type=risk_type, severity=RiskSeverity.MEDIUM, description="x")


def _signal(signal_type):
    return PerformanceSignal(type=signal_type, message="x", impact=ImpactLevel.HIGH)


class TestPerformanceSignals:
    """Tests for generate_performance_signals."""

    def test_excellent_run_has_two_positive_signals(self):
        signals = generate_performance_signals(_stats(2, 3), critical_count=0, total=5)

        assert [s.message for s in signals] == [
            "Excellent scoring consistency across all submissions",
            "No critical deviations detected",
        ]
        assert all(s.type == SignalType.POSITIVE for s in signals)
        assert signals[0].impact == ImpactLevel.HIGH
        assert dict(signals[1].data) == {"criticalCount": 0}

    def test_reference_signals(self):
        signals = generate_performance_signals(_stats(24.4, 60), critical_count=2, total=5)

        assert [(s.type, s.message) for s in signals] == [
            (SignalType.WARNING, "Moderate deviation rate detected"),
            (SignalType.WARNING, "Elevated critical deviation rate"),
            (SignalType.CRITICAL, "Extreme deviation detected in individual submissions"),
        ]
        assert dict(signals[1].data) == {"criticalRate": pytest.approx(0.4)}
        assert dict(signals[2].data) == {"maxDeviation": 60}

    def test_moderate_band_bounds(self):
        at_floor = generate_performance_signals(_stats(15), 1, 100)
        at_ceiling = generate_performance_signals(_stats(25), 1, 100)

        assert not any(s.message == "Moderate deviation rate detected" for s in at_floor)
        assert any(s.message == "Moderate deviation rate detected" for s in at_ceiling)

    def test_high_average_is_critical(self):
        signals = generate_performance_signals(_stats(26), 0, 5)

        assert any(
            s.type == SignalType.CRITICAL
            and s.message == "High deviation rate requiring immediate attention"
            for s in signals
        )

    def test_elevated_rate_is_strict(self):
        """One critical in ten is exactly 10%: no warning."""
        signals = generate_performance_signals(_stats(10), critical_count=1, total=10)

        assert signals == []


class TestInsightSummary:
    """Tests for generate_insight_summary."""

    def test_reference_summary(self):
        summary = generate_insight_summary(
            QualityRating.POOR, _stats(24.4, 60), ["sub-002", "sub-005"], total=5
        )

        assert summary == [
            "This audit run shows poor review quality with an average deviation of "
            "24.4 points between user and AI scores.",
            "Critical deviations were detected in 2 submissions, representing 40.0% "
            "of all submissions.",
            "Significant scoring discrepancies suggest the need for review process "
            "improvements or system calibration.",
        ]

    def test_no_critical_variant(self):
        summary = generate_insight_summary(QualityRating.EXCELLENT, _stats(2), [], total=5)

        assert len(summary) == 3
        assert summary[1].startswith("No critical deviations were detected")
        assert summary[2] == "The scoring system demonstrates excellent consistency and reliability."

    @pytest.mark.parametrize("average", [10, 15, 20])
    def test_moderate_closing(self, average):
        summary = generate_insight_summary(QualityRating.GOOD, _stats(average), [], total=5)

        assert summary[2].startswith("Moderate deviations indicate normal variance")

    def test_average_rendered_to_one_decimal(self):
        summary = generate_insight_summary(QualityRating.GOOD, _stats(12.345), [], total=5)

        assert "average deviation of 12.3 points" in summary[0]


class TestRecommendations:
    """Tests for generate_recommendations."""

    def test_fallback_only_when_empty(self):
        assert generate_recommendations(QualityRating.EXCELLENT, [], []) == list(
            FALLBACK_RECOMMENDATIONS
        )

    def test_short_list_gets_no_fallback(self):
        recommendations = generate_recommendations(QualityRating.FAIR, [], [])

        assert recommendations == ["Review scoring criteria and consider process refinements."]

    def test_order_quality_then_risk_then_signal(self):
        recommendations = generate_recommendations(
            QualityRating.GOOD,
            [_risk(RiskType.REVIEWER_PATTERN)],
            [_signal(SignalType.WARNING), _signal(SignalType.CRITICAL)],
        )

        assert recommendations == [
            RISK_RECOMMENDATIONS[RiskType.REVIEWER_PATTERN],
            CRITICAL_SIGNAL_RECOMMENDATION,
        ]

    def test_truncated_to_five_without_resorting(self):
        risks = [_risk(t) for t in RiskType]

        recommendations = generate_recommendations(
            QualityRating.POOR, risks, [_signal(SignalType.CRITICAL)]
        )

        assert recommendations == [
            *QUALITY_RECOMMENDATIONS[QualityRating.POOR],
            RISK_RECOMMENDATIONS[RiskType.SCORE_INFLATION],
            RISK_RECOMMENDATIONS[RiskType.AI_BIAS],
            RISK_RECOMMENDATIONS[RiskType.REVIEWER_PATTERN],
        ]

    def test_configurable_cap(self):
        recommendations = generate_recommendations(
            QualityRating.POOR,
            [_risk(RiskType.SKILL_GAP)],
            [],
            NarrativeThresholds(max_recommendations=2),
        )

        assert recommendations == list(QUALITY_RECOMMENDATIONS[QualityRating.POOR])

    def test_mappings_cover_every_enum_member(self):
        assert set(RISK_RECOMMENDATIONS) == set(RiskType)
        assert set(QUALITY_RECOMMENDATIONS) == set(QualityRating)
