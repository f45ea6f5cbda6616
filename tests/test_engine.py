"""
Integration tests for the insight assembler.

Tests cover:
- The reference five-submission run end to end
- Sum and critical-list invariants
- Idempotence (fingerprints) and input immutability
- Empty-input failure
- Precomputed vs computed separation and drift logging
- Custom thresholds
"""
import logging
from copy import deepcopy
from datetime import datetime

import pytest

from auditinsight import (
    DegenerateInputError,
    InsightAssembler,
    QualityRating,
    RiskSeverity,
    RiskType,
    generate_audit_insights,
    insights_fingerprint,
    thresholds_from_dict,
)
from auditinsight.models import AuditAction, DeviationType, SignalType

from tests.conftest import make_audit_run, make_result, make_uniform_results


# =============================================================================
# Reference Scenario
# =============================================================================

class TestReferenceRun:
    """End-to-end checks on the reference run."""

    def test_breakdowns(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert insights.deviation_breakdown.to_dict() == {
            "none": 1, "minor": 2, "major": 0, "critical": 2,
        }
        assert insights.critical_submissions == ("sub-002", "sub-005")
        assert insights.flags_triggered == 4
        assert insights.override_count == 0

    def test_statistics_and_quality(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert insights.average_deviation == pytest.approx(24.4)
        assert insights.max_deviation == 60
        assert insights.min_deviation == 1
        assert insights.median_deviation == 7
        assert insights.review_quality == QualityRating.POOR
        assert insights.quality_score == 11

    def test_skill_gap_indicator(self, reference_run):
        insights = generate_audit_insights(reference_run)

        (skill_gap,) = [r for r in insights.risk_indicators if r.type == RiskType.SKILL_GAP]
        assert skill_gap.severity == RiskSeverity.MEDIUM
        assert insights.has_risk(RiskType.SCORE_INFLATION)
        assert insights.has_risk(RiskType.AI_BIAS)
        assert not insights.has_risk(RiskType.REVIEWER_PATTERN)

    def test_narrative(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert len(insights.insight_summary) == 3
        assert 1 <= len(insights.recommendations) <= 5
        # Two quality + three risk recommendations fill the cap
        assert len(insights.recommendations) == 5
        assert any(s.type == SignalType.CRITICAL for s in insights.performance_signals)

    def test_total_submissions_is_copied_from_run(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert insights.total_submissions == reference_run.total_submissions

    def test_metadata(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert isinstance(insights.analysis_timestamp, datetime)
        assert insights.analysis_timestamp.tzinfo is not None
        assert insights.analysis_duration >= 0


# =============================================================================
# Invariants
# =============================================================================

class TestInvariants:
    """Properties that hold for any well-formed run."""

    @pytest.mark.parametrize(
        "deviations, deviation_type, action",
        [
            ([1], DeviationType.NONE, AuditAction.ALLOW),
            ([5, 9, 13], DeviationType.MINOR, AuditAction.FLAG_FOR_REVIEW),
            ([40, 50, 60, 70], DeviationType.CRITICAL, AuditAction.ESCALATE),
        ],
    )
    def test_sum_invariant(self, deviations, deviation_type, action):
        run = make_audit_run(
            results=make_uniform_results(
                deviations, deviation_type=deviation_type, suggested_action=action
            )
        )

        insights = generate_audit_insights(run)

        assert insights.deviation_breakdown.total == len(run.results)
        assert insights.action_distribution.total == len(run.results)
        assert sum(insights.deviation_breakdown.to_dict().values()) == len(run.results)

    def test_sum_invariant_on_reference(self, reference_run):
        insights = generate_audit_insights(reference_run)

        assert sum(insights.deviation_breakdown.to_dict().values()) == 5
        assert sum(insights.action_distribution.to_dict().values()) == 5

    def test_critical_list_fidelity(self, reference_run):
        insights = generate_audit_insights(reference_run)

        expected = [
            r.submission_id for r in reference_run.results
            if r.deviation_type == DeviationType.CRITICAL
        ]
        assert list(insights.critical_submissions) == expected

    def test_idempotent_apart_from_metadata(self, reference_run):
        first = generate_audit_insights(reference_run)
        second = generate_audit_insights(reference_run)

        assert insights_fingerprint(first) == insights_fingerprint(second)
        assert first.recommendations == second.recommendations
        assert first.skill_area_analysis == second.skill_area_analysis

    def test_fingerprint_changes_with_content(self, reference_run, excellent_run):
        assert insights_fingerprint(generate_audit_insights(reference_run)) != (
            insights_fingerprint(generate_audit_insights(excellent_run))
        )

    def test_input_not_mutated(self, reference_run):
        snapshot = deepcopy(reference_run)

        generate_audit_insights(reference_run)

        assert reference_run == snapshot

    def test_result_is_frozen(self, reference_run):
        insights = generate_audit_insights(reference_run)

        with pytest.raises(AttributeError):
            insights.review_quality = QualityRating.EXCELLENT


# =============================================================================
# Failure and Edge Cases
# =============================================================================

class TestEdgeCases:
    """Empty input, drift, and alternate runs."""

    def test_empty_run_raises(self):
        run = make_audit_run(results=[], id="run-empty")

        with pytest.raises(DegenerateInputError) as exc_info:
            generate_audit_insights(run)

        assert exc_info.value.run_id == "run-empty"

    def test_empty_run_with_nonzero_precomputed_total_still_raises(self):
        run = make_audit_run(results=[], total_submissions=10, average_deviation=5)

        with pytest.raises(DegenerateInputError):
            generate_audit_insights(run)

    def test_unrecognized_enum_values_do_not_abort(self):
        """Unknown spellings under-count instead of failing the run."""
        run = make_audit_run(results=[
            make_result(submission_id="sub-001", task_difficulty="Expert"),
            make_result(submission_id="sub-002", deviation_type="Critical"),
            make_result(submission_id="sub-003"),
        ])

        insights = generate_audit_insights(run)

        assert insights.deviation_breakdown.total == 2
        assert [d.difficulty for d in insights.difficulty_analysis] == ["Expert", "medium"]
        assert insights.to_dict()["difficultyAnalysis"][0]["difficulty"] == "Expert"

    def test_excellent_run(self, excellent_run):
        insights = generate_audit_insights(excellent_run)

        assert insights.review_quality == QualityRating.EXCELLENT
        assert insights.risk_indicators == ()
        assert insights.recommendations == (
            "Continue monitoring and maintain current review processes.",
            "Consider periodic system audits to ensure ongoing quality.",
        )
        assert "Excellent performance in frontend" in insights.notable_patterns

    def test_quality_uses_result_count_not_precomputed_total(self):
        """A stale upstream total does not change the computed critical rate."""
        results = make_uniform_results([4, 4, 4, 4, 4])
        results[0] = make_result(
            submission_id="sub-001", deviation=4, deviation_type=DeviationType.CRITICAL
        )
        consistent = make_audit_run(results=results)
        stale = make_audit_run(results=results, total_submissions=50)

        assert generate_audit_insights(consistent).review_quality == (
            generate_audit_insights(stale).review_quality
        )

    def test_drift_is_logged_not_reconciled(self, reference_run, caplog):
        with caplog.at_level(logging.WARNING, logger="auditinsight.engine.insight_assembler"):
            insights = generate_audit_insights(reference_run)

        assert "precomputed summary disagrees" in caplog.text
        # Computed average is still reported, upstream 12.5 is not substituted
        assert insights.average_deviation == pytest.approx(24.4)

    def test_consistent_run_logs_no_drift(self, excellent_run, caplog):
        with caplog.at_level(logging.WARNING, logger="auditinsight.engine.insight_assembler"):
            generate_audit_insights(excellent_run)

        assert "precomputed summary disagrees" not in caplog.text

    def test_assembler_with_custom_thresholds(self, reference_run):
        thresholds = thresholds_from_dict({
            "name": "lenient",
            "quality": {"fair": {"max_avg_deviation": 30, "max_critical_rate": 0.5}},
            "risk": {"skill_gap_min_critical_rate": 0.5},
        })

        insights = InsightAssembler(thresholds=thresholds).assemble(reference_run)

        assert insights.review_quality == QualityRating.FAIR
        assert not insights.has_risk(RiskType.SKILL_GAP)

    def test_to_dict_wire_shape(self, reference_run):
        payload = generate_audit_insights(reference_run).to_dict()

        assert payload["reviewQuality"] == "poor"
        assert payload["criticalSubmissions"] == ["sub-002", "sub-005"]
        assert payload["skillAreaAnalysis"][0]["skillArea"] == "frontend"
        assert payload["difficultyAnalysis"][1]["difficulty"] == "expert"
        assert payload["riskIndicators"][0]["affectedSubmissions"] == ["sub-002", "sub-005"]
        assert isinstance(payload["analysisTimestamp"], str)
        assert set(payload) >= {
            "deviationBreakdown", "actionDistribution", "averageDeviation",
            "maxDeviation", "minDeviation", "flagsTriggered", "overrideCount",
            "qualityScore", "notablePatterns", "performanceSignals",
            "insightSummary", "recommendations", "totalSubmissions",
            "analysisDuration",
        }
