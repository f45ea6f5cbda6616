"""
Insight Assembler

Runs every analysis stage over one audit run and returns a single
immutable AuditInsightsResult.

Precondition: the run must contain at least one result. An empty run
raises DegenerateInputError before any stage executes; no partial result
is ever produced. Exceptions from any stage propagate unchanged.

Denominators: the global quality label and score, the elevated critical
rate signal and the critical percentage in the summary all divide by
``len(run.results)``, not by the stored ``run.total_submissions``. When
the stored total is stale these outputs differ from a computation over
the stored total; the drift is logged, never corrected. Only the
run-level notable patterns and the reported ``total_submissions`` read
the stored summary fields.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..config import DEFAULT_THRESHOLDS, InsightThresholds
from ..models import AuditInsightsResult, AuditRun, DeviationStats, PrecomputedSummary
from .deviation_calculator import (
    calculate_action_distribution,
    calculate_deviation_breakdown,
    calculate_deviation_stats,
    count_flags_triggered,
    count_overrides,
    get_critical_submissions,
    require_results,
)
from .narrative_generator import (
    generate_insight_summary,
    generate_performance_signals,
    generate_recommendations,
)
from .pattern_analyzer import (
    analyze_difficulties,
    analyze_skill_areas,
    detect_notable_patterns,
)
from .quality_assessor import assess_review_quality, calculate_quality_score
from .risk_detector import detect_risk_indicators

logger = logging.getLogger(__name__)


def _log_precomputed_drift(
    run: AuditRun,
    precomputed: PrecomputedSummary,
    stats: DeviationStats,
    critical_count: int,
) -> None:
    """Warn when upstream summary fields disagree with the results. Never reconciles."""
    drift = {}
    if precomputed.total_submissions != run.result_count:
        drift["total_submissions"] = (precomputed.total_submissions, run.result_count)
    if precomputed.critical_flags != critical_count:
        drift["critical_flags"] = (precomputed.critical_flags, critical_count)
    if abs(precomputed.average_deviation - stats.average) > 1e-9:
        drift["average_deviation"] = (precomputed.average_deviation, stats.average)
    if drift:
        logger.warning(
            f"Audit run {run.id}: precomputed summary disagrees with results "
            f"(field: (precomputed, computed)) {drift}"
        )


@dataclass(frozen=True)
class InsightAssembler:
    """
    Orchestrates the analysis stages with one threshold configuration.

    Stateless apart from its thresholds, so one instance can serve any
    number of runs, including concurrently.

    Usage:
        assembler = InsightAssembler(thresholds=load_threshold_profile("strict.yaml"))
        insights = assembler.assemble(run)
    """
    thresholds: InsightThresholds = field(default_factory=lambda: DEFAULT_THRESHOLDS)

    def assemble(self, run: AuditRun) -> AuditInsightsResult:
        """
        Build insights for a run.

        Raises:
            DegenerateInputError: If the run has no results
        """
        started = time.perf_counter()
        results = run.results
        require_results(results, run_id=run.id)
        thresholds = self.thresholds
        total = len(results)
        logger.debug(f"Generating insights for audit run {run.id} ({total} results)")

        # Step 1: Basic calculations
        deviation_breakdown = calculate_deviation_breakdown(results)
        action_distribution = calculate_action_distribution(results)
        stats = calculate_deviation_stats(results)
        critical_submissions = get_critical_submissions(results)
        flags_triggered = count_flags_triggered(results)
        override_count = count_overrides(results)

        precomputed = run.precomputed
        _log_precomputed_drift(run, precomputed, stats, len(critical_submissions))

        # Step 2: Quality assessment
        review_quality = assess_review_quality(
            stats.average, deviation_breakdown.critical, total, thresholds.quality
        )
        quality_score = calculate_quality_score(
            stats.average, deviation_breakdown.critical, total, thresholds.quality
        )

        # Step 3: Pattern analysis
        skill_area_analysis = analyze_skill_areas(results, thresholds)
        difficulty_analysis = analyze_difficulties(results, thresholds)
        notable_patterns = detect_notable_patterns(
            precomputed, skill_area_analysis, difficulty_analysis, thresholds.pattern
        )

        # Step 4: Performance and risk analysis
        performance_signals = generate_performance_signals(
            stats, deviation_breakdown.critical, total, thresholds.signal
        )
        risk_indicators = detect_risk_indicators(results, thresholds.risk)

        # Step 5: Summary and recommendations
        insight_summary = generate_insight_summary(
            review_quality, stats, critical_submissions, total, thresholds.narrative
        )
        recommendations = generate_recommendations(
            review_quality, risk_indicators, performance_signals, thresholds.narrative
        )

        analysis_duration = (time.perf_counter() - started) * 1000

        insights = AuditInsightsResult(
            deviation_breakdown=deviation_breakdown,
            action_distribution=action_distribution,
            average_deviation=stats.average,
            max_deviation=stats.max,
            min_deviation=stats.min,
            median_deviation=stats.median,
            critical_submissions=tuple(critical_submissions),
            flags_triggered=flags_triggered,
            override_count=override_count,
            review_quality=review_quality,
            quality_score=quality_score,
            notable_patterns=tuple(notable_patterns),
            skill_area_analysis=tuple(skill_area_analysis),
            difficulty_analysis=tuple(difficulty_analysis),
            performance_signals=tuple(performance_signals),
            risk_indicators=tuple(risk_indicators),
            insight_summary=tuple(insight_summary),
            recommendations=tuple(recommendations),
            analysis_timestamp=datetime.now(timezone.utc),
            total_submissions=precomputed.total_submissions,
            analysis_duration=analysis_duration,
        )

        logger.info(
            f"Audit run {run.id}: {review_quality.value} quality "
            f"(score {quality_score}), {len(risk_indicators)} risk indicators, "
            f"{total} results in {analysis_duration:.2f}ms"
        )
        return insights


def generate_audit_insights(
    run: AuditRun,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> AuditInsightsResult:
    """
    Generate the full insight rollup for one audit run.

    The run MUST contain at least one result: an empty run raises
    DegenerateInputError. Enum fields are not validated here; parse
    untrusted input with ``auditinsight.ingest`` first.

    Args:
        run: The audit run to analyze (never mutated)
        thresholds: Engine thresholds (defaults reproduce reference behaviour)

    Returns:
        Immutable AuditInsightsResult

    Raises:
        DegenerateInputError: If ``run.results`` is empty
    """
    return InsightAssembler(thresholds=thresholds).assemble(run)
