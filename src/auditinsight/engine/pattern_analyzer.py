"""
Pattern Analyzer

Groups a run's results by skill area and by task difficulty, rates each
group, and derives run-level notable patterns.

Grouping uses exact equality on the field value with no normalization;
"Frontend" and "frontend" are different skill areas. An unrecognized
difficulty spelling forms its own group and matches no difficulty rule.
Groups keep the order in which their first member appears in the run.
"""
from __future__ import annotations

import logging
from typing import Callable, Hashable, Sequence, TypeVar, Union

from ..config import DEFAULT_THRESHOLDS, InsightThresholds, PatternThresholds
from ..models import (
    AuditResult,
    DifficultyInsight,
    PrecomputedSummary,
    QualityRating,
    SkillAreaInsight,
    TaskDifficulty,
)
from .deviation_calculator import average_deviation, count_critical
from .quality_assessor import assess_review_quality

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


def group_results(
    results: Sequence[AuditResult],
    key: Callable[[AuditResult], K],
) -> dict[K, list[AuditResult]]:
    """Group results by key, preserving first-seen group order."""
    groups: dict[K, list[AuditResult]] = {}
    for result in results:
        groups.setdefault(key(result), []).append(result)
    return groups


def _difficulty_key(result: AuditResult) -> Union[TaskDifficulty, str]:
    """Known difficulties become enum members; anything else groups as-is."""
    try:
        return TaskDifficulty(result.task_difficulty)
    except ValueError:
        logger.warning(
            f"Unrecognized TaskDifficulty {result.task_difficulty!r} on submission "
            f"{result.submission_id}; grouped under its raw value"
        )
        return result.task_difficulty


# =============================================================================
# Group Trends
# =============================================================================

def skill_area_trend(
    average: float,
    critical_count: int,
    submission_count: int,
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS.pattern,
) -> str:
    if average > thresholds.skill_high_deviation:
        return "High deviation rate"
    if average < thresholds.skill_excellent_alignment:
        return "Excellent alignment"
    if critical_count > submission_count * thresholds.skill_high_critical_share:
        return "High critical rate"
    return "Standard performance"


def difficulty_trend(
    difficulty: Union[TaskDifficulty, str],
    average: float,
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS.pattern,
) -> str:
    if difficulty == TaskDifficulty.EXPERT and average > thresholds.expert_high_deviation:
        return "High deviation for expert level"
    if difficulty == TaskDifficulty.EASY and average > thresholds.easy_unexpected_deviation:
        return "Unexpected deviation for easy tasks"
    if average < thresholds.difficulty_excellent_consistency:
        return "Excellent scoring consistency"
    return "Expected performance"


# =============================================================================
# Group Analysis
# =============================================================================

def analyze_skill_areas(
    results: Sequence[AuditResult],
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> list[SkillAreaInsight]:
    """One insight per distinct skill area."""
    insights: list[SkillAreaInsight] = []
    for skill_area, members in group_results(results, lambda r: r.skill_area).items():
        average = average_deviation(members)
        critical_count = count_critical(members)
        insights.append(
            SkillAreaInsight(
                skill_area=skill_area,
                submission_count=len(members),
                average_deviation=average,
                critical_count=critical_count,
                quality_rating=assess_review_quality(
                    average, critical_count, len(members), thresholds.quality
                ),
                notable_trend=skill_area_trend(
                    average, critical_count, len(members), thresholds.pattern
                ),
            )
        )
    return insights


def analyze_difficulties(
    results: Sequence[AuditResult],
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> list[DifficultyInsight]:
    """One insight per distinct task difficulty."""
    insights: list[DifficultyInsight] = []
    groups = group_results(results, _difficulty_key)
    for difficulty, members in groups.items():
        average = average_deviation(members)
        critical_count = count_critical(members)
        insights.append(
            DifficultyInsight(
                difficulty=difficulty,
                submission_count=len(members),
                average_deviation=average,
                critical_count=critical_count,
                quality_rating=assess_review_quality(
                    average, critical_count, len(members), thresholds.quality
                ),
                notable_trend=difficulty_trend(difficulty, average, thresholds.pattern),
            )
        )
    return insights


# =============================================================================
# Run-Level Patterns
# =============================================================================

def detect_notable_patterns(
    precomputed: PrecomputedSummary,
    skill_area_analysis: Sequence[SkillAreaInsight],
    difficulty_analysis: Sequence[DifficultyInsight],
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS.pattern,
) -> list[str]:
    """
    Run-level observations, in fixed order.

    The overall-deviation and critical-flag checks read the run's
    precomputed upstream summary, not the engine's own statistics.
    """
    patterns: list[str] = []

    high_deviation_skills = [
        s.skill_area
        for s in skill_area_analysis
        if s.average_deviation > thresholds.run_skill_high_deviation
    ]
    if high_deviation_skills:
        patterns.append(f"High deviation detected in {', '.join(high_deviation_skills)}")

    excellent_skills = [
        s.skill_area
        for s in skill_area_analysis
        if s.quality_rating == QualityRating.EXCELLENT
    ]
    if excellent_skills:
        patterns.append(f"Excellent performance in {', '.join(excellent_skills)}")

    if any(
        d.difficulty == TaskDifficulty.EXPERT
        and d.average_deviation > thresholds.run_expert_high_deviation
        for d in difficulty_analysis
    ):
        patterns.append("Expert-level tasks showing high deviation rates")

    if any(
        d.difficulty == TaskDifficulty.EASY
        and d.average_deviation > thresholds.run_easy_high_deviation
        for d in difficulty_analysis
    ):
        patterns.append("Unexpected deviations in easy-level tasks")

    if precomputed.average_deviation < thresholds.run_overall_excellent:
        patterns.append("Overall excellent scoring consistency")
    elif precomputed.average_deviation > thresholds.run_overall_high:
        patterns.append("Overall high deviation rate requiring attention")

    if precomputed.critical_flags > precomputed.total_submissions * thresholds.run_critical_flag_share:
        patterns.append("High critical flag rate indicating potential systemic issues")

    return patterns
