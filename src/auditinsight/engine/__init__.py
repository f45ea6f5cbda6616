"""
Audit Insight Engine

Analysis stages for one audit run, leaves first.

Stages:
- Deviation calculator: statistics and categorical counts
- Quality assessor: quality label and numeric score
- Pattern analyzer: per-skill / per-difficulty insights and notable patterns
- Risk detector: score inflation, AI bias, reviewer override, skill gap
- Narrative generator: signals, summary, recommendations
- Insight assembler: orchestration

Usage:
    from auditinsight.engine import generate_audit_insights

    insights = generate_audit_insights(run)
"""
from __future__ import annotations

from .deviation_calculator import (
    calculate_action_distribution,
    calculate_deviation_breakdown,
    calculate_deviation_stats,
    count_flags_triggered,
    count_overrides,
    get_critical_submissions,
    require_results,
)
from .quality_assessor import (
    assess_review_quality,
    calculate_quality_score,
)
from .pattern_analyzer import (
    analyze_difficulties,
    analyze_skill_areas,
    detect_notable_patterns,
    difficulty_trend,
    skill_area_trend,
)
from .risk_detector import (
    detect_ai_bias,
    detect_reviewer_pattern,
    detect_risk_indicators,
    detect_score_inflation,
    detect_skill_gap,
)
from .narrative_generator import (
    generate_insight_summary,
    generate_performance_signals,
    generate_recommendations,
)
from .insight_assembler import (
    InsightAssembler,
    generate_audit_insights,
)

__all__ = [
    # Deviation calculator
    "calculate_action_distribution",
    "calculate_deviation_breakdown",
    "calculate_deviation_stats",
    "count_flags_triggered",
    "count_overrides",
    "get_critical_submissions",
    "require_results",
    # Quality assessor
    "assess_review_quality",
    "calculate_quality_score",
    # Pattern analyzer
    "analyze_difficulties",
    "analyze_skill_areas",
    "detect_notable_patterns",
    "difficulty_trend",
    "skill_area_trend",
    # Risk detector
    "detect_ai_bias",
    "detect_reviewer_pattern",
    "detect_risk_indicators",
    "detect_score_inflation",
    "detect_skill_gap",
    # Narrative generator
    "generate_insight_summary",
    "generate_performance_signals",
    "generate_recommendations",
    # Assembler
    "InsightAssembler",
    "generate_audit_insights",
]
