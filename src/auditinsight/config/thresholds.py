"""
Insight Thresholds

Every tunable cut-off used by the engine, grouped by stage. Detection code
reads these structures and never inlines the numbers, so a profile can
retune the engine without touching detection logic.

DEFAULT_THRESHOLDS reproduces the reference behaviour.
"""
from __future__ import annotations

from dataclasses import dataclass, field


# =============================================================================
# Quality Assessment
# =============================================================================

@dataclass(frozen=True)
class QualityBand:
    """Nested ceiling for one quality label: both limits must hold."""
    max_avg_deviation: float
    max_critical_rate: float


@dataclass(frozen=True)
class QualityThresholds:
    """
    Quality label ceilings, checked excellent -> good -> fair.

    Anything that clears none of them is rated poor. The numeric score
    uses its own linear formula and may disagree with the label near a
    ceiling.
    """
    excellent: QualityBand = QualityBand(max_avg_deviation=8, max_critical_rate=0.05)
    good: QualityBand = QualityBand(max_avg_deviation=15, max_critical_rate=0.15)
    fair: QualityBand = QualityBand(max_avg_deviation=25, max_critical_rate=0.25)

    # Score = max(0, deviation_points - avg * per_point)
    #       + max(0, critical_points - rate * 100)
    deviation_points: float = 60
    deviation_penalty_per_point: float = 2
    critical_points: float = 40


# =============================================================================
# Risk Detection
# =============================================================================

@dataclass(frozen=True)
class RiskThresholds:
    """Cut-offs for the four risk signatures."""
    # score_inflation: human score far above a large AI disagreement
    inflation_min_deviation: float = 30
    inflation_min_user_score: float = 85
    inflation_high_share: float = 0.2

    # ai_bias: AI score low while deviation is large
    ai_bias_min_deviation: float = 25
    ai_bias_max_ai_score: float = 50
    ai_bias_high_share: float = 0.15

    # reviewer_pattern: reviewers overriding too often
    override_min_rate: float = 0.3
    override_high_rate: float = 0.5

    # skill_gap: too many critical deviations
    skill_gap_min_critical_rate: float = 0.4
    skill_gap_high_critical_rate: float = 0.6


# =============================================================================
# Pattern Analysis
# =============================================================================

@dataclass(frozen=True)
class PatternThresholds:
    """Cut-offs for group trends and run-level notable patterns."""
    # Skill area trend
    skill_high_deviation: float = 20
    skill_excellent_alignment: float = 5
    skill_high_critical_share: float = 0.2

    # Difficulty trend
    expert_high_deviation: float = 15
    easy_unexpected_deviation: float = 10
    difficulty_excellent_consistency: float = 3

    # Run-level patterns
    run_skill_high_deviation: float = 15
    run_expert_high_deviation: float = 20
    run_easy_high_deviation: float = 10
    run_overall_excellent: float = 5
    run_overall_high: float = 20
    run_critical_flag_share: float = 0.2


# =============================================================================
# Performance Signals
# =============================================================================

@dataclass(frozen=True)
class SignalThresholds:
    """Cut-offs for performance signals."""
    excellent_avg_deviation: float = 8
    moderate_avg_deviation: float = 15
    high_avg_deviation: float = 25
    elevated_critical_rate: float = 0.1
    extreme_max_deviation: float = 50


# =============================================================================
# Narrative
# =============================================================================

@dataclass(frozen=True)
class NarrativeThresholds:
    """Cut-offs for the closing summary sentence and recommendation cap."""
    consistent_avg_deviation: float = 10
    discrepancy_avg_deviation: float = 20
    max_recommendations: int = 5


# =============================================================================
# Combined
# =============================================================================

@dataclass(frozen=True)
class InsightThresholds:
    """All engine thresholds in one immutable structure."""
    quality: QualityThresholds = field(default_factory=QualityThresholds)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    pattern: PatternThresholds = field(default_factory=PatternThresholds)
    signal: SignalThresholds = field(default_factory=SignalThresholds)
    narrative: NarrativeThresholds = field(default_factory=NarrativeThresholds)
    name: str = "default"


DEFAULT_THRESHOLDS = InsightThresholds()
