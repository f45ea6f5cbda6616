"""
Audit Insight Models

Input records (AuditRun, AuditResult), enumerations, and the output
value types produced by the engine.
"""
from __future__ import annotations

from .enums import (
    AuditAction,
    DeviationType,
    ImpactLevel,
    QualityRating,
    RiskSeverity,
    RiskType,
    RunStatus,
    SignalType,
    TaskDifficulty,
)
from .audit_run import (
    AuditResult,
    AuditRun,
    PrecomputedSummary,
)
from .insights import (
    ActionDistribution,
    AuditInsightsResult,
    DeviationBreakdown,
    DeviationStats,
    DifficultyInsight,
    PerformanceSignal,
    RiskIndicator,
    SkillAreaInsight,
)

__all__ = [
    # Enums
    "AuditAction",
    "DeviationType",
    "ImpactLevel",
    "QualityRating",
    "RiskSeverity",
    "RiskType",
    "RunStatus",
    "SignalType",
    "TaskDifficulty",
    # Input
    "AuditResult",
    "AuditRun",
    "PrecomputedSummary",
    # Output
    "ActionDistribution",
    "AuditInsightsResult",
    "DeviationBreakdown",
    "DeviationStats",
    "DifficultyInsight",
    "PerformanceSignal",
    "RiskIndicator",
    "SkillAreaInsight",
]
