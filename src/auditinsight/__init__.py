"""
Audit Insight - AI-vs-Human Scoring Agreement Analysis

Turns one audit run's (human score, AI score) pairs into deviation
breakdowns, a quality rating, group-level patterns, risk indicators, and
recommendations, returned as a single immutable rollup.

Key Features:
- Stateless, synchronous, side-effect free analysis
- Quality label and 0-100 score, per run and per skill/difficulty group
- Four independent risk signatures
- Tunable threshold profiles (YAML/JSON)
- camelCase wire serialization for downstream consumers

Quick Start:
    from auditinsight import generate_audit_insights, load_audit_run

    run = load_audit_run("runs/run-001.json")
    insights = generate_audit_insights(run)
    print(insights.review_quality, insights.recommendations)

A run with no results raises DegenerateInputError.

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    AuditAction,
    DeviationType,
    ImpactLevel,
    QualityRating,
    RiskSeverity,
    RiskType,
    RunStatus,
    SignalType,
    TaskDifficulty,
    # Input
    AuditResult,
    AuditRun,
    PrecomputedSummary,
    # Output
    ActionDistribution,
    AuditInsightsResult,
    DeviationBreakdown,
    DeviationStats,
    DifficultyInsight,
    PerformanceSignal,
    RiskIndicator,
    SkillAreaInsight,
)

# =============================================================================
# Engine and Configuration
# =============================================================================
from .config import (
    DEFAULT_THRESHOLDS,
    InsightThresholds,
    load_threshold_profile,
    thresholds_from_dict,
)
from .engine import (
    InsightAssembler,
    generate_audit_insights,
)
from .ingest import (
    load_audit_run,
    parse_audit_run,
)

# =============================================================================
# Utilities
# =============================================================================
from .canon import (
    canonical_json,
    content_hash,
    insights_fingerprint,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    AuditInsightError,
    AuditRunLoadError,
    AuditRunValidationError,
    DegenerateInputError,
    ThresholdLoadError,
    ThresholdValidationError,
)

# =============================================================================
# Public API
# =============================================================================
__all__ = [
    # Version
    "__version__",
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
    # Engine and configuration
    "DEFAULT_THRESHOLDS",
    "InsightThresholds",
    "InsightAssembler",
    "generate_audit_insights",
    "load_threshold_profile",
    "thresholds_from_dict",
    "load_audit_run",
    "parse_audit_run",
    # Utilities
    "canonical_json",
    "content_hash",
    "insights_fingerprint",
    # Exceptions
    "AuditInsightError",
    "AuditRunLoadError",
    "AuditRunValidationError",
    "DegenerateInputError",
    "ThresholdLoadError",
    "ThresholdValidationError",
]
