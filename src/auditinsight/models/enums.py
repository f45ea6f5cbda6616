"""
Audit Insight Enumerations

All enumeration types used throughout the audit insight engine.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
The values are the wire spellings consumed by message templating and the
web client, so they must not change.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Task Context
# =============================================================================

class TaskDifficulty(str, Enum):
    """Difficulty tier of the audited task."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class RunStatus(str, Enum):
    """Lifecycle state of an audit run."""
    COMPLETED = "completed"
    FAILED = "failed"
    RUNNING = "running"


# =============================================================================
# Per-Submission Classification
# =============================================================================

class DeviationType(str, Enum):
    """
    Categorical deviation label assigned upstream.

    The engine only counts these; it never reclassifies a numeric
    deviation into this enum.
    """
    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class AuditAction(str, Enum):
    """Action suggested for, or taken on, a reviewed submission."""
    ALLOW = "allow"
    FLAG_FOR_REVIEW = "flag_for_review"
    ESCALATE = "escalate"
    OVERRIDE = "override"


# =============================================================================
# Quality Assessment
# =============================================================================

class QualityRating(str, Enum):
    """Four-level judgment of AI/human score agreement."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


# =============================================================================
# Signals and Risks
# =============================================================================

class SignalType(str, Enum):
    """Polarity of a performance signal."""
    POSITIVE = "positive"
    WARNING = "warning"
    CRITICAL = "critical"


class ImpactLevel(str, Enum):
    """Impact of a performance signal."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskType(str, Enum):
    """Detected failure-mode signature."""
    SCORE_INFLATION = "score_inflation"
    AI_BIAS = "ai_bias"
    REVIEWER_PATTERN = "reviewer_pattern"
    SKILL_GAP = "skill_gap"


class RiskSeverity(str, Enum):
    """Severity of a risk indicator."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
