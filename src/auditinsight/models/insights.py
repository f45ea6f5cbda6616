"""
Audit Insight Models

Output of the insight engine: one immutable rollup per analyzed run.

Key components:
- DeviationStats: Aggregate statistics over per-submission deviations
- DeviationBreakdown / ActionDistribution: Categorical counts
- SkillAreaInsight / DifficultyInsight: Per-group analysis
- PerformanceSignal / RiskIndicator: Detected signals and risks
- AuditInsightsResult: The full rollup

Every record serializes with ``to_dict()`` to the camelCase wire shape that
message templating and the web client read. Field names and enum
spellings in that shape are a contract.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Union

from .enums import (
    AuditAction,
    DeviationType,
    ImpactLevel,
    QualityRating,
    RiskSeverity,
    RiskType,
    SignalType,
    TaskDifficulty,
)


# =============================================================================
# Statistics and Counts
# =============================================================================

@dataclass(frozen=True)
class DeviationStats:
    """
    Aggregate statistics over the ``deviation`` field of a result list.

    ``median`` is the element at index ``n // 2`` of the ascending sort,
    not the average of the two middle values.
    """
    average: float
    max: float
    min: float
    median: float


@dataclass(frozen=True)
class DeviationBreakdown:
    """Count of results per upstream deviation type."""
    none: int = 0
    minor: int = 0
    major: int = 0
    critical: int = 0

    @classmethod
    def from_counts(cls, counts: Mapping[DeviationType, int]) -> "DeviationBreakdown":
        return cls(
            none=counts.get(DeviationType.NONE, 0),
            minor=counts.get(DeviationType.MINOR, 0),
            major=counts.get(DeviationType.MAJOR, 0),
            critical=counts.get(DeviationType.CRITICAL, 0),
        )

    def count(self, deviation_type: DeviationType) -> int:
        return getattr(self, deviation_type.value)

    @property
    def total(self) -> int:
        return self.none + self.minor + self.major + self.critical

    def to_dict(self) -> dict[str, int]:
        return {t.value: self.count(t) for t in DeviationType}


@dataclass(frozen=True)
class ActionDistribution:
    """Count of results per operative action."""
    allow: int = 0
    flag_for_review: int = 0
    escalate: int = 0
    override: int = 0

    @classmethod
    def from_counts(cls, counts: Mapping[AuditAction, int]) -> "ActionDistribution":
        return cls(
            allow=counts.get(AuditAction.ALLOW, 0),
            flag_for_review=counts.get(AuditAction.FLAG_FOR_REVIEW, 0),
            escalate=counts.get(AuditAction.ESCALATE, 0),
            override=counts.get(AuditAction.OVERRIDE, 0),
        )

    def count(self, action: AuditAction) -> int:
        return getattr(self, action.value)

    @property
    def total(self) -> int:
        return self.allow + self.flag_for_review + self.escalate + self.override

    def to_dict(self) -> dict[str, int]:
        return {a.value: self.count(a) for a in AuditAction}


# =============================================================================
# Group Insights
# =============================================================================

@dataclass(frozen=True)
class SkillAreaInsight:
    """Analysis of all results sharing one skill area."""
    skill_area: str
    submission_count: int
    average_deviation: float
    critical_count: int
    quality_rating: QualityRating
    notable_trend: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "skillArea": self.skill_area,
            "submissionCount": self.submission_count,
            "averageDeviation": self.average_deviation,
            "criticalCount": self.critical_count,
            "qualityRating": self.quality_rating.value,
            "notableTrend": self.notable_trend,
        }


@dataclass(frozen=True)
class DifficultyInsight:
    """Analysis of all results sharing one task difficulty."""
    difficulty: Union[TaskDifficulty, str]  # raw value when unrecognized
    submission_count: int
    average_deviation: float
    critical_count: int
    quality_rating: QualityRating
    notable_trend: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "difficulty": getattr(self.difficulty, "value", self.difficulty),
            "submissionCount": self.submission_count,
            "averageDeviation": self.average_deviation,
            "criticalCount": self.critical_count,
            "qualityRating": self.quality_rating.value,
            "notableTrend": self.notable_trend,
        }


# =============================================================================
# Signals and Risks
# =============================================================================

@dataclass(frozen=True)
class PerformanceSignal:
    """
    A threshold-triggered observation about run performance.

    Attributes:
        type: positive / warning / critical
        message: Human-readable description
        impact: Expected impact level
        data: The metric(s) that triggered the signal (read-only)
    """
    type: SignalType
    message: str
    impact: ImpactLevel
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Store a read-only view over a private copy
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type.value,
            "message": self.message,
            "impact": self.impact.value,
        }
        if self.data:
            result["data"] = dict(self.data)
        return result


@dataclass(frozen=True)
class RiskIndicator:
    """
    A detected statistical signature suggesting a specific failure mode.

    Attributes:
        type: Which signature matched
        severity: medium or high, depending on prevalence
        description: Human-readable summary
        evidence: Supporting lines, one per submission or one aggregate
        affected_submissions: Submission IDs involved, in run order
    """
    type: RiskType
    severity: RiskSeverity
    description: str
    evidence: tuple[str, ...] = ()
    affected_submissions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "evidence": list(self.evidence),
            "affectedSubmissions": list(self.affected_submissions),
        }


# =============================================================================
# Insights Result
# =============================================================================

@dataclass(frozen=True)
class AuditInsightsResult:
    """
    The full insight rollup for one audit run.

    Constructed once by the assembler and never mutated. Two results built
    from the same run differ only in ``analysis_timestamp`` and
    ``analysis_duration``.
    """
    # Basic metrics
    deviation_breakdown: DeviationBreakdown
    action_distribution: ActionDistribution
    average_deviation: float
    max_deviation: float
    min_deviation: float
    median_deviation: float

    # Critical analysis
    critical_submissions: tuple[str, ...]
    flags_triggered: int
    override_count: int

    # Quality assessment
    review_quality: QualityRating
    quality_score: int

    # Pattern detection
    notable_patterns: tuple[str, ...]
    skill_area_analysis: tuple[SkillAreaInsight, ...]
    difficulty_analysis: tuple[DifficultyInsight, ...]

    # Performance signals
    performance_signals: tuple[PerformanceSignal, ...]
    risk_indicators: tuple[RiskIndicator, ...]

    # Summary
    insight_summary: tuple[str, ...]
    recommendations: tuple[str, ...]

    # Metadata
    analysis_timestamp: datetime
    total_submissions: int
    analysis_duration: float  # milliseconds

    def has_risk(self, risk_type: RiskType) -> bool:
        return any(r.type == risk_type for r in self.risk_indicators)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return {
            "deviationBreakdown": self.deviation_breakdown.to_dict(),
            "actionDistribution": self.action_distribution.to_dict(),
            "averageDeviation": self.average_deviation,
            "maxDeviation": self.max_deviation,
            "minDeviation": self.min_deviation,
            "medianDeviation": self.median_deviation,
            "criticalSubmissions": list(self.critical_submissions),
            "flagsTriggered": self.flags_triggered,
            "overrideCount": self.override_count,
            "reviewQuality": self.review_quality.value,
            "qualityScore": self.quality_score,
            "notablePatterns": list(self.notable_patterns),
            "skillAreaAnalysis": [s.to_dict() for s in self.skill_area_analysis],
            "difficultyAnalysis": [d.to_dict() for d in self.difficulty_analysis],
            "performanceSignals": [s.to_dict() for s in self.performance_signals],
            "riskIndicators": [r.to_dict() for r in self.risk_indicators],
            "insightSummary": list(self.insight_summary),
            "recommendations": list(self.recommendations),
            "analysisTimestamp": self.analysis_timestamp.isoformat(),
            "totalSubmissions": self.total_submissions,
            "analysisDuration": self.analysis_duration,
        }
