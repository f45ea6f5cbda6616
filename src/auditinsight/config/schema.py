"""
Threshold Profile Schemas

Pydantic models for validating threshold profile YAML/JSON files.

Every field defaults to the built-in constant, so a profile only lists the
values it overrides. Unknown keys are rejected to catch misspellings.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .thresholds import (
    NarrativeThresholds,
    PatternThresholds,
    QualityThresholds,
    RiskThresholds,
    SignalThresholds,
)


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"

_QUALITY = QualityThresholds()
_RISK = RiskThresholds()
_PATTERN = PatternThresholds()
_SIGNAL = SignalThresholds()
_NARRATIVE = NarrativeThresholds()


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Section Schemas
# =============================================================================

class QualityBandSchema(_StrictModel):
    """One nested quality ceiling."""
    max_avg_deviation: float = Field(..., ge=0)
    max_critical_rate: float = Field(..., ge=0, le=1)


class QualitySchema(_StrictModel):
    """Quality label ceilings and score formula weights."""
    excellent: QualityBandSchema = QualityBandSchema(
        max_avg_deviation=_QUALITY.excellent.max_avg_deviation,
        max_critical_rate=_QUALITY.excellent.max_critical_rate,
    )
    good: QualityBandSchema = QualityBandSchema(
        max_avg_deviation=_QUALITY.good.max_avg_deviation,
        max_critical_rate=_QUALITY.good.max_critical_rate,
    )
    fair: QualityBandSchema = QualityBandSchema(
        max_avg_deviation=_QUALITY.fair.max_avg_deviation,
        max_critical_rate=_QUALITY.fair.max_critical_rate,
    )
    deviation_points: float = Field(_QUALITY.deviation_points, ge=0)
    deviation_penalty_per_point: float = Field(_QUALITY.deviation_penalty_per_point, ge=0)
    critical_points: float = Field(_QUALITY.critical_points, ge=0)

    @model_validator(mode="after")
    def validate_nesting(self) -> "QualitySchema":
        """Ceilings must widen from excellent to fair or lower labels become unreachable."""
        bands = [("excellent", self.excellent), ("good", self.good), ("fair", self.fair)]
        for (lower_name, lower), (upper_name, upper) in zip(bands, bands[1:]):
            if lower.max_avg_deviation > upper.max_avg_deviation:
                raise ValueError(
                    f"{lower_name}.max_avg_deviation exceeds {upper_name}.max_avg_deviation"
                )
            if lower.max_critical_rate > upper.max_critical_rate:
                raise ValueError(
                    f"{lower_name}.max_critical_rate exceeds {upper_name}.max_critical_rate"
                )
        return self


class RiskSchema(_StrictModel):
    """Risk signature cut-offs."""
    inflation_min_deviation: float = Field(_RISK.inflation_min_deviation, ge=0)
    inflation_min_user_score: float = Field(_RISK.inflation_min_user_score, ge=0)
    inflation_high_share: float = Field(_RISK.inflation_high_share, ge=0, le=1)
    ai_bias_min_deviation: float = Field(_RISK.ai_bias_min_deviation, ge=0)
    ai_bias_max_ai_score: float = Field(_RISK.ai_bias_max_ai_score, ge=0)
    ai_bias_high_share: float = Field(_RISK.ai_bias_high_share, ge=0, le=1)
    override_min_rate: float = Field(_RISK.override_min_rate, ge=0, le=1)
    override_high_rate: float = Field(_RISK.override_high_rate, ge=0, le=1)
    skill_gap_min_critical_rate: float = Field(_RISK.skill_gap_min_critical_rate, ge=0, le=1)
    skill_gap_high_critical_rate: float = Field(_RISK.skill_gap_high_critical_rate, ge=0, le=1)


class PatternSchema(_StrictModel):
    """Group trend and run-level pattern cut-offs."""
    skill_high_deviation: float = Field(_PATTERN.skill_high_deviation, ge=0)
    skill_excellent_alignment: float = Field(_PATTERN.skill_excellent_alignment, ge=0)
    skill_high_critical_share: float = Field(_PATTERN.skill_high_critical_share, ge=0, le=1)
    expert_high_deviation: float = Field(_PATTERN.expert_high_deviation, ge=0)
    easy_unexpected_deviation: float = Field(_PATTERN.easy_unexpected_deviation, ge=0)
    difficulty_excellent_consistency: float = Field(
        _PATTERN.difficulty_excellent_consistency, ge=0
    )
    run_skill_high_deviation: float = Field(_PATTERN.run_skill_high_deviation, ge=0)
    run_expert_high_deviation: float = Field(_PATTERN.run_expert_high_deviation, ge=0)
    run_easy_high_deviation: float = Field(_PATTERN.run_easy_high_deviation, ge=0)
    run_overall_excellent: float = Field(_PATTERN.run_overall_excellent, ge=0)
    run_overall_high: float = Field(_PATTERN.run_overall_high, ge=0)
    run_critical_flag_share: float = Field(_PATTERN.run_critical_flag_share, ge=0, le=1)


class SignalSchema(_StrictModel):
    """Performance signal cut-offs."""
    excellent_avg_deviation: float = Field(_SIGNAL.excellent_avg_deviation, ge=0)
    moderate_avg_deviation: float = Field(_SIGNAL.moderate_avg_deviation, ge=0)
    high_avg_deviation: float = Field(_SIGNAL.high_avg_deviation, ge=0)
    elevated_critical_rate: float = Field(_SIGNAL.elevated_critical_rate, ge=0, le=1)
    extreme_max_deviation: float = Field(_SIGNAL.extreme_max_deviation, ge=0)

    @model_validator(mode="after")
    def validate_moderate_band(self) -> "SignalSchema":
        if self.moderate_avg_deviation > self.high_avg_deviation:
            raise ValueError("moderate_avg_deviation exceeds high_avg_deviation")
        return self


class NarrativeSchema(_StrictModel):
    """Summary cut-offs and recommendation cap."""
    consistent_avg_deviation: float = Field(_NARRATIVE.consistent_avg_deviation, ge=0)
    discrepancy_avg_deviation: float = Field(_NARRATIVE.discrepancy_avg_deviation, ge=0)
    max_recommendations: int = Field(_NARRATIVE.max_recommendations, ge=1)


# =============================================================================
# Profile Schema
# =============================================================================

class ThresholdProfileSchema(_StrictModel):
    """Root schema for a threshold profile document."""
    schema_version: str = SCHEMA_VERSION
    name: str = "default"
    description: Optional[str] = None

    quality: QualitySchema = Field(default_factory=QualitySchema)
    risk: RiskSchema = Field(default_factory=RiskSchema)
    pattern: PatternSchema = Field(default_factory=PatternSchema)
    signal: SignalSchema = Field(default_factory=SignalSchema)
    narrative: NarrativeSchema = Field(default_factory=NarrativeSchema)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a threshold profile's schema version is compatible.

    Args:
        data: Dictionary with schema_version field

    Returns:
        True if compatible, False otherwise
    """
    profile_version = str(data.get("schema_version", SCHEMA_VERSION))
    # Only the major version has to match
    profile_major = profile_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return profile_major == current_major


def validate_threshold_profile(data: dict[str, Any]) -> ThresholdProfileSchema:
    """Validate raw profile data. Raises pydantic.ValidationError."""
    return ThresholdProfileSchema.model_validate(data)
