"""
Audit Insight Configuration

Engine thresholds and threshold profile loading.

Usage:
    from auditinsight.config import DEFAULT_THRESHOLDS, load_threshold_profile

    thresholds = load_threshold_profile("profiles/strict.yaml")
"""
from __future__ import annotations

from .thresholds import (
    DEFAULT_THRESHOLDS,
    InsightThresholds,
    NarrativeThresholds,
    PatternThresholds,
    QualityBand,
    QualityThresholds,
    RiskThresholds,
    SignalThresholds,
)
from .schema import (
    SCHEMA_VERSION,
    ThresholdProfileSchema,
    check_schema_version,
    validate_threshold_profile,
)
from .loader import (
    load_threshold_profile,
    thresholds_from_dict,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "InsightThresholds",
    "NarrativeThresholds",
    "PatternThresholds",
    "QualityBand",
    "QualityThresholds",
    "RiskThresholds",
    "SignalThresholds",
    "SCHEMA_VERSION",
    "ThresholdProfileSchema",
    "check_schema_version",
    "validate_threshold_profile",
    "load_threshold_profile",
    "thresholds_from_dict",
]
