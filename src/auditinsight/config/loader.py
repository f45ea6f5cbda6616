"""
Threshold Profile Loader

Loads and validates threshold profiles from YAML or JSON files.

Converts Pydantic schema models to the frozen InsightThresholds structure
the engine consumes.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from ..documents import DOCUMENT_ERRORS, load_document
from ..exceptions import ThresholdLoadError, ThresholdValidationError
from .schema import (
    SCHEMA_VERSION,
    ThresholdProfileSchema,
    check_schema_version,
    validate_threshold_profile,
)
from .thresholds import (
    InsightThresholds,
    NarrativeThresholds,
    PatternThresholds,
    QualityBand,
    QualityThresholds,
    RiskThresholds,
    SignalThresholds,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_profile(schema: ThresholdProfileSchema) -> InsightThresholds:
    """Convert ThresholdProfileSchema to InsightThresholds."""
    quality = schema.quality
    return InsightThresholds(
        quality=QualityThresholds(
            excellent=QualityBand(**quality.excellent.model_dump()),
            good=QualityBand(**quality.good.model_dump()),
            fair=QualityBand(**quality.fair.model_dump()),
            deviation_points=quality.deviation_points,
            deviation_penalty_per_point=quality.deviation_penalty_per_point,
            critical_points=quality.critical_points,
        ),
        risk=RiskThresholds(**schema.risk.model_dump()),
        pattern=PatternThresholds(**schema.pattern.model_dump()),
        signal=SignalThresholds(**schema.signal.model_dump()),
        narrative=NarrativeThresholds(**schema.narrative.model_dump()),
        name=schema.name,
    )


def thresholds_from_dict(data: dict[str, Any], source: str = "") -> InsightThresholds:
    """
    Build thresholds from raw profile data.

    Args:
        data: Parsed profile document (may be empty)
        source: Origin used in error details

    Returns:
        InsightThresholds with unspecified values at their defaults

    Raises:
        ThresholdValidationError: If the version or schema check fails
    """
    data = data or {}
    if not isinstance(data, dict):
        raise ThresholdValidationError(
            message="Threshold profile must be a mapping",
            details={"source": source, "type": type(data).__name__},
        )

    if not check_schema_version(data):
        profile_version = data.get("schema_version", "unknown")
        raise ThresholdValidationError(
            message=f"Schema version mismatch: profile has {profile_version}, expected {SCHEMA_VERSION}",
            details={
                "profile_version": profile_version,
                "expected_version": SCHEMA_VERSION,
                "source": source,
            },
        )

    try:
        schema = validate_threshold_profile(data)
    except ValidationError as e:
        raise ThresholdValidationError(
            message=f"Threshold profile validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_url=False), "source": source},
        ) from e

    return _convert_profile(schema)


def load_threshold_profile(path: Union[str, Path]) -> InsightThresholds:
    """
    Load a threshold profile from a file.

    Args:
        path: Path to YAML or JSON file

    Returns:
        InsightThresholds for the engine

    Raises:
        ThresholdLoadError: If the file cannot be read or parsed
        ThresholdValidationError: If validation fails
    """
    path = Path(path)
    logger.debug(f"Loading threshold profile from {path}")

    try:
        data = load_document(path)
    except DOCUMENT_ERRORS as e:
        raise ThresholdLoadError(
            message=f"Failed to load threshold profile: {e}",
            details={"path": str(path), "error": str(e)},
        ) from e

    thresholds = thresholds_from_dict(data, source=str(path))
    logger.info(f"Loaded threshold profile '{thresholds.name}' from {path}")
    return thresholds
