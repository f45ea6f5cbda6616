"""
Audit Insight Exception Hierarchy

Domain-specific exceptions for audit run analysis.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: AI_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class AuditInsightError(Exception):
    """
    Base exception for all audit insight errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (AI_*)
        details: Additional context about the error
        run_id: Associated audit run ID if applicable
    """
    message: str
    code: str = "AI_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    run_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.run_id:
            parts.append(f"(run: {self.run_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.run_id:
            result["run_id"] = self.run_id
        return result


# =============================================================================
# Engine Errors
# =============================================================================

@dataclass
class DegenerateInputError(AuditInsightError):
    """
    Audit run has no results to analyze.

    Raised instead of returning zeroed statistics: an empty run would
    otherwise be rated "excellent".
    """
    code: str = "AI_DEGENERATE_INPUT"


# =============================================================================
# Audit Run Ingestion Errors
# =============================================================================

@dataclass
class AuditRunLoadError(AuditInsightError):
    """Failed to read an audit run document."""
    code: str = "AI_RUN_LOAD_ERROR"


@dataclass
class AuditRunValidationError(AuditInsightError):
    """Audit run document failed schema validation."""
    code: str = "AI_RUN_VALIDATION_ERROR"


# =============================================================================
# Threshold Profile Errors
# =============================================================================

@dataclass
class ThresholdLoadError(AuditInsightError):
    """Failed to read a threshold profile."""
    code: str = "AI_THRESHOLD_LOAD_ERROR"


@dataclass
class ThresholdValidationError(AuditInsightError):
    """Threshold profile failed schema or consistency validation."""
    code: str = "AI_THRESHOLD_VALIDATION_ERROR"
