"""
Audit Run Schemas

Pydantic models for validating audit run documents as stored upstream
and served to the web client (camelCase keys).

The engine itself trusts its input. These schemas are where field names
and enum spellings get checked, so an unrecognized deviation type is
rejected here instead of silently going uncounted later.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums as Literals (for document validation)
# =============================================================================

TaskDifficultyValue = Literal["easy", "medium", "hard", "expert"]

RunStatusValue = Literal["completed", "failed", "running"]

DeviationTypeValue = Literal["none", "minor", "major", "critical"]

AuditActionValue = Literal["allow", "flag_for_review", "escalate", "override"]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Document Schemas
# =============================================================================

class AuditResultSchema(_WireModel):
    """Schema for one reviewed submission."""
    id: Optional[str] = Field(None, description="Storage row ID")
    submission_id: str = Field(..., min_length=1)
    user_id: str
    user_score: float
    ai_score: float
    deviation: float = Field(..., ge=0, description="abs(userScore - aiScore)")
    deviation_type: DeviationTypeValue
    suggested_action: AuditActionValue
    action_taken: Optional[AuditActionValue] = None
    task_title: str
    skill_area: str
    task_difficulty: TaskDifficultyValue
    timestamp: datetime
    reviewer: Optional[str] = None
    notes: Optional[str] = None


class AuditRunSchema(_WireModel):
    """Root schema for an audit run document."""
    id: str = Field(..., min_length=1)
    reviewer: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    task_title: str
    task_difficulty: TaskDifficultyValue
    skill_area: str
    status: RunStatusValue
    total_submissions: int = Field(..., ge=0)
    average_deviation: float = Field(..., ge=0)
    critical_flags: int = Field(..., ge=0)
    results: list[AuditResultSchema] = Field(default_factory=list)


def validate_audit_run(data: dict[str, Any]) -> AuditRunSchema:
    """Validate raw run data. Raises pydantic.ValidationError."""
    return AuditRunSchema.model_validate(data)
