"""
Audit Run Models

Input records for the insight engine. An audit run is one batch of
submissions reviewed together under one reviewer/task context; each
reviewed submission carries a human score, an AI score, and the deviation
between them.

Both records are frozen: the engine treats a run as read-only for the
whole analysis.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .enums import AuditAction, DeviationType, RunStatus, TaskDifficulty


# =============================================================================
# Audit Result
# =============================================================================

@dataclass(frozen=True)
class AuditResult:
    """
    One reviewed submission within an audit run.

    Scores are on a 0-100 scale and are not clamped here. ``deviation`` is
    expected to be ``abs(user_score - ai_score)`` as computed upstream; the
    engine aggregates this field and never re-subtracts the scores.

    Attributes:
        submission_id: Opaque submission identifier
        user_id: Opaque submitter identifier
        user_score: Human reviewer score
        ai_score: AI-assigned score
        deviation: Absolute score difference (trusted)
        deviation_type: Upstream categorical label
        suggested_action: Action proposed upstream
        action_taken: Action the reviewer actually took, if any
        task_title: Title of the audited task
        skill_area: Skill area of the audited task
        task_difficulty: Difficulty tier of the audited task
        timestamp: When the submission was reviewed
    """
    submission_id: str
    user_id: str
    user_score: float
    ai_score: float
    deviation: float
    deviation_type: DeviationType
    suggested_action: AuditAction
    task_title: str
    skill_area: str
    task_difficulty: TaskDifficulty
    timestamp: datetime
    action_taken: Optional[AuditAction] = None

    # Audit trail only, never used in classification math
    id: Optional[str] = None
    reviewer: Optional[str] = None
    notes: Optional[str] = None

    @property
    def operative_action(self) -> AuditAction:
        """The action taken if recorded, otherwise the suggested action."""
        return self.action_taken or self.suggested_action

    @property
    def is_critical(self) -> bool:
        return self.deviation_type == DeviationType.CRITICAL


# =============================================================================
# Audit Run
# =============================================================================

@dataclass(frozen=True)
class PrecomputedSummary:
    """
    Summary fields carried on the run from upstream.

    These are NOT recomputed from the results. Narrative text and the
    run-level notable patterns read them; everything else uses the
    engine's own statistics. The two sources can drift when a caller
    supplies inconsistent data.
    """
    total_submissions: int
    average_deviation: float
    critical_flags: int


@dataclass(frozen=True)
class AuditRun:
    """
    One audit run with its reviewed results.

    ``results`` keeps insertion order; the order carries no meaning for the
    analysis but is preserved in any per-submission output lists.
    """
    id: str
    reviewer: str
    started_at: datetime
    task_title: str
    task_difficulty: TaskDifficulty
    skill_area: str
    status: RunStatus
    total_submissions: int
    average_deviation: float
    critical_flags: int
    results: tuple[AuditResult, ...] = field(default_factory=tuple)
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.results, tuple):
            object.__setattr__(self, "results", tuple(self.results))

    @property
    def precomputed(self) -> PrecomputedSummary:
        """Upstream summary fields, kept apart from computed statistics."""
        return PrecomputedSummary(
            total_submissions=self.total_submissions,
            average_deviation=self.average_deviation,
            critical_flags=self.critical_flags,
        )

    @property
    def result_count(self) -> int:
        return len(self.results)
