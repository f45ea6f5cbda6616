"""
Pytest configuration and fixtures for audit insight tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from datetime import datetime, timedelta, timezone

from auditinsight.models import (
    AuditAction,
    AuditResult,
    AuditRun,
    DeviationType,
    RunStatus,
    TaskDifficulty,
)


BASE_TIME = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_result(
    submission_id: str = "sub-001",
    user_score: float = 85,
    ai_score: float = 80,
    deviation: float = None,
    deviation_type: DeviationType = DeviationType.MINOR,
    suggested_action: AuditAction = AuditAction.ALLOW,
    action_taken: AuditAction = None,
    skill_area: str = "frontend",
    task_difficulty: TaskDifficulty = TaskDifficulty.MEDIUM,
    user_id: str = None,
    task_title: str = "Build a responsive navigation bar",
    minutes: int = 15,
) -> AuditResult:
    """Create an AuditResult; deviation defaults to abs(user - ai)."""
    if deviation is None:
        deviation = abs(user_score - ai_score)

    return AuditResult(
        submission_id=submission_id,
        user_id=user_id or f"user-{submission_id}",
        user_score=user_score,
        ai_score=ai_score,
        deviation=deviation,
        deviation_type=deviation_type,
        suggested_action=suggested_action,
        action_taken=action_taken,
        task_title=task_title,
        skill_area=skill_area,
        task_difficulty=task_difficulty,
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        reviewer="admin-1",
    )


def make_audit_run(
    results: list = None,
    id: str = "run-001",
    total_submissions: int = None,
    average_deviation: float = None,
    critical_flags: int = None,
    status: RunStatus = RunStatus.COMPLETED,
) -> AuditRun:
    """
    Create an AuditRun.

    Precomputed summary fields default to values consistent with results.
    """
    results = results if results is not None else []
    if total_submissions is None:
        total_submissions = len(results)
    if average_deviation is None:
        average_deviation = (
            sum(r.deviation for r in results) / len(results) if results else 0.0
        )
    if critical_flags is None:
        critical_flags = sum(1 for r in results if r.deviation_type == DeviationType.CRITICAL)

    return AuditRun(
        id=id,
        reviewer="admin-1",
        started_at=BASE_TIME,
        completed_at=BASE_TIME + timedelta(hours=1),
        task_title="Build a responsive navigation bar",
        task_difficulty=TaskDifficulty.MEDIUM,
        skill_area="frontend",
        status=status,
        total_submissions=total_submissions,
        average_deviation=average_deviation,
        critical_flags=critical_flags,
        results=results,
    )


def make_uniform_results(
    deviations: list,
    deviation_type: DeviationType = DeviationType.MINOR,
    **kwargs,
) -> list:
    """One result per deviation, with sequential submission IDs."""
    return [
        make_result(
            submission_id=f"sub-{i:03d}",
            user_score=70,
            ai_score=70 - d,
            deviation=d,
            deviation_type=deviation_type,
            minutes=15 * i,
            **kwargs,
        )
        for i, d in enumerate(deviations, start=1)
    ]


def reference_results() -> list:
    """The five-submission reference run: deviations 7, 47, 1, 7, 60."""
    return [
        make_result(
            submission_id="sub-001", user_score=85, ai_score=78,
            deviation_type=DeviationType.MINOR,
            suggested_action=AuditAction.FLAG_FOR_REVIEW, action_taken=AuditAction.ALLOW,
            skill_area="frontend", task_difficulty=TaskDifficulty.MEDIUM, minutes=15,
        ),
        make_result(
            submission_id="sub-002", user_score=92, ai_score=45,
            deviation_type=DeviationType.CRITICAL,
            suggested_action=AuditAction.ESCALATE, action_taken=AuditAction.ESCALATE,
            skill_area="cloud-devops", task_difficulty=TaskDifficulty.EXPERT, minutes=30,
        ),
        make_result(
            submission_id="sub-003", user_score=88, ai_score=87,
            deviation_type=DeviationType.NONE,
            suggested_action=AuditAction.ALLOW, action_taken=AuditAction.ALLOW,
            skill_area="frontend", task_difficulty=TaskDifficulty.MEDIUM, minutes=45,
        ),
        make_result(
            submission_id="sub-004", user_score=75, ai_score=82,
            deviation_type=DeviationType.MINOR,
            suggested_action=AuditAction.FLAG_FOR_REVIEW,
            action_taken=AuditAction.FLAG_FOR_REVIEW,
            skill_area="ai-ml", task_difficulty=TaskDifficulty.HARD, minutes=60,
        ),
        make_result(
            submission_id="sub-005", user_score=95, ai_score=35,
            deviation_type=DeviationType.CRITICAL,
            suggested_action=AuditAction.ESCALATE, action_taken=AuditAction.ESCALATE,
            skill_area="cloud-devops", task_difficulty=TaskDifficulty.EXPERT, minutes=75,
        ),
    ]


def reference_run_document() -> dict:
    """The reference run as a camelCase wire document."""
    return {
        "id": "test-run-001",
        "reviewer": "admin-1",
        "startedAt": "2024-01-15T10:00:00Z",
        "completedAt": "2024-01-15T11:00:00Z",
        "taskTitle": "Test Task",
        "taskDifficulty": "medium",
        "skillArea": "frontend",
        "status": "completed",
        "totalSubmissions": 5,
        "averageDeviation": 12.5,
        "criticalFlags": 1,
        "results": [
            {
                "id": f"result-{i}",
                "submissionId": r.submission_id,
                "userId": r.user_id,
                "userScore": r.user_score,
                "aiScore": r.ai_score,
                "deviation": r.deviation,
                "deviationType": r.deviation_type.value,
                "suggestedAction": r.suggested_action.value,
                "actionTaken": r.action_taken.value,
                "taskTitle": "Test Task",
                "skillArea": r.skill_area,
                "taskDifficulty": r.task_difficulty.value,
                "timestamp": r.timestamp.isoformat(),
                "reviewer": "admin-1",
            }
            for i, r in enumerate(reference_results(), start=1)
        ],
    }


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def reference_run() -> AuditRun:
    """Reference run with upstream summary fields that disagree with results."""
    return make_audit_run(
        results=reference_results(),
        id="test-run-001",
        total_submissions=5,
        average_deviation=12.5,
        critical_flags=1,
    )


@pytest.fixture
def excellent_run() -> AuditRun:
    """Five closely agreeing submissions in one skill area."""
    results = [
        make_result(
            submission_id=f"sub-{i:03d}", user_score=85 + i, ai_score=85 + i - d,
            deviation_type=DeviationType.NONE, suggested_action=AuditAction.ALLOW,
            action_taken=AuditAction.ALLOW, minutes=15 * i,
        )
        for i, d in enumerate([2, 2, 1, 3, 2], start=1)
    ]
    return make_audit_run(results=results)
