"""
Deviation Calculator

Aggregate statistics and categorical counts over one run's results.

Every function here requires a non-empty result list; the statistics
entry point raises DegenerateInputError rather than returning zeros.
"""
from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Optional, Sequence, TypeVar

from ..exceptions import DegenerateInputError
from ..models import (
    ActionDistribution,
    AuditAction,
    AuditResult,
    DeviationBreakdown,
    DeviationStats,
    DeviationType,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

FLAG_ACTIONS = frozenset({AuditAction.FLAG_FOR_REVIEW, AuditAction.ESCALATE})


def require_results(results: Sequence[AuditResult], run_id: Optional[str] = None) -> None:
    """Raise DegenerateInputError for an empty result list."""
    if not results:
        raise DegenerateInputError(
            message="Audit run has no results; insights require at least one submission",
            details={"result_count": 0},
            run_id=run_id,
        )


def _coerce(enum_cls: type[E], value: object, submission_id: str) -> Optional[E]:
    """Map a raw value to an enum member, or None with a warning."""
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            f"Unrecognized {enum_cls.__name__} {value!r} on submission "
            f"{submission_id}; not counted"
        )
        return None


# =============================================================================
# Statistics
# =============================================================================

def calculate_deviation_stats(results: Sequence[AuditResult]) -> DeviationStats:
    """
    Compute mean, max, min and median of the ``deviation`` field.

    The median is the element at index ``n // 2`` of the ascending sort.
    For an even count that is the upper of the two middle values, e.g.
    ``[1, 2, 3, 4]`` gives 3.

    Raises:
        DegenerateInputError: If results is empty
    """
    require_results(results)
    deviations = sorted(r.deviation for r in results)
    return DeviationStats(
        average=sum(deviations) / len(deviations),
        max=deviations[-1],
        min=deviations[0],
        median=deviations[len(deviations) // 2],
    )


def average_deviation(results: Sequence[AuditResult]) -> float:
    """Mean deviation of a non-empty result list."""
    return sum(r.deviation for r in results) / len(results)


# =============================================================================
# Categorical Counts
# =============================================================================

def calculate_deviation_breakdown(results: Sequence[AuditResult]) -> DeviationBreakdown:
    """Count results per deviation type. Unknown types are skipped."""
    counts: Counter[DeviationType] = Counter()
    for result in results:
        deviation_type = _coerce(DeviationType, result.deviation_type, result.submission_id)
        if deviation_type is not None:
            counts[deviation_type] += 1
    return DeviationBreakdown.from_counts(counts)


def calculate_action_distribution(results: Sequence[AuditResult]) -> ActionDistribution:
    """Count results per operative action. Unknown actions are skipped."""
    counts: Counter[AuditAction] = Counter()
    for result in results:
        action = _coerce(AuditAction, result.operative_action, result.submission_id)
        if action is not None:
            counts[action] += 1
    return ActionDistribution.from_counts(counts)


def get_critical_submissions(results: Sequence[AuditResult]) -> list[str]:
    """Submission IDs labeled critical, in run order."""
    return [r.submission_id for r in results if r.is_critical]


def count_critical(results: Sequence[AuditResult]) -> int:
    return sum(1 for r in results if r.is_critical)


def count_flags_triggered(results: Sequence[AuditResult]) -> int:
    """Results whose suggested action was a flag or an escalation."""
    return sum(1 for r in results if r.suggested_action in FLAG_ACTIONS)


def count_overrides(results: Sequence[AuditResult]) -> int:
    """Results the reviewer actually overrode."""
    return sum(1 for r in results if r.action_taken == AuditAction.OVERRIDE)
