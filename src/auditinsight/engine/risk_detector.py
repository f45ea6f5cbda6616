"""
Risk Detector

Scans a run for four independent risk signatures. Each check produces
at most one RiskIndicator; any combination may fire together.

Signatures:
- score_inflation: large deviation on a high human score
- ai_bias: large deviation on a low AI score
- reviewer_pattern: reviewers overriding a large share of the run
- skill_gap: a large share of critical deviations
"""
from __future__ import annotations

from typing import Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, RiskThresholds
from ..models import (
    AuditAction,
    AuditResult,
    RiskIndicator,
    RiskSeverity,
    RiskType,
)


def format_score(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def format_percent(rate: float) -> str:
    return f"{rate * 100:.1f}%"


def _severity(exceeds: bool) -> RiskSeverity:
    return RiskSeverity.HIGH if exceeds else RiskSeverity.MEDIUM


# =============================================================================
# Signature Checks
# =============================================================================

def detect_score_inflation(
    results: Sequence[AuditResult],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS.risk,
) -> Optional[RiskIndicator]:
    inflated = [
        r for r in results
        if r.deviation >= thresholds.inflation_min_deviation
        and r.user_score >= thresholds.inflation_min_user_score
    ]
    if not inflated:
        return None
    return RiskIndicator(
        type=RiskType.SCORE_INFLATION,
        severity=_severity(len(inflated) > len(results) * thresholds.inflation_high_share),
        description="Potential score inflation detected",
        evidence=tuple(
            f"User score {format_score(r.user_score)} vs AI score {format_score(r.ai_score)} "
            f"(deviation: {format_score(r.deviation)})"
            for r in inflated
        ),
        affected_submissions=tuple(r.submission_id for r in inflated),
    )


def detect_ai_bias(
    results: Sequence[AuditResult],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS.risk,
) -> Optional[RiskIndicator]:
    biased = [
        r for r in results
        if r.deviation >= thresholds.ai_bias_min_deviation
        and r.ai_score <= thresholds.ai_bias_max_ai_score
    ]
    if not biased:
        return None
    return RiskIndicator(
        type=RiskType.AI_BIAS,
        severity=_severity(len(biased) > len(results) * thresholds.ai_bias_high_share),
        description="Potential AI scoring bias detected",
        evidence=tuple(
            f"AI score {format_score(r.ai_score)} significantly lower than "
            f"user score {format_score(r.user_score)}"
            for r in biased
        ),
        affected_submissions=tuple(r.submission_id for r in biased),
    )


def detect_reviewer_pattern(
    results: Sequence[AuditResult],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS.risk,
) -> Optional[RiskIndicator]:
    overridden = [r for r in results if r.action_taken == AuditAction.OVERRIDE]
    override_rate = len(overridden) / len(results)
    if override_rate < thresholds.override_min_rate:
        return None
    return RiskIndicator(
        type=RiskType.REVIEWER_PATTERN,
        severity=_severity(override_rate > thresholds.override_high_rate),
        description="High override rate detected",
        evidence=(f"Override rate: {format_percent(override_rate)}",),
        affected_submissions=tuple(r.submission_id for r in overridden),
    )


def detect_skill_gap(
    results: Sequence[AuditResult],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS.risk,
) -> Optional[RiskIndicator]:
    critical = [r for r in results if r.is_critical]
    rate = len(critical) / len(results)
    if rate < thresholds.skill_gap_min_critical_rate:
        return None
    return RiskIndicator(
        type=RiskType.SKILL_GAP,
        severity=_severity(rate > thresholds.skill_gap_high_critical_rate),
        description="High critical rate indicating potential skill gaps",
        evidence=(f"Critical rate: {format_percent(rate)}",),
        affected_submissions=tuple(r.submission_id for r in critical),
    )


RISK_CHECKS = (
    detect_score_inflation,
    detect_ai_bias,
    detect_reviewer_pattern,
    detect_skill_gap,
)


def detect_risk_indicators(
    results: Sequence[AuditResult],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS.risk,
) -> list[RiskIndicator]:
    """Run every signature check; indicators keep check order."""
    indicators: list[RiskIndicator] = []
    for check in RISK_CHECKS:
        indicator = check(results, thresholds)
        if indicator is not None:
            indicators.append(indicator)
    return indicators
