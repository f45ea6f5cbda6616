"""
Audit Run Loader

Loads audit run documents from mappings or JSON/YAML files and converts
them to the frozen AuditRun model.

The loader does not reconcile precomputed summary fields with the
results; that disagreement is left visible to the engine.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from ..documents import DOCUMENT_ERRORS, load_document
from ..exceptions import AuditRunLoadError, AuditRunValidationError
from ..models import (
    AuditAction,
    AuditResult,
    AuditRun,
    DeviationType,
    RunStatus,
    TaskDifficulty,
)
from .schema import AuditResultSchema, AuditRunSchema, validate_audit_run

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_result(schema: AuditResultSchema) -> AuditResult:
    """Convert AuditResultSchema to AuditResult model."""
    return AuditResult(
        id=schema.id,
        submission_id=schema.submission_id,
        user_id=schema.user_id,
        user_score=schema.user_score,
        ai_score=schema.ai_score,
        deviation=schema.deviation,
        deviation_type=DeviationType(schema.deviation_type),
        suggested_action=AuditAction(schema.suggested_action),
        action_taken=AuditAction(schema.action_taken) if schema.action_taken else None,
        task_title=schema.task_title,
        skill_area=schema.skill_area,
        task_difficulty=TaskDifficulty(schema.task_difficulty),
        timestamp=schema.timestamp,
        reviewer=schema.reviewer,
        notes=schema.notes,
    )


def _convert_run(schema: AuditRunSchema) -> AuditRun:
    """Convert AuditRunSchema to AuditRun model."""
    return AuditRun(
        id=schema.id,
        reviewer=schema.reviewer,
        started_at=schema.started_at,
        completed_at=schema.completed_at,
        task_title=schema.task_title,
        task_difficulty=TaskDifficulty(schema.task_difficulty),
        skill_area=schema.skill_area,
        status=RunStatus(schema.status),
        total_submissions=schema.total_submissions,
        average_deviation=schema.average_deviation,
        critical_flags=schema.critical_flags,
        results=tuple(_convert_result(r) for r in schema.results),
    )


# =============================================================================
# Public API
# =============================================================================

def parse_audit_run(data: Any, source: str = "") -> AuditRun:
    """
    Validate and convert an audit run document.

    Args:
        data: Parsed document (camelCase or snake_case keys)
        source: Origin used in error details

    Returns:
        Frozen AuditRun

    Raises:
        AuditRunValidationError: If the document fails validation
    """
    if not isinstance(data, dict):
        raise AuditRunValidationError(
            message="Audit run document must be a mapping",
            details={"source": source, "type": type(data).__name__},
        )

    try:
        schema = validate_audit_run(data)
    except ValidationError as e:
        raise AuditRunValidationError(
            message=f"Audit run validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_url=False), "source": source},
            run_id=data.get("id"),
        ) from e

    return _convert_run(schema)


def load_audit_run(path: Union[str, Path]) -> AuditRun:
    """
    Load an audit run from a JSON or YAML file.

    Raises:
        AuditRunLoadError: If the file cannot be read or parsed
        AuditRunValidationError: If validation fails
    """
    path = Path(path)
    logger.debug(f"Loading audit run from {path}")

    try:
        data = load_document(path)
    except DOCUMENT_ERRORS as e:
        raise AuditRunLoadError(
            message=f"Failed to load audit run: {e}",
            details={"path": str(path), "error": str(e)},
        ) from e

    return parse_audit_run(data, source=str(path))
