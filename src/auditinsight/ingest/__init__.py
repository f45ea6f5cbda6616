"""
Audit Run Ingestion

Validates audit run documents and converts them to engine models.
"""
from __future__ import annotations

from .schema import (
    AuditResultSchema,
    AuditRunSchema,
    validate_audit_run,
)
from .loader import (
    load_audit_run,
    parse_audit_run,
)

__all__ = [
    "AuditResultSchema",
    "AuditRunSchema",
    "validate_audit_run",
    "load_audit_run",
    "parse_audit_run",
]
