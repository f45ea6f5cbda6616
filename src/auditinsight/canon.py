"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing and comparison:
- Sorted keys (lexicographic)
- No whitespace
- UTF-8 encoding

Used to fingerprint insight results so two analyses of the same run can
be compared while ignoring when, and how fast, they were produced.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from .models import AuditInsightsResult

# Fields that legitimately differ between two analyses of the same run
VOLATILE_FIELDS = frozenset({"analysisTimestamp", "analysisDuration"})


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - datetime/date: ISO 8601 format
    - Enum: value
    - dataclass: dict
    - tuple/set/frozenset: list (sets sorted)
    """
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        to_dict = getattr(obj, "to_dict", None)
        return to_dict() if callable(to_dict) else asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """Hex-encoded SHA-256 of the canonical JSON representation."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def insights_fingerprint(insights: AuditInsightsResult) -> str:
    """
    Content hash of an insight result without its volatile metadata.

    Two analyses of an identical, unmodified run have equal fingerprints.
    """
    payload = {
        key: value
        for key, value in insights.to_dict().items()
        if key not in VOLATILE_FIELDS
    }
    return content_hash(payload)
