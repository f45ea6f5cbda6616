"""
Document Files

Reads JSON or YAML documents for the threshold profile and audit run
loaders. Callers wrap DOCUMENT_ERRORS in their own load error.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

DOCUMENT_ERRORS = (OSError, yaml.YAMLError, json.JSONDecodeError)


def load_document(path: Path) -> Any:
    """Load data from a .json file, or any other suffix as YAML."""
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        # YAML is a superset of JSON, so anything else goes through yaml
        return yaml.safe_load(f)
