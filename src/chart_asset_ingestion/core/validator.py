"""JSON Schema validation for chart manifests.

This module loads the formal JSON Schema and validates meta.json contents
before they are written.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from jsonschema.validators import validator_for

from .types import ChartMeta

# Path to the schema file shipped with the package
# src/chart_asset_ingestion/core/validator.py -> src/chart_asset_ingestion/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "meta.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def collect_meta_errors(meta: ChartMeta) -> list[str]:
    """List every problem in a chart manifest.

    Schema violations are reported in document order, one line each, as
    "<field path>: <message>". A descending range is reported too.

    Args:
        meta: The manifest dictionary to check

    Returns:
        Error lines; empty if the manifest is valid
    """
    schema = load_schema()
    validator = validator_for(schema)(schema)

    errors = []
    for error in sorted(validator.iter_errors(meta), key=lambda e: list(map(str, e.path))):
        location = " -> ".join(str(p) for p in error.path) or "root"
        errors.append(f"{location}: {error.message}")

    chart_range = meta.get("range")
    if isinstance(chart_range, list) and len(chart_range) == 2 and chart_range[0] > chart_range[1]:
        errors.append(f"range: must be ascending, got {chart_range}")

    return errors


def validate_meta(meta: ChartMeta) -> None:
    """Validate a chart manifest against the JSON Schema.

    Args:
        meta: The manifest dictionary to validate

    Raises:
        ValidationError: If the manifest is invalid; the message lists all problems
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    errors = collect_meta_errors(meta)
    if errors:
        raise ValidationError(f"invalid meta.json for {meta.get('id')!r}: " + "; ".join(errors))
