# SPDX-License-Identifier: Apache-2.0
"""
GraphQL response envelope validation (JSON Schema Draft 2020-12).

The envelope schema ships with the package under ``schemas/``. The validator
is built once and reused.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from countries_suite.errors import ShapeError

ENVELOPE_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "graphql.response.json"

_VALIDATOR_LOCK = threading.Lock()
_VALIDATOR: Optional[Draft202012Validator] = None


def get_validator() -> Draft202012Validator:
    """Load, check and cache the envelope schema validator."""
    global _VALIDATOR
    with _VALIDATOR_LOCK:
        if _VALIDATOR is None:
            schema = json.loads(ENVELOPE_SCHEMA_PATH.read_text(encoding="utf-8"))
            Draft202012Validator.check_schema(schema)
            _VALIDATOR = Draft202012Validator(schema)
        return _VALIDATOR


def envelope_errors(payload: Any) -> List[ValidationError]:
    """All schema violations for ``payload``, ordered by location."""
    return sorted(get_validator().iter_errors(payload), key=lambda e: list(e.absolute_path))


def validate_envelope(payload: Any, context: str = "response") -> None:
    """Raise ShapeError describing every violation of the envelope schema."""
    problems = envelope_errors(payload)
    if not problems:
        return
    lines = []
    for err in problems:
        where = "/".join(str(p) for p in err.absolute_path) or "<root>"
        lines.append(f"  - at {where}: {err.message}")
    raise ShapeError(
        f"{context}: not a valid GraphQL response envelope:\n" + "\n".join(lines),
        details={"violations": len(problems)},
    )
