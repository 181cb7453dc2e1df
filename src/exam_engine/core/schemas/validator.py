"""
Schema Validation Utilities

Validates question set payloads and persisted attempt blobs.

Two layers run on every payload:
- JSON Schema (``*.schema.json`` next to this module) via ``jsonschema``
  for structure and types
- Semantic checks the schema cannot express (non-empty question list,
  unique qids)

Validation fails fast: the first schema violation is raised with all
collected messages attached.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import InvalidQuestionSet, ValidationError


# Schema version constants
ATTEMPT_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _schema_errors(data: Any, name: str) -> list[jsonschema.ValidationError]:
    schema = _load_schema(name)
    validator = jsonschema.Draft202012Validator(schema)
    return sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))


def _format_path(error: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in error.absolute_path)


def validate_question_set(data: dict[str, Any]) -> None:
    """
    Validate a question set payload.

    Args:
        data: Question set dictionary (as loaded from JSON)

    Raises:
        InvalidQuestionSet: If the payload is malformed, has no questions,
            or repeats a qid
    """
    errors = _schema_errors(data, "question_set")
    if errors:
        first = errors[0]
        raise InvalidQuestionSet(
            f"Schema validation failed: {first.message}",
            path=_format_path(first),
            errors=[f"{_format_path(e) or '<root>'}: {e.message}" for e in errors],
        )

    qids = [q["qid"] for q in data["questions"]]
    check_qids(qids)


def check_qids(qids: list[int]) -> None:
    """
    Semantic checks shared by payload and model validation.

    Raises:
        InvalidQuestionSet: If ``qids`` is empty or contains duplicates
    """
    if not qids:
        raise InvalidQuestionSet(
            "No gradable content: question set has no questions",
            path="questions",
        )

    duplicates = sorted(qid for qid, count in Counter(qids).items() if count > 1)
    if duplicates:
        raise InvalidQuestionSet(
            f"Duplicate qids in question set: {duplicates}",
            path="questions",
            errors=[f"Duplicate qid: {qid}" for qid in duplicates],
        )


def validate_attempt_blob(data: Any) -> None:
    """
    Validate a persisted attempt blob.

    Args:
        data: Decoded JSON blob

    Raises:
        ValidationError: If the blob does not match the attempt schema or
            was written by an unsupported schema version
    """
    errors = _schema_errors(data, "attempt_blob")
    if errors:
        first = errors[0]
        raise ValidationError(
            f"Schema validation failed: {first.message}",
            path=_format_path(first),
            errors=[e.message for e in errors],
        )

    version = data.get("schema_version")
    if version != ATTEMPT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported attempt schema version: {version} (expected {ATTEMPT_SCHEMA_VERSION})",
            path="schema_version",
        )
