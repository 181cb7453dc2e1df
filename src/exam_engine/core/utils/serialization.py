"""
Serialization Utilities

Provides to/from JSON utilities for question sets and persisted attempts.

- Models own their ``to_dict()`` / ``from_dict()``
- Functions here add the JSON encoding, schema validation and the
  persisted-blob envelope (schema version + last displayed qid)
- Calculated values (question counts) are never written
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..errors import InvalidQuestionSet, ValidationError
from ..models.attempt import Attempt
from ..models.question_set import QuestionSet
from ..schemas.validator import (
    ATTEMPT_SCHEMA_VERSION,
    validate_attempt_blob,
    validate_question_set,
)


@dataclass(frozen=True)
class PersistedAttempt:
    """An attempt read back from a store, with the question it was showing."""

    attempt: Attempt
    current_qid: Optional[int] = None


# ─────────────────────────────────────────────────────────────────────────────
# Attempt Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_attempt(attempt: Attempt, current_qid: Optional[int] = None) -> str:
    """
    Encode an attempt as the JSON blob kept in a persistence store.

    Args:
        attempt: Attempt to persist
        current_qid: Question displayed when the blob was written

    Returns:
        JSON string
    """
    payload = {
        "schema_version": ATTEMPT_SCHEMA_VERSION,
        "attempt": attempt.to_dict(),
        "current_qid": current_qid,
    }
    return json.dumps(payload, ensure_ascii=False, sort_keys=True)


def deserialize_attempt(blob: str) -> PersistedAttempt:
    """
    Decode a persisted attempt blob.

    Args:
        blob: JSON string written by serialize_attempt()

    Returns:
        PersistedAttempt

    Raises:
        ValidationError: If the blob is not valid JSON or fails the schema
    """
    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError) as e:
        raise ValidationError(f"Attempt blob is not valid JSON: {e}", errors=[str(e)])

    validate_attempt_blob(data)

    try:
        attempt = Attempt.from_dict(data["attempt"])
    except (KeyError, ValueError, TypeError) as e:
        raise ValidationError(f"Attempt blob could not be parsed: {e}", path="attempt", errors=[str(e)])

    return PersistedAttempt(attempt=attempt, current_qid=data.get("current_qid"))


# ─────────────────────────────────────────────────────────────────────────────
# Question Set Serialization
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_question_set(data: dict[str, Any]) -> QuestionSet:
    """
    Build a QuestionSet from a payload after validating it.

    Raises:
        InvalidQuestionSet: If the payload is malformed or has no usable questions
    """
    validate_question_set(data)
    try:
        return QuestionSet.from_dict(data)
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidQuestionSet(f"Question set could not be parsed: {e}", errors=[str(e)])


def load_question_set_json(path: Path) -> QuestionSet:
    """
    Load a question set from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidQuestionSet: If the content is not a usable question set
    """
    if not path.exists():
        raise FileNotFoundError(f"Question set file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidQuestionSet(
                f"Question set is not valid JSON: {e}",
                path=str(path),
                errors=[str(e)],
            )

    return deserialize_question_set(data)


def save_question_set_json(question_set: QuestionSet, path: Path) -> None:
    """Write a question set to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(question_set.to_dict(), f, indent=2, ensure_ascii=False)
