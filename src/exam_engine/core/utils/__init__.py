"""
Utils Package

Serialization helpers for question sets and persisted attempts.
"""

from .serialization import (
    PersistedAttempt,
    serialize_attempt,
    deserialize_attempt,
    deserialize_question_set,
    load_question_set_json,
    save_question_set_json,
)

__all__ = [
    "PersistedAttempt",
    "serialize_attempt",
    "deserialize_attempt",
    "deserialize_question_set",
    "load_question_set_json",
    "save_question_set_json",
]
