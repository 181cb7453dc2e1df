"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    ATTEMPT_SCHEMA_VERSION,
    check_qids,
    validate_attempt_blob,
    validate_question_set,
)

__all__ = [
    "ATTEMPT_SCHEMA_VERSION",
    "check_qids",
    "validate_attempt_blob",
    "validate_question_set",
]
