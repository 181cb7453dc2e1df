"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import copy

import pytest

from exam_engine.core.errors import InvalidQuestionSet, ValidationError
from exam_engine.core.schemas.validator import (
    ATTEMPT_SCHEMA_VERSION,
    check_qids,
    validate_attempt_blob,
    validate_question_set,
)


class TestValidateQuestionSet:
    """Tests for validate_question_set function."""

    def test_validate_when_valid_then_no_error(self, question_set_payload):
        """A valid payload passes silently."""
        validate_question_set(question_set_payload)

    def test_validate_when_questions_missing_then_raises(self, question_set_payload):
        """questions is a required field."""
        data = copy.deepcopy(question_set_payload)
        del data["questions"]

        with pytest.raises(InvalidQuestionSet, match="Schema validation failed"):
            validate_question_set(data)

    def test_validate_when_qid_zero_then_raises_with_path(self, question_set_payload):
        """The error path points at the offending qid."""
        data = copy.deepcopy(question_set_payload)
        data["questions"][0]["qid"] = 0

        with pytest.raises(InvalidQuestionSet) as exc_info:
            validate_question_set(data)

        assert exc_info.value.path == "questions.0.qid"

    def test_validate_when_qtype_unknown_then_raises(self, question_set_payload):
        """qtype must be MCQ or TITA."""
        data = copy.deepcopy(question_set_payload)
        data["questions"][2]["qtype"] = "ESSAY"

        with pytest.raises(InvalidQuestionSet):
            validate_question_set(data)

    def test_validate_when_no_questions_then_no_gradable_content(self, question_set_payload):
        """An empty question list has no gradable content."""
        data = copy.deepcopy(question_set_payload)
        data["questions"] = []

        with pytest.raises(InvalidQuestionSet, match="No gradable content"):
            validate_question_set(data)

    def test_validate_when_duplicate_qids_then_raises(self, question_set_payload):
        """Repeated qids are listed in errors."""
        data = copy.deepcopy(question_set_payload)
        data["questions"][1]["qid"] = 1

        with pytest.raises(InvalidQuestionSet, match="Duplicate qids") as exc_info:
            validate_question_set(data)

        assert exc_info.value.errors == ["Duplicate qid: 1"]

    def test_invalid_question_set_is_validation_error(self):
        """InvalidQuestionSet can be caught as ValidationError."""
        assert issubclass(InvalidQuestionSet, ValidationError)


class TestCheckQids:
    """Tests for check_qids function."""

    def test_check_when_unique_then_no_error(self):
        """Unique qids in any order pass."""
        check_qids([3, 1, 2])

    def test_check_when_empty_then_raises(self):
        """No qids means no attempt."""
        with pytest.raises(InvalidQuestionSet):
            check_qids([])

    def test_check_when_duplicates_then_lists_each_once(self):
        """Each duplicate is reported once, sorted."""
        with pytest.raises(InvalidQuestionSet, match=r"\[2, 5\]"):
            check_qids([5, 2, 5, 2, 2, 1])


class TestValidateAttemptBlob:
    """Tests for validate_attempt_blob function."""

    @pytest.fixture
    def blob(self) -> dict:
        return {
            "schema_version": ATTEMPT_SCHEMA_VERSION,
            "current_qid": 1,
            "attempt": {
                "upload_id": "u",
                "user_id": "local_user",
                "timer": {"started_at": 0, "duration_sec": 600, "remaining_sec": 120},
                "answers": {"1": "B"},
                "statuses": {"1": "Answered", "2": "Not Visited"},
                "status": "in_progress",
                "score": None,
            },
        }

    def test_validate_when_valid_then_no_error(self, blob):
        """A valid payload passes silently."""
        validate_attempt_blob(blob)

    def test_validate_when_answer_key_not_numeric_then_raises(self, blob):
        """Answer keys must be numeric qids."""
        blob["attempt"]["answers"] = {"q1": "B"}

        with pytest.raises(ValidationError):
            validate_attempt_blob(blob)

    def test_validate_when_not_object_then_raises(self):
        """A blob must be a JSON object."""
        with pytest.raises(ValidationError):
            validate_attempt_blob(["not", "a", "blob"])

    def test_validate_when_version_missing_then_raises(self, blob):
        """schema_version is required."""
        del blob["schema_version"]

        with pytest.raises(ValidationError):
            validate_attempt_blob(blob)
