"""
Unit Tests for Marking Scheme

Tests for MarkDelta and MarkingScheme.
"""

import pytest

from exam_engine.core.models import MarkDelta, MarkingScheme, QuestionType


class TestMarkDelta:
    """Tests for MarkDelta validation."""

    def test_create_when_numbers_then_succeeds(self):
        """Integer deltas are accepted."""
        delta = MarkDelta(correct=3, wrong=-1)

        assert delta.correct == 3
        assert delta.wrong == -1

    def test_create_when_float_then_succeeds(self):
        """Fractional deltas are accepted."""
        assert MarkDelta(correct=1.5, wrong=-0.5).wrong == -0.5

    def test_create_when_bool_then_raises(self):
        """Booleans are not points."""
        with pytest.raises(ValueError, match="correct"):
            MarkDelta(correct=True)

    def test_create_when_string_then_raises(self):
        """Strings are not points."""
        with pytest.raises(ValueError, match="wrong"):
            MarkDelta(correct=3, wrong="-1")

    def test_from_dict_when_wrong_missing_then_zero(self):
        """A missing wrong delta defaults to 0."""
        assert MarkDelta.from_dict({"correct": 2}) == MarkDelta(2, 0)


class TestMarkingScheme:
    """Tests for MarkingScheme."""

    def test_cat_default_when_created_then_plus3_minus1_and_plus3_zero(self):
        """CAT default is +3/-1 for MCQ and +3/0 for TITA."""
        scheme = MarkingScheme.cat_default()

        assert scheme.mcq == MarkDelta(3, -1)
        assert scheme.tita == MarkDelta(3, 0)

    def test_for_type_when_tita_then_tita_delta(self):
        """for_type() picks the bucket of the question type."""
        scheme = MarkingScheme(mcq=MarkDelta(4, -1), tita=MarkDelta(2, 0))

        assert scheme.for_type(QuestionType.TITA) == MarkDelta(2, 0)
        assert scheme.for_type(QuestionType.MCQ) == MarkDelta(4, -1)

    def test_to_dict_when_roundtrip_then_equal(self):
        """Marking scheme survives a dict round trip."""
        scheme = MarkingScheme(mcq=MarkDelta(4, -1), tita=MarkDelta(2, 0))

        assert MarkingScheme.from_dict(scheme.to_dict()) == scheme
