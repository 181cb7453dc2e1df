"""
Unit Tests for Scoring
"""

import pytest

from exam_engine.core.models import (
    Attempt,
    MarkDelta,
    MarkingScheme,
    Question,
    QuestionSet,
    QuestionSetMeta,
    QuestionType,
    Score,
)
from exam_engine.engine.scoring import Outcome, answered_count, grade_question, review, score


def make_set(*questions, marking=None) -> QuestionSet:
    return QuestionSet(
        meta=QuestionSetMeta(marking=marking or MarkingScheme.cat_default()),
        questions=tuple(questions),
    )


def make_attempt(qs: QuestionSet, answers: dict) -> Attempt:
    attempt = Attempt.fresh(qs.qids, upload_id="u", user_id="local_user", duration_sec=60)
    attempt.answers.update(answers)
    return attempt


class TestScore:
    """Tests for score()."""

    def test_score_when_mcq_correct_and_tita_wrong_then_raw_three(self):
        """Correct MCQ plus wrong TITA scores 3."""
        qs = make_set(
            Question(1, QuestionType.MCQ, answer_key="B"),
            Question(2, QuestionType.TITA, answer_key="42"),
        )
        attempt = make_attempt(qs, {1: "B", 2: "43"})

        assert score(attempt, qs) == Score(
            raw=3, mcq_correct=1, mcq_wrong=0, tita_correct=0, total_answered=2
        )

    def test_score_when_no_answer_key_then_counts_answered_only(self):
        """An ungradable answer only counts as answered."""
        qs = make_set(
            Question(1, QuestionType.MCQ, answer_key="B"),
            Question(2, QuestionType.TITA, answer_key="42"),
            Question(3, QuestionType.MCQ, answer_key=None),
        )
        attempt = make_attempt(qs, {1: "B", 2: "43", 3: "A"})

        result = score(attempt, qs)

        assert result.raw == 3
        assert result.total_answered == 3
        assert result.mcq_wrong == 0

    def test_score_when_mcq_wrong_then_negative_mark(self):
        """A wrong MCQ applies the negative delta."""
        qs = make_set(Question(1, QuestionType.MCQ, answer_key="B"))

        result = score(make_attempt(qs, {1: "D"}), qs)

        assert result.raw == -1
        assert result.mcq_wrong == 1

    def test_score_when_tita_wrong_delta_set_then_still_not_penalized(self):
        """Wrong TITA answers are never penalized."""
        marking = MarkingScheme(mcq=MarkDelta(3, -1), tita=MarkDelta(3, -1))
        qs = make_set(Question(1, QuestionType.TITA, answer_key="42"), marking=marking)

        result = score(make_attempt(qs, {1: "7"}), qs)

        assert result.raw == 0
        assert result.total_answered == 1

    def test_score_when_case_and_whitespace_differ_then_correct(self):
        """Comparison ignores case and surrounding whitespace."""
        qs = make_set(
            Question(1, QuestionType.MCQ, answer_key="b"),
            Question(2, QuestionType.TITA, answer_key=" Forty "),
        )

        result = score(make_attempt(qs, {1: " B ", 2: "forty"}), qs)

        assert result.mcq_correct == 1
        assert result.tita_correct == 1
        assert result.raw == 6

    def test_score_when_whitespace_answer_then_unanswered(self):
        """Whitespace answers count for nothing."""
        qs = make_set(Question(1, QuestionType.MCQ, answer_key="B"))

        result = score(make_attempt(qs, {1: "   "}), qs)

        assert result == Score()

    def test_score_when_called_twice_then_identical(self, question_set):
        """Scoring is pure."""
        attempt = make_attempt(question_set, {1: "B", 2: "A", 3: "42", 4: "x", 5: ""})

        first = score(attempt, question_set)
        second = score(attempt, question_set)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_score_when_questions_reordered_then_same_result(self, question_set):
        """Question order does not change the score."""
        answers = {1: "B", 2: "A", 3: "42", 4: "x"}
        reordered = QuestionSet(
            meta=question_set.meta,
            questions=tuple(reversed(question_set.questions)),
        )

        assert score(make_attempt(question_set, answers), question_set) == score(
            make_attempt(reordered, answers), reordered
        )

    def test_score_when_answers_contain_unknown_qid_then_ignored(self):
        """Answers for unknown qids are ignored."""
        qs = make_set(Question(1, QuestionType.MCQ, answer_key="B"))

        result = score(make_attempt(qs, {1: "B", 77: "B"}), qs)

        assert result.total_answered == 1


class TestGradeAndReview:
    """Tests for grade_question(), review() and answered_count()."""

    @pytest.mark.parametrize(
        "key, answer, expected",
        [
            ("B", "B", Outcome.CORRECT),
            ("B", "C", Outcome.INCORRECT),
            ("B", None, Outcome.UNANSWERED),
            ("B", "  ", Outcome.UNANSWERED),
            (None, "A", Outcome.UNGRADABLE),
            (None, "", Outcome.UNANSWERED),
        ],
    )
    def test_grade_question_outcomes(self, key, answer, expected):
        """grade_question() covers every outcome."""
        question = Question(1, QuestionType.MCQ, answer_key=key)

        assert grade_question(question, answer) is expected

    def test_review_when_submitted_then_agrees_with_score(self, question_set):
        """Review rows agree with the score."""
        attempt = make_attempt(question_set, {1: "B", 2: "A", 3: "42", 4: "x"})

        rows = review(attempt, question_set)
        result = score(attempt, question_set)

        assert [row.qid for row in rows] == [1, 2, 3, 4, 5]
        outcomes = {row.qid: row.outcome for row in rows}
        assert outcomes == {
            1: Outcome.CORRECT,
            2: Outcome.INCORRECT,
            3: Outcome.CORRECT,
            4: Outcome.UNGRADABLE,
            5: Outcome.UNANSWERED,
        }
        assert sum(1 for row in rows if row.outcome is not Outcome.UNANSWERED) == result.total_answered
        assert rows[4].answer == ""

    def test_answered_count_when_blank_values_then_skipped(self):
        """Blank answers are not counted."""
        assert answered_count({1: "A", 2: " ", 3: "", 4: "42"}) == 2
