"""
Module: engine.scoring

Purpose:
    Grades a submitted attempt against the question set's marking scheme.
    Everything here is pure: no I/O, no mutation, identical output for
    identical input.

Key Functions:
    - score(attempt, question_set): Final Score
    - grade_question(question, answer): Outcome for one question
    - review(attempt, question_set): Per-question outcomes for a results screen
    - answered_count(answers): Number of non-blank answers

Scoring rules:
    - An answer counts when its trimmed text is non-empty
    - Correct means trimmed, case-insensitive equality with the answer key
    - A question without an answer key is ungradable: it counts toward
      total_answered and nothing else
    - MCQ: correct adds mcq.correct, incorrect adds mcq.wrong
    - TITA: correct adds tita.correct, incorrect adds nothing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..core.models.attempt import Attempt, Score, is_answered
from ..core.models.question_set import QuestionSet
from ..core.models.questions import Question, QuestionType


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNANSWERED = "unanswered"
    UNGRADABLE = "ungradable"


@dataclass(frozen=True)
class QuestionReview:
    """One row of the results screen."""

    question: Question
    answer: str
    outcome: Outcome

    @property
    def qid(self) -> int:
        return self.question.qid


def _normalize(value: str) -> str:
    return value.strip().lower()


def grade_question(question: Question, answer: Optional[str]) -> Outcome:
    """Classify one answer to ``question``."""
    if not is_answered(answer):
        return Outcome.UNANSWERED
    if question.answer_key is None:
        return Outcome.UNGRADABLE
    if _normalize(answer) == _normalize(question.answer_key):
        return Outcome.CORRECT
    return Outcome.INCORRECT


def score(attempt: Attempt, question_set: QuestionSet) -> Score:
    """
    Compute the final score of an attempt.

    Question order does not affect the result.

    Args:
        attempt: Attempt whose answers are graded
        question_set: Questions and marking scheme

    Returns:
        Score
    """
    mcq_correct = 0
    mcq_wrong = 0
    tita_correct = 0
    total_answered = 0

    for question in question_set.questions:
        outcome = grade_question(question, attempt.answers.get(question.qid))
        if outcome is Outcome.UNANSWERED:
            continue
        total_answered += 1

        if question.qtype is QuestionType.MCQ:
            if outcome is Outcome.CORRECT:
                mcq_correct += 1
            elif outcome is Outcome.INCORRECT:
                mcq_wrong += 1
        elif outcome is Outcome.CORRECT:
            tita_correct += 1

    marking = question_set.meta.marking
    raw = (
        mcq_correct * marking.mcq.correct
        + mcq_wrong * marking.mcq.wrong
        + tita_correct * marking.tita.correct
    )

    return Score(
        raw=raw,
        mcq_correct=mcq_correct,
        mcq_wrong=mcq_wrong,
        tita_correct=tita_correct,
        total_answered=total_answered,
    )


def review(attempt: Attempt, question_set: QuestionSet) -> list[QuestionReview]:
    """Outcome of every question in display order."""
    return [
        QuestionReview(
            question=question,
            answer=attempt.answer_for(question.qid),
            outcome=grade_question(question, attempt.answers.get(question.qid)),
        )
        for question in question_set.questions
    ]


def answered_count(answers: Mapping[int, str]) -> int:
    """Number of answers with non-blank text."""
    return sum(1 for value in answers.values() if is_answered(value))
