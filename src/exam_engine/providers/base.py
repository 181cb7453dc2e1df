"""
Question set providers.

A provider hands the engine a validated, read-only QuestionSet. Where the
set comes from (a parsed upload, a bundled JSON file, a test fixture) is
the provider's business.
"""

from __future__ import annotations

from typing import Protocol

from ..core.models.question_set import QuestionSet
from ..core.schemas.validator import check_qids


class QuestionSetProvider(Protocol):
    def load(self) -> QuestionSet: ...


class StaticQuestionSetProvider:
    """Provider for a QuestionSet that is already in memory."""

    def __init__(self, question_set: QuestionSet) -> None:
        check_qids(list(question_set.qids))
        self._question_set = question_set

    def load(self) -> QuestionSet:
        return self._question_set
