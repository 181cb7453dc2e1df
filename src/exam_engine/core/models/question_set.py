"""
Module: question_set

Purpose:
    Provides the QuestionSet dataclass: the immutable exam definition handed
    to the engine by a question set provider.

Key Classes:
    - QuestionSetMeta: Title, marking scheme and provenance
    - QuestionSet: Questions, passages and meta with lookup helpers

Used By:
    - providers
    - engine.session
    - engine.scoring
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

from .marking import MarkingScheme
from .questions import Passage, Question


@dataclass(frozen=True)
class QuestionSetMeta:
    """
    Descriptive data for a question set.

    Attributes:
        title: Human readable name of the paper
        marking: Marking scheme applied at submission
        year: Exam year, if known
        source_url: Where the paper came from, if known
    """

    title: str = ""
    marking: MarkingScheme = field(default_factory=MarkingScheme)
    year: Optional[int] = None
    source_url: Optional[str] = None

    def to_dict(self) -> dict:
        d: dict = {"title": self.title, "marking": self.marking.to_dict()}
        if self.year is not None:
            d["year"] = self.year
        if self.source_url:
            d["source_url"] = self.source_url
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuestionSetMeta:
        marking = data.get("marking")
        return cls(
            title=data.get("title", ""),
            marking=MarkingScheme.from_dict(marking) if marking else MarkingScheme(),
            year=data.get("year"),
            source_url=data.get("source_url"),
        )


@dataclass(frozen=True)
class QuestionSet:
    """
    Complete, read-only exam definition.

    Question order is the display order. Counts are always calculated,
    never stored.

    Attributes:
        meta: Title and marking scheme
        questions: Questions in display order
        passages: Shared reading contexts
    """

    meta: QuestionSetMeta
    questions: tuple[Question, ...]
    passages: tuple[Passage, ...] = ()

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def total_passages(self) -> int:
        return len(self.passages)

    @cached_property
    def qids(self) -> tuple[int, ...]:
        """Question ids in display order."""
        return tuple(q.qid for q in self.questions)

    @cached_property
    def _by_qid(self) -> dict[int, Question]:
        return {q.qid: q for q in self.questions}

    @cached_property
    def _passages_by_id(self) -> dict[int, Passage]:
        return {p.passage_id: p for p in self.passages}

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    def get_question(self, qid: int) -> Optional[Question]:
        return self._by_qid.get(qid)

    def has_question(self, qid: int) -> bool:
        return qid in self._by_qid

    def get_passage(self, passage_id: int) -> Optional[Passage]:
        return self._passages_by_id.get(passage_id)

    def passage_for(self, question: Question) -> Optional[Passage]:
        """Passage shown alongside ``question``, if it has one."""
        if question.passage_id is None:
            return None
        return self.get_passage(question.passage_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "meta": self.meta.to_dict(),
            "passages": [p.to_dict() for p in self.passages],
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionSet:
        return cls(
            meta=QuestionSetMeta.from_dict(data.get("meta", {})),
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
            passages=tuple(Passage.from_dict(p) for p in data.get("passages", [])),
        )

    def __repr__(self) -> str:
        return (
            f"QuestionSet({self.meta.title!r}, questions={self.total_questions}, "
            f"passages={self.total_passages})"
        )
