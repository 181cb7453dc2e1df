"""
Module: questions

Purpose:
    Provides the immutable exam definition types: Question, Option and
    Passage. These are produced by a question set provider and are never
    mutated by the engine.

Key Classes:
    - QuestionType: MCQ or TITA (type-in-the-answer)
    - Option: Labelled choice of an MCQ question
    - Question: One gradable item, optionally grouped under a passage
    - Passage: Shared reading context referenced by questions

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.question_set.QuestionSet
    - engine.scoring
    - engine.navigation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QuestionType(str, Enum):
    """Kind of question, decides which marking bucket applies."""

    MCQ = "MCQ"
    TITA = "TITA"


@dataclass(frozen=True, slots=True)
class Option:
    """
    A labelled MCQ choice.

    Attributes:
        label: Choice label as typed by the candidate, e.g. "B"
        text: Choice text shown next to the label
    """

    label: str
    text: str = ""

    def to_dict(self) -> dict:
        return {"label": self.label, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> Option:
        return cls(label=str(data["label"]), text=str(data.get("text", "")))


@dataclass(frozen=True)
class Question:
    """
    A single exam question (immutable).

    Attributes:
        qid: Unique positive integer within a question set
        qtype: MCQ or TITA
        text: Question stem
        options: Ordered choices, only meaningful for MCQ
        answer_key: Expected answer, None when the question cannot be graded
        passage_id: Passage this question belongs to, if any
        section: Optional section tag, used for filtering only
        topic: Optional topic tag, used for filtering only
        page_ref: Source page the question was taken from

    Invariants:
        - qid > 0
        - section/topic never influence scoring

    Example:
        >>> q = Question(qid=1, qtype=QuestionType.MCQ, answer_key="B")
        >>> q.is_gradable
        True
    """

    qid: int
    qtype: QuestionType
    text: str = ""
    options: tuple[Option, ...] = ()
    answer_key: Optional[str] = None
    passage_id: Optional[int] = None
    section: Optional[str] = None
    topic: Optional[str] = None
    page_ref: int = 0

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if isinstance(self.qid, bool) or not isinstance(self.qid, int):
            raise ValueError(f"qid must be an integer: {self.qid!r}")
        if self.qid <= 0:
            raise ValueError(f"qid must be positive: {self.qid}")
        if not isinstance(self.qtype, QuestionType):
            # Accept raw strings from JSON payloads
            object.__setattr__(self, "qtype", QuestionType(self.qtype))

    @property
    def is_gradable(self) -> bool:
        """True when an answer key is available."""
        return self.answer_key is not None

    def option_labels(self) -> list[str]:
        """Labels of the MCQ options in display order."""
        return [opt.label for opt in self.options]

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Optional tags are only written when set.
        """
        d = {
            "qid": self.qid,
            "qtype": self.qtype.value,
            "text": self.text,
            "options": [opt.to_dict() for opt in self.options],
            "answer_key": self.answer_key,
            "passage_id": self.passage_id,
            "page_ref": self.page_ref,
        }
        if self.section:
            d["section"] = self.section
        if self.topic:
            d["topic"] = self.topic
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """
        Deserialize from dictionary.

        Args:
            data: Dict representation

        Returns:
            Question instance

        Raises:
            ValueError: If qid or qtype are invalid
        """
        return cls(
            qid=data["qid"],
            qtype=QuestionType(data["qtype"]),
            text=data.get("text", ""),
            options=tuple(Option.from_dict(o) for o in data.get("options", [])),
            answer_key=data.get("answer_key"),
            passage_id=data.get("passage_id"),
            section=data.get("section") or None,
            topic=data.get("topic") or None,
            page_ref=data.get("page_ref", 0),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Question({self.qid}, {self.qtype.value}, key={self.answer_key!r})"


@dataclass(frozen=True)
class Passage:
    """
    Shared reading context referenced by zero or more questions.

    Attributes:
        passage_id: Identifier referenced by Question.passage_id
        text: Full passage text
        title: Optional heading
        page_span: First and last source page
    """

    passage_id: int
    text: str
    title: Optional[str] = None
    page_span: tuple[int, int] = (0, 0)

    def to_dict(self) -> dict:
        d = {
            "passage_id": self.passage_id,
            "text": self.text,
            "page_span": list(self.page_span),
        }
        if self.title:
            d["title"] = self.title
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Passage:
        span = data.get("page_span") or (0, 0)
        return cls(
            passage_id=data["passage_id"],
            text=data.get("text", ""),
            title=data.get("title"),
            page_span=(int(span[0]), int(span[1])),
        )
