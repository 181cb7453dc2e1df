"""
Module: marking

Purpose:
    Provides the MarkingScheme dataclass: per question type point deltas
    applied uniformly to every question of that type.

Key Classes:
    - MarkDelta: {correct, wrong} points for one question type
    - MarkingScheme: MarkDelta for MCQ and for TITA

Used By:
    - core.models.question_set.QuestionSetMeta
    - engine.scoring
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .questions import QuestionType

Points = Union[int, float]


@dataclass(frozen=True, slots=True)
class MarkDelta:
    """
    Points awarded for one question type.

    Attributes:
        correct: Added to the raw score for a correct answer
        wrong: Added for an incorrect answer (typically <= 0)
    """

    correct: Points
    wrong: Points = 0

    def __post_init__(self) -> None:
        for name in ("correct", "wrong"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number: {value!r}")

    def to_dict(self) -> dict:
        return {"correct": self.correct, "wrong": self.wrong}

    @classmethod
    def from_dict(cls, data: dict) -> MarkDelta:
        return cls(correct=data["correct"], wrong=data.get("wrong", 0))


@dataclass(frozen=True, slots=True)
class MarkingScheme:
    """
    Marking scheme for a question set.

    There are no per-question overrides; every question of a type uses the
    same deltas.

    Example:
        >>> scheme = MarkingScheme.cat_default()
        >>> scheme.mcq.wrong
        -1
    """

    mcq: MarkDelta = field(default_factory=lambda: MarkDelta(correct=3, wrong=-1))
    tita: MarkDelta = field(default_factory=lambda: MarkDelta(correct=3, wrong=0))

    @classmethod
    def cat_default(cls) -> MarkingScheme:
        """+3 / -1 for MCQ, +3 / 0 for TITA."""
        return cls()

    def for_type(self, qtype: QuestionType) -> MarkDelta:
        """Deltas that apply to questions of ``qtype``."""
        if qtype is QuestionType.MCQ:
            return self.mcq
        return self.tita

    def to_dict(self) -> dict:
        return {"mcq": self.mcq.to_dict(), "tita": self.tita.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> MarkingScheme:
        return cls(
            mcq=MarkDelta.from_dict(data["mcq"]),
            tita=MarkDelta.from_dict(data["tita"]),
        )
