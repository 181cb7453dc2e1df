"""
Module: engine.status

Purpose:
    Question status state machine. A pure function of (current status,
    event) with no I/O and no dependency on any other question.

Key Functions:
    - transition(current, event, answered=...): Next status

Key Classes:
    - Visit, SetAnswer, ClearAnswer, ToggleMark: Events

Transition table:

| current \\ event     | Visit       | SetAnswer(v)     | ClearAnswer     | ToggleMark (answered / not)    |
|----------------------|-------------|------------------|-----------------|--------------------------------|
| NotVisited           | NotAnswered | Answered         | NotAnswered     | AnsweredAndMarked / Marked     |
| NotAnswered          | -           | Answered         | NotAnswered     | AnsweredAndMarked / Marked     |
| Answered             | -           | Answered         | NotAnswered     | AnsweredAndMarked / Marked     |
| MarkedForReview      | -           | AnsweredAndMarked| MarkedForReview | Answered / NotAnswered         |
| AnsweredAndMarked    | -           | AnsweredAndMarked| MarkedForReview | Answered                       |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.errors import InvalidTransition
from ..core.models.attempt import QuestionStatus, is_answered


@dataclass(frozen=True, slots=True)
class Visit:
    """Question was displayed."""


@dataclass(frozen=True, slots=True)
class SetAnswer:
    """Answer text changed. A blank value behaves like ClearAnswer."""

    value: str


@dataclass(frozen=True, slots=True)
class ClearAnswer:
    """Answer was cleared."""


@dataclass(frozen=True, slots=True)
class ToggleMark:
    """Marked-for-review flag was flipped."""


Event = Union[Visit, SetAnswer, ClearAnswer, ToggleMark]

_MARKED = (QuestionStatus.MARKED_FOR_REVIEW, QuestionStatus.ANSWERED_AND_MARKED)


def transition(current: QuestionStatus, event: Event, *, answered: bool = False) -> QuestionStatus:
    """
    Compute the next status of a question.

    Args:
        current: Status before the event
        event: What happened to the question
        answered: Whether the answer map holds a non-empty value for the
            question when the event happens. Only ToggleMark reads it.

    Returns:
        Status after the event

    Raises:
        InvalidTransition: If ``current`` is not a QuestionStatus or
            ``event`` is not a known event
    """
    if not isinstance(current, QuestionStatus):
        raise InvalidTransition(current, event)

    if isinstance(event, Visit):
        if current is QuestionStatus.NOT_VISITED:
            return QuestionStatus.NOT_ANSWERED
        return current

    if isinstance(event, SetAnswer):
        if not is_answered(event.value):
            return _clear(current)
        if current in _MARKED:
            return QuestionStatus.ANSWERED_AND_MARKED
        return QuestionStatus.ANSWERED

    if isinstance(event, ClearAnswer):
        return _clear(current)

    if isinstance(event, ToggleMark):
        if current is QuestionStatus.MARKED_FOR_REVIEW:
            return QuestionStatus.ANSWERED if answered else QuestionStatus.NOT_ANSWERED
        if current is QuestionStatus.ANSWERED_AND_MARKED:
            return QuestionStatus.ANSWERED
        return QuestionStatus.ANSWERED_AND_MARKED if answered else QuestionStatus.MARKED_FOR_REVIEW

    raise InvalidTransition(current, event)


def _clear(current: QuestionStatus) -> QuestionStatus:
    if current is QuestionStatus.ANSWERED_AND_MARKED:
        return QuestionStatus.MARKED_FOR_REVIEW
    if current is QuestionStatus.MARKED_FOR_REVIEW:
        return current
    return QuestionStatus.NOT_ANSWERED
