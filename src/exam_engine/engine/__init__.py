"""
Engine Package

Runtime of an exam attempt: the status state machine, the countdown timer,
debounced autosave with resume, scoring, and the session that ties them
together.

| Module     | Role                                          |
|------------|-----------------------------------------------|
| status     | Per-question status transitions (pure)        |
| timer      | Countdown controller and tick sources         |
| autosave   | Debounced persistence and restore             |
| scoring    | Final score and per-question review (pure)    |
| navigation | Section filters and next/previous stepping    |
| session    | ExamSession, the owner of an Attempt          |
"""

from .autosave import AutosaveManager, Debouncer, ManualDebouncer, QtDebouncer
from .config import DEFAULT_DURATION_SEC, EngineConfig
from .navigation import ALL_SECTIONS, adjacent_qid, filter_questions, sections, status_counts
from .scoring import Outcome, QuestionReview, answered_count, grade_question, review, score
from .session import ExamSession
from .status import ClearAnswer, Event, SetAnswer, ToggleMark, Visit, transition
from .timer import ManualTickSource, QtTickSource, TickSource, TimerController, TimerState

__all__ = [
    "AutosaveManager",
    "Debouncer",
    "ManualDebouncer",
    "QtDebouncer",
    "DEFAULT_DURATION_SEC",
    "EngineConfig",
    "ALL_SECTIONS",
    "adjacent_qid",
    "filter_questions",
    "sections",
    "status_counts",
    "Outcome",
    "QuestionReview",
    "answered_count",
    "grade_question",
    "review",
    "score",
    "ExamSession",
    "ClearAnswer",
    "Event",
    "SetAnswer",
    "ToggleMark",
    "Visit",
    "transition",
    "ManualTickSource",
    "QtTickSource",
    "TickSource",
    "TimerController",
    "TimerState",
]
