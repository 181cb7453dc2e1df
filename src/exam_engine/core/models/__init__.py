"""
Core Models Package

Exam definition models (immutable) and attempt state (the single mutable
aggregate owned by an exam session).

| Type | Mutable | Role |
|------|---------|------|
| `Question`, `Passage`, `QuestionSet` | no | Provided exam definition |
| `MarkingScheme` | no | Point deltas per question type |
| `Attempt` | yes | Answers, statuses and clock of one run |
| `Score` | no | Computed once at submission |
"""

from .questions import Option, Passage, Question, QuestionType
from .marking import MarkDelta, MarkingScheme
from .question_set import QuestionSet, QuestionSetMeta
from .attempt import Attempt, AttemptStatus, QuestionStatus, Score, TimerSnapshot, is_answered

__all__ = [
    "Option",
    "Passage",
    "Question",
    "QuestionType",
    "MarkDelta",
    "MarkingScheme",
    "QuestionSet",
    "QuestionSetMeta",
    "Attempt",
    "AttemptStatus",
    "QuestionStatus",
    "Score",
    "TimerSnapshot",
    "is_answered",
]
