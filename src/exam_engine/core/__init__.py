"""
Exam Engine Core Package

Shared data models, errors, schemas and serialization. Everything in this
package is free of I/O scheduling and Qt; the engine package builds on it.

**MODEL RULES:**

1. **Immutable exam definitions**
   - Question, Passage, MarkingScheme and QuestionSet are frozen dataclasses
   - The engine never mutates a question set it was given

2. **One mutable aggregate**
   - Attempt is the only mutable value and is owned by a single ExamSession

3. **Calculated, never stored**
   - Question counts and scores are derived; a Score is written once at
     submission and never recomputed
"""

from .models import (
    Attempt,
    AttemptStatus,
    MarkDelta,
    MarkingScheme,
    Option,
    Passage,
    Question,
    QuestionSet,
    QuestionSetMeta,
    QuestionStatus,
    QuestionType,
    Score,
    TimerSnapshot,
)
from .errors import (
    AttemptFinished,
    CorruptPersistedState,
    ExamEngineError,
    InvalidQuestionSet,
    InvalidTransition,
    ValidationError,
)

__all__ = [
    "Attempt",
    "AttemptStatus",
    "MarkDelta",
    "MarkingScheme",
    "Option",
    "Passage",
    "Question",
    "QuestionSet",
    "QuestionSetMeta",
    "QuestionStatus",
    "QuestionType",
    "Score",
    "TimerSnapshot",
    "AttemptFinished",
    "CorruptPersistedState",
    "ExamEngineError",
    "InvalidQuestionSet",
    "InvalidTransition",
    "ValidationError",
]
