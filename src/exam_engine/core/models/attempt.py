"""
Module: attempt

Purpose:
    Provides the Attempt aggregate - the only mutable value in the engine -
    together with the per-question status tags and the derived Score.

Key Classes:
    - QuestionStatus: Per-question lifecycle tag
    - AttemptStatus: in_progress / submitted
    - TimerSnapshot: Clock values carried by an attempt
    - Score: Frozen result computed once at submission
    - Attempt: Answers, statuses, timer and lifecycle of one run

Used By:
    - engine.status (QuestionStatus)
    - engine.session (Attempt)
    - engine.autosave (serialization)
    - engine.scoring (Score)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional

from .marking import Points


class QuestionStatus(str, Enum):
    """Per-question lifecycle tag shown in the question navigator."""

    NOT_VISITED = "Not Visited"
    NOT_ANSWERED = "Not Answered"
    ANSWERED = "Answered"
    MARKED_FOR_REVIEW = "Marked for Review"
    ANSWERED_AND_MARKED = "Answered & Marked for Review"

    @property
    def is_marked(self) -> bool:
        return self in (QuestionStatus.MARKED_FOR_REVIEW, QuestionStatus.ANSWERED_AND_MARKED)


class AttemptStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


def is_answered(value: Optional[str]) -> bool:
    """An answer counts only when its trimmed text is non-empty."""
    return bool(value and value.strip())


@dataclass(frozen=True, slots=True)
class Score:
    """
    Result of grading a submitted attempt.

    Attributes:
        raw: Sum of marking deltas
        mcq_correct: MCQ questions answered correctly
        mcq_wrong: MCQ questions answered incorrectly
        tita_correct: TITA questions answered correctly
        total_answered: Questions with a non-empty answer, any type
    """

    raw: Points = 0
    mcq_correct: int = 0
    mcq_wrong: int = 0
    tita_correct: int = 0
    total_answered: int = 0

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "mcq_correct": self.mcq_correct,
            "mcq_wrong": self.mcq_wrong,
            "tita_correct": self.tita_correct,
            "total_answered": self.total_answered,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Score:
        return cls(
            raw=data["raw"],
            mcq_correct=data["mcq_correct"],
            mcq_wrong=data["mcq_wrong"],
            tita_correct=data["tita_correct"],
            total_answered=data["total_answered"],
        )


@dataclass
class TimerSnapshot:
    """
    Clock values of an attempt.

    Only ``remaining_sec`` changes during the attempt; ``duration_sec`` is
    fixed at creation. ``started_at`` is epoch milliseconds.
    """

    started_at: int
    duration_sec: int
    remaining_sec: int

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at,
            "duration_sec": self.duration_sec,
            "remaining_sec": self.remaining_sec,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TimerSnapshot:
        return cls(
            started_at=int(data["started_at"]),
            duration_sec=int(data["duration_sec"]),
            remaining_sec=int(data["remaining_sec"]),
        )


@dataclass
class Attempt:
    """
    One user's in-progress or submitted run through a question set.

    Attributes:
        upload_id: Identity of the question set upload (persistence key source)
        user_id: Identity of the candidate
        timer: Clock values
        answers: qid -> raw answer text (MCQ: option label, TITA: free text)
        statuses: qid -> QuestionStatus, total over the question set
        status: Lifecycle of the attempt
        score: None while in progress, set once at submission

    Invariants:
        - statuses has exactly one entry per qid of the question set
        - score is not None iff status is SUBMITTED
    """

    upload_id: str
    user_id: str
    timer: TimerSnapshot
    answers: Dict[int, str] = field(default_factory=dict)
    statuses: Dict[int, QuestionStatus] = field(default_factory=dict)
    status: AttemptStatus = AttemptStatus.IN_PROGRESS
    score: Optional[Score] = None

    @classmethod
    def fresh(
        cls,
        qids: Iterable[int],
        *,
        upload_id: str,
        user_id: str,
        duration_sec: int,
        started_at: Optional[int] = None,
    ) -> Attempt:
        """
        New attempt with every question NotVisited except the first.

        The first question is displayed immediately, so it starts as
        NotAnswered.
        """
        qid_list = list(qids)
        statuses = {qid: QuestionStatus.NOT_VISITED for qid in qid_list}
        if qid_list:
            statuses[qid_list[0]] = QuestionStatus.NOT_ANSWERED
        return cls(
            upload_id=upload_id,
            user_id=user_id,
            timer=TimerSnapshot(
                started_at=started_at if started_at is not None else int(time.time() * 1000),
                duration_sec=duration_sec,
                remaining_sec=duration_sec,
            ),
            statuses=statuses,
        )

    @property
    def is_submitted(self) -> bool:
        return self.status is AttemptStatus.SUBMITTED

    def answer_for(self, qid: int) -> str:
        return self.answers.get(qid, "")

    def has_answer(self, qid: int) -> bool:
        return is_answered(self.answers.get(qid))

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        JSON object keys are strings, so qids are written as strings and
        converted back in from_dict().
        """
        return {
            "upload_id": self.upload_id,
            "user_id": self.user_id,
            "timer": self.timer.to_dict(),
            "answers": {str(qid): value for qid, value in self.answers.items()},
            "statuses": {str(qid): st.value for qid, st in self.statuses.items()},
            "status": self.status.value,
            "score": self.score.to_dict() if self.score else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Attempt:
        """
        Deserialize from dictionary.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a status or qid cannot be parsed
        """
        score_data: Optional[dict] = data.get("score")
        return cls(
            upload_id=data["upload_id"],
            user_id=data["user_id"],
            timer=TimerSnapshot.from_dict(data["timer"]),
            answers={int(qid): str(value) for qid, value in data.get("answers", {}).items()},
            statuses={
                int(qid): QuestionStatus(value)
                for qid, value in data["statuses"].items()
            },
            status=AttemptStatus(data.get("status", AttemptStatus.IN_PROGRESS.value)),
            score=Score.from_dict(score_data) if score_data else None,
        )
