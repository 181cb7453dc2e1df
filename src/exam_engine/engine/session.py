"""
Module: engine.session

Purpose:
    The exam session is the single logical owner of an Attempt. It routes
    UI events into the status machine and the timer, schedules autosaves
    after every mutation, and finalizes the attempt on submission.

Key Classes:
    - ExamSession: start_attempt / visit / set_answer / clear_answer /
      toggle_mark / pause / resume / set_remaining / submit / close

Concurrency:
    Timer ticks and debounced saves are Qt timer events delivered on the
    same event loop as UI events, so every mutation runs to completion
    before the next one starts. submit() and close() cancel the timer
    before touching any other state.

Dependencies:
    - PySide6.QtCore: QObject/Signal, default Qt tick source and debouncer

Used By:
    - Application UI layers (exam screen, question navigator, timer bar)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from ..core.errors import AttemptFinished
from ..core.models.attempt import Attempt, AttemptStatus
from ..core.models.question_set import QuestionSet
from ..core.schemas.validator import check_qids
from ..storage.base import PersistenceStore
from . import navigation
from .autosave import AutosaveManager, Debouncer, QtDebouncer
from .config import EngineConfig
from .scoring import QuestionReview, review, score
from .status import ClearAnswer, Event, SetAnswer, ToggleMark, Visit, transition
from .timer import QtTickSource, TickSource, TimerController

logger = logging.getLogger(__name__)


class ExamSession(QObject):
    """
    Runs one attempt at a time.

    Signals:
        attempt_changed(Attempt): After any mutation of the attempt
        remaining_changed(int): After every timer tick
        time_expired(): Once per attempt when the clock reaches zero
        submitted(Attempt): Once per attempt after scoring

    Usage:
        session = ExamSession(FileStore(data_dir))
        attempt = session.start_attempt(question_set, "paper.pdf-1712345678")
        session.set_answer(1, "B")
        session.toggle_mark(2)
        final = session.submit()
        final.score.raw
    """

    attempt_changed = Signal(object)
    remaining_changed = Signal(int)
    time_expired = Signal()
    submitted = Signal(object)

    def __init__(
        self,
        store: PersistenceStore,
        *,
        config: Optional[EngineConfig] = None,
        tick_source: Optional[TickSource] = None,
        debouncer: Optional[Debouncer] = None,
        on_time_expired: Optional[Callable[[], None]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._config = config or EngineConfig()
        self._tick_source = tick_source
        self._debouncer = debouncer
        self._on_time_expired = on_time_expired

        self._question_set: Optional[QuestionSet] = None
        self._attempt: Optional[Attempt] = None
        self._timer: Optional[TimerController] = None
        self._autosave: Optional[AutosaveManager] = None
        self._current_qid: Optional[int] = None
        self._expiry_handled = False

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def attempt(self) -> Optional[Attempt]:
        return self._attempt

    @property
    def question_set(self) -> Optional[QuestionSet]:
        return self._question_set

    @property
    def current_qid(self) -> Optional[int]:
        return self._current_qid

    @property
    def timer(self) -> Optional[TimerController]:
        return self._timer

    @property
    def remaining_sec(self) -> int:
        return self._timer.remaining_sec if self._timer else 0

    @property
    def is_running(self) -> bool:
        return bool(self._timer and self._timer.is_running)

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def start_attempt(self, question_set: QuestionSet, session_key: str) -> Attempt:
        """
        Resume the persisted attempt for ``session_key`` or start a fresh one.

        Args:
            question_set: Exam definition (read-only)
            session_key: Opaque identifier binding persisted state to this attempt

        Returns:
            The attempt, with its timer running

        Raises:
            InvalidQuestionSet: If the set is empty or repeats a qid; no
                attempt is created
        """
        check_qids(list(question_set.qids))

        if self._attempt is not None and not self._attempt.is_submitted:
            self.close()

        if self._tick_source is None:
            self._tick_source = QtTickSource(self._config.tick_interval_ms, parent=self)
        if self._debouncer is None:
            self._debouncer = QtDebouncer(
                self._config.autosave_delay_ms,
                self._config.autosave_max_wait_ms,
                parent=self,
            )

        self._question_set = question_set
        self._autosave = AutosaveManager(
            self._store,
            session_key,
            config=self._config,
            debouncer=self._debouncer,
        )
        self._expiry_handled = False

        first_qid = question_set.qids[0]
        restored = self._autosave.restore(question_set)
        if restored is not None:
            self._attempt = restored.attempt
            self._current_qid = restored.current_qid or first_qid
            logger.info(
                f"Resumed attempt {session_key!r} with "
                f"{self._attempt.timer.remaining_sec}s remaining"
            )
        else:
            self._attempt = Attempt.fresh(
                question_set.qids,
                upload_id=session_key,
                user_id=self._config.user_id,
                duration_sec=self._config.duration_sec,
            )
            self._current_qid = first_qid
            logger.info(
                f"Started attempt {session_key!r}: {question_set.total_questions} questions, "
                f"{self._config.duration_sec}s"
            )

        self._apply(self._current_qid, Visit())

        self._timer = TimerController(
            self._attempt.timer.remaining_sec,
            self._tick_source,
            on_expired=self._handle_expired,
            on_tick=self._handle_tick,
        )
        if self._timer.remaining_sec == 0:
            # Clock ran out before the previous session could submit
            self._handle_expired()
        else:
            self._timer.resume()
        return self._attempt

    def submit(self) -> Attempt:
        """
        Finalize the attempt: stop the clock, score once, clear persisted state.

        Calling submit() again returns the same attempt unchanged.

        Raises:
            RuntimeError: If no attempt was started
        """
        attempt = self._require_attempt()
        if attempt.is_submitted:
            return attempt

        self._timer.cancel()
        attempt.timer.remaining_sec = self._timer.remaining_sec
        attempt.score = score(attempt, self._question_set)
        attempt.status = AttemptStatus.SUBMITTED
        self._autosave.clear()

        logger.info(
            f"Submitted attempt {attempt.upload_id!r}: raw={attempt.score.raw} "
            f"answered={attempt.score.total_answered}/{self._question_set.total_questions}"
        )
        self.attempt_changed.emit(attempt)
        self.submitted.emit(attempt)
        return attempt

    def close(self) -> Optional[Attempt]:
        """
        Exit without submitting.

        Stops the clock and writes the attempt now so it can be resumed
        with the same session key.

        Returns:
            The closed attempt, or None if nothing was running
        """
        attempt = self._attempt
        if attempt is None:
            return None

        if not attempt.is_submitted:
            self._timer.cancel()
            attempt.timer.remaining_sec = self._timer.remaining_sec
            self._autosave.schedule(attempt, self._current_qid)
            self._autosave.flush()
            logger.info(
                f"Closed attempt {attempt.upload_id!r} with "
                f"{attempt.timer.remaining_sec}s remaining"
            )

        self._attempt = None
        self._question_set = None
        self._timer = None
        self._autosave = None
        self._current_qid = None
        return attempt

    # ─────────────────────────────────────────────────────────────────────────
    # Question Events
    # ─────────────────────────────────────────────────────────────────────────

    def visit(self, qid: int) -> Attempt:
        """Display ``qid``; it leaves NotVisited for good."""
        self._require_question(qid)
        self._current_qid = qid
        return self._apply(qid, Visit())

    def set_answer(self, qid: int, value: str) -> Attempt:
        """Record an answer. Blank text counts as clearing it."""
        attempt = self._require_question(qid)
        if value and value.strip():
            attempt.answers[qid] = value
        else:
            attempt.answers.pop(qid, None)
        return self._apply(qid, SetAnswer(value or ""))

    def clear_answer(self, qid: int) -> Attempt:
        attempt = self._require_question(qid)
        attempt.answers.pop(qid, None)
        return self._apply(qid, ClearAnswer())

    def toggle_mark(self, qid: int) -> Attempt:
        self._require_question(qid)
        return self._apply(qid, ToggleMark())

    # ─────────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────────

    def go_next(self, section: Optional[str] = None) -> Optional[int]:
        """Visit the next question within ``section``; None at the end."""
        return self._step(+1, section)

    def go_previous(self, section: Optional[str] = None) -> Optional[int]:
        """Visit the previous question within ``section``; None at the start."""
        return self._step(-1, section)

    def _step(self, step: int, section: Optional[str]) -> Optional[int]:
        self._require_active()
        target = navigation.adjacent_qid(self._question_set, self._current_qid, step, section)
        if target is not None:
            self.visit(target)
        return target

    # ─────────────────────────────────────────────────────────────────────────
    # Clock
    # ─────────────────────────────────────────────────────────────────────────

    def pause(self) -> None:
        if self._timer is not None:
            self._timer.pause()

    def resume(self) -> None:
        if self._attempt is not None and not self._attempt.is_submitted:
            self._timer.resume()

    def set_remaining(self, value: int) -> bool:
        """
        Overwrite the remaining time; only honoured while paused.

        Returns:
            True if the value was applied
        """
        attempt = self._require_active()
        if not self._timer.set_remaining(value):
            return False
        attempt.timer.remaining_sec = self._timer.remaining_sec
        self._changed()
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Results
    # ─────────────────────────────────────────────────────────────────────────

    def results(self) -> list[QuestionReview]:
        """Per-question outcomes of the submitted attempt."""
        attempt = self._require_attempt()
        if not attempt.is_submitted:
            raise RuntimeError("Results are only available after submit()")
        return review(attempt, self._question_set)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _apply(self, qid: int, event: Event) -> Attempt:
        attempt = self._attempt
        current = attempt.statuses[qid]
        updated = transition(current, event, answered=attempt.has_answer(qid))
        if updated is not current:
            logger.debug(f"Q{qid}: {current.value} -> {updated.value} on {type(event).__name__}")
        attempt.statuses[qid] = updated
        self._changed()
        return attempt

    def _changed(self) -> None:
        self._autosave.schedule(self._attempt, self._current_qid)
        self.attempt_changed.emit(self._attempt)

    def _handle_tick(self, remaining: int) -> None:
        self._attempt.timer.remaining_sec = remaining
        self._autosave.schedule(self._attempt, self._current_qid)
        self.remaining_changed.emit(remaining)

    def _handle_expired(self) -> None:
        if self._expiry_handled:
            return
        self._expiry_handled = True
        self.time_expired.emit()
        if self._on_time_expired is not None:
            self._on_time_expired()
        if self._config.auto_submit_on_expiry and self._attempt is not None:
            self.submit()

    def _require_attempt(self) -> Attempt:
        if self._attempt is None:
            raise RuntimeError("No attempt in progress; call start_attempt() first")
        return self._attempt

    def _require_active(self) -> Attempt:
        attempt = self._require_attempt()
        if attempt.is_submitted:
            raise AttemptFinished(f"Attempt {attempt.upload_id!r} has already been submitted")
        return attempt

    def _require_question(self, qid: int) -> Attempt:
        attempt = self._require_active()
        if not self._question_set.has_question(qid):
            raise KeyError(f"Unknown qid: {qid}")
        return attempt
