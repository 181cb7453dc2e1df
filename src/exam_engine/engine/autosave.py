"""
Module: engine.autosave

Purpose:
    Debounced persistence of an in-progress attempt and restore-on-start.
    Holds at most one pending write per session key; bursts of mutations
    collapse into a single store write.

Key Classes:
    - AutosaveManager: schedule / flush / discard / clear / restore
    - QtDebouncer: Trailing-edge debounce with a max-wait bound on QTimers
    - ManualDebouncer: Debouncer fired by the caller

Dependencies:
    - PySide6.QtCore: Single-shot QTimers for the debounce

Used By:
    - engine.session
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

from ..core.errors import CorruptPersistedState, ValidationError
from ..core.models.attempt import Attempt, QuestionStatus
from ..core.models.question_set import QuestionSet
from ..core.utils.serialization import PersistedAttempt, deserialize_attempt, serialize_attempt
from ..storage.base import PersistenceStore
from .config import EngineConfig

logger = logging.getLogger(__name__)


class Debouncer(Protocol):
    """Calls the bound callback once after a burst of triggers settles."""

    def bind(self, callback: Callable[[], None]) -> None: ...

    def trigger(self) -> None: ...

    def cancel(self) -> None: ...


class ManualDebouncer:
    """Debouncer that only fires when told to."""

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self.pending = False
        self.trigger_count = 0

    def bind(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def trigger(self) -> None:
        self.pending = True
        self.trigger_count += 1

    def cancel(self) -> None:
        self.pending = False

    def fire(self) -> bool:
        """Run the callback if a trigger is pending."""
        if not self.pending or self._callback is None:
            return False
        self.pending = False
        self._callback()
        return True


class QtDebouncer(QObject):
    """
    Trailing-edge debounce on the Qt event loop.

    Every trigger() restarts a ``delay_ms`` single-shot timer. A second
    timer, started by the first trigger of a burst, fires after
    ``max_wait_ms`` even if triggers keep arriving.
    """

    def __init__(
        self,
        delay_ms: int = 3000,
        max_wait_ms: int = 10000,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._callback: Optional[Callable[[], None]] = None

        self._delay_timer = QTimer(self)
        self._delay_timer.setSingleShot(True)
        self._delay_timer.setInterval(delay_ms)
        self._delay_timer.timeout.connect(self._fire)

        self._max_wait_timer = QTimer(self)
        self._max_wait_timer.setSingleShot(True)
        self._max_wait_timer.setInterval(max_wait_ms)
        self._max_wait_timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        return self._delay_timer.isActive()

    def bind(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def trigger(self) -> None:
        self._delay_timer.start()
        if not self._max_wait_timer.isActive():
            self._max_wait_timer.start()

    def cancel(self) -> None:
        self._delay_timer.stop()
        self._max_wait_timer.stop()

    def _fire(self) -> None:
        self.cancel()
        if self._callback is not None:
            self._callback()


class AutosaveManager:
    """
    Persistence of one attempt under one session key.

    The pending write keeps a reference to the live Attempt and serializes
    it when flushed, so the stored blob is always the latest state.

    Usage:
        manager = AutosaveManager(store, "paper.pdf-1712", debouncer=QtDebouncer())
        restored = manager.restore(question_set)
        ...
        manager.schedule(attempt, current_qid)   # on every mutation
        manager.flush()                          # on exit
        manager.clear()                          # on submit
    """

    def __init__(
        self,
        store: PersistenceStore,
        session_key: str,
        *,
        config: Optional[EngineConfig] = None,
        debouncer: Optional[Debouncer] = None,
    ) -> None:
        self._store = store
        self._config = config or EngineConfig()
        self.session_key = session_key
        self.storage_key = self._config.storage_key(session_key)
        self._debouncer = debouncer
        self._pending: Optional[tuple[Attempt, Optional[int]]] = None
        if debouncer is not None:
            debouncer.bind(self.flush)

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Writing
    # ─────────────────────────────────────────────────────────────────────────

    def schedule(self, attempt: Attempt, current_qid: Optional[int] = None) -> None:
        """Replace the pending write and (re)start the debounce."""
        self._pending = (attempt, current_qid)
        if self._debouncer is not None:
            self._debouncer.trigger()

    def flush(self) -> bool:
        """
        Write the pending attempt now.

        A failed write is logged and dropped; the next mutation schedules
        a fresh one.

        Returns:
            True if a blob was written
        """
        if self._pending is None:
            return False
        attempt, current_qid = self._pending
        self._pending = None
        if self._debouncer is not None:
            self._debouncer.cancel()

        try:
            self._store.set(self.storage_key, serialize_attempt(attempt, current_qid))
        except OSError as e:
            logger.warning(f"Failed to autosave attempt {self.session_key!r}: {e}")
            return False
        logger.debug(f"Autosaved attempt {self.session_key!r} ({attempt.timer.remaining_sec}s left)")
        return True

    def discard(self) -> None:
        """Drop the pending write without writing it."""
        self._pending = None
        if self._debouncer is not None:
            self._debouncer.cancel()

    def clear(self) -> None:
        """Drop any pending write and delete the persisted blob."""
        self.discard()
        self._store.delete(self.storage_key)
        logger.debug(f"Cleared persisted attempt {self.session_key!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Restoring
    # ─────────────────────────────────────────────────────────────────────────

    def restore(self, question_set: QuestionSet) -> Optional[PersistedAttempt]:
        """
        Load the persisted in-progress attempt for this session key.

        A malformed blob is logged, deleted (best effort) and treated as absent so the
        caller starts fresh.

        Returns:
            PersistedAttempt reconciled with ``question_set``, or None
        """
        try:
            blob = self._store.get(self.storage_key)
        except OSError as e:
            logger.warning(f"Could not read persisted attempt {self.session_key!r}: {e}")
            return None
        if blob is None:
            return None

        try:
            persisted = self._parse(blob)
        except CorruptPersistedState as e:
            logger.warning(f"Discarding persisted attempt {e.session_key!r}: {e}")
            try:
                self._store.delete(self.storage_key)
            except OSError as delete_error:
                logger.warning(
                    f"Could not delete corrupt attempt {self.session_key!r}: {delete_error}"
                )
            return None

        return _reconcile(persisted, question_set)

    def _parse(self, blob: str) -> PersistedAttempt:
        try:
            persisted = deserialize_attempt(blob)
        except ValidationError as e:
            raise CorruptPersistedState(str(e), session_key=self.session_key) from e

        if persisted.attempt.is_submitted:
            raise CorruptPersistedState(
                "persisted attempt is already submitted",
                session_key=self.session_key,
            )
        if persisted.attempt.score is not None:
            raise CorruptPersistedState(
                "in-progress attempt carries a score",
                session_key=self.session_key,
            )
        return persisted


def _reconcile(persisted: PersistedAttempt, question_set: QuestionSet) -> PersistedAttempt:
    """
    Keep the persisted state as given, limited to the qids of the set.

    Entries for unknown qids are dropped and questions the blob does not
    mention start NotVisited, so the status map stays total.
    """
    attempt = persisted.attempt
    known = question_set.qids

    dropped = sorted(set(attempt.statuses) - set(known))
    if dropped:
        logger.debug(f"Dropping persisted entries for unknown qids {dropped}")

    attempt.statuses = {
        qid: attempt.statuses.get(qid, QuestionStatus.NOT_VISITED) for qid in known
    }
    attempt.answers = {
        qid: value for qid, value in attempt.answers.items() if question_set.has_question(qid)
    }

    current_qid = persisted.current_qid
    if current_qid is not None and not question_set.has_question(current_qid):
        current_qid = None

    return PersistedAttempt(attempt=attempt, current_qid=current_qid)
