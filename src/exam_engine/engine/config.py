"""
Module: engine.config

Purpose:
    Configuration dataclass for exam sessions. Provides immutable settings
    for the attempt duration, timer tick interval and autosave debounce.

Key Classes:
    - EngineConfig: Main configuration for an exam session

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - engine.session: Duration, identity and expiry policy
    - engine.autosave: Key prefix and debounce intervals
    - cli: Optional JSON config file
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

DEFAULT_DURATION_SEC = 180 * 60  # 3 hours


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for an exam session.

    Attributes:
        duration_sec: Length of a fresh attempt (default 3 hours)
        tick_interval_ms: Wall-clock length of one timer tick (default 1000)
        autosave_delay_ms: Quiet period before a pending save is written
        autosave_max_wait_ms: Upper bound on how long a pending save can be
            postponed by further mutations (timer ticks mutate every second)
        user_id: Identity written into new attempts
        key_prefix: Prepended to session keys in the persistence store
        auto_submit_on_expiry: Submit automatically when time runs out
    """
    duration_sec: int = DEFAULT_DURATION_SEC
    tick_interval_ms: int = 1000
    autosave_delay_ms: int = 3000
    autosave_max_wait_ms: int = 10000
    user_id: str = "local_user"
    key_prefix: str = "attempt_"
    auto_submit_on_expiry: bool = True

    def __post_init__(self) -> None:
        if self.duration_sec <= 0:
            raise ValueError(f"duration_sec must be positive: {self.duration_sec}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive: {self.tick_interval_ms}")
        if self.autosave_delay_ms < 0:
            raise ValueError(f"autosave_delay_ms cannot be negative: {self.autosave_delay_ms}")
        if self.autosave_max_wait_ms < self.autosave_delay_ms:
            raise ValueError(
                f"autosave_max_wait_ms ({self.autosave_max_wait_ms}) must be >= "
                f"autosave_delay_ms ({self.autosave_delay_ms})"
            )

    def storage_key(self, session_key: str) -> str:
        """Store key under which the attempt for ``session_key`` is kept."""
        return f"{self.key_prefix}{session_key}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """
        Build a config from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If a known value is out of range
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
