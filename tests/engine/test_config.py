"""
Unit Tests for Engine Configuration
"""

import pytest

from exam_engine.engine.config import DEFAULT_DURATION_SEC, EngineConfig


class TestEngineConfig:

    def test_defaults_when_created_then_three_hours_and_local_user(self):
        """Defaults match a three hour local exam."""
        config = EngineConfig()

        assert config.duration_sec == DEFAULT_DURATION_SEC == 10800
        assert config.user_id == "local_user"
        assert config.autosave_delay_ms == 3000
        assert config.auto_submit_on_expiry is True

    def test_storage_key_when_session_key_then_prefixed(self):
        """storage_key() prepends the prefix."""
        assert EngineConfig().storage_key("p.pdf-1") == "attempt_p.pdf-1"

    def test_config_is_immutable(self):
        """EngineConfig should be frozen."""
        with pytest.raises(AttributeError):
            EngineConfig().duration_sec = 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"duration_sec": 0},
            {"tick_interval_ms": 0},
            {"autosave_delay_ms": -1},
            {"autosave_delay_ms": 5000, "autosave_max_wait_ms": 1000},
        ],
    )
    def test_create_when_out_of_range_then_raises(self, kwargs):
        """Out of range values raise ValueError."""
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_from_dict_when_unknown_keys_then_ignored(self):
        """Unknown keys in a config file are ignored."""
        config = EngineConfig.from_dict({"duration_sec": 600, "theme": "dark"})

        assert config.duration_sec == 600
