"""
Tests for chronokv configuration.
"""

from chronokv.config import StoreConfig


class TestStoreConfig:
    """Defaults and environment overrides."""

    def test_defaults(self):
        config = StoreConfig()
        assert config.strict is False
        assert config.thread_safe is True
        assert config.log_level == "WARNING"

    def test_from_empty_env(self):
        assert StoreConfig.from_env({}) == StoreConfig()

    def test_from_env(self):
        config = StoreConfig.from_env({
            "CHRONOKV_STRICT": "yes",
            "CHRONOKV_THREAD_SAFE": "0",
            "CHRONOKV_LOG_LEVEL": "debug",
        })
        assert config.strict is True
        assert config.thread_safe is False
        assert config.log_level == "DEBUG"

    def test_unrecognized_flag_keeps_default(self):
        config = StoreConfig.from_env({"CHRONOKV_STRICT": "maybe"})
        assert config.strict is False

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("CHRONOKV_STRICT", "true")
        assert StoreConfig.from_env().strict is True

    def test_to_dict(self):
        assert StoreConfig().to_dict() == {
            "strict": False,
            "thread_safe": True,
            "log_level": "WARNING",
        }
