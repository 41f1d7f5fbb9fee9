# -*- encoding: utf-8 -*-
"""
chronokv configuration.

Settings are plain dataclass fields with environment overrides:

    CHRONOKV_STRICT       raise InvalidArgumentError instead of dropping writes
    CHRONOKV_THREAD_SAFE  guard the index with a lock (default on)
    CHRONOKV_LOG_LEVEL    level used by the command line harness
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


@dataclass
class StoreConfig:
    """
    Configuration for a chronokv store.

    Attributes:
        strict: Raise InvalidArgumentError on rejected writes instead of
            ignoring them silently
        thread_safe: Serialize all index access through one re-entrant lock
        log_level: Logging level name for the command line harness
    """
    strict: bool = False
    thread_safe: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """
        Build a configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            StoreConfig with unset variables left at their defaults
        """
        env = os.environ if env is None else env
        return cls(
            strict=_env_flag(env, "CHRONOKV_STRICT", False),
            thread_safe=_env_flag(env, "CHRONOKV_THREAD_SAFE", True),
            log_level=env.get("CHRONOKV_LOG_LEVEL", "WARNING").upper(),
        )

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return {
            "strict": self.strict,
            "thread_safe": self.thread_safe,
            "log_level": self.log_level,
        }
