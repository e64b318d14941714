"""Logging settings for processes that emit Logbook lines.

Settings are plain values loaded once at startup and passed to
``configure_from_settings``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from logbook_kv.backends import TRACE
from logbook_kv.errors import LoggingConfigError

_TRUTHY = {"1", "true", "yes", "on"}
_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


def normalize_level(level: str) -> str:
    """Return the canonical level name, raising LoggingConfigError if unknown."""
    name = level.strip().upper()
    if name not in _LEVELS:
        raise LoggingConfigError("level", level)
    return "WARNING" if name == "WARN" else name


def level_number(level: str) -> int:
    return _LEVELS[normalize_level(level)]


@dataclass
class LoggingSettings:
    """Logging configuration.

    Args:
        level: Minimum level name (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render lines as JSON instead of console text
        log_file: Optional file to append to instead of stderr
        colors: Colorize console output
    """

    level: str = "INFO"
    json_output: bool = False
    log_file: Path | None = None
    colors: bool = True

    def __post_init__(self):
        self.level = normalize_level(self.level)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> LoggingSettings:
        """Load settings from ``LOGBOOK_*`` environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``

        Returns:
            LoggingSettings instance
        """
        env = os.environ if env is None else env
        log_file = env.get("LOGBOOK_LOG_FILE")
        return cls(
            level=env.get("LOGBOOK_LEVEL", "INFO"),
            json_output=_env_flag(env, "LOGBOOK_JSON", False),
            log_file=Path(log_file) if log_file else None,
            colors=_env_flag(env, "LOGBOOK_COLORS", True),
        )
