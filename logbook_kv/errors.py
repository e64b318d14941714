"""
Exceptions raised outside the line-building core.
"""

from __future__ import annotations


class LogbookError(Exception):
    """Raised when library metadata or logging setup cannot be resolved."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LoggingConfigError(LogbookError):
    """Raised for invalid logging settings (e.g. an unknown level name)."""

    def __init__(self, setting: str, value: str, message: str | None = None):
        self.setting = setting
        self.value = value
        super().__init__(message or f"Invalid value for {setting}: {value!r}")
