"""Pytest configuration and shared fixtures."""
import logging
from datetime import datetime, timedelta, timezone

import pytest
import structlog

from logbook_kv.logging_config import HANDLER_NAME


class RecordingLogger:
    """LeveledLogger that keeps every call instead of emitting it."""

    def __init__(self):
        self.calls = []

    def _record(self, severity, template, args):
        self.calls.append((severity, template, args))

    def trace(self, template, *args):
        self._record("trace", template, args)

    def debug(self, template, *args):
        self._record("debug", template, args)

    def info(self, template, *args):
        self._record("info", template, args)

    def warn(self, template, *args):
        self._record("warn", template, args)

    def error(self, template, *args):
        self._record("error", template, args)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 7, 9, 5, 4, 123456, tzinfo=timezone(timedelta(hours=-4), "VET"))


@pytest.fixture
def restore_logging():
    """Drop the handler configure_logging installs and reset structlog."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()
