"""
Leveled logger backends for Logbook.

A Logbook hands each line to its backend as a ``{}``-placeholder template
plus a flat argument list. When an error was captured it rides along as the
last argument, one past the values the template consumes, and backends log
it as exception info instead of substituting it.

Backends:
- StdlibLogger: wraps a ``logging.Logger``; substitution is deferred until a
  handler actually formats the record
- StructlogLogger: wraps a structlog logger; renders the line as the event
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import structlog

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_PLACEHOLDER = "{}"
_ESCAPE = "\\"
_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


@runtime_checkable
class LeveledLogger(Protocol):
    """Anything Logbook can emit to."""

    def trace(self, template: str, *args: Any) -> None: ...

    def debug(self, template: str, *args: Any) -> None: ...

    def info(self, template: str, *args: Any) -> None: ...

    def warn(self, template: str, *args: Any) -> None: ...

    def error(self, template: str, *args: Any) -> None: ...


def _is_escaped(template: str, index: int) -> bool:
    return index > 0 and template[index - 1] == _ESCAPE


def _arg_to_str(arg: Any) -> str:
    return "null" if arg is None else str(arg)


def format_message(template: str, args: Sequence[Any]) -> str:
    """
    Substitute ``{}`` placeholders in order.

    ``\\{}`` yields a literal ``{}`` and ``\\\\{}`` a backslash followed by the
    argument. Placeholders without an argument are left as they are and
    surplus arguments are ignored.
    """
    if not args:
        return template

    parts: list[str] = []
    pos = 0
    index = 0
    while index < len(args):
        found = template.find(_PLACEHOLDER, pos)
        if found == -1:
            break
        if _is_escaped(template, found):
            if _is_escaped(template, found - 1):
                parts.append(template[pos : found - 1])
                parts.append(_arg_to_str(args[index]))
                index += 1
                pos = found + 2
            else:
                parts.append(template[pos : found - 1])
                parts.append("{")
                pos = found + 1
        else:
            parts.append(template[pos:found])
            parts.append(_arg_to_str(args[index]))
            index += 1
            pos = found + 2
    parts.append(template[pos:])
    return "".join(parts)


def split_error(args: Sequence[Any]) -> tuple[tuple[Any, ...], BaseException | None]:
    """Split a trailing exception off the argument list."""
    if args and isinstance(args[-1], BaseException):
        return tuple(args[:-1]), args[-1]
    return tuple(args), None


def _in_package(filename: str) -> bool:
    return os.path.dirname(os.path.abspath(filename)) == _PACKAGE_DIR


def _caller_stacklevel() -> int:
    """``stacklevel`` that points ``logger.log`` past this package's frames.

    Counted from the frame calling ``logger.log`` (level 1), which itself
    calls this helper.
    """
    level = 2
    frame = sys._getframe(2)
    while frame is not None and _in_package(frame.f_code.co_filename):
        level += 1
        frame = frame.f_back
    return level


class _LazyMessage:
    __slots__ = ("template", "args")

    def __init__(self, template: str, args: tuple[Any, ...]):
        self.template = template
        self.args = args

    def __str__(self) -> str:
        return format_message(self.template, self.args)

    def __repr__(self) -> str:
        return f"_LazyMessage({self.template!r}, {self.args!r})"


class StdlibLogger:
    """LeveledLogger on top of the standard ``logging`` module."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def wrapped(self) -> logging.Logger:
        return self._logger

    def trace(self, template: str, *args: Any) -> None:
        self._log(TRACE, template, args)

    def debug(self, template: str, *args: Any) -> None:
        self._log(logging.DEBUG, template, args)

    def info(self, template: str, *args: Any) -> None:
        self._log(logging.INFO, template, args)

    def warn(self, template: str, *args: Any) -> None:
        self._log(logging.WARNING, template, args)

    def error(self, template: str, *args: Any) -> None:
        self._log(logging.ERROR, template, args)

    def _log(self, level: int, template: str, args: tuple[Any, ...]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        values, error = split_error(args)
        self._logger.log(
            level,
            _LazyMessage(template, values),
            exc_info=error,
            stacklevel=_caller_stacklevel(),
        )

    def __repr__(self) -> str:
        return f"StdlibLogger({self.name!r})"


class StructlogLogger:
    """LeveledLogger on top of a structlog logger.

    structlog has no ``trace`` method, so trace lines go out at debug. Lines
    below the wrapped logger's ``isEnabledFor`` level are never rendered.
    """

    _METHODS = {
        "trace": "debug",
        "debug": "debug",
        "info": "info",
        "warn": "warning",
        "error": "error",
    }
    _LEVELS = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(self, logger: Any = None, name: str | None = None):
        self._logger = logger if logger is not None else structlog.get_logger(name)

    @property
    def wrapped(self) -> Any:
        return self._logger

    def trace(self, template: str, *args: Any) -> None:
        self._log("trace", template, args)

    def debug(self, template: str, *args: Any) -> None:
        self._log("debug", template, args)

    def info(self, template: str, *args: Any) -> None:
        self._log("info", template, args)

    def warn(self, template: str, *args: Any) -> None:
        self._log("warn", template, args)

    def error(self, template: str, *args: Any) -> None:
        self._log("error", template, args)

    def _log(self, severity: str, template: str, args: tuple[Any, ...]) -> None:
        method = self._METHODS[severity]
        is_enabled_for = getattr(self._logger, "isEnabledFor", None)
        if callable(is_enabled_for) and not is_enabled_for(self._LEVELS[method]):
            return
        values, error = split_error(args)
        kwargs: dict[str, Any] = {}
        if error is not None:
            kwargs["exc_info"] = error
        getattr(self._logger, method)(format_message(template, values), **kwargs)
