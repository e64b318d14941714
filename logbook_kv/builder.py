"""
Logbook: a chainable builder for key/value log lines.

Every ``add`` returns a new Logbook holding the previous pairs plus the new
one; the receiver is never modified. A Logbook can therefore be kept as a
template (for example a module-level instance bound to a logger) and shared
freely between threads.

On a terminal severity call the valid pairs are joined into a single
``{}``-placeholder template and a flat argument list, and both are handed to
the backend in one call. A captured error, if any, is appended as the last
argument so the backend can log its traceback.

Example:
    from logbook_kv import Logbook

    logbook = Logbook.instance(__name__)
    logbook.message("Hello world").language("en").info()
    # message="Hello world" language="en"

    logbook.add("order", "{} x {}", 3, "widget").success().info()
    # order="3 x widget" status="success"
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from types import ModuleType
from typing import Any

from logbook_kv.backends import LeveledLogger, StdlibLogger
from logbook_kv.keys import LogbookKey
from logbook_kv.pair import Pair

_UNSET: Any = object()


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _millis(moment: datetime) -> str:
    return f"{moment.microsecond // 1000:03d}"


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _describe_error(error: BaseException) -> str:
    text = str(error)
    if not text:
        return type(error).__name__
    return f"{type(error).__name__}: {text}"


def _resolve_logger(origin: Any) -> LeveledLogger:
    if isinstance(origin, logging.Logger):
        return StdlibLogger(origin)
    if isinstance(origin, str):
        return StdlibLogger(logging.getLogger(origin))
    if isinstance(origin, ModuleType):
        return StdlibLogger(logging.getLogger(origin.__name__))
    if isinstance(origin, type):
        return StdlibLogger(logging.getLogger(_qualified_name(origin)))
    if isinstance(origin, LeveledLogger):
        return origin
    raise TypeError(
        f"Cannot bind a Logbook to {type(origin).__name__!r}; pass a logger name, "
        "module, class, logging.Logger or LeveledLogger"
    )


class Logbook:
    """Immutable accumulator of key/value pairs bound to a leveled logger."""

    __slots__ = ("_backend", "_pairs", "_error", "_clock")

    def __init__(
        self,
        backend: LeveledLogger,
        pairs: Iterable[Pair] = (),
        captured_error: BaseException | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        self._backend = backend
        self._pairs: tuple[Pair, ...] = tuple(pairs)
        self._error = captured_error
        self._clock = clock or _local_now

    # =========================================================================
    # Construction
    # =========================================================================

    @staticmethod
    def logger(origin: Any) -> LeveledLogger:
        """Resolve ``origin`` to the backend :meth:`instance` would bind."""
        return _resolve_logger(origin)

    @classmethod
    def instance(cls, origin: Any, *, clock: Callable[[], datetime] | None = None) -> Logbook:
        """
        Create an empty Logbook.

        Args:
            origin: Logger name, module, class, ``logging.Logger`` or any
                LeveledLogger (e.g. a StructlogLogger)
            clock: Optional zero-argument callable returning the current time

        Returns:
            Logbook with no pairs
        """
        return cls(_resolve_logger(origin), clock=clock)

    @property
    def backend(self) -> LeveledLogger:
        return self._backend

    @property
    def pairs(self) -> tuple[Pair, ...]:
        return self._pairs

    @property
    def captured_error(self) -> BaseException | None:
        return self._error

    def _copy(self, pairs: tuple[Pair, ...], error: BaseException | None) -> Logbook:
        return Logbook(self._backend, pairs, error, clock=self._clock)

    def _append(self, pair: Pair) -> Logbook:
        return self._copy(self._pairs + (pair,), self._error)

    # =========================================================================
    # Generic pairs
    # =========================================================================

    def add(self, key: str | None, value_or_format: Any, *values: Any) -> Logbook:
        """
        Add a pair.

        ``add(key, value)`` adds a single value. ``add(key, fmt, *values)``
        adds a pair whose value is ``fmt`` with its ``{}`` placeholders filled
        from ``values`` by the backend.
        """
        if values:
            return self.add_formatted(key, value_or_format, *values)
        return self._append(Pair.of(key, value_or_format))

    def add_formatted(self, key: str | None, value_format: str | None, *values: Any) -> Logbook:
        return self._append(Pair(key, value_format, values))

    def _add_key(self, key: LogbookKey, value: Any) -> Logbook:
        return self.add(key.value, value)

    def message(self, value: Any, *values: Any) -> Logbook:
        if values:
            return self.add_formatted(LogbookKey.MESSAGE.value, value, *values)
        return self._add_key(LogbookKey.MESSAGE, value)

    # =========================================================================
    # Errors
    # =========================================================================

    def exception(self, exception: Any) -> Logbook:
        """Add ``exception=`` describing ``exception`` (no traceback).

        An error is described as ``TypeName: message``; anything else is
        added as is.
        """
        if isinstance(exception, BaseException):
            exception = _describe_error(exception)
        return self._add_key(LogbookKey.EXCEPTION, exception)

    def with_error(self, error: BaseException | None) -> Logbook:
        """Capture ``error`` for traceback rendering, replacing any earlier one."""
        return self._copy(self._pairs, error)

    def capture_error(
        self, message_or_error: Any, error: BaseException | None = _UNSET
    ) -> Logbook:
        """
        Capture an error and describe it under ``exception=``.

        ``capture_error(err)`` uses ``TypeName: message`` as the value;
        ``capture_error("message", err)`` uses ``message``. Only exceptions
        are captured: ``capture_error("message", None)`` or
        ``capture_error("text")`` add the pair and leave the captured error
        as it was.
        """
        if error is not _UNSET:
            logbook = self.with_error(error) if isinstance(error, BaseException) else self
            return logbook._add_key(LogbookKey.EXCEPTION, message_or_error)
        if isinstance(message_or_error, BaseException):
            return self.with_error(message_or_error).exception(message_or_error)
        return self._add_key(LogbookKey.EXCEPTION, message_or_error)

    exception_with_stack_trace = capture_error

    # =========================================================================
    # Named fields
    # =========================================================================

    def endpoint(self, endpoint: str | None) -> Logbook:
        return self._add_key(LogbookKey.ENDPOINT, endpoint)

    def service(self, service: str | None) -> Logbook:
        return self._add_key(LogbookKey.SERVICE, service)

    def name(self, name: str | None) -> Logbook:
        return self._add_key(LogbookKey.NAME, name)

    def duration(self, duration: float | None) -> Logbook:
        return self._add_key(LogbookKey.DURATION, duration)

    def status(self, status: str | None) -> Logbook:
        return self._add_key(LogbookKey.STATUS, status)

    def fail(self) -> Logbook:
        return self._add_key(LogbookKey.STATUS, LogbookKey.FAIL.value)

    def success(self) -> Logbook:
        return self._add_key(LogbookKey.STATUS, LogbookKey.SUCCESS.value)

    def environment(self, environment: str | None) -> Logbook:
        return self._add_key(LogbookKey.ENVIRONMENT, environment)

    def method(self, method: str | Callable[..., Any] | None) -> Logbook:
        if method is not None and not isinstance(method, str):
            method = getattr(method, "__name__", str(method))
        return self._add_key(LogbookKey.METHOD, method)

    def klass(self, klass: str | type | None) -> Logbook:
        if isinstance(klass, type):
            klass = _qualified_name(klass)
        return self._add_key(LogbookKey.CLASS, klass)

    def package(self, package: str | ModuleType | type | None) -> Logbook:
        if isinstance(package, ModuleType):
            package = package.__name__
        elif isinstance(package, type):
            package = package.__module__
        return self._add_key(LogbookKey.PACKAGE, package)

    def code(self, code: str | None) -> Logbook:
        return self._add_key(LogbookKey.CODE, code)

    def track(self, track: uuid.UUID | str | None) -> Logbook:
        return self._add_key(LogbookKey.TRACK, track)

    def request(self, request: uuid.UUID | str | None) -> Logbook:
        return self._add_key(LogbookKey.REQUEST, request)

    def session(self, session: uuid.UUID | str | None) -> Logbook:
        return self._add_key(LogbookKey.SESSION, session)

    def id(self, id: uuid.UUID | str | None) -> Logbook:
        return self._add_key(LogbookKey.ID, id)

    def transaction(self, transaction: uuid.UUID | str | None) -> Logbook:
        return self._add_key(LogbookKey.TRANSACTION, transaction)

    def type(self, type: str | None) -> Logbook:
        return self._add_key(LogbookKey.TYPE, type)

    def value(self, value: Any) -> Logbook:
        return self._add_key(LogbookKey.VALUE, value)

    def http_method(self, http_method: str | None) -> Logbook:
        return self._add_key(LogbookKey.HTTP_METHOD, http_method)

    def http_status(self, http_status: int | str | None) -> Logbook:
        return self._add_key(LogbookKey.HTTP_STATUS, http_status)

    def language(self, language: str | None) -> Logbook:
        return self._add_key(LogbookKey.LANGUAGE, language)

    def arguments(self, arguments: Iterable[Any] | None) -> Logbook:
        if arguments is not None:
            arguments = tuple(arguments)
        return self._add_key(LogbookKey.ARGUMENTS, arguments)

    def action(self, action: str | None) -> Logbook:
        return self._add_key(LogbookKey.ACTION, action)

    # =========================================================================
    # Clock-derived fields
    # =========================================================================

    def day(self) -> Logbook:
        return self._add_key(LogbookKey.DAY, self._clock().day)

    def day_name(self) -> Logbook:
        return self._add_key(LogbookKey.DAY, self._clock().strftime("%A"))

    def month(self) -> Logbook:
        return self._add_key(LogbookKey.MONTH, self._clock().month)

    def month_name(self) -> Logbook:
        return self._add_key(LogbookKey.MONTH, self._clock().strftime("%B"))

    def year(self) -> Logbook:
        return self._add_key(LogbookKey.YEAR, self._clock().year)

    def date(self, fmt: str | None = None) -> Logbook:
        now = self._clock()
        if fmt is None:
            return self._add_key(LogbookKey.DATE, now.date().isoformat())
        return self.date_time(fmt, key=LogbookKey.DATE.value)

    def time(self, fmt: str | None = None) -> Logbook:
        if fmt is None:
            now = self._clock()
            return self._add_key(LogbookKey.TIME, f"{now:%H:%M:%S}.{_millis(now)}")
        return self.date_time(fmt, key=LogbookKey.TIME.value)

    def date_time(self, fmt: str | None = None, *, key: str = LogbookKey.DATE_TIME.value) -> Logbook:
        """Add the current time under ``key``, formatted with ``strftime``.

        Without ``fmt`` the value looks like ``2024-05-01 13:45:12.345 +0200``.
        """
        now = self._clock()
        if fmt is None:
            return self.add(key, f"{now:%Y-%m-%d %H:%M:%S}.{_millis(now)} {now:%z}")
        return self.add(key, now.strftime(fmt))

    def time_zone(self) -> Logbook:
        return self.date_time("%z", key=LogbookKey.TIME_ZONE.value)

    def time_zone_name(self) -> Logbook:
        return self._add_key(LogbookKey.TIME_ZONE, self._clock().tzname())

    # =========================================================================
    # Emission
    # =========================================================================

    def _valid_pairs(self) -> list[Pair]:
        return [pair for pair in self._pairs if pair.is_valid()]

    def template(self) -> str:
        """Space-joined ``key="{}"`` fragments of the valid pairs."""
        return " ".join(pair.render_key_fragment() for pair in self._valid_pairs())

    def arguments_list(self) -> tuple[Any, ...]:
        """Rendered values of the valid pairs, then the captured error if any."""
        args: list[Any] = []
        for pair in self._valid_pairs():
            args.extend(pair.render_string_values())
        if self._error is not None:
            args.append(self._error)
        return tuple(args)

    def _emit(self, severity: str) -> Logbook:
        getattr(self._backend, severity)(self.template(), *self.arguments_list())
        return self

    def trace(self) -> Logbook:
        return self._emit("trace")

    def debug(self) -> Logbook:
        return self._emit("debug")

    def info(self) -> Logbook:
        return self._emit("info")

    def warn(self) -> Logbook:
        return self._emit("warn")

    def error(self) -> Logbook:
        return self._emit("error")

    def __repr__(self) -> str:
        return f"Logbook(backend={self._backend!r}, pairs={len(self._pairs)})"
