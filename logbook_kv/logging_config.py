"""Structured logging configuration for Logbook.

Uses structlog to render both structlog events and the standard-library
records that Logbook's StdlibLogger produces, so every line goes through the
same console or JSON renderer.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from logbook_kv.config import LoggingSettings, level_number

HANDLER_NAME = "logbook_kv"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
) -> logging.Handler:
    """Configure structured logging.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON format
        log_file: Optional file to log to
        colors: Whether to use colors in console output

    Returns:
        The handler installed on the root logger
    """
    numeric_level = level_number(level)

    renderer: structlog.types.Processor
    final: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json_output:
        final.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    final.append(renderer)

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=final,
        )
    )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
        if existing.get_name() == HANDLER_NAME:
            existing.close()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return handler


def configure_from_settings(settings: LoggingSettings) -> logging.Handler:
    """Configure logging from a LoggingSettings value."""
    return configure_logging(
        level=settings.level,
        json_output=settings.json_output,
        log_file=settings.log_file,
        colors=settings.colors and not settings.json_output,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


# Usage example:
# from logbook_kv import Logbook
# from logbook_kv.logging_config import configure_logging
#
# configure_logging(level="DEBUG", json_output=True)
# Logbook.instance(__name__).message("order placed").add("items", 3).info()
