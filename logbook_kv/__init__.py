"""
Logbook: key/value log lines for the standard logging module and structlog.

Lines are built as ordered ``key="value"`` pairs with keys restricted to
``[A-Za-z0-9_.]`` and values stripped of quotes and newlines, then emitted in
a single call to a leveled logger.
"""

from .backends import TRACE, LeveledLogger, StdlibLogger, StructlogLogger, format_message
from .builder import Logbook
from .config import LoggingSettings
from .errors import LogbookError, LoggingConfigError
from .keys import LogbookKey
from .logging_config import configure_from_settings, configure_logging, get_logger
from .pair import Pair, clean_value, sanitize_key
from .version import LibraryInfo, load_library_info

__version__ = "0.1.0"

__all__ = [
    "TRACE",
    "LeveledLogger",
    "LibraryInfo",
    "Logbook",
    "LogbookError",
    "LogbookKey",
    "LoggingConfigError",
    "LoggingSettings",
    "Pair",
    "StdlibLogger",
    "StructlogLogger",
    "clean_value",
    "configure_from_settings",
    "configure_logging",
    "format_message",
    "get_logger",
    "load_library_info",
    "sanitize_key",
]
