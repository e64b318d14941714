from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from logbook_kv.builder import Logbook
from logbook_kv.config import LoggingSettings
from logbook_kv.errors import LogbookError
from logbook_kv.logging_config import configure_from_settings
from logbook_kv.version import load_library_info


def run_demo(logbook: Logbook) -> None:
    """Emit one line per Logbook feature."""
    logbook.info()
    logbook.warn()
    logbook.error()
    logbook.trace()
    logbook.debug()

    logbook.message("Hello world!").language("en").info()

    logbook.message("A line with an exception").exception(RuntimeError("Oh oh!")).info()

    logbook.message("A line with an exception and its traceback").capture_error(
        RuntimeError("Oh oh!")
    ).info()

    logbook.message("Formatted message, arg1 {}, arg2 {} and arg3 {}", 1, "2", "3").info()

    logbook.message("An error").exception(RuntimeError(":(")).error()

    logbook.message("Tuples and lists are rendered as arrays").add("array", ("1", "2")).add(
        "list", ["1", "2"]
    ).info()

    logbook.message("Every value is wrapped in double quotes").add("int", 1).add("float", 3.14).info()

    logbook.message("None is supported").add(None, "nullKey").add("nullValue", None).info()

    logbook.message("Arrays may hold None").add("array", [None, "not None"]).info()

    logbook.message("Empty keys are skipped").add("", "empty key").info()

    logbook.message("Strips \"double\" and 'single' quotes and new\nlines").info()

    logbook.message("Many times").info().error()


def cmd_version() -> None:
    info = load_library_info()
    print(f"{info.name} {info.version}")


def cmd_demo(settings: LoggingSettings) -> None:
    configure_from_settings(settings)
    run_demo(Logbook.instance("logbook_kv.demo"))


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="logbook-kv", description="Emit sample Logbook lines")
    p.add_argument("--level", default=None, help="Log level (default: LOGBOOK_LEVEL or INFO)")
    p.add_argument("--json", dest="json_output", action="store_true", help="Render JSON lines")
    p.add_argument("--log-file", type=Path, default=None, help="Append to this file instead of stderr")
    p.add_argument("--no-color", dest="colors", action="store_false", default=None)
    p.add_argument("--version", action="store_true", help="Print library name and version")

    args = p.parse_args(argv)

    try:
        if args.version:
            cmd_version()
            return

        settings = LoggingSettings.from_env()
        if args.level is not None:
            settings = replace(settings, level=args.level)
        if args.json_output:
            settings.json_output = True
        if args.log_file is not None:
            settings.log_file = args.log_file
        if args.colors is not None:
            settings.colors = args.colors
        cmd_demo(settings)
    except LogbookError as e:
        raise SystemExit(f"ERROR: {e}") from e


if __name__ == "__main__":
    main()
