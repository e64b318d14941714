"""
Tests for the demo CLI.
"""

import json
from importlib import metadata

import pytest

from logbook_kv import cli
from logbook_kv.builder import Logbook
from logbook_kv.version import LibraryInfo


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, restore_logging):
    for name in ("LOGBOOK_LEVEL", "LOGBOOK_JSON", "LOGBOOK_LOG_FILE", "LOGBOOK_COLORS"):
        monkeypatch.delenv(name, raising=False)


def _events(path):
    return [json.loads(line)["event"] for line in path.read_text(encoding="utf-8").splitlines()]


def test_demo_writes_json_lines(tmp_path):
    log_file = tmp_path / "demo.jsonl"
    cli.main(["--json", "--log-file", str(log_file)])

    events = _events(log_file)
    assert 'message="Hello world!" language="en"' in events
    assert 'message="Empty keys are skipped"' in events
    assert 'message="None is supported" null="nullKey" nullValue="null"' in events
    assert 'message="Arrays may hold None" array="[null, not None]"' in events
    assert 'message="Formatted message, arg1 1, arg2 2 and arg3 3"' in events
    assert 'message="Strips double and single quotes and new lines"' in events
    assert events.count('message="Many times"') == 2


def test_demo_respects_level(tmp_path):
    log_file = tmp_path / "demo.jsonl"
    cli.main(["--json", "--log-file", str(log_file), "--level", "error"])

    events = _events(log_file)
    assert events == ["", 'message="An error" exception="RuntimeError: :("', 'message="Many times"']


def test_demo_reads_environment(tmp_path, monkeypatch):
    log_file = tmp_path / "env.jsonl"
    monkeypatch.setenv("LOGBOOK_JSON", "1")
    monkeypatch.setenv("LOGBOOK_LOG_FILE", str(log_file))
    monkeypatch.setenv("LOGBOOK_LEVEL", "WARNING")
    cli.main([])

    assert _events(log_file)[0] == ""


def test_invalid_level_exits_with_error():
    with pytest.raises(SystemExit) as exc:
        cli.main(["--level", "LOUD"])
    assert str(exc.value.code).startswith("ERROR:")


def test_version_prints_name_and_version(monkeypatch, capsys):
    monkeypatch.setattr(
        cli,
        "load_library_info",
        lambda: LibraryInfo(name="logbook-kv", version="1.2.3", vendor="", revision="unknown"),
    )
    cli.main(["--version"])
    assert capsys.readouterr().out.strip() == "logbook-kv 1.2.3"


def test_version_without_metadata_exits(monkeypatch):
    from logbook_kv import version

    def missing(distribution):
        raise metadata.PackageNotFoundError(distribution)

    monkeypatch.setattr(cli, "load_library_info", lambda: version.load_library_info(lookup=missing))
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert "Library metadata not found" in str(exc.value.code)


def test_run_demo_with_recorder(recorder):
    cli.run_demo(Logbook(recorder))
    severities = [call[0] for call in recorder.calls]
    assert severities[:5] == ["info", "warn", "error", "trace", "debug"]
    assert recorder.calls[-2:] == [
        ("info", 'message="{}"', ("Many times",)),
        ("error", 'message="{}"', ("Many times",)),
    ]
