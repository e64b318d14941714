from logbook_kv.errors import LogbookError, LoggingConfigError


def test_logbook_error_message():
    error = LogbookError("expected message")
    assert str(error) == "expected message"
    assert error.message == "expected message"


def test_logbook_error_keeps_cause():
    cause = RuntimeError()
    try:
        try:
            raise cause
        except RuntimeError as exc:
            raise LogbookError("wrapped") from exc
    except LogbookError as error:
        assert error.__cause__ is cause


def test_logging_config_error_default_message():
    error = LoggingConfigError("level", "LOUD")
    assert error.setting == "level"
    assert error.value == "LOUD"
    assert str(error) == "Invalid value for level: 'LOUD'"
