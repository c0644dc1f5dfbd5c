"""Logger setup and error type unit tests."""

from baggage_propagation import PropagationError, PropagationErrorCodes
from baggage_propagation.logger import logger_from_config, new_logger
from baggage_propagation.models import LogSection


def test_new_logger_json_format() -> None:
    logger = new_logger(level="INFO", format="json")
    assert logger is not None


def test_new_logger_text_format() -> None:
    logger = new_logger(level="DEBUG", format="text")
    assert logger.bind(component="baggage") is not None


def test_logger_from_config() -> None:
    logger = logger_from_config(LogSection(level="WARNING", format="text"))
    assert logger is not None


def test_error_str_includes_code() -> None:
    err = PropagationError(code=PropagationErrorCodes.NO_ACTIVE_OPERATION, message="No operation is active")
    assert str(err) == "NO_ACTIVE_OPERATION: No operation is active"
    assert err.code == PropagationErrorCodes.NO_ACTIVE_OPERATION


def test_error_keeps_cause() -> None:
    cause = OSError("denied")
    err = PropagationError(code=PropagationErrorCodes.READ_FILE, message="read failed", cause=cause)
    assert err.__cause__ is cause
