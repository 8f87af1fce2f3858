"""
Tests for the custom exception hierarchy
"""

import logging

from elevare.exceptions import (
    ConfigurationError,
    DataError,
    ElevareError,
    RecordNotFoundError,
    ValidationError,
    wrap_provider_exception,
)


class TestElevareError:
    """Tests for the base exception"""

    def test_defaults(self):
        error = ElevareError("boom")

        assert str(error) == "boom"
        assert error.user_message == "An error occurred. Please try again."
        assert error.context == {}
        assert error.request_id

    def test_request_ids_are_unique(self):
        assert ElevareError("a").request_id != ElevareError("b").request_id

    def test_to_dict(self):
        error = ElevareError("boom", request_id="req-1", user_message="Try later")

        data = error.to_dict()

        assert data["error"] == "ElevareError"
        assert data["message"] == "boom"
        assert data["user_message"] == "Try later"
        assert data["request_id"] == "req-1"
        assert "timestamp" in data

    def test_logged_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="elevare.exceptions"):
            ElevareError("boom", user_id="user-1", operation="get_next_best")

        assert "ElevareError: boom" in caplog.text
        record = caplog.records[-1]
        assert record.user_id == "user-1"
        assert record.operation == "get_next_best"


class TestSubclasses:
    """Tests for specialised errors"""

    def test_validation_error(self):
        error = ValidationError("must be >= 0", field="current", value=-1)

        assert error.field == "current"
        assert error.value == -1
        assert error.user_message == "Invalid current: must be >= 0"
        assert error.context == {"field": "current", "value": -1}

    def test_validation_error_without_field(self):
        assert ValidationError("bad snapshot").user_message == "bad snapshot"

    def test_record_not_found(self):
        error = RecordNotFoundError("missing", record_type="User", record_id="u-1")

        assert isinstance(error, DataError)
        assert error.user_message == "User not found."

    def test_configuration_error(self):
        error = ConfigurationError("bad", config_key="LOG_LEVEL")
        assert error.context == {"config_key": "LOG_LEVEL"}


class TestWrapProviderException:
    """Tests for wrap_provider_exception()"""

    def test_wraps_foreign_exception(self):
        cause = ConnectionError("db down")

        error = wrap_provider_exception(cause, operation="get_user_stats", user_id="u-1")

        assert isinstance(error, DataError)
        assert error.cause is cause
        assert error.message == "get_user_stats failed: db down"
        assert error.user_message == "We couldn't load your achievement progress. Please try again."

    def test_passes_elevare_errors_through(self):
        original = RecordNotFoundError("missing", record_type="User", record_id="u-1")

        assert wrap_provider_exception(original, operation="get_user_stats") is original


def test_cause_logged_with_traceback(caplog):
    cause = ValueError("bad value")

    with caplog.at_level(logging.ERROR, logger="elevare.exceptions"):
        error = DataError("load failed", cause=cause)

    record = caplog.records[-1]
    assert record.exc_info[1] is cause
    assert record.cause == repr(cause)
    assert record.error_type == "DataError"
    assert "context" not in error.to_dict()
