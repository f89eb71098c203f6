"""Unit tests for notepad.core.resilience."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from notepad.core.resilience import build_retrying, log_retry


class TestLogRetry:
    def test_logs_warning_with_attempt(self):
        retry_state = MagicMock()
        retry_state.attempt_number = 2
        retry_state.start_time = 10.0
        retry_state.outcome_timestamp = 10.5
        retry_state.outcome.failed = True
        retry_state.outcome.exception.return_value = ConnectionError("refused")
        retry_state.fn.__name__ = "find_all"

        with patch("notepad.core.resilience.logger") as mock_logger:
            log_retry(retry_state)

        mock_logger.warning.assert_called_once()
        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["resilience_event"] == "retry_attempt"
        assert extra["attempt"] == 2
        assert extra["duration_ms"] == 500
        assert extra["error"] == "refused"

    def test_without_function_name(self):
        retry_state = MagicMock()
        retry_state.fn = None
        retry_state.outcome = None
        retry_state.start_time = None

        with patch("notepad.core.resilience.logger") as mock_logger:
            log_retry(retry_state)

        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["dependency"] == "remote-notes"
        assert extra["error"] is None
        assert extra["duration_ms"] is None


class TestBuildRetrying:
    async def test_retries_transport_errors_until_success(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise httpx.ConnectError("refused")
            return "ok"

        result = None
        async for attempt in build_retrying(max_attempts=3, backoff_multiplier=0):
            with attempt:
                result = await flaky()

        assert result == "ok"
        assert len(calls) == 3

    async def test_reraises_after_last_attempt(self):
        calls = []

        with pytest.raises(httpx.ConnectError):
            async for attempt in build_retrying(max_attempts=2, backoff_multiplier=0):
                with attempt:
                    calls.append(1)
                    raise httpx.ConnectError("refused")

        assert len(calls) == 2

    async def test_does_not_retry_other_errors(self):
        calls = []

        with pytest.raises(ValueError):
            async for attempt in build_retrying(max_attempts=3, backoff_multiplier=0):
                with attempt:
                    calls.append(1)
                    raise ValueError("bad payload")

        assert len(calls) == 1
