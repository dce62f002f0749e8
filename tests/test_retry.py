"""
Tests for RetryPolicy and with_retry().
"""

from unittest.mock import Mock

import pytest

from client.errors import AppError, api_error, auth_error, network_error
from client.retry import NO_RETRY, RetryPolicy, with_retry


class TestRetryPolicy:
    """Test policy configuration."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 3
        assert policy.delays_ms() == [1000, 2000]

    def test_delay_grows_exponentially(self):
        policy = RetryPolicy(max_attempts=5, base_delay_ms=100, multiplier=3)
        assert policy.delays_ms() == [100, 300, 900, 2700]

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)
        with pytest.raises(ValueError):
            RetryPolicy(base_delay_ms=-1)

    def test_no_retry_makes_one_attempt(self):
        sleeps = []
        fn = Mock(side_effect=network_error())
        with pytest.raises(AppError):
            with_retry(fn, NO_RETRY, sleeps.append)
        assert fn.call_count == 1
        assert sleeps == []


class TestWithRetry:
    """Test the retry loop."""

    def test_success_on_first_attempt(self):
        sleeps = []
        fn = Mock(return_value="ok")
        assert with_retry(fn, RetryPolicy(), sleeps.append) == "ok"
        assert fn.call_count == 1
        assert sleeps == []

    def test_retries_until_success(self):
        sleeps = []
        fn = Mock(side_effect=[api_error(500), network_error(), "ok"])
        assert with_retry(fn, RetryPolicy(), sleeps.append) == "ok"
        assert fn.call_count == 3
        assert sleeps == [1.0, 2.0]

    def test_raises_last_error_after_max_attempts(self):
        sleeps = []
        errors = [api_error(500, "first"), api_error(502, "second"), api_error(503, "third")]
        fn = Mock(side_effect=errors)

        with pytest.raises(Exception) as exc_info:
            with_retry(fn, RetryPolicy(), sleeps.append)

        assert exc_info.value is errors[-1]
        assert fn.call_count == 3
        assert sleeps == [1.0, 2.0]

    @pytest.mark.parametrize("error", [api_error(404), api_error(400), auth_error()])
    def test_non_retryable_fails_immediately(self, error):
        sleeps = []
        fn = Mock(side_effect=error)
        with pytest.raises(Exception) as exc_info:
            with_retry(fn, RetryPolicy(), sleeps.append)
        assert exc_info.value is error
        assert fn.call_count == 1
        assert sleeps == []

    def test_unclassified_exceptions_not_retried(self):
        fn = Mock(side_effect=KeyError("x"))
        with pytest.raises(KeyError):
            with_retry(fn, RetryPolicy(), lambda _: None)
        assert fn.call_count == 1

    def test_custom_predicate(self):
        fn = Mock(side_effect=[KeyError("x"), "ok"])
        policy = RetryPolicy(retry_predicate=lambda e: isinstance(e, KeyError))
        assert with_retry(fn, policy, lambda _: None) == "ok"
