"""
Tests for sui_toolbox.retry

Tests verify:
- Success on first attempt returns immediately (no sleep)
- Retryable errors are retried until success
- Non-retryable errors stop on the attempt that raised them
- Exponential backoff delays and cap
- Overall budget is never exceeded by sleeping or by slow attempts
- max_attempts cap
- on_retry hook sees every retry decision
"""

import pytest

from sui_toolbox.retry import (
    RetryPolicy,
    RetryTimeoutError,
    deadline_for,
    exponential_backoff,
    fixed_backoff,
    retry,
)


class Transient(Exception):
    pass


class Terminal(Exception):
    pass


def make_policy(clock, **overrides):
    defaults = dict(
        backoff=exponential_backoff(initial=1.0, factor=2.0, max_delay=8.0),
        timeout=60.0,
        retry_if=lambda e: isinstance(e, Transient),
        sleep=clock.sleep,
        clock=clock,
    )
    defaults.update(overrides)
    return RetryPolicy(**defaults)


class TestBackoffFunctions:
    """Test backoff helpers."""

    def test_exponential_backoff_doubles(self):
        backoff = exponential_backoff(initial=0.1, factor=2.0, max_delay=10.0)
        assert [backoff(n) for n in range(4)] == pytest.approx([0.1, 0.2, 0.4, 0.8])

    def test_exponential_backoff_is_capped(self):
        backoff = exponential_backoff(initial=1.0, factor=2.0, max_delay=5.0)
        assert backoff(10) == 5.0

    def test_fixed_backoff(self):
        backoff = fixed_backoff(2.0)
        assert backoff(0) == backoff(7) == 2.0


class TestRetrySuccess:
    """Test successful calls."""

    def test_first_attempt_success_does_not_sleep(self, fake_clock):
        result = retry(lambda: "ok", make_policy(fake_clock))

        assert result == "ok"
        assert fake_clock.sleeps == []

    def test_retries_transient_errors_until_success(self, fake_clock):
        outcomes = [Transient("503"), Transient("503"), "funded"]
        calls = []

        def attempt():
            calls.append(1)
            outcome = outcomes[len(calls) - 1]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        result = retry(attempt, make_policy(fake_clock))

        assert result == "funded"
        assert len(calls) == 3
        assert fake_clock.sleeps == [1.0, 2.0]


class TestNonRetryable:
    """Test that terminal errors are raised at once."""

    def test_terminal_error_raised_unchanged_after_one_attempt(self, fake_clock):
        calls = []

        def attempt():
            calls.append(1)
            raise Terminal("rate limited")

        with pytest.raises(Terminal, match="rate limited"):
            retry(attempt, make_policy(fake_clock))

        assert len(calls) == 1
        assert fake_clock.sleeps == []

    def test_terminal_error_after_transient_errors_stops(self, fake_clock):
        outcomes = [Transient("down"), Terminal("429")]
        calls = []

        def attempt():
            calls.append(1)
            raise outcomes[len(calls) - 1]

        with pytest.raises(Terminal):
            retry(attempt, make_policy(fake_clock))

        assert len(calls) == 2


class TestRetryBudget:
    """Test the overall wall-clock budget."""

    def test_timeout_raises_retry_timeout_error(self, fake_clock):
        def attempt():
            raise Transient("down")

        with pytest.raises(RetryTimeoutError) as exc_info:
            retry(attempt, make_policy(fake_clock, timeout=10.0))

        assert isinstance(exc_info.value.last_error, Transient)
        assert isinstance(exc_info.value.__cause__, Transient)
        # 1 + 2 + 4 = 7s slept; the next 8s sleep would cross the deadline
        assert fake_clock.sleeps == [1.0, 2.0, 4.0]
        assert exc_info.value.attempts == 4

    def test_budget_never_exceeded(self, fake_clock):
        start = fake_clock.now

        def attempt():
            fake_clock.advance(0.5)  # each request takes time too
            raise Transient("down")

        with pytest.raises(RetryTimeoutError):
            retry(attempt, make_policy(fake_clock, timeout=30.0))

        assert fake_clock.now - start <= 30.0

    def test_attempt_overrunning_deadline_stops_retrying(self, fake_clock):
        """No further attempt starts once a slow attempt has used the budget."""
        calls = []

        def attempt():
            calls.append(1)
            fake_clock.advance(25.0)
            raise Transient("slow")

        with pytest.raises(RetryTimeoutError) as exc_info:
            retry(attempt, make_policy(fake_clock, timeout=30.0, backoff=fixed_backoff(0.0)))

        assert len(calls) == 2
        assert exc_info.value.attempts == 2

    def test_deadline_for_counts_down_to_zero(self, fake_clock):
        remaining = deadline_for(make_policy(fake_clock, timeout=30.0))

        assert remaining() == 30.0
        fake_clock.advance(12.0)
        assert remaining() == 18.0
        fake_clock.advance(40.0)
        assert remaining() == 0.0

    def test_max_attempts(self, fake_clock):
        calls = []

        def attempt():
            calls.append(1)
            raise Transient("down")

        with pytest.raises(RetryTimeoutError, match="3 attempts"):
            retry(attempt, make_policy(fake_clock, max_attempts=3))

        assert len(calls) == 3


class TestRetryLogging:
    """Test the on_retry hook."""

    def test_on_retry_called_per_retry(self, fake_clock):
        seen = []
        outcomes = [Transient("a"), Transient("b"), "ok"]
        calls = []

        def attempt():
            calls.append(1)
            outcome = outcomes[len(calls) - 1]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        policy = make_policy(fake_clock, on_retry=lambda n, delay, e: seen.append((n, delay, str(e))))
        retry(attempt, policy)

        assert seen == [(1, 1.0, "a"), (2, 2.0, "b")]
