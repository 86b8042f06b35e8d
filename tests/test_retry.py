"""Tests for the fixed-interval retry policy."""

from __future__ import annotations

import time

import pytest

from forgepr.prs.retry import RetryPolicy


class Flaky:
    """Operation that fails a set number of times before succeeding."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError(f"failure {self.calls}")
        return "ok"


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 4
        assert policy.delay == 0.5

    @pytest.mark.parametrize("max_attempts", [0, -1])
    def test_rejects_non_positive_attempts(self, max_attempts):
        with pytest.raises(ValueError, match="max_attempts"):
            RetryPolicy(max_attempts=max_attempts)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError, match="delay"):
            RetryPolicy(delay=-0.1)

    async def test_no_sleep_on_first_success(self, recording_sleep):
        operation = Flaky(failures=0)

        result = await RetryPolicy(sleep=recording_sleep).run(operation)

        assert result == "ok"
        assert operation.calls == 1
        assert recording_sleep.delays == []

    async def test_constant_delay_between_attempts(self, recording_sleep):
        operation = Flaky(failures=3)

        result = await RetryPolicy(delay=0.5, sleep=recording_sleep).run(operation)

        assert result == "ok"
        assert operation.calls == 4
        assert recording_sleep.delays == [0.5, 0.5, 0.5]

    async def test_raises_last_error_without_trailing_sleep(self, recording_sleep):
        operation = Flaky(failures=10)

        with pytest.raises(RuntimeError, match="failure 4"):
            await RetryPolicy(sleep=recording_sleep).run(operation)

        assert operation.calls == 4
        assert recording_sleep.delays == [0.5, 0.5, 0.5]

    async def test_on_failure_hook_sees_every_failed_attempt(self, recording_sleep):
        seen: list[tuple[int, str]] = []
        operation = Flaky(failures=2)

        await RetryPolicy(sleep=recording_sleep).run(
            operation,
            on_failure=lambda attempt, error: seen.append((attempt, str(error))),
        )

        assert seen == [(1, "failure 1"), (2, "failure 2")]

    async def test_single_attempt_policy(self, recording_sleep):
        operation = Flaky(failures=1)

        with pytest.raises(RuntimeError, match="failure 1"):
            await RetryPolicy(max_attempts=1, sleep=recording_sleep).run(operation)

        assert recording_sleep.delays == []

    async def test_real_sleep_waits_at_least_the_delay(self):
        operation = Flaky(failures=1)
        started = time.monotonic()

        await RetryPolicy(delay=0.05).run(operation)

        assert time.monotonic() - started >= 0.045
