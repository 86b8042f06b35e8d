"""Tests for GitHubPrMonitor."""

from __future__ import annotations

import asyncio

import pytest

from forgepr.github.client import GitHubAPIError
from forgepr.github.monitor import GitHubPrMonitor
from forgepr.github.normalize import detailed_pull_request_from_response


class StubSource:
    def __init__(self, payload, errors=None):
        self.payload = payload
        self.errors = list(errors or [])
        self.calls = 0

    async def get(self, pr_number):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return detailed_pull_request_from_response(dict(self.payload, number=pr_number))


class TestGitHubPrMonitor:
    async def test_refresh_publishes_latest_record(self, repo, github_pr_response):
        source = StubSource(github_pr_response)
        monitor = GitHubPrMonitor(source, repo, 42, "main")
        seen = []
        monitor.pr.subscribe(seen.append)

        pr = await monitor.refresh()

        assert pr.number == 42
        assert monitor.pr.value == pr
        assert seen == [None, pr]
        assert monitor.loading.value is False

    async def test_refresh_error_is_published_and_raised(self, repo, github_pr_response):
        error = GitHubAPIError("Not Found", status_code=404)
        monitor = GitHubPrMonitor(StubSource(github_pr_response, [error]), repo, 42, "main")

        with pytest.raises(GitHubAPIError):
            await monitor.refresh()

        assert monitor.error.value is error
        assert monitor.pr.value is None

        await monitor.refresh()

        assert monitor.error.value is None
        assert monitor.pr.value is not None

    async def test_polling_survives_errors_and_stops(self, repo, github_pr_response):
        source = StubSource(github_pr_response, [GitHubAPIError("flaky", status_code=502)])
        monitor = GitHubPrMonitor(source, repo, 42, "main")

        task = monitor.start(interval=0)
        assert monitor.start(interval=0) is task
        for _ in range(20):
            if monitor.pr.value is not None:
                break
            await asyncio.sleep(0)

        assert monitor.is_running
        assert source.calls >= 2
        assert monitor.pr.value is not None

        await monitor.stop()

        assert not monitor.is_running
        assert task.cancelled()

    async def test_stop_when_not_started(self, repo, github_pr_response):
        monitor = GitHubPrMonitor(StubSource(github_pr_response), repo, 1, "main")

        await monitor.stop()

        assert not monitor.is_running
