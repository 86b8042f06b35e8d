"""Polling monitor for a single pull request."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from forgepr.prs.observable import Observable

if TYPE_CHECKING:
    from forgepr.prs.interface import PrDataSource
    from forgepr.prs.models import DetailedPullRequest, RepoInfo

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0


class GitHubPrMonitor:
    """Keeps an up to date view of one pull request.

    The latest fetched record is published through ``pr``; the last polling
    failure (or None after a successful fetch) through ``error``.
    """

    def __init__(
        self,
        source: PrDataSource,
        repo: RepoInfo,
        pr_number: int,
        base_branch: str,
    ) -> None:
        self.source = source
        self.repo = repo
        self.pr_number = pr_number
        self.base_branch = base_branch
        self.pr: Observable[DetailedPullRequest | None] = Observable(None)
        self.error: Observable[Exception | None] = Observable(None)
        self.loading = Observable(False)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        """Whether the polling task is active."""
        return self._task is not None and not self._task.done()

    async def refresh(self) -> DetailedPullRequest:
        """Fetch the pull request once and publish the result.

        Raises:
            Exception: Whatever the data source raises; it is also published
                through ``error``.
        """
        self.loading.set(True)
        try:
            pr = await self.source.get(self.pr_number)
        except Exception as e:
            self.error.set(e)
            raise
        finally:
            self.loading.set(False)
        self.error.set(None)
        self.pr.set(pr)
        return pr

    def start(self, interval: float = DEFAULT_POLL_INTERVAL) -> asyncio.Task[None]:
        """Start polling in the background.

        Calling start while already running returns the existing task.

        Args:
            interval: Seconds between fetches.
        """
        if self._task is not None and not self._task.done():
            return self._task
        self._task = asyncio.create_task(
            self._poll(interval),
            name=f"pr-monitor-{self.repo.full_name}#{self.pr_number}",
        )
        return self._task

    async def stop(self) -> None:
        """Stop polling and wait for the task to finish."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _poll(self, interval: float) -> None:
        while True:
            try:
                await self.refresh()
            except Exception as e:
                logger.warning(
                    "Failed to refresh %s#%d: %s",
                    self.repo.full_name,
                    self.pr_number,
                    e,
                )
            await asyncio.sleep(interval)

    def __repr__(self) -> str:
        """Get string representation."""
        return f"GitHubPrMonitor(repo={self.repo.full_name!r}, pr_number={self.pr_number})"
