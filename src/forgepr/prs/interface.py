"""Protocols describing the pull-request surface and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from forgepr.prs.models import (
        CreatePullRequestArgs,
        DetailedPullRequest,
        MergeMethod,
        PrState,
        PullRequest,
    )
    from forgepr.prs.observable import Observable


class PrDataSource(Protocol):
    """Anything a monitor can fetch pull request details from."""

    async def get(self, pr_number: int) -> DetailedPullRequest: ...


class AnalyticsSink(Protocol):
    """Best-effort receiver for named product events."""

    def capture(self, event: str) -> None: ...


class ForgePrService(PrDataSource, Protocol):
    """Internal pull-request operations every forge adapter provides."""

    loading: Observable[bool]

    async def create_pr(self, args: CreatePullRequestArgs) -> PullRequest: ...

    async def merge(self, method: MergeMethod, pr_number: int) -> None: ...

    async def reopen(self, pr_number: int) -> None: ...

    async def update(
        self,
        pr_number: int,
        *,
        description: str | None = None,
        state: PrState | str | None = None,
        target_base: str | None = None,
    ) -> None: ...
