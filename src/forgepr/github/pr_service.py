"""GitHub implementation of the pull request service.

GitHubPrService maps each internal pull request operation onto one call
of the GitHub pulls API. Creating a pull request is retried because it
can race a branch push the forge has not finished processing yet.

Errors from the transport are never wrapped: callers get the original
exception so forge diagnostics stay available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from forgepr.github.monitor import GitHubPrMonitor
from forgepr.github.normalize import (
    detailed_pull_request_from_response,
    pull_request_from_response,
)
from forgepr.logging import get_logger, log_create_attempt, log_pr_operation
from forgepr.prs.models import MergeMethod, PrState
from forgepr.prs.observable import Observable
from forgepr.prs.retry import RetryPolicy

if TYPE_CHECKING:
    from forgepr.github.client import GitHubClient
    from forgepr.prs.interface import AnalyticsSink
    from forgepr.prs.models import (
        CreatePullRequestArgs,
        DetailedPullRequest,
        PullRequest,
        RepoInfo,
    )

PR_CREATED_EVENT = "PR Successful"


class GitHubPrService:
    """Pull request operations for one GitHub repository.

    Attributes:
        loading: True while any create call (including its retries) is running.
    """

    def __init__(
        self,
        client: GitHubClient,
        repo: RepoInfo,
        base_branch: str,
        *,
        analytics: AnalyticsSink | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: GitHub transport.
            repo: Repository coordinates.
            base_branch: Default base branch handed to monitors.
            analytics: Optional sink notified after a successful create.
            retry_policy: Create retry policy (default: 4 attempts, 0.5s apart).
        """
        self._client = client
        self._repo = repo
        self._base_branch = base_branch
        self._analytics = analytics
        self._retry_policy = retry_policy or RetryPolicy()
        self._pr_monitors: dict[int, GitHubPrMonitor] = {}
        self._log = get_logger(__name__)
        self._creates_in_flight = 0
        self.loading: Observable[bool] = Observable(False)

    @property
    def repo(self) -> RepoInfo:
        """Get the repository coordinates."""
        return self._repo

    @property
    def base_branch(self) -> str:
        """Get the default base branch."""
        return self._base_branch

    @property
    def retry_policy(self) -> RetryPolicy:
        """Get the create retry policy."""
        return self._retry_policy

    async def create_pr(self, args: CreatePullRequestArgs) -> PullRequest:
        """Open a pull request, retrying while the forge catches up.

        Args:
            args: Title, body, branches and draft flag.

        Returns:
            The normalized pull request from the successful attempt.

        Raises:
            Exception: The error from the last attempt once all attempts fail.
        """

        async def request() -> PullRequest:
            data = await self._client.create_pull(
                self._repo.owner,
                self._repo.name,
                head=args.upstream_name,
                base=args.base_branch_name,
                title=args.title,
                body=args.body,
                draft=args.draft,
            )
            return pull_request_from_response(data)

        def on_failure(attempt: int, error: Exception) -> None:
            log_create_attempt(
                self._repo.full_name,
                attempt,
                self._retry_policy.max_attempts,
                str(error),
            )

        self._creates_in_flight += 1
        self.loading.set(True)
        try:
            pr = await self._retry_policy.run(request, on_failure=on_failure)
        finally:
            self._creates_in_flight -= 1
            self.loading.set(self._creates_in_flight > 0)

        self._capture(PR_CREATED_EVENT)
        log_pr_operation(
            "create",
            self._repo.full_name,
            pr.number,
            head=args.upstream_name,
            base=args.base_branch_name,
            draft=args.draft,
        )
        return pr

    async def get(self, pr_number: int) -> DetailedPullRequest:
        """Fetch a single pull request."""
        data = await self._client.get_pull(self._repo.owner, self._repo.name, pr_number)
        return detailed_pull_request_from_response(data)

    async def merge(self, method: MergeMethod | str, pr_number: int) -> None:
        """Merge a pull request with the given method."""
        method = MergeMethod(method)
        await self._client.merge_pull(
            self._repo.owner,
            self._repo.name,
            pr_number,
            merge_method=method.value,
        )
        log_pr_operation("merge", self._repo.full_name, pr_number, method=method.value)

    async def reopen(self, pr_number: int) -> None:
        """Reopen a closed pull request."""
        await self._client.update_pull(
            self._repo.owner,
            self._repo.name,
            pr_number,
            state=PrState.OPEN.value,
        )
        log_pr_operation("reopen", self._repo.full_name, pr_number)

    async def update(
        self,
        pr_number: int,
        *,
        description: str | None = None,
        state: PrState | str | None = None,
        target_base: str | None = None,
    ) -> None:
        """Update selected fields of a pull request.

        Fields left as None are not sent and stay unchanged.

        Raises:
            ValueError: If state is not 'open' or 'closed'.
        """
        state_value = PrState(state).value if state is not None else None
        await self._client.update_pull(
            self._repo.owner,
            self._repo.name,
            pr_number,
            body=description,
            state=state_value,
            base=target_base,
        )
        log_pr_operation(
            "update",
            self._repo.full_name,
            pr_number,
            fields=[
                name
                for name, value in (
                    ("description", description),
                    ("state", state_value),
                    ("target_base", target_base),
                )
                if value is not None
            ],
        )

    def pr_monitor(self, pr_number: int) -> GitHubPrMonitor:
        """Get the monitor for a pull request, creating it on first use.

        The same instance is returned for every call with the same number.
        """
        monitor = self._pr_monitors.get(pr_number)
        if monitor is not None:
            return monitor
        monitor = GitHubPrMonitor(self, self._repo, pr_number, self._base_branch)
        self._pr_monitors[pr_number] = monitor
        return monitor

    @property
    def pr_monitors(self) -> dict[int, GitHubPrMonitor]:
        """Get a snapshot of the monitors created so far."""
        return dict(self._pr_monitors)

    def _capture(self, event: str) -> None:
        if self._analytics is None:
            return
        try:
            self._analytics.capture(event)
        except Exception as e:
            self._log.debug("analytics_capture_failed", analytics_event=event, error=str(e))

    def __repr__(self) -> str:
        """Get string representation."""
        return f"GitHubPrService(repo={self._repo.full_name!r}, base_branch={self._base_branch!r})"
