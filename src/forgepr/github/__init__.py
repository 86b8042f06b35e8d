"""GitHub transport, payload normalization and pull request service."""

from forgepr.github.auth import AuthenticationError, get_github_token
from forgepr.github.client import (
    DEFAULT_HEADERS,
    GitHubAPIError,
    GitHubClient,
    TransientError,
)
from forgepr.github.monitor import GitHubPrMonitor
from forgepr.github.normalize import (
    detailed_pull_request_from_response,
    pull_request_from_response,
)
from forgepr.github.pr_service import GitHubPrService

__all__ = [
    "DEFAULT_HEADERS",
    "AuthenticationError",
    "GitHubAPIError",
    "GitHubClient",
    "GitHubPrMonitor",
    "GitHubPrService",
    "TransientError",
    "detailed_pull_request_from_response",
    "get_github_token",
    "pull_request_from_response",
]
