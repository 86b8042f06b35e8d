"""Forge-independent pull-request model and helpers."""

from forgepr.prs.interface import AnalyticsSink, ForgePrService, PrDataSource
from forgepr.prs.models import (
    Author,
    CreatePullRequestArgs,
    DetailedPullRequest,
    Label,
    MergeMethod,
    PrState,
    PullRequest,
    RepoInfo,
)
from forgepr.prs.observable import Observable
from forgepr.prs.retry import RetryPolicy

__all__ = [
    "AnalyticsSink",
    "Author",
    "CreatePullRequestArgs",
    "DetailedPullRequest",
    "ForgePrService",
    "Label",
    "MergeMethod",
    "Observable",
    "PrDataSource",
    "PrState",
    "PullRequest",
    "RepoInfo",
    "RetryPolicy",
]
