"""Normalized pull-request model shared by all forge adapters.

This module defines:
- RepoInfo: immutable repository coordinates (owner, name)
- CreatePullRequestArgs: input for creating a pull request
- MergeMethod / PrState: closed sets of forge values
- PullRequest / DetailedPullRequest: normalized response records
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - used in dataclass fields
from enum import Enum


class MergeMethod(str, Enum):
    """How a pull request is merged into its base branch.

    Values are the forge's ``merge_method`` strings.
    """

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class PrState(str, Enum):
    """State a pull request can be updated to."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class RepoInfo:
    """Repository coordinates on the forge."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Get the ``owner/name`` form."""
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, full_name: str) -> RepoInfo:
        """Build coordinates from an ``owner/name`` string.

        Raises:
            ValueError: If the string is not in ``owner/name`` form.
        """
        owner, sep, name = full_name.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            msg = f"Repository must be in 'owner/name' form, got {full_name!r}"
            raise ValueError(msg)
        return cls(owner=owner, name=name)


@dataclass(frozen=True)
class CreatePullRequestArgs:
    """Arguments for opening a pull request.

    Attributes:
        title: Pull request title.
        body: Pull request description (may be empty).
        base_branch_name: Branch the changes should be merged into.
        upstream_name: Branch holding the changes (the forge's ``head``).
        draft: Open as a draft pull request.
    """

    title: str
    body: str
    base_branch_name: str
    upstream_name: str
    draft: bool = False


@dataclass(frozen=True)
class Author:
    """Pull request author or reviewer."""

    name: str | None = None
    email: str | None = None
    is_bot: bool = False
    gravatar_url: str | None = None


@dataclass(frozen=True)
class Label:
    """Label attached to a pull request."""

    name: str
    description: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class PullRequest:
    """Summary of a pull request as returned by create/list calls."""

    html_url: str
    number: int
    title: str
    body: str | None
    author: Author | None
    draft: bool
    source_branch: str
    target_branch: str
    sha: str
    created_at: datetime | None = None
    modified_at: datetime | None = None
    merged_at: datetime | None = None
    closed_at: datetime | None = None
    repo_full_name: str | None = None
    repository_https_url: str | None = None
    repo_owner: str | None = None
    labels: tuple[Label, ...] = field(default_factory=tuple)
    reviewers: tuple[Author, ...] = field(default_factory=tuple)

    @property
    def merged(self) -> bool:
        """Whether the pull request has been merged."""
        return self.merged_at is not None


@dataclass(frozen=True)
class DetailedPullRequest(PullRequest):
    """Full pull request record as returned by a single-PR fetch."""

    id: int | None = None
    state: str | None = None
    fork: bool = False
    comments_count: int = 0
    commits_count: int = 0
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    mergeable: bool | None = None
    mergeable_state: str | None = None
    rebaseable: bool | None = None
    base_repo_full_name: str | None = None
    head_repo_full_name: str | None = None
    base_sha: str | None = None
