"""Mapping of GitHub pull request payloads onto the normalized model.

Both functions are pure and tolerate missing optional fields: anything
GitHub leaves out becomes None, False, 0 or an empty tuple.
"""

from __future__ import annotations

import contextlib
from datetime import datetime
from typing import Any

from forgepr.prs.models import Author, DetailedPullRequest, Label, PullRequest


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None if absent or invalid."""
    if not isinstance(value, str) or not value:
        return None
    with contextlib.suppress(ValueError):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _author(user: Any) -> Author | None:
    if not isinstance(user, dict):
        return None
    return Author(
        name=user.get("login"),
        email=user.get("email"),
        is_bot=user.get("type") == "Bot",
        gravatar_url=user.get("avatar_url"),
    )


def _labels(raw: Any) -> tuple[Label, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        Label(
            name=label["name"],
            description=label.get("description"),
            color=label.get("color"),
        )
        for label in raw
        if isinstance(label, dict) and label.get("name")
    )


def _reviewers(raw: Any) -> tuple[Author, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(author for author in (_author(user) for user in raw) if author is not None)


def _summary_fields(data: dict[str, Any]) -> dict[str, Any]:
    head = _as_dict(data.get("head"))
    base = _as_dict(data.get("base"))
    base_repo = _as_dict(base.get("repo"))
    base_owner = _as_dict(base_repo.get("owner"))

    return {
        "html_url": data.get("html_url") or "",
        "number": int(data.get("number") or 0),
        "title": data.get("title") or "",
        "body": data.get("body"),
        "author": _author(data.get("user")),
        "draft": bool(data.get("draft", False)),
        "source_branch": head.get("ref") or "",
        "target_branch": base.get("ref") or "",
        "sha": head.get("sha") or "",
        "created_at": _parse_timestamp(data.get("created_at")),
        "modified_at": _parse_timestamp(data.get("updated_at")),
        "merged_at": _parse_timestamp(data.get("merged_at")),
        "closed_at": _parse_timestamp(data.get("closed_at")),
        "repo_full_name": base_repo.get("full_name"),
        "repository_https_url": base_repo.get("clone_url"),
        "repo_owner": base_owner.get("login"),
        "labels": _labels(data.get("labels")),
        "reviewers": _reviewers(data.get("requested_reviewers")),
    }


def pull_request_from_response(data: dict[str, Any]) -> PullRequest:
    """Normalize a create/list pull request payload.

    Args:
        data: Raw pull request JSON from GitHub.

    Returns:
        PullRequest instance.
    """
    return PullRequest(**_summary_fields(data))


def detailed_pull_request_from_response(data: dict[str, Any]) -> DetailedPullRequest:
    """Normalize a single pull request payload.

    Args:
        data: Raw pull request JSON from GitHub's get endpoint.

    Returns:
        DetailedPullRequest instance.
    """
    head = _as_dict(data.get("head"))
    base = _as_dict(data.get("base"))
    head_repo = _as_dict(head.get("repo"))
    base_repo = _as_dict(base.get("repo"))

    head_full_name = head_repo.get("full_name")
    base_full_name = base_repo.get("full_name")

    return DetailedPullRequest(
        **_summary_fields(data),
        id=data.get("id"),
        state=data.get("state"),
        fork=bool(head_full_name and base_full_name and head_full_name != base_full_name),
        comments_count=int(data.get("comments") or 0) + int(data.get("review_comments") or 0),
        commits_count=int(data.get("commits") or 0),
        additions=int(data.get("additions") or 0),
        deletions=int(data.get("deletions") or 0),
        changed_files=int(data.get("changed_files") or 0),
        mergeable=data.get("mergeable"),
        mergeable_state=data.get("mergeable_state"),
        rebaseable=data.get("rebaseable"),
        base_repo_full_name=base_full_name,
        head_repo_full_name=head_full_name,
        base_sha=base.get("sha"),
    )
