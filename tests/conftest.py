"""Shared pytest fixtures for forgepr tests.

This module provides common fixtures for:
- Temporary config files
- Sample GitHub pull request API responses
- A fake pulls transport and a recording sleep for the gateway
"""

from __future__ import annotations

import copy
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import structlog
import yaml

from forgepr.prs.models import RepoInfo

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """Return a sample configuration dictionary."""
    return {
        "version": 1,
        "github": {
            "token": "test-token-value",
        },
        "repository": {
            "owner": "octocat",
            "name": "hello-world",
            "base_branch": "main",
        },
        "create_retry": {
            "max_attempts": 4,
            "delay": 0,
        },
    }


@pytest.fixture
def write_config(temp_dir: Path) -> Callable[..., Path]:
    """Factory fixture to write config files."""

    def _write(config: dict[str, Any], filename: str = "config.yaml") -> Path:
        path = temp_dir / filename
        with path.open("w") as f:
            yaml.safe_dump(config, f)
        return path

    return _write


# ============================================================================
# GitHub API Response Fixtures
# ============================================================================


@pytest.fixture
def repo() -> RepoInfo:
    """Return the repository used across tests."""
    return RepoInfo(owner="octocat", name="hello-world")


@pytest.fixture
def github_pr_response() -> dict[str, Any]:
    """Return a sample GitHub pull request API response."""
    return {
        "id": 1001,
        "number": 42,
        "state": "open",
        "title": "Fix bug",
        "body": "Fixes the thing",
        "draft": False,
        "html_url": "https://github.com/octocat/hello-world/pull/42",
        "user": {
            "login": "contributor",
            "type": "User",
            "avatar_url": "https://avatars.githubusercontent.com/u/3",
        },
        "labels": [
            {"name": "bug", "description": "Something is broken", "color": "d73a4a"},
        ],
        "requested_reviewers": [
            {"login": "reviewer1", "type": "User"},
            {"login": "review-bot[bot]", "type": "Bot"},
        ],
        "head": {
            "ref": "feature/fix",
            "sha": "6dcb09b5b57875f334f61aebed695e2e4193db5e",
            "repo": {"full_name": "octocat/hello-world"},
        },
        "base": {
            "ref": "main",
            "sha": "e5bd3914e2e596debea16f433f57875b5b90bcd6",
            "repo": {
                "full_name": "octocat/hello-world",
                "clone_url": "https://github.com/octocat/hello-world.git",
                "owner": {"login": "octocat"},
            },
        },
        "created_at": "2026-01-08T09:00:00Z",
        "updated_at": "2026-01-10T14:00:00Z",
        "closed_at": None,
        "merged_at": None,
        "mergeable": True,
        "mergeable_state": "clean",
        "rebaseable": True,
        "comments": 2,
        "review_comments": 1,
        "commits": 3,
        "additions": 10,
        "deletions": 4,
        "changed_files": 2,
    }


# ============================================================================
# Gateway Test Doubles
# ============================================================================


class FakePullsClient:
    """Stands in for GitHubClient, recording calls and replaying outcomes.

    Each entry in ``create_outcomes`` is either an exception to raise or a
    payload to return, consumed one per create call.
    """

    def __init__(self, pr_payload: dict[str, Any]) -> None:
        self.pr_payload = pr_payload
        self.create_outcomes: list[BaseException | dict[str, Any]] = []
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.error: BaseException | None = None

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((name, args, kwargs))
        if self.error is not None:
            raise self.error

    def calls_named(self, name: str) -> list[tuple[tuple[Any, ...], dict[str, Any]]]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    async def create_pull(self, owner: str, repo: str, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("create_pull", (owner, repo), kwargs))
        if self.create_outcomes:
            outcome = self.create_outcomes.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        return copy.deepcopy(self.pr_payload)

    async def get_pull(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        self._record("get_pull", owner, repo, pull_number)
        return copy.deepcopy(self.pr_payload)

    async def merge_pull(
        self, owner: str, repo: str, pull_number: int, **kwargs: Any
    ) -> dict[str, Any]:
        self._record("merge_pull", owner, repo, pull_number, **kwargs)
        return {"merged": True, "sha": "abc123", "message": "Pull Request successfully merged"}

    async def update_pull(
        self, owner: str, repo: str, pull_number: int, **kwargs: Any
    ) -> dict[str, Any]:
        self._record("update_pull", owner, repo, pull_number, **kwargs)
        return copy.deepcopy(self.pr_payload)


class RecordingSleep:
    """Awaitable sleep that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def fake_client(github_pr_response: dict[str, Any]) -> FakePullsClient:
    """Return a fake pulls transport."""
    return FakePullsClient(github_pr_response)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Return a sleep that records delays."""
    return RecordingSleep()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo configure_logging() calls so later tests log to a live stream."""
    yield
    structlog.reset_defaults()
