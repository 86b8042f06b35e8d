"""Pydantic schema models for configuration.

- Config: Top-level configuration container
- GitHubConfig: GitHub API settings
- RepositoryConfig: Repository coordinates and base branch
- CreateRetryConfig: Retry policy for pull request creation
"""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forgepr.prs.models import RepoInfo
from forgepr.prs.retry import DEFAULT_DELAY_SECONDS, DEFAULT_MAX_ATTEMPTS, RetryPolicy

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class GitHubConfig(BaseModel):
    """GitHub API configuration.

    Attributes:
        base_url: API base URL (default: https://api.github.com)
        token: Token or env var reference; falls back to GITHUB_TOKEN
        timeout: Request timeout in seconds (1-300, default: 30)
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = "https://api.github.com"
    token: str | None = None
    timeout: Annotated[float, Field(ge=1, le=300)] = 30.0

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate the API URL uses https."""
        if not v.startswith("https://"):
            msg = "base_url must be an https:// URL"
            raise ValueError(msg)
        return v.rstrip("/")


class RepositoryConfig(BaseModel):
    """Repository the pull requests belong to.

    Attributes:
        owner: Repository owner (user or organization)
        name: Repository name
        base_branch: Default branch pull requests target
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: Annotated[str, Field(min_length=1, max_length=100)]
    name: Annotated[str, Field(min_length=1, max_length=100)]
    base_branch: Annotated[str, Field(min_length=1)] = "main"

    @field_validator("owner", "name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate owner/name contain only characters GitHub allows."""
        if not _NAME_PATTERN.match(v):
            msg = "must contain only letters, digits, '-', '_' or '.'"
            raise ValueError(msg)
        return v

    def to_repo_info(self) -> RepoInfo:
        """Get the repository coordinates."""
        return RepoInfo(owner=self.owner, name=self.name)


class CreateRetryConfig(BaseModel):
    """Retry policy for pull request creation.

    Attributes:
        max_attempts: Total attempts (1-10, default: 4)
        delay: Constant delay between attempts in seconds (0-60, default: 0.5)
    """

    model_config = ConfigDict(extra="forbid")

    max_attempts: Annotated[int, Field(ge=1, le=10)] = DEFAULT_MAX_ATTEMPTS
    delay: Annotated[float, Field(ge=0, le=60)] = DEFAULT_DELAY_SECONDS

    def to_policy(self) -> RetryPolicy:
        """Build the retry policy."""
        return RetryPolicy(max_attempts=self.max_attempts, delay=self.delay)


class Config(BaseModel):
    """Top-level configuration loaded from YAML.

    Attributes:
        version: Schema version (must be 1)
        github: GitHub API settings
        repository: Repository coordinates
        create_retry: Pull request creation retry policy
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal[1]
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    repository: RepositoryConfig
    create_retry: CreateRetryConfig = Field(default_factory=CreateRetryConfig)
