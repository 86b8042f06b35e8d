"""GitHub token resolution and masking."""

from __future__ import annotations

import os

TOKEN_ENV_VAR = "GITHUB_TOKEN"


class AuthenticationError(Exception):
    """Raised when no usable GitHub credentials are available."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialize authentication error.

        Args:
            message: Error description.
            status_code: HTTP status code if from API response.
        """
        super().__init__(message)
        self.status_code = status_code


def get_github_token(token: str | None = None) -> str:
    """Resolve the GitHub token.

    Args:
        token: Explicit token. Falls back to GITHUB_TOKEN when empty.

    Returns:
        GitHub token.

    Raises:
        AuthenticationError: If neither an explicit token nor GITHUB_TOKEN is set.
    """
    resolved = (token or os.environ.get(TOKEN_ENV_VAR, "")).strip()
    if not resolved:
        raise AuthenticationError(
            f"{TOKEN_ENV_VAR} environment variable is not set. "
            "Please set it to a GitHub token with pull request write access."
        )
    return resolved


def mask_token(token: str) -> str:
    """Mask a token for safe logging.

    Args:
        token: Token to mask.

    Returns:
        Masked token showing first 4 and last 4 characters.
    """
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"
