"""Async transport for the GitHub pulls REST API.

This module provides the GitHubClient class which handles:
- Authenticated requests with the forge's default headers
- Status code mapping to GitHubAPIError / TransientError
- The four pulls endpoints the gateway needs (create, get, merge, update)

Each call issues exactly one HTTP request. Retrying is left to callers.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from forgepr.github.auth import get_github_token, mask_token

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS: dict[str, str] = {
    "X-GitHub-Api-Version": "2022-11-28",
}


class TransientError(Exception):
    """Raised for 5xx server errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retry_after: int | None = None,
    ) -> None:
        """Initialize transient error.

        Args:
            message: Error description.
            status_code: HTTP status code if available.
            retry_after: Suggested retry delay in seconds.
        """
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after


class GitHubAPIError(Exception):
    """Raised for non-transient GitHub API errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
    ) -> None:
        """Initialize GitHub API error.

        Args:
            message: Error description.
            status_code: HTTP status code.
            response_body: Response JSON body if available.
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body or {}

    @property
    def errors(self) -> list[dict[str, Any]]:
        """Get the validation errors GitHub attached to a 422 response."""
        errors = self.response_body.get("errors")
        return errors if isinstance(errors, list) else []


class GitHubClient:
    """Async GitHub pulls API client.

    The client supports both context manager and standalone usage.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = "forgepr/0.1.0",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            token: GitHub token. If None, reads from GITHUB_TOKEN.
            base_url: GitHub API base URL.
            user_agent: User-Agent header value.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._token = get_github_token(token)
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Get default request headers."""
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self._user_agent,
            **DEFAULT_HEADERS,
        }

    async def __aenter__(self) -> GitHubClient:
        """Enter async context."""
        await self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure we have an active client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self.headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def _handle_response(response: httpx.Response) -> dict[str, Any]:
        """Map an HTTP response to its JSON body or an error.

        Args:
            response: HTTP response.

        Returns:
            Parsed JSON object, or an empty dict for 204 responses.

        Raises:
            TransientError: For 5xx errors.
            GitHubAPIError: For other non-success statuses.
        """
        if response.status_code == 204:
            return {}

        if response.status_code in (200, 201):
            data = response.json() if response.content else {}
            return data if isinstance(data, dict) else {"data": data}

        if response.status_code >= 500:
            retry_after = int(response.headers.get("Retry-After", 0)) or None
            raise TransientError(
                f"GitHub API server error: {response.status_code}",
                status_code=response.status_code,
                retry_after=retry_after,
            )

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        if not isinstance(body, dict):
            body = {"message": str(body)}

        if response.status_code == 401:
            raise GitHubAPIError(
                "GitHub API authentication failed",
                status_code=401,
                response_body=body,
            )

        raise GitHubAPIError(
            f"GitHub API error: {response.status_code} - {body.get('message', 'Unknown error')}",
            status_code=response.status_code,
            response_body=body,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a single request to the GitHub API.

        Network errors (httpx.RequestError) propagate unchanged.

        Args:
            method: HTTP method.
            path: API path (e.g., "/repos/octocat/hello/pulls").
            json: Optional JSON body.

        Returns:
            Parsed JSON response.
        """
        client = await self._ensure_client()
        logger.debug("%s %s", method, path)
        response = await client.request(method, path, json=json)
        return self._handle_response(response)

    async def create_pull(
        self,
        owner: str,
        repo: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        draft: bool = False,
    ) -> dict[str, Any]:
        """Open a pull request.

        Args:
            owner: Repository owner.
            repo: Repository name.
            title: Pull request title.
            head: Branch containing the changes.
            base: Branch to merge into.
            body: Pull request description.
            draft: Whether to open as a draft.

        Returns:
            Created pull request data.
        """
        payload: dict[str, Any] = {
            "title": title,
            "head": head,
            "base": base,
            "draft": draft,
        }
        if body is not None:
            payload["body"] = body
        return await self.request("POST", f"/repos/{owner}/{repo}/pulls", json=payload)

    async def get_pull(self, owner: str, repo: str, pull_number: int) -> dict[str, Any]:
        """Get pull request details."""
        return await self.request("GET", f"/repos/{owner}/{repo}/pulls/{pull_number}")

    async def merge_pull(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        *,
        merge_method: str,
    ) -> dict[str, Any]:
        """Merge a pull request.

        Args:
            owner: Repository owner.
            repo: Repository name.
            pull_number: Pull request number.
            merge_method: One of "merge", "squash" or "rebase".

        Returns:
            Merge result data (sha, merged, message).
        """
        return await self.request(
            "PUT",
            f"/repos/{owner}/{repo}/pulls/{pull_number}/merge",
            json={"merge_method": merge_method},
        )

    async def update_pull(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        **fields: Any,
    ) -> dict[str, Any]:
        """Update a pull request.

        Only keyword arguments that are not None are sent; anything left
        out stays unchanged on the forge.

        Args:
            owner: Repository owner.
            repo: Repository name.
            pull_number: Pull request number.
            **fields: Any of title, body, state, base, maintainer_can_modify.

        Returns:
            Updated pull request data.
        """
        payload = {key: value for key, value in fields.items() if value is not None}
        return await self.request(
            "PATCH",
            f"/repos/{owner}/{repo}/pulls/{pull_number}",
            json=payload,
        )

    def __repr__(self) -> str:
        """Get string representation."""
        return f"GitHubClient(base_url={self._base_url!r}, token={mask_token(self._token)!r})"
