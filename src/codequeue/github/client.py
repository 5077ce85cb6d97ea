"""GitHub GraphQL API client used by the GitHub Projects provider."""

from __future__ import annotations

import logging
import os
import re
import subprocess
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_HOST = "api.github.com"
DEFAULT_TIMEOUT = 30.0
GH_CLI_TIMEOUT = 10

_OPERATION_NAME = re.compile(r"(?:query|mutation)\s+(\w+)")


class GitHubClientError(Exception):
    """A GraphQL request did not produce data."""


class GitHubAuthError(GitHubClientError):
    """No usable token, or the token was rejected."""


class GitHubNotFoundError(GitHubClientError):
    """Project, item or field does not exist (or is invisible to the token)."""


class GitHubForbiddenError(GitHubClientError):
    """Token lacks the scopes for the operation."""


class GitHubRateLimitError(GitHubClientError):
    """API rate limit exhausted."""


def resolve_token() -> str | None:
    """Find a GitHub token.

    Looks at GITHUB_TOKEN first, then asks the gh CLI. Returns None when
    neither yields a token.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        logger.debug("Using token from GITHUB_TOKEN")
        return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
            timeout=GH_CLI_TIMEOUT,
        )
    except (subprocess.SubprocessError, FileNotFoundError):
        logger.debug("No token from gh CLI")
        return None

    return result.stdout.strip() or None


class GitHubClient:
    """Synchronous GraphQL client.

    One httpx.Client is shared by all calls, so the client may be used from
    the publish worker threads. Every request is bounded by ``timeout``.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            token: Token with the "project" scope
            base_url: API host; set it for GitHub Enterprise
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url
        self._graphql_url = f"https://{base_url}/graphql"
        self._client = httpx.Client(
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )

    @classmethod
    def from_environment(cls, base_url: str = DEFAULT_HOST) -> GitHubClient:
        """Build a client from resolve_token().

        Raises:
            GitHubAuthError: If no token is available
        """
        token = resolve_token()
        if token is None:
            raise GitHubAuthError(
                "No GitHub token found. Set GITHUB_TOKEN or run 'gh auth login'."
            )
        return cls(token, base_url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.execute(query, variables)

    def mutate(self, mutation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.execute(mutation, variables)

    def execute(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a query or mutation and return its ``data`` object.

        Raises:
            GitHubAuthError: HTTP 401
            GitHubRateLimitError: HTTP 403 mentioning the rate limit
            GitHubForbiddenError: Other HTTP 403, or a FORBIDDEN error
            GitHubNotFoundError: HTTP 404, or a NOT_FOUND error
            GitHubClientError: Transport failure, timeout, bad JSON or any
                other GraphQL error
        """
        match = _OPERATION_NAME.search(document)
        operation = match.group(1) if match else "anonymous"

        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables
        logger.debug("GraphQL %s variables=%s", operation, variables)

        started = time.monotonic()
        try:
            response = self._client.post(self._graphql_url, json=payload)
        except httpx.RequestError as e:
            logger.error("GraphQL %s: %s", operation, e)
            raise GitHubClientError(f"Request failed: {e}") from e
        elapsed_ms = (time.monotonic() - started) * 1000

        error = _http_error(response)
        if error is not None:
            logger.error(
                "GraphQL %s: HTTP %d (%.0fms)", operation, response.status_code, elapsed_ms
            )
            raise error

        try:
            body = response.json()
        except ValueError as e:
            raise GitHubClientError(f"Invalid JSON response: {e}") from e

        if body.get("errors"):
            error = _graphql_error(body["errors"])
            logger.error("GraphQL %s: %s (%.0fms)", operation, error, elapsed_ms)
            raise error

        logger.debug("GraphQL %s: OK (%.0fms)", operation, elapsed_ms)
        return body.get("data") or {}


def _http_error(response: httpx.Response) -> GitHubClientError | None:
    status = response.status_code
    if status < 400:
        return None
    if status == 401:
        return GitHubAuthError("Authentication failed. Check GITHUB_TOKEN (scopes: project).")
    if status == 403:
        if "rate limit" in response.text.lower():
            return GitHubRateLimitError("GitHub API rate limit exceeded. Try again later.")
        return GitHubForbiddenError("Permission denied. The token needs the 'project' scope.")
    if status == 404:
        return GitHubNotFoundError("Resource not found")
    return GitHubClientError(f"HTTP {status}: {response.text}")


def _graphql_error(errors: list[dict[str, Any]]) -> GitHubClientError:
    for error in errors:
        kind = error.get("type", "")
        message = error.get("message", "")
        if kind == "NOT_FOUND" or "not found" in message.lower():
            return GitHubNotFoundError(message)
        if kind == "FORBIDDEN" or "permission" in message.lower():
            return GitHubForbiddenError(message)
    return GitHubClientError("; ".join(e.get("message", str(e)) for e in errors))
