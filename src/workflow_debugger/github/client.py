"""Authenticated GitHub REST API client.

The client never raises: transport errors, rejected requests, missing
credentials and non-JSON bodies all come back as a failed ``FetchResult``
and are logged. Every call is a single attempt.
"""

from __future__ import annotations

from typing import Any

import httpx

from workflow_debugger.config import Settings, get_settings
from workflow_debugger.core.result import FailureKind, FetchResult
from workflow_debugger.logging import get_logger

logger = get_logger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class GitHubClient:
    """Client for the GitHub REST API.

    Usage:
        client = GitHubClient(get_settings())
        result = await client.request(client.url("/repos/owner/repo/actions/runs"))
        if result.ok:
            runs = result.value["workflow_runs"]
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Settings carrying the credential and API options.
                Defaults to the process-wide settings.
            transport: Optional httpx transport, used by tests.
        """
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.settings.github_api_base.rstrip("/")

    def url(self, endpoint: str) -> str:
        """Build an absolute API URL from an endpoint path."""
        return f"{self.base_url}{endpoint}"

    def _headers(self) -> dict[str, str] | None:
        """Get headers for API requests, or None if no credential is set."""
        token = self.settings.github_personal_access_token
        if not token:
            logger.error(
                "GitHub token not provided. "
                "Set GITHUB_PERSONAL_ACCESS_TOKEN environment variable."
            )
            return None
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": self.settings.github_api_version,
        }

    def _client(self, follow_redirects: bool = True) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=follow_redirects,
            timeout=self.settings.request_timeout,
        )

    async def request(
        self,
        url: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> FetchResult[Any]:
        """Make an authenticated request and decode the JSON response.

        Args:
            url: Absolute API URL.
            method: HTTP method (GET, POST, etc.)
            body: JSON body, sent only for POST, PUT and PATCH.

        Returns:
            FetchResult holding the decoded JSON value, or the reason the
            request produced nothing.
        """
        headers = self._headers()
        if headers is None:
            return FetchResult.fail(FailureKind.MISSING_TOKEN, "GitHub token not configured")

        method = method.upper()
        json_body = body if body is not None and method in _BODY_METHODS else None

        async with self._client() as client:
            try:
                response = await client.request(method, url, headers=headers, json=json_body)
            except httpx.HTTPError as e:
                logger.error("Error making GitHub API request", url=url, error=repr(e))
                return FetchResult.fail(FailureKind.TRANSPORT, str(e) or repr(e))

        if not response.is_success:
            logger.error(
                "GitHub API error",
                url=url,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            return FetchResult.fail(
                FailureKind.HTTP_STATUS,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error("Response is not JSON", url=url, content_type=content_type)
            return FetchResult.fail(
                FailureKind.NOT_JSON, f"Unexpected content type: {content_type}"
            )

        try:
            return FetchResult.success(response.json())
        except ValueError as e:
            logger.error("Response body is not valid JSON", url=url, error=str(e))
            return FetchResult.fail(FailureKind.NOT_JSON, str(e))

    async def check_exists(self, url: str) -> FetchResult[str]:
        """Check that an authenticated resource exists without downloading it.

        Used for binary endpoints such as log archives, which answer with a
        redirect to the download location. The redirect is not followed.

        Args:
            url: Absolute API URL.

        Returns:
            FetchResult holding ``url`` itself when the resource is reachable.
        """
        headers = self._headers()
        if headers is None:
            return FetchResult.fail(FailureKind.MISSING_TOKEN, "GitHub token not configured")

        async with self._client(follow_redirects=False) as client:
            try:
                # Streamed so the archive body is never read
                async with client.stream("GET", url, headers=headers) as response:
                    pass
            except httpx.HTTPError as e:
                logger.error("Error checking GitHub resource", url=url, error=repr(e))
                return FetchResult.fail(FailureKind.TRANSPORT, str(e) or repr(e))

        if not (response.is_success or response.is_redirect):
            logger.error(
                "GitHub API error checking resource",
                url=url,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            return FetchResult.fail(
                FailureKind.HTTP_STATUS,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        return FetchResult.success(url)
