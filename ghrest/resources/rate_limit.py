"""``GET /rate_limit`` -- quota for every API category."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghrest.schemas import RateLimitOverview

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


class RateLimitResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self) -> RateLimitOverview:
        """Current quota; this call does not count against it."""
        overview, _ = self._client.request("GET", "rate_limit", model=RateLimitOverview)
        return overview


class AsyncRateLimitResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def get(self) -> RateLimitOverview:
        overview, _ = await self._client.request(
            "GET", "rate_limit", model=RateLimitOverview,
        )
        return overview
