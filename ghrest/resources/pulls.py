"""Pull request endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghrest.http.response import Response
from ghrest.schemas import (
    MergeRequest,
    MergeResult,
    PullRequest,
    PullRequestCreate,
    PullRequestUpdate,
)

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


class PullRequestsResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self, owner: str, repo: str, number: int) -> tuple[PullRequest, Response]:
        return self._client.request(
            "GET", f"repos/{owner}/{repo}/pulls/{number}", model=PullRequest,
        )

    def create(
        self, owner: str, repo: str, body: PullRequestCreate,
    ) -> tuple[PullRequest, Response]:
        return self._client.request(
            "POST", f"repos/{owner}/{repo}/pulls", json=body, model=PullRequest,
        )

    def update(
        self, owner: str, repo: str, number: int, body: PullRequestUpdate,
    ) -> tuple[PullRequest, Response]:
        return self._client.request(
            "PATCH", f"repos/{owner}/{repo}/pulls/{number}", json=body, model=PullRequest,
        )

    def merge(
        self, owner: str, repo: str, number: int, body: MergeRequest | None = None,
    ) -> tuple[MergeResult, Response]:
        return self._client.request(
            "PUT",
            f"repos/{owner}/{repo}/pulls/{number}/merge",
            json=body or MergeRequest(),
            model=MergeResult,
        )

    def list(
        self,
        owner: str,
        repo: str,
        *,
        state: str | None = None,
        head: str | None = None,
        base: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[PullRequest], Response]:
        """Pull requests of a repository; *state* is open, closed or all."""
        params = {
            "state": state,
            "head": head,
            "base": base,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return self._client.request(
            "GET", f"repos/{owner}/{repo}/pulls", params=params, model=list[PullRequest],
        )


class AsyncPullRequestsResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def get(
        self, owner: str, repo: str, number: int,
    ) -> tuple[PullRequest, Response]:
        return await self._client.request(
            "GET", f"repos/{owner}/{repo}/pulls/{number}", model=PullRequest,
        )

    async def create(
        self, owner: str, repo: str, body: PullRequestCreate,
    ) -> tuple[PullRequest, Response]:
        return await self._client.request(
            "POST", f"repos/{owner}/{repo}/pulls", json=body, model=PullRequest,
        )

    async def update(
        self, owner: str, repo: str, number: int, body: PullRequestUpdate,
    ) -> tuple[PullRequest, Response]:
        return await self._client.request(
            "PATCH", f"repos/{owner}/{repo}/pulls/{number}", json=body, model=PullRequest,
        )

    async def merge(
        self, owner: str, repo: str, number: int, body: MergeRequest | None = None,
    ) -> tuple[MergeResult, Response]:
        return await self._client.request(
            "PUT",
            f"repos/{owner}/{repo}/pulls/{number}/merge",
            json=body or MergeRequest(),
            model=MergeResult,
        )

    async def list(
        self,
        owner: str,
        repo: str,
        *,
        state: str | None = None,
        head: str | None = None,
        base: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[PullRequest], Response]:
        params = {
            "state": state,
            "head": head,
            "base": base,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return await self._client.request(
            "GET", f"repos/{owner}/{repo}/pulls", params=params, model=list[PullRequest],
        )
