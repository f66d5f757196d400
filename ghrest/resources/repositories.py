"""Repository endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghrest.http.response import Response
from ghrest.schemas import Repository, RepositoryCreate, RepositoryUpdate, User

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


class RepositoriesResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self, owner: str, repo: str) -> tuple[Repository, Response]:
        return self._client.request("GET", f"repos/{owner}/{repo}", model=Repository)

    def create(self, body: RepositoryCreate) -> tuple[Repository, Response]:
        """Create a repository owned by the authenticated user."""
        return self._client.request("POST", "user/repos", json=body, model=Repository)

    def update(
        self, owner: str, repo: str, body: RepositoryUpdate,
    ) -> tuple[Repository, Response]:
        return self._client.request(
            "PATCH", f"repos/{owner}/{repo}", json=body, model=Repository,
        )

    def delete(self, owner: str, repo: str) -> Response:
        _, resp = self._client.request("DELETE", f"repos/{owner}/{repo}")
        return resp

    def list_for_user(
        self,
        owner: str,
        *,
        type: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[Repository], Response]:
        """Public repositories of *owner*, filtered by *type* (all, owner, member)."""
        params = {
            "type": type,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return self._client.request(
            "GET", f"users/{owner}/repos", params=params, model=list[Repository],
        )

    def list_contributors(
        self,
        owner: str,
        repo: str,
        *,
        anon: bool | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[User], Response]:
        """Contributors sorted by number of commits, optionally with anonymous ones."""
        params = {"anon": anon, "per_page": per_page, "page": page}
        return self._client.request(
            "GET", f"repos/{owner}/{repo}/contributors", params=params, model=list[User],
        )


class AsyncRepositoriesResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def get(self, owner: str, repo: str) -> tuple[Repository, Response]:
        return await self._client.request(
            "GET", f"repos/{owner}/{repo}", model=Repository,
        )

    async def create(self, body: RepositoryCreate) -> tuple[Repository, Response]:
        return await self._client.request(
            "POST", "user/repos", json=body, model=Repository,
        )

    async def update(
        self, owner: str, repo: str, body: RepositoryUpdate,
    ) -> tuple[Repository, Response]:
        return await self._client.request(
            "PATCH", f"repos/{owner}/{repo}", json=body, model=Repository,
        )

    async def delete(self, owner: str, repo: str) -> Response:
        _, resp = await self._client.request("DELETE", f"repos/{owner}/{repo}")
        return resp

    async def list_for_user(
        self,
        owner: str,
        *,
        type: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[Repository], Response]:
        params = {
            "type": type,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return await self._client.request(
            "GET", f"users/{owner}/repos", params=params, model=list[Repository],
        )

    async def list_contributors(
        self,
        owner: str,
        repo: str,
        *,
        anon: bool | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"anon": anon, "per_page": per_page, "page": page}
        return await self._client.request(
            "GET", f"repos/{owner}/{repo}/contributors", params=params, model=list[User],
        )
