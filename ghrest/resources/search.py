"""Search endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ghrest.schemas import Repository, SearchResult, User

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


def _search_params(
    query: str,
    sort: str | None,
    order: str | None,
    per_page: int | None,
    page: int | None,
) -> dict[str, Any]:
    # Collapse runs of whitespace; httpx encodes the remaining spaces as '+'.
    return {
        "q": " ".join(query.split()),
        "sort": sort,
        "order": order,
        "per_page": per_page,
        "page": page,
    }


class SearchResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def repositories(
        self,
        query: str,
        *,
        sort: str | None = None,
        order: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> SearchResult[Repository]:
        """Search repositories, e.g. ``"language:python stars:>100"``."""
        result, _ = self._client.request(
            "GET",
            "search/repositories",
            params=_search_params(query, sort, order, per_page, page),
            model=SearchResult[Repository],
        )
        return result

    def users(
        self,
        query: str,
        *,
        sort: str | None = None,
        order: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> SearchResult[User]:
        result, _ = self._client.request(
            "GET",
            "search/users",
            params=_search_params(query, sort, order, per_page, page),
            model=SearchResult[User],
        )
        return result


class AsyncSearchResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def repositories(
        self,
        query: str,
        *,
        sort: str | None = None,
        order: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> SearchResult[Repository]:
        result, _ = await self._client.request(
            "GET",
            "search/repositories",
            params=_search_params(query, sort, order, per_page, page),
            model=SearchResult[Repository],
        )
        return result

    async def users(
        self,
        query: str,
        *,
        sort: str | None = None,
        order: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> SearchResult[User]:
        result, _ = await self._client.request(
            "GET",
            "search/users",
            params=_search_params(query, sort, order, per_page, page),
            model=SearchResult[User],
        )
        return result
