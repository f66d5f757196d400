"""User endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghrest.http.response import Response
from ghrest.schemas import User, UserUpdate

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


class UsersResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self, username: str) -> User:
        """Public profile of *username*."""
        user, _ = self._client.request("GET", f"users/{username}", model=User)
        return user

    def get_authenticated(self) -> User:
        """Profile of the user owning the configured token."""
        user, _ = self._client.request("GET", "user", model=User)
        return user

    def list(
        self,
        *,
        since: int | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[User], Response]:
        """All users in sign-up order, starting after user id *since*."""
        params = {"since": since, "per_page": per_page, "page": page}
        return self._client.request("GET", "users", params=params, model=list[User])

    def update_authenticated(self, body: UserUpdate) -> User:
        user, _ = self._client.request("PATCH", "user", json=body, model=User)
        return user

    def list_followers(
        self, *, per_page: int | None = None, page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"per_page": per_page, "page": page}
        return self._client.request(
            "GET", "user/followers", params=params, model=list[User],
        )

    def list_following(
        self, *, per_page: int | None = None, page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"per_page": per_page, "page": page}
        return self._client.request(
            "GET", "user/following", params=params, model=list[User],
        )

    def follow(self, username: str) -> Response:
        _, resp = self._client.request("PUT", f"user/following/{username}")
        return resp

    def unfollow(self, username: str) -> Response:
        _, resp = self._client.request("DELETE", f"user/following/{username}")
        return resp


class AsyncUsersResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def get(self, username: str) -> User:
        user, _ = await self._client.request("GET", f"users/{username}", model=User)
        return user

    async def get_authenticated(self) -> User:
        user, _ = await self._client.request("GET", "user", model=User)
        return user

    async def list(
        self,
        *,
        since: int | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"since": since, "per_page": per_page, "page": page}
        return await self._client.request(
            "GET", "users", params=params, model=list[User],
        )

    async def update_authenticated(self, body: UserUpdate) -> User:
        user, _ = await self._client.request("PATCH", "user", json=body, model=User)
        return user

    async def list_followers(
        self, *, per_page: int | None = None, page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"per_page": per_page, "page": page}
        return await self._client.request(
            "GET", "user/followers", params=params, model=list[User],
        )

    async def list_following(
        self, *, per_page: int | None = None, page: int | None = None,
    ) -> tuple[list[User], Response]:
        params = {"per_page": per_page, "page": page}
        return await self._client.request(
            "GET", "user/following", params=params, model=list[User],
        )

    async def follow(self, username: str) -> Response:
        _, resp = await self._client.request("PUT", f"user/following/{username}")
        return resp

    async def unfollow(self, username: str) -> Response:
        _, resp = await self._client.request("DELETE", f"user/following/{username}")
        return resp
