"""Async and sync clients for the GitHub REST API."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

import httpx
from pydantic import BaseModel

from ghrest.config import ClientSettings
from ghrest.http.executor import (
    AsyncRateLimitHandler,
    AsyncRequestExecutor,
    RateLimitHandler,
    RequestExecutor,
    RequestHook,
    ResponseHook,
)
from ghrest.http.response import Response
from ghrest.metrics import ClientMetrics
from ghrest.resources.issues import AsyncIssuesResource, IssuesResource
from ghrest.resources.pulls import AsyncPullRequestsResource, PullRequestsResource
from ghrest.resources.rate_limit import AsyncRateLimitResource, RateLimitResource
from ghrest.resources.repositories import (
    AsyncRepositoriesResource,
    RepositoriesResource,
)
from ghrest.resources.search import AsyncSearchResource, SearchResource
from ghrest.resources.users import AsyncUsersResource, UsersResource

ACCEPT = "application/vnd.github+json"


def _resolve_settings(
    settings: ClientSettings | None, overrides: dict[str, Any],
) -> ClientSettings:
    if settings is None:
        return ClientSettings(**overrides)
    if overrides:
        return ClientSettings(**{**settings.model_dump(), **overrides})
    return settings


def _default_headers(settings: ClientSettings) -> dict[str, str]:
    headers = {
        "Accept": ACCEPT,
        "X-GitHub-Api-Version": settings.api_version,
        "User-Agent": settings.user_agent,
    }
    if settings.token:
        headers["Authorization"] = f"Bearer {settings.token}"
    return headers


def query_params(**params: Any) -> dict[str, str]:
    """Drop ``None`` values and render the rest the way the API expects."""
    rendered: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            rendered[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            if value:
                rendered[key] = ",".join(str(v) for v in value)
        elif hasattr(value, "isoformat"):
            rendered[key] = value.isoformat()
        else:
            rendered[key] = str(value)
    return rendered


def _json_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


class _ClientBase:
    settings: ClientSettings
    _http: httpx.Client | httpx.AsyncClient

    def new_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Request:
        """Build a request for *path* relative to ``settings.base_url``."""
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = query_params(**params)
        if json is not None:
            kwargs["json"] = _json_body(json)
        return self._http.build_request(method, path.lstrip("/"), **kwargs)

    @property
    def metrics(self) -> ClientMetrics:
        return self._executor.metrics


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncGitHubClient(_ClientBase):
    """Async client for the GitHub API (backed by ``httpx.AsyncClient``)."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limit_handler: AsyncRateLimitHandler | None = None,
        request_hook: RequestHook | None = None,
        response_hook: ResponseHook | None = None,
        metrics: ClientMetrics | None = None,
        **overrides: Any,
    ) -> None:
        self.settings = _resolve_settings(settings, overrides)
        kwargs: dict[str, Any] = {
            "base_url": self.settings.base_url,
            "headers": _default_headers(self.settings),
            "timeout": self.settings.timeout,
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**kwargs)
        self._executor = AsyncRequestExecutor(
            self._http,
            self.settings,
            rate_limit_handler=rate_limit_handler,
            request_hook=request_hook,
            response_hook=response_hook,
            metrics=metrics,
        )

        self.users = AsyncUsersResource(self)
        self.repositories = AsyncRepositoriesResource(self)
        self.issues = AsyncIssuesResource(self)
        self.pulls = AsyncPullRequestsResource(self)
        self.search = AsyncSearchResource(self)
        self.rate_limit = AsyncRateLimitResource(self)

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncGitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    # -- execution -----------------------------------------------------------

    async def do(
        self,
        request: httpx.Request,
        model: Any = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> tuple[Any, Response]:
        return await self._executor.do(request, model, cancel=cancel)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        model: Any = None,
        cancel: asyncio.Event | None = None,
    ) -> tuple[Any, Response]:
        req = self.new_request(method, path, params=params, json=json)
        return await self.do(req, model, cancel=cancel)


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class GitHubClient(_ClientBase):
    """Synchronous client for the GitHub API (backed by ``httpx.Client``).

    Settings come from *settings*, from keyword overrides such as
    ``token="..."``, or from ``GHREST_*`` environment variables.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        rate_limit_handler: RateLimitHandler | None = None,
        request_hook: RequestHook | None = None,
        response_hook: ResponseHook | None = None,
        metrics: ClientMetrics | None = None,
        **overrides: Any,
    ) -> None:
        self.settings = _resolve_settings(settings, overrides)
        kwargs: dict[str, Any] = {
            "base_url": self.settings.base_url,
            "headers": _default_headers(self.settings),
            "timeout": self.settings.timeout,
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._http = httpx.Client(**kwargs)
        self._executor = RequestExecutor(
            self._http,
            self.settings,
            rate_limit_handler=rate_limit_handler,
            request_hook=request_hook,
            response_hook=response_hook,
            metrics=metrics,
        )

        self.users = UsersResource(self)
        self.repositories = RepositoriesResource(self)
        self.issues = IssuesResource(self)
        self.pulls = PullRequestsResource(self)
        self.search = SearchResource(self)
        self.rate_limit = RateLimitResource(self)

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # -- execution -----------------------------------------------------------

    def do(
        self,
        request: httpx.Request,
        model: Any = None,
        *,
        cancel: threading.Event | None = None,
    ) -> tuple[Any, Response]:
        """Execute *request*; see :meth:`RequestExecutor.do`."""
        return self._executor.do(request, model, cancel=cancel)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        model: Any = None,
        cancel: threading.Event | None = None,
    ) -> tuple[Any, Response]:
        req = self.new_request(method, path, params=params, json=json)
        return self.do(req, model, cancel=cancel)
