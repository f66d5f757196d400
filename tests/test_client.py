"""Tests for the clients and their resource wrappers."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from ghrest import AsyncGitHubClient, ClientSettings, GitHubClient, NotFoundError
from ghrest.client import query_params
from ghrest.schemas import IssueCreate, MergeRequest, RepositoryCreate
from helpers import ScriptedServer, failing, ok

_USER = {"id": 583231, "login": "octocat", "type": "User"}
_REPO = {"id": 1296269, "name": "Hello-World", "full_name": "octocat/Hello-World"}
_ISSUE = {"id": 1, "number": 1347, "state": "open", "title": "Found a bug"}
_PULL = {"id": 2, "number": 42, "state": "open", "title": "Amazing new feature"}
_MERGED = {"sha": "6dcb09b5", "merged": True, "message": "Pull Request successfully merged"}
_QUOTA = {"limit": 5000, "remaining": 4999, "used": 1, "reset": 1700000000}


def _client(server: ScriptedServer, **overrides) -> GitHubClient:
    overrides.setdefault("base_url", "https://api.test")
    return GitHubClient(transport=server.transport, **overrides)


def _async_client(server: ScriptedServer, **overrides) -> AsyncGitHubClient:
    overrides.setdefault("base_url", "https://api.test")
    return AsyncGitHubClient(transport=server.transport, **overrides)


# ---------------------------------------------------------------------------
# Query rendering
# ---------------------------------------------------------------------------


class TestQueryParams:
    def test_drops_none(self):
        assert query_params(a=None, b=1) == {"b": "1"}

    def test_bool(self):
        assert query_params(anon=True, draft=False) == {"anon": "true", "draft": "false"}

    def test_list_joined(self):
        assert query_params(labels=["bug", "ui"]) == {"labels": "bug,ui"}

    def test_empty_list_dropped(self):
        assert query_params(labels=[]) == {}

    def test_datetime(self):
        since = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert query_params(since=since) == {"since": "2024-01-02T03:04:05+00:00"}


# ---------------------------------------------------------------------------
# Client construction
# ---------------------------------------------------------------------------


class TestClientSetup:
    def test_default_headers_without_token(self):
        server = ScriptedServer(ok({}))
        with _client(server) as c:
            c.request("GET", "meta")
        req = server.requests[0]
        assert req.headers["accept"] == "application/vnd.github+json"
        assert req.headers["x-github-api-version"] == "2022-11-28"
        assert req.headers["user-agent"] == "ghrest/0.1"
        assert "authorization" not in req.headers

    def test_token_sets_bearer(self):
        server = ScriptedServer(ok({}))
        with _client(server, token="ghp_secret") as c:
            c.request("GET", "meta")
        assert server.requests[0].headers["authorization"] == "Bearer ghp_secret"

    def test_base_url_with_path(self):
        server = ScriptedServer(ok({}))
        with _client(server, base_url="https://ghe.example/api/v3") as c:
            c.request("GET", "/users/octocat")
        assert str(server.requests[0].url) == "https://ghe.example/api/v3/users/octocat"

    def test_overrides_applied_to_settings(self):
        settings = ClientSettings(token="from-settings", retry_max=2)
        with GitHubClient(settings, token="override") as c:
            assert c.settings.token == "override"
            assert c.settings.retry_max == 2
        assert settings.token == "from-settings"

    def test_settings_used_as_is(self):
        settings = ClientSettings(retry_max=4)
        with GitHubClient(settings) as c:
            assert c.settings is settings

    def test_context_manager_closes(self):
        server = ScriptedServer(ok({}))
        with _client(server) as c:
            pass
        assert c._http.is_closed

    def test_new_request_body_from_model(self):
        with GitHubClient() as c:
            req = c.new_request("POST", "user/repos", json=RepositoryCreate(name="demo"))
        assert json.loads(req.content) == {"name": "demo"}
        assert req.url.path == "/user/repos"

    async def test_async_context_manager_closes(self):
        server = ScriptedServer(ok({}))
        async with _async_client(server) as c:
            pass
        assert c._http.is_closed


# ---------------------------------------------------------------------------
# Sync resources
# ---------------------------------------------------------------------------


class TestResources:
    def test_users_get(self):
        server = ScriptedServer(ok(_USER))
        with _client(server) as c:
            user = c.users.get("octocat")
        assert user.login == "octocat"
        req = server.requests[0]
        assert req.method == "GET"
        assert req.url.path == "/users/octocat"

    def test_users_list_pagination(self):
        link = '<https://api.test/users?since=583231&page=2>; rel="next"'
        server = ScriptedServer(ok([_USER], link=link))
        with _client(server) as c:
            users, resp = c.users.list(since=100, per_page=1)
        assert [u.id for u in users] == [583231]
        assert resp.next_page == 2
        params = server.requests[0].url.params
        assert params["since"] == "100"
        assert params["per_page"] == "1"
        assert "page" not in params

    def test_follow_returns_envelope(self):
        server = ScriptedServer(ok(status=204))
        with _client(server) as c:
            resp = c.users.follow("octocat")
        assert resp.status_code == 204
        assert server.requests[0].method == "PUT"
        assert server.requests[0].url.path == "/user/following/octocat"

    def test_repositories_get(self):
        server = ScriptedServer(ok(_REPO))
        with _client(server) as c:
            repo, resp = c.repositories.get("octocat", "Hello-World")
        assert repo.full_name == "octocat/Hello-World"
        assert resp.rate_limit.remaining == 4999

    def test_repositories_get_not_found(self):
        server = ScriptedServer(failing(404, remaining=4998, message="Not Found"))
        with _client(server) as c:
            with pytest.raises(NotFoundError):
                c.repositories.get("octocat", "missing")

    def test_list_contributors_anon(self):
        server = ScriptedServer(ok([_USER]))
        with _client(server) as c:
            c.repositories.list_contributors("octocat", "Hello-World", anon=True)
        assert server.requests[0].url.params["anon"] == "true"

    def test_issues_list_filters(self):
        server = ScriptedServer(ok([_ISSUE]))
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        with _client(server) as c:
            issues, _ = c.issues.list_for_repo(
                "octocat", "Hello-World", labels=["bug", "ui"], since=since, state="all",
            )
        assert issues[0].number == 1347
        params = server.requests[0].url.params
        assert params["labels"] == "bug,ui"
        assert params["since"] == "2024-01-01T00:00:00+00:00"
        assert params["state"] == "all"

    def test_issues_create_body(self):
        server = ScriptedServer(ok(_ISSUE, status=201))
        with _client(server) as c:
            c.issues.create("octocat", "Hello-World", IssueCreate(title="Found a bug"))
        assert json.loads(server.requests[0].content) == {"title": "Found a bug"}

    def test_pulls_merge_default_body(self):
        server = ScriptedServer(ok(_MERGED))
        with _client(server) as c:
            result, _ = c.pulls.merge("octocat", "Hello-World", 42)
        assert result.merged
        req = server.requests[0]
        assert req.method == "PUT"
        assert req.url.path == "/repos/octocat/Hello-World/pulls/42/merge"
        assert json.loads(req.content) == {}

    def test_pulls_merge_method(self):
        server = ScriptedServer(ok(_MERGED))
        with _client(server) as c:
            c.pulls.merge("octocat", "Hello-World", 42, MergeRequest(merge_method="squash"))
        assert json.loads(server.requests[0].content) == {"merge_method": "squash"}

    def test_search_query(self):
        body = {"total_count": 1, "incomplete_results": False, "items": [_REPO]}
        server = ScriptedServer(ok(body))
        with _client(server) as c:
            result = c.search.repositories("language:python   stars:>100", sort="stars")
        assert result.items[0].name == "Hello-World"
        params = server.requests[0].url.params
        assert params["q"] == "language:python stars:>100"
        assert params["sort"] == "stars"

    def test_rate_limit_get(self):
        body = {"resources": {"core": _QUOTA, "search": _QUOTA}, "rate": _QUOTA}
        server = ScriptedServer(ok(body))
        with _client(server) as c:
            overview = c.rate_limit.get()
        assert overview.resources["core"].remaining == 4999
        assert overview.rate.limit == 5000
        assert server.requests[0].url.path == "/rate_limit"


# ---------------------------------------------------------------------------
# Async resources
# ---------------------------------------------------------------------------


class TestAsyncResources:
    async def test_users_get(self):
        server = ScriptedServer(ok(_USER))
        async with _async_client(server) as c:
            user = await c.users.get("octocat")
        assert user.id == 583231
        assert server.requests[0].url.path == "/users/octocat"

    async def test_pulls_get(self):
        server = ScriptedServer(ok(_PULL))
        async with _async_client(server) as c:
            pull, resp = await c.pulls.get("octocat", "Hello-World", 42)
        assert pull.number == 42
        assert resp.status_code == 200

    async def test_repositories_delete(self):
        server = ScriptedServer(ok(status=204))
        async with _async_client(server) as c:
            resp = await c.repositories.delete("octocat", "Hello-World")
        assert resp.status_code == 204
        assert server.requests[0].method == "DELETE"

    async def test_search_users(self):
        body = {"total_count": 1, "items": [_USER]}
        server = ScriptedServer(ok(body))
        async with _async_client(server) as c:
            result = await c.search.users("location:berlin", per_page=5)
        assert result.total_count == 1
        assert result.items[0].login == "octocat"
        assert server.requests[0].url.params["per_page"] == "5"

    async def test_metrics_shared(self):
        server = ScriptedServer(ok({"resources": {"core": _QUOTA}}))
        async with _async_client(server) as c:
            await c.rate_limit.get()
        assert c.metrics.total_sends == 1
        assert c.metrics.status_codes == {200: 1}


def test_transport_error_surfaces():
    server = ScriptedServer(httpx.ConnectTimeout("slow"))
    with _client(server) as c:
        with pytest.raises(httpx.ConnectTimeout):
            c.users.get("octocat")
