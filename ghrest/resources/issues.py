"""Issue and issue-comment endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from ghrest.http.response import Response
from ghrest.schemas import Issue, IssueComment, IssueCreate, IssueUpdate

if TYPE_CHECKING:
    from ghrest.client import AsyncGitHubClient, GitHubClient


def _issue_filters(
    state: str | None,
    assignee: str | None,
    creator: str | None,
    mentioned: str | None,
    labels: list[str] | None,
    since: datetime | None,
    sort: str | None,
    direction: str | None,
    per_page: int | None,
    page: int | None,
) -> dict[str, Any]:
    return {
        "state": state,
        "assignee": assignee,
        "creator": creator,
        "mentioned": mentioned,
        "labels": labels,
        "since": since,
        "sort": sort,
        "direction": direction,
        "per_page": per_page,
        "page": page,
    }


class IssuesResource:
    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self, owner: str, repo: str, number: int) -> Issue:
        issue, _ = self._client.request(
            "GET", f"repos/{owner}/{repo}/issues/{number}", model=Issue,
        )
        return issue

    def create(self, owner: str, repo: str, body: IssueCreate) -> Issue:
        issue, _ = self._client.request(
            "POST", f"repos/{owner}/{repo}/issues", json=body, model=Issue,
        )
        return issue

    def update(self, owner: str, repo: str, number: int, body: IssueUpdate) -> Issue:
        issue, _ = self._client.request(
            "PATCH", f"repos/{owner}/{repo}/issues/{number}", json=body, model=Issue,
        )
        return issue

    def lock(
        self, owner: str, repo: str, number: int, lock_reason: str | None = None,
    ) -> Response:
        """Lock the conversation; *lock_reason* is one of off-topic, too heated, resolved, spam."""
        body = {"lock_reason": lock_reason} if lock_reason else None
        _, resp = self._client.request(
            "PUT", f"repos/{owner}/{repo}/issues/{number}/lock", json=body,
        )
        return resp

    def unlock(self, owner: str, repo: str, number: int) -> Response:
        _, resp = self._client.request(
            "DELETE", f"repos/{owner}/{repo}/issues/{number}/lock",
        )
        return resp

    def list_for_repo(
        self,
        owner: str,
        repo: str,
        *,
        state: str | None = None,
        assignee: str | None = None,
        creator: str | None = None,
        mentioned: str | None = None,
        labels: list[str] | None = None,
        since: datetime | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[Issue], Response]:
        params = _issue_filters(
            state, assignee, creator, mentioned, labels,
            since, sort, direction, per_page, page,
        )
        return self._client.request(
            "GET", f"repos/{owner}/{repo}/issues", params=params, model=list[Issue],
        )

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> IssueComment:
        comment, _ = self._client.request(
            "POST",
            f"repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
            model=IssueComment,
        )
        return comment

    def list_comments(
        self,
        owner: str,
        repo: str,
        *,
        since: datetime | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[IssueComment], Response]:
        """Comments across every issue of the repository."""
        params = {
            "since": since,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return self._client.request(
            "GET",
            f"repos/{owner}/{repo}/issues/comments",
            params=params,
            model=list[IssueComment],
        )


class AsyncIssuesResource:
    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def get(self, owner: str, repo: str, number: int) -> Issue:
        issue, _ = await self._client.request(
            "GET", f"repos/{owner}/{repo}/issues/{number}", model=Issue,
        )
        return issue

    async def create(self, owner: str, repo: str, body: IssueCreate) -> Issue:
        issue, _ = await self._client.request(
            "POST", f"repos/{owner}/{repo}/issues", json=body, model=Issue,
        )
        return issue

    async def update(
        self, owner: str, repo: str, number: int, body: IssueUpdate,
    ) -> Issue:
        issue, _ = await self._client.request(
            "PATCH", f"repos/{owner}/{repo}/issues/{number}", json=body, model=Issue,
        )
        return issue

    async def lock(
        self, owner: str, repo: str, number: int, lock_reason: str | None = None,
    ) -> Response:
        body = {"lock_reason": lock_reason} if lock_reason else None
        _, resp = await self._client.request(
            "PUT", f"repos/{owner}/{repo}/issues/{number}/lock", json=body,
        )
        return resp

    async def unlock(self, owner: str, repo: str, number: int) -> Response:
        _, resp = await self._client.request(
            "DELETE", f"repos/{owner}/{repo}/issues/{number}/lock",
        )
        return resp

    async def list_for_repo(
        self,
        owner: str,
        repo: str,
        *,
        state: str | None = None,
        assignee: str | None = None,
        creator: str | None = None,
        mentioned: str | None = None,
        labels: list[str] | None = None,
        since: datetime | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[Issue], Response]:
        params = _issue_filters(
            state, assignee, creator, mentioned, labels,
            since, sort, direction, per_page, page,
        )
        return await self._client.request(
            "GET", f"repos/{owner}/{repo}/issues", params=params, model=list[Issue],
        )

    async def create_comment(
        self, owner: str, repo: str, number: int, body: str,
    ) -> IssueComment:
        comment, _ = await self._client.request(
            "POST",
            f"repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
            model=IssueComment,
        )
        return comment

    async def list_comments(
        self,
        owner: str,
        repo: str,
        *,
        since: datetime | None = None,
        sort: str | None = None,
        direction: str | None = None,
        per_page: int | None = None,
        page: int | None = None,
    ) -> tuple[list[IssueComment], Response]:
        params = {
            "since": since,
            "sort": sort,
            "direction": direction,
            "per_page": per_page,
            "page": page,
        }
        return await self._client.request(
            "GET",
            f"repos/{owner}/{repo}/issues/comments",
            params=params,
            model=list[IssueComment],
        )
