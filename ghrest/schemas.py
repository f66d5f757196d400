"""Pydantic models for GitHub REST payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """One entry of the ``errors`` array in a failing response."""

    code: str | None = None
    resource: str | None = None
    field: str | None = None


class ErrorBody(BaseModel):
    """Structured error returned by non-2xx responses."""

    message: str = Field(..., description="Human-readable error message")
    documentation_url: str | None = Field(
        None, description="Link to the relevant API documentation"
    )
    errors: list[ErrorDetail] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(BaseModel):
    id: int
    login: str
    node_id: str | None = None
    avatar_url: str | None = None
    url: str | None = None
    html_url: str | None = None
    type: str | None = None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    hireable: bool | None = None
    bio: str | None = None
    public_repos: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdate(BaseModel):
    """Body for ``PATCH /user``. Unset fields are left unchanged."""

    name: str | None = None
    email: str | None = None
    blog: str | None = None
    twitter_username: str | None = None
    company: str | None = None
    location: str | None = None
    hireable: bool | None = None
    bio: str | None = None


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class RepositoryPermissions(BaseModel):
    admin: bool = False
    push: bool = False
    pull: bool = False


class Repository(BaseModel):
    id: int
    name: str
    full_name: str
    owner: User | None = None
    private: bool = False
    html_url: str | None = None
    description: str | None = None
    fork: bool = False
    url: str | None = None
    clone_url: str | None = None
    mirror_url: str | None = None
    language: str | None = None
    forks_count: int = 0
    stargazers_count: int = 0
    watchers_count: int = 0
    size: int = 0
    default_branch: str | None = None
    open_issues_count: int = 0
    is_template: bool = False
    topics: list[str] = Field(default_factory=list)
    has_issues: bool = False
    has_projects: bool = False
    has_wiki: bool = False
    has_pages: bool = False
    has_downloads: bool = False
    archived: bool = False
    disabled: bool = False
    visibility: str | None = None
    pushed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    permissions: RepositoryPermissions | None = None


class RepositoryCreate(BaseModel):
    """Body for ``POST /user/repos``."""

    name: str
    description: str | None = None
    homepage: str | None = None
    private: bool | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_wiki: bool | None = None
    has_discussions: bool | None = None
    team_id: int | None = None
    auto_init: bool | None = None
    gitignore_template: str | None = None
    license_template: str | None = None
    allow_squash_merge: bool | None = None
    allow_merge_commit: bool | None = None
    allow_rebase_merge: bool | None = None
    allow_auto_merge: bool | None = None
    delete_branch_on_merge: bool | None = None
    has_downloads: bool | None = None
    is_template: bool | None = None


class RepositoryUpdate(BaseModel):
    """Body for ``PATCH /repos/{owner}/{repo}``."""

    name: str | None = None
    description: str | None = None
    homepage: str | None = None
    private: bool | None = None
    visibility: str | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_wiki: bool | None = None
    is_template: bool | None = None
    default_branch: str | None = None
    allow_squash_merge: bool | None = None
    allow_merge_commit: bool | None = None
    allow_rebase_merge: bool | None = None
    allow_auto_merge: bool | None = None
    delete_branch_on_merge: bool | None = None
    allow_update_branch: bool | None = None
    archived: bool | None = None
    allow_forking: bool | None = None


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class Label(BaseModel):
    id: int | None = None
    url: str | None = None
    name: str
    description: str | None = None
    color: str | None = None
    default: bool = False


class Issue(BaseModel):
    id: int
    number: int
    url: str | None = None
    repository_url: str | None = None
    state: str
    title: str
    body: str | None = None
    labels: list[Label] = Field(default_factory=list)
    user: User | None = None
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    locked: bool = False
    comments: int = 0
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_by: User | None = None


class IssueCreate(BaseModel):
    """Body for ``POST /repos/{owner}/{repo}/issues``."""

    title: str
    body: str | None = None
    assignee: str | None = None
    milestone: int | str | None = None
    labels: list[str] | None = None
    assignees: list[str] | None = None
    type: str | None = None


class IssueUpdate(BaseModel):
    """Body for ``PATCH /repos/{owner}/{repo}/issues/{number}``."""

    title: str | None = None
    body: str | None = None
    assignee: str | None = None
    state: str | None = None
    state_reason: str | None = None
    milestone: int | str | None = None
    labels: list[str] | None = None
    assignees: list[str] | None = None
    type: str | None = None


class IssueComment(BaseModel):
    id: int
    url: str | None = None
    body: str | None = None
    user: User | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    issue_url: str | None = None


# ---------------------------------------------------------------------------
# Pull requests
# ---------------------------------------------------------------------------


class PullRequest(BaseModel):
    id: int
    number: int
    title: str
    body: str | None = None
    url: str | None = None
    state: str
    locked: bool = False
    active_lock_reason: str | None = None
    labels: list[Label] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    merged_at: datetime | None = None
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    requested_reviewers: list[User] = Field(default_factory=list)
    user: User | None = None
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    issue_url: str | None = None
    commits_url: str | None = None
    comments_url: str | None = None
    statuses_url: str | None = None
    draft: bool = False


class PullRequestCreate(BaseModel):
    """Body for ``POST /repos/{owner}/{repo}/pulls``."""

    head: str
    base: str
    title: str | None = None
    head_repo: str | None = None
    body: str | None = None
    maintainer_can_modify: bool | None = None
    draft: bool | None = None
    issue: int | None = None


class PullRequestUpdate(BaseModel):
    """Body for ``PATCH /repos/{owner}/{repo}/pulls/{number}``."""

    title: str | None = None
    base: str | None = None
    body: str | None = None
    state: str | None = None
    maintainer_can_modify: bool | None = None


class MergeRequest(BaseModel):
    """Body for ``PUT /repos/{owner}/{repo}/pulls/{number}/merge``."""

    commit_title: str | None = None
    commit_message: str | None = None
    sha: str | None = None
    merge_method: str | None = None


class MergeResult(BaseModel):
    sha: str | None = None
    merged: bool
    message: str


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchResult(BaseModel, Generic[T]):
    total_count: int
    incomplete_results: bool = False
    items: list[T] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Rate limit
# ---------------------------------------------------------------------------


class RateLimitStatus(BaseModel):
    """Quota for one API category as reported by ``GET /rate_limit``."""

    limit: int
    remaining: int
    used: int = 0
    reset: int


class RateLimitOverview(BaseModel):
    resources: dict[str, RateLimitStatus] = Field(
        default_factory=dict, description="Quota per API category (core, search, ...)"
    )
    rate: RateLimitStatus | None = None
