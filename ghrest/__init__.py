"""ghrest -- typed sync and async clients for the GitHub REST API."""

from __future__ import annotations

from ghrest.exceptions import (
    APIError,
    AuthenticationError,
    ForbiddenError,
    GitHubError,
    LinkHeaderError,
    MaxAttemptsExceededError,
    NotFoundError,
    RateLimitError,
    RateLimitHandlerError,
    RequestCancelledError,
    ResponseDecodeError,
    ValidationError,
)
from ghrest.config import ClientSettings
from ghrest.client import AsyncGitHubClient, GitHubClient
from ghrest.http.ratelimit import RateLimit
from ghrest.http.response import Response
from ghrest.metrics import ClientMetrics

__all__ = [
    "AsyncGitHubClient",
    "GitHubClient",
    "ClientSettings",
    "ClientMetrics",
    "RateLimit",
    "Response",
    "GitHubError",
    "APIError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
    "LinkHeaderError",
    "MaxAttemptsExceededError",
    "RateLimitHandlerError",
    "RequestCancelledError",
    "ResponseDecodeError",
]
