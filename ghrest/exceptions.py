"""Exception hierarchy for the ghrest client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pydantic

from ghrest.http.ratelimit import RateLimit
from ghrest.schemas import ErrorBody, ErrorDetail

if TYPE_CHECKING:
    from ghrest.http.response import Response


class GitHubError(Exception):
    """Base exception for all ghrest errors."""


class LinkHeaderError(GitHubError):
    """Raised when a ``Link`` header cannot be parsed into page numbers."""


class APIError(GitHubError):
    """The server answered with a failing status code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        documentation_url: str | None = None,
        errors: list[ErrorDetail] | None = None,
        response: Response | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.documentation_url = documentation_url
        self.errors = list(errors or [])
        self.response = response
        super().__init__(f"{status_code}: {message}")


class ValidationError(APIError):
    """Raised on 400 or 422 responses."""


class AuthenticationError(APIError):
    """Raised on 401 responses."""


class ForbiddenError(APIError):
    """Raised on 403 responses that are not quota exhaustion."""


class NotFoundError(APIError):
    """Raised on 404 responses."""


class RateLimitError(APIError):
    """Raised on 403/429 responses with no quota remaining."""

    @property
    def rate_limit(self) -> RateLimit:
        if self.response is None:
            return RateLimit()
        return self.response.rate_limit


class MaxAttemptsExceededError(GitHubError):
    """Every permitted attempt received a retryable response."""

    def __init__(self, attempts: int, response: Response | None = None) -> None:
        self.attempts = attempts
        self.response = response
        status = response.status_code if response is not None else 0
        super().__init__(
            f"giving up after {attempts} attempts (last status {status})"
        )


class RateLimitHandlerError(GitHubError):
    """The configured rate-limit handler raised; see ``__cause__``."""

    def __init__(self, response: Response | None = None) -> None:
        self.response = response
        super().__init__("rate limit handler failed")


class ResponseDecodeError(GitHubError):
    """A successful response body did not match the expected model."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        self.response = response
        super().__init__(message)


class RequestCancelledError(GitHubError):
    """The caller cancelled the request before it completed."""


# Maps HTTP status codes to exception classes.
_STATUS_MAP: dict[int, type[APIError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    422: ValidationError,
}


def build_api_error(response: Response) -> APIError:
    """Construct the appropriate :class:`APIError` for a failing envelope.

    The body of ``response.http_response`` must already be read. Bodies
    that are not a JSON error object yield the message
    ``request failed with status <code>``.
    """
    status_code = response.status_code
    http_response = response.http_response

    body: ErrorBody | None = None
    if http_response is not None:
        try:
            body = ErrorBody.model_validate_json(http_response.content)
        except pydantic.ValidationError:
            body = None

    if status_code in (403, 429) and response.rate_limit.remaining == 0:
        exc_cls: type[APIError] = RateLimitError
    else:
        exc_cls = _STATUS_MAP.get(status_code, APIError)

    if body is None:
        return exc_cls(
            status_code,
            f"request failed with status {status_code}",
            response=response,
        )
    return exc_cls(
        status_code,
        body.message,
        documentation_url=body.documentation_url,
        errors=body.errors,
        response=response,
    )
