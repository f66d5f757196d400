"""Request execution with rate-limit aware retries.

``RequestExecutor.do`` and ``AsyncRequestExecutor.do`` send a prepared
``httpx.Request`` until it yields a non-retryable response or the attempt
budget runs out, then either decode the body or raise a structured error.

Failure shapes seen by callers:

* ``httpx.TransportError`` -- connection level failure, never retried.
* :class:`~ghrest.exceptions.APIError` (and subclasses) -- the server
  answered with status >= 400; carries the envelope.
* :class:`~ghrest.exceptions.MaxAttemptsExceededError` -- every attempt
  was retryable; carries the last envelope.
* :class:`~ghrest.exceptions.RequestCancelledError` -- the caller's
  cancel event fired.

Hooks are called synchronously on the calling thread or task. Anything
they raise is logged and ignored.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import threading
import time
from typing import Any, Awaitable, Callable, Union

import httpx
import pydantic
from pydantic import TypeAdapter

from ghrest.config import ClientSettings
from ghrest.exceptions import (
    MaxAttemptsExceededError,
    RateLimitHandlerError,
    RequestCancelledError,
    ResponseDecodeError,
    build_api_error,
)
from ghrest.http.ratelimit import RateLimit
from ghrest.http.response import Response, build_response
from ghrest.http.retry import compute_backoff, is_rate_limited, should_retry
from ghrest.metrics import ClientMetrics
from ghrest.request_context import bind_call_id

logger = logging.getLogger(__name__)

RequestHook = Callable[[httpx.Request], None]
ResponseHook = Callable[[Response], None]
RateLimitHandler = Callable[[httpx.Response], None]
AsyncRateLimitHandler = Callable[[httpx.Response], Union[Awaitable[None], None]]

# What to do with a retryable response.
_FAIL = "fail"
_EXHAUSTED = "exhausted"
_HANDLER = "handler"
_WAIT = "wait"


@functools.lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def _decode(content: bytes, model: Any, response: Response) -> Any:
    try:
        return _adapter(model).validate_json(content)
    except pydantic.ValidationError as exc:
        raise ResponseDecodeError(
            f"could not decode response body as {model!r}", response
        ) from exc


def _fire_hook(name: str, hook: Callable[[Any], None] | None, arg: Any) -> None:
    if hook is None:
        return
    try:
        hook(arg)
    except Exception:
        logger.warning("%s hook raised; continuing", name, exc_info=True)


def _read_and_close(http_response: httpx.Response) -> None:
    # The body stays readable on the envelope after the stream is closed.
    try:
        if not http_response.is_stream_consumed:
            http_response.read()
    finally:
        http_response.close()


async def _aread_and_close(http_response: httpx.Response) -> None:
    try:
        if not http_response.is_stream_consumed:
            await http_response.aread()
    finally:
        await http_response.aclose()


def _wait(delay: float, cancel: threading.Event | None) -> bool:
    """Block for *delay* seconds. Returns True if *cancel* fired first."""
    if cancel is None:
        time.sleep(delay)
        return False
    return cancel.wait(delay)


async def _async_wait(delay: float, cancel: asyncio.Event | None) -> bool:
    """Async twin of :func:`_wait`."""
    if cancel is None:
        await asyncio.sleep(delay)
        return False
    try:
        await asyncio.wait_for(cancel.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return False
    return True


class _ExecutorBase:
    """State and decisions shared by the sync and async executors."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        rate_limit_handler: Callable[[httpx.Response], Any] | None = None,
        request_hook: RequestHook | None = None,
        response_hook: ResponseHook | None = None,
        metrics: ClientMetrics | None = None,
    ) -> None:
        self.settings = settings
        self.rate_limit_handler = rate_limit_handler
        self.request_hook = request_hook
        self.response_hook = response_hook
        self.metrics = metrics if metrics is not None else ClientMetrics()

    @property
    def max_attempts(self) -> int:
        return self.settings.max_attempts

    def _log_fields(self, request: httpx.Request, attempt: int, **more: Any) -> dict:
        fields = {
            "method": request.method,
            "url": str(request.url),
            "attempt": attempt + 1,
            "max_attempts": self.max_attempts,
        }
        fields.update(more)
        return fields

    def _before_send(self, request: httpx.Request, attempt: int) -> float:
        _fire_hook("request", self.request_hook, request)
        logger.debug(
            "Sending %s %s (attempt %d/%d)",
            request.method, request.url, attempt + 1, self.max_attempts,
            extra=self._log_fields(request, attempt),
        )
        return time.perf_counter()

    def _after_receive(self, http_response: httpx.Response, started: float) -> Response:
        rate_limit = RateLimit.from_headers(http_response.headers)
        response = build_response(http_response, rate_limit)
        self.metrics.record_send(
            http_response.status_code, (time.perf_counter() - started) * 1000,
        )
        _fire_hook("response", self.response_hook, response)
        return response

    def _retry_action(self, attempt: int, response: Response) -> str:
        if not self.settings.rate_limit_retry:
            return _FAIL
        request = response.http_response.request
        if attempt >= self.max_attempts - 1:
            self.metrics.inc_exhausted()
            logger.warning(
                "Giving up on %s %s after %d attempts (last status %d)",
                request.method,
                request.url,
                self.max_attempts,
                response.status_code,
                extra=self._log_fields(request, attempt, status=response.status_code),
            )
            return _EXHAUSTED
        self.metrics.inc_retry(
            is_rate_limited(response.status_code, response.rate_limit)
        )
        if self.rate_limit_handler is not None:
            return _HANDLER
        return _WAIT

    def _backoff(self, attempt: int, response: Response) -> float:
        # The reset time only matters once the quota is spent; a 5xx with
        # quota left follows the exponential schedule.
        rate_limited = is_rate_limited(response.status_code, response.rate_limit)
        delay = compute_backoff(
            self.settings.retry_wait_min,
            self.settings.retry_wait_max,
            attempt,
            response.rate_limit if rate_limited else RateLimit(),
        )
        request = response.http_response.request
        logger.info(
            "Retrying %s %s after status %d in %.1fs (attempt %d/%d)",
            request.method,
            request.url,
            response.status_code,
            delay,
            attempt + 1,
            self.max_attempts,
            extra=self._log_fields(
                request,
                attempt,
                status=response.status_code,
                delay=round(delay, 3),
                rate_limited=rate_limited,
            ),
        )
        return delay

    def _finish(self, response: Response, model: Any) -> tuple[Any, Response]:
        # Body has been read and the stream closed by the caller.
        if response.status_code >= 400:
            raise build_api_error(response)
        if model is None:
            return None, response
        return _decode(response.http_response.content, model, response), response


class RequestExecutor(_ExecutorBase):
    """Runs requests on a blocking ``httpx.Client``."""

    def __init__(self, http_client: httpx.Client, settings: ClientSettings, **kwargs: Any) -> None:
        super().__init__(settings, **kwargs)
        self.http_client = http_client

    def do(
        self,
        request: httpx.Request,
        model: Any = None,
        *,
        cancel: threading.Event | None = None,
    ) -> tuple[Any, Response]:
        """Send *request*, retrying per the client settings.

        Returns ``(value, envelope)`` where *value* is the body validated
        against *model* (``None`` when no model is given).
        """
        with bind_call_id():
            response = self._send_with_retries(request, cancel)
            _read_and_close(response.http_response)
            return self._finish(response, model)

    def _send_with_retries(
        self, request: httpx.Request, cancel: threading.Event | None,
    ) -> Response:
        for attempt in range(self.max_attempts):
            if cancel is not None and cancel.is_set():
                raise RequestCancelledError("request cancelled")

            started = self._before_send(request, attempt)
            http_response = self.http_client.send(request, stream=True)
            response = self._after_receive(http_response, started)

            if not should_retry(http_response.status_code, response.rate_limit):
                return response

            action = self._retry_action(attempt, response)
            if action == _FAIL:
                return response
            if action == _EXHAUSTED:
                _read_and_close(http_response)
                raise MaxAttemptsExceededError(self.max_attempts, response)
            if action == _HANDLER:
                try:
                    self.rate_limit_handler(http_response)
                except Exception as exc:
                    _read_and_close(http_response)
                    raise RateLimitHandlerError(response) from exc
                finally:
                    http_response.close()
                continue

            http_response.close()
            delay = self._backoff(attempt, response)
            if _wait(delay, cancel):
                raise RequestCancelledError("request cancelled during backoff")

        raise MaxAttemptsExceededError(self.max_attempts)


class AsyncRequestExecutor(_ExecutorBase):
    """Runs requests on an ``httpx.AsyncClient``.

    Cancelling the surrounding task aborts the loop at its next await,
    including mid-backoff; the optional *cancel* event does the same but
    surfaces as :class:`RequestCancelledError`.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: ClientSettings, **kwargs: Any) -> None:
        super().__init__(settings, **kwargs)
        self.http_client = http_client

    async def do(
        self,
        request: httpx.Request,
        model: Any = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> tuple[Any, Response]:
        with bind_call_id():
            response = await self._send_with_retries(request, cancel)
            await _aread_and_close(response.http_response)
            return self._finish(response, model)

    async def _send_with_retries(
        self, request: httpx.Request, cancel: asyncio.Event | None,
    ) -> Response:
        for attempt in range(self.max_attempts):
            if cancel is not None and cancel.is_set():
                raise RequestCancelledError("request cancelled")

            started = self._before_send(request, attempt)
            http_response = await self.http_client.send(request, stream=True)
            response = self._after_receive(http_response, started)

            if not should_retry(http_response.status_code, response.rate_limit):
                return response

            action = self._retry_action(attempt, response)
            if action == _FAIL:
                return response
            if action == _EXHAUSTED:
                await _aread_and_close(http_response)
                raise MaxAttemptsExceededError(self.max_attempts, response)
            if action == _HANDLER:
                try:
                    result = self.rate_limit_handler(http_response)
                    if inspect.isawaitable(result):
                        await result
                except Exception as exc:
                    await _aread_and_close(http_response)
                    raise RateLimitHandlerError(response) from exc
                finally:
                    await http_response.aclose()
                continue

            await http_response.aclose()
            delay = self._backoff(attempt, response)
            if await _async_wait(delay, cancel):
                raise RequestCancelledError("request cancelled during backoff")

        # Every iteration returns, raises or continues to another attempt.
        raise MaxAttemptsExceededError(self.max_attempts)
