"""Response envelope: raw httpx response plus rate-limit and pagination data."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from ghrest.exceptions import LinkHeaderError
from ghrest.http.ratelimit import RateLimit

logger = logging.getLogger(__name__)

REL_PREV = "prev"
REL_NEXT = "next"
REL_FIRST = "first"
REL_LAST = "last"

_PAGE_RELS = (REL_PREV, REL_NEXT, REL_FIRST, REL_LAST)


@dataclass
class Response:
    """Wraps one HTTP round trip.

    Page numbers are ``0`` when the server did not advertise them, and
    ``rate_limit`` is all zeros when no quota headers were sent.
    """

    http_response: httpx.Response | None = None
    rate_limit: RateLimit = field(default_factory=RateLimit)
    previous_page: int = 0
    next_page: int = 0
    first_page: int = 0
    last_page: int = 0

    @property
    def status_code(self) -> int:
        if self.http_response is None:
            return 0
        return self.http_response.status_code

    @property
    def headers(self) -> httpx.Headers:
        if self.http_response is None:
            return httpx.Headers()
        return self.http_response.headers

    @property
    def has_next_page(self) -> bool:
        return self.next_page != 0


def parse_link_header(http_response: httpx.Response) -> dict[str, int]:
    """Map ``prev``/``next``/``first``/``last`` to the ``page`` of each link.

    Returns an empty dict when there is no ``Link`` header. Unknown
    relations and ``page=0`` are skipped. Raises :class:`LinkHeaderError`
    on an invalid URL or a missing/non-integer ``page`` parameter.
    """
    if not http_response.headers.get("link"):
        return {}

    pages: dict[str, int] = {}
    for rel, link in http_response.links.items():
        raw_url = link.get("url", "")
        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as exc:
            raise LinkHeaderError(f"invalid link URL {raw_url!r}") from exc

        raw_page = url.params.get("page")
        try:
            page = int(raw_page)
        except (TypeError, ValueError) as exc:
            raise LinkHeaderError(
                f"invalid page {raw_page!r} in link {raw_url!r}"
            ) from exc

        if page == 0:
            continue
        if rel in _PAGE_RELS:
            pages[rel] = page
    return pages


def build_response(
    http_response: httpx.Response | None,
    rate_limit: RateLimit | None = None,
) -> Response:
    """Build the envelope for *http_response*.

    A ``None`` response yields a zero-valued envelope. A malformed ``Link``
    header is logged and leaves every page field at ``0``.
    """
    if http_response is None:
        return Response()

    if rate_limit is None:
        rate_limit = RateLimit.from_headers(http_response.headers)
    response = Response(http_response=http_response, rate_limit=rate_limit)

    try:
        pages = parse_link_header(http_response)
    except LinkHeaderError:
        logger.warning(
            "Ignoring unparseable Link header %r",
            http_response.headers.get("link"),
            exc_info=True,
        )
        return response

    response.previous_page = pages.get(REL_PREV, 0)
    response.next_page = pages.get(REL_NEXT, 0)
    response.first_page = pages.get(REL_FIRST, 0)
    response.last_page = pages.get(REL_LAST, 0)
    return response

