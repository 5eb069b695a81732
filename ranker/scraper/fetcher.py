"""HTTP fetcher: retrieves the raw bytes of a single page."""

from __future__ import annotations

import logging

import httpx

from ranker.config import settings
from ranker.scraper.errors import FetchError
from ranker.scraper.models import RawPage

logger = logging.getLogger(__name__)

# Anything above the permanent-redirect class counts as a failed fetch.
_MAX_ACCEPTED_STATUS = 308


def fetch_url(url: str, *, timeout: float | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    No retries are attempted: the first failure is final.

    Raises:
        FetchError: If the transport fails or the server answers with a
            status code above 308.
    """
    headers = {"User-Agent": settings.user_agent}
    timeout = settings.request_timeout if timeout is None else timeout

    logger.debug("GET %s (timeout=%ss)", url, timeout)
    try:
        with httpx.Client(
            headers=headers,
            timeout=timeout,
            follow_redirects=settings.follow_redirects,
        ) as client:
            response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(url, str(exc) or type(exc).__name__) from exc

    if response.status_code > _MAX_ACCEPTED_STATUS:
        raise FetchError(
            url,
            f"HTTP {response.status_code}",
            status_code=response.status_code,
        )

    logger.debug(
        "HTTP %s, %d bytes, charset=%s",
        response.status_code,
        len(response.content),
        response.charset_encoding,
    )
    return RawPage(
        url=url,
        html=response.content,
        status_code=response.status_code,
        encoding=response.charset_encoding,
    )
