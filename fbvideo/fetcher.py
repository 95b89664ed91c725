"""HTTP transport shared by every :class:`~fbvideo.extractor.PageExtractor`."""

from __future__ import annotations

import logging
import threading

import httpx

from fbvideo.config import Settings, settings
from fbvideo.errors import (
    ExtractionError,
    FetchTimeoutError,
    InvalidTargetError,
    RedirectError,
    UnknownFetchError,
)

logger = logging.getLogger(__name__)

# Disguise as IE 9 on Windows 7.
USER_AGENT = "Mozilla/5.0 (compatible; MSIE 9.0; Windows NT 6.1; Trident/5.0)"

_DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Encoding": "gzip",
}


def build_client(config: Settings | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured for scraping video pages.

    Responses are gzip-negotiated and decompressed transparently by httpx.
    """
    config = config or settings
    return httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=config.request_timeout,
        follow_redirects=True,
        max_redirects=config.max_redirects,
    )


_default_client: httpx.Client | None = None
_default_client_lock = threading.Lock()


def default_client() -> httpx.Client:
    """The process-wide client, built once on first use and shared read-only after.

    Safe to call from several threads at once; exactly one client is built.
    """
    global _default_client
    if _default_client is None:
        with _default_client_lock:
            if _default_client is None:
                _default_client = build_client()
    return _default_client


def map_transport_error(exc: Exception, url: str) -> ExtractionError:
    """Translate an httpx exception into the matching :class:`ExtractionError`."""
    detail = str(exc) or type(exc).__name__
    if isinstance(exc, httpx.TimeoutException):
        return FetchTimeoutError(url, detail)
    if isinstance(exc, httpx.TooManyRedirects):
        return RedirectError(url, detail)
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return InvalidTargetError(url, detail)
    return UnknownFetchError(url, detail)


def fetch_page(url: str, client: httpx.Client | None = None) -> str:
    """Issue a single GET for *url* and return the body as text.

    Any final response counts as fetched, 4xx and 5xx pages included; only a
    redirect the client could not follow is rejected.

    Raises:
        ExtractionError: A subclass describing the transport failure.  No
            retry is attempted.
    """
    client = client or default_client()
    logger.debug("GET %s", url)
    try:
        response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        error = map_transport_error(exc, url)
        logger.debug("fetch failed: %s", error)
        raise error from exc

    if response.is_redirect:
        error = RedirectError(url, f"HTTP {response.status_code}")
        logger.debug("fetch failed: %s", error)
        raise error

    body = response.text
    logger.debug("fetched %s: HTTP %d, %d chars", url, response.status_code, len(body))
    return body
