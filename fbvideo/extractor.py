"""Pull the real video URL or title out of a Facebook video page.

The page source is fetched once per :class:`PageExtractor` and searched for
the string fields ``hd_src`` / ``sd_src`` (optionally suffixed with
``_no_ratelimit``) and the ``pageTitle`` element.

Example::

    extractor = PageExtractor(
        "https://www.facebook.com/817131355292571/videos/2101344733268123/",
        Quality.HD,
    )
    print(extractor.fetch_video_url())
"""

from __future__ import annotations

import logging

import httpx

from fbvideo.errors import InvalidTargetError
from fbvideo.fetcher import fetch_page
from fbvideo.models import ExtractionRequest, Quality
from fbvideo.patterns import TITLE_MATCHER, VIDEO_URL_MATCHERS, FieldMatcher

logger = logging.getLogger(__name__)


class PageExtractor:
    """Fetch a video page lazily and extract fields from the cached body.

    No network I/O happens at construction.  The first successful fetch is
    kept for the lifetime of the instance; a failed fetch leaves the cache
    empty so the next call tries again.
    """

    def __init__(
        self,
        source_url: str,
        quality: Quality = Quality.HD,
        client: httpx.Client | None = None,
    ) -> None:
        self._request = ExtractionRequest(source_url=source_url, quality=Quality(quality))
        self._client = client
        self._body: str | None = None

    def __repr__(self) -> str:
        return (
            f"PageExtractor(source_url={self.source_url!r}, "
            f"quality={self.quality.value!r}, fetched={self.is_fetched})"
        )

    @property
    def request(self) -> ExtractionRequest:
        return self._request

    @property
    def source_url(self) -> str:
        return self._request.source_url

    @property
    def quality(self) -> Quality:
        return self._request.quality

    @property
    def is_fetched(self) -> bool:
        """``True`` once the page body has been fetched and cached."""
        return self._body is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_video_url(self) -> str:
        """Return the direct media URL (usually ``mp4``) for the configured quality.

        Raises:
            InvalidTargetError: The page has no ``{sd,hd}_src`` field.
            ExtractionError: The page could not be fetched.
        """
        return self._extract(VIDEO_URL_MATCHERS[self.quality])

    def fetch_video_title(self) -> str:
        """Return the page title text.  Quality plays no part here.

        Raises:
            InvalidTargetError: The page has no ``pageTitle`` element.
            ExtractionError: The page could not be fetched.
        """
        return self._extract(TITLE_MATCHER)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _page_source(self) -> str:
        if self._body is None:
            self._body = fetch_page(self.source_url, self._client)
        return self._body

    def _extract(self, matcher: FieldMatcher) -> str:
        body = self._page_source()
        value = matcher.search(body)
        if value is None:
            logger.debug("no %s field in %s", matcher.name, self.source_url)
            raise InvalidTargetError(self.source_url, f"no {matcher.name} field found")
        logger.debug("matched %s in %s", matcher.name, self.source_url)
        return value
