"""Errors raised while fetching a video page or extracting fields from it.

Every error derives from :class:`ExtractionError` so callers can catch the
whole family at once, and carries an :class:`ErrorKind` for callers that would
rather branch on a value than on the class.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    TIMEOUT = "timeout"
    REDIRECT = "redirect"
    INVALID_TARGET = "invalid_target"
    UNKNOWN = "unknown"


class ExtractionError(Exception):
    """Base class for every failure surfaced by :class:`PageExtractor`."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    summary: str = "unknown error"

    def __init__(self, url: str, detail: str | None = None) -> None:
        self.url = url
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        """Return a one-line, human-readable description of the failure."""
        message = f"{self.summary} for {self.url}"
        if self.detail:
            message += f" ({self.detail})"
        return message


class FetchTimeoutError(ExtractionError):
    kind = ErrorKind.TIMEOUT
    summary = "request timed out"


class RedirectError(ExtractionError):
    kind = ErrorKind.REDIRECT
    summary = "redirect failed"


class InvalidTargetError(ExtractionError):
    """The URL is unusable, or the fetched page has no recognisable field."""

    kind = ErrorKind.INVALID_TARGET
    summary = "invalid target"


class UnknownFetchError(ExtractionError):
    kind = ErrorKind.UNKNOWN
    summary = "request failed"
