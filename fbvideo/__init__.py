"""fbvideo: fetch a Facebook video page and leak its real media URL."""

from fbvideo.errors import (
    ErrorKind,
    ExtractionError,
    FetchTimeoutError,
    InvalidTargetError,
    RedirectError,
    UnknownFetchError,
)
from fbvideo.extractor import PageExtractor
from fbvideo.models import ExtractionRequest, Quality

__version__ = "0.2.0"

__all__ = [
    "PageExtractor",
    "ExtractionRequest",
    "Quality",
    "ExtractionError",
    "ErrorKind",
    "FetchTimeoutError",
    "RedirectError",
    "InvalidTargetError",
    "UnknownFetchError",
]
