"""fburl: get direct video URLs from Facebook video pages.

Usage:
    python cli/main.py --help
    python cli/main.py [--hd | --sd] [--title] URL [URL ...]

One extractor is built per distinct URL and all of them run concurrently.
Each resolved URL is printed to stdout as soon as it is ready; failures are
reported on stderr and do not stop the remaining URLs.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from fbvideo.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

import typer

from fbvideo import __version__
from fbvideo.config import settings
from fbvideo.errors import ExtractionError
from fbvideo.extractor import PageExtractor
from fbvideo.fetcher import default_client
from fbvideo.models import Quality

app = typer.Typer(
    name="fburl",
    help="Get video URLs from Facebook URL.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fburl {__version__}")
        raise typer.Exit()


def _log_level(name: str) -> int:
    """Numeric level for *name*; unknown names fall back to WARNING."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else _log_level(settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _unique(urls: List[str]) -> List[str]:
    """Deduplicate while preserving insertion order."""
    seen: set[str] = set()
    unique: List[str] = []
    for u in urls:
        if u not in seen:
            seen.add(u)
            unique.append(u)
    return unique


def _resolve(extractor: PageExtractor, with_title: bool) -> str:
    video_url = extractor.fetch_video_url()
    if with_title:
        # Same instance, so the cached page is reused.
        return f"{extractor.fetch_video_title()}\t{video_url}"
    return video_url


@app.command()
def main(
    urls: List[str] = typer.Argument(..., help="List of URLs to get video link."),
    hd: bool = typer.Option(False, "--hd", help="Get HD quality video URL (default)."),
    sd: bool = typer.Option(False, "--sd", help="Get SD quality video URL."),
    title: bool = typer.Option(False, "--title", help="Prefix each URL with the video title."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fetch details to stderr."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Print the direct video URL for each Facebook video URL."""
    if hd and sd:
        raise typer.BadParameter("--hd and --sd are mutually exclusive.")
    _configure_logging(verbose)

    quality = Quality.SD if sd else Quality.HD
    client = default_client()
    extractors = [PageExtractor(url, quality, client=client) for url in _unique(urls)]

    with ThreadPoolExecutor(max_workers=max(1, min(settings.max_workers, len(extractors)))) as pool:
        future_to_extractor = {
            pool.submit(_resolve, extractor, title): extractor for extractor in extractors
        }
        for future in as_completed(future_to_extractor):
            try:
                typer.echo(future.result())
            except ExtractionError as exc:
                typer.echo(f"Error: {exc}", err=True)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
