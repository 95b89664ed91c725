"""Named field matchers applied to raw page markup."""

from __future__ import annotations

import re
from dataclasses import dataclass

from fbvideo.models import Quality


@dataclass(frozen=True)
class FieldMatcher:
    """A labelled value inside unstructured markup.

    ``group`` is the capture group holding the value; the first match in
    document order wins.
    """

    name: str
    regex: re.Pattern[str]
    group: int = 1

    def search(self, body: str) -> str | None:
        match = self.regex.search(body)
        if match is None:
            return None
        return match.group(self.group)


def _media_src(prefix: str) -> FieldMatcher:
    # Accepts both `hd_src` and `hd_src_no_ratelimit`; the value is the same either way.
    return FieldMatcher(
        name=f"{prefix}_src",
        regex=re.compile(prefix + r'_src(_no_ratelimit)?:\s*"([^"]+)"'),
        group=2,
    )


VIDEO_URL_MATCHERS: dict[Quality, FieldMatcher] = {
    Quality.SD: _media_src("sd"),
    Quality.HD: _media_src("hd"),
}

TITLE_MATCHER = FieldMatcher(
    name="page_title",
    regex=re.compile(r'title id="pageTitle">([^<]+)'),
)
