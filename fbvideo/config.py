"""Centralised settings for fbvideo.

Transport and CLI configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _optional_timeout(raw: str) -> float | None:
    """``0`` (or any non-positive value) disables the transport timeout."""
    value = float(raw)
    return value if value > 0 else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    request_timeout: float | None = field(
        default_factory=lambda: _optional_timeout(
            os.environ.get("FBVIDEO_REQUEST_TIMEOUT", "30.0")
        )
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("FBVIDEO_MAX_REDIRECTS", "10"))
    )

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    max_workers: int = field(
        default_factory=lambda: int(os.environ.get("FBVIDEO_MAX_WORKERS", "8"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("FBVIDEO_LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton, import this everywhere:
#   from fbvideo.config import settings
settings = Settings()
