"""Data models for an extraction request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Quality(str, Enum):
    """Which of the two parallel media fields to look for."""

    SD = "sd"
    HD = "hd"


@dataclass(frozen=True)
class ExtractionRequest:
    """A single video page to extract from, fixed at construction."""

    source_url: str
    quality: Quality = Quality.HD
