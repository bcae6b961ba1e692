"""Data models for the render resolver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

from src.common.models import ContentItem


@dataclass(frozen=True)
class RenderedPage:
    """A page ready to be written: its permalink and final markup."""
    permalink: str
    output_path: PurePosixPath  # relative to the output directory
    content: str
    layout: str
    item: Optional[ContentItem] = None  # None for generated pages

    @property
    def is_generated(self) -> bool:
        return self.item is None


@dataclass(frozen=True)
class ListingEntry:
    """One post as shown on a listing or tag page."""
    title: str
    url: str
    date: str  # YYYY-MM-DD
    tags: tuple[str, ...] = ()
    excerpt: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "date": self.date,
            "tags": list(self.tags),
            "excerpt": self.excerpt,
        }
