"""Shared Pydantic data models for the site publisher.

These models define the data contract between the content store and the
render resolver. All modules import from here.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .errors import SiteError

# Front-matter keys mapped onto ContentItem fields; everything else is extra
KNOWN_KEYS = ("layout", "title", "permalink", "date", "tags")

NO_LAYOUT = "none"


# === Enums ===

class ContentKind(str, Enum):
    """Whether an item is a dated post or a standalone page."""
    PAGE = "page"
    POST = "post"


class SourceFormat(str, Enum):
    """Markup of an item's body."""
    MARKDOWN = "markdown"
    HTML = "html"


# === Content ===

class ContentItem(BaseModel):
    """A single page or post: front-matter metadata plus body text.

    Items are frozen; an edit to the source file produces a new item on the
    next store pass.
    """

    model_config = {"frozen": True}

    layout: str = NO_LAYOUT
    title: str = ""
    permalink: str | None = None
    date: datetime | None = None
    tags: tuple[str, ...] = ()
    body: str = ""

    kind: ContentKind = ContentKind.PAGE
    source_path: Path | None = None
    source_format: SourceFormat = SourceFormat.MARKDOWN
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("layout", mode="before")
    @classmethod
    def _layout_name(cls, value: Any) -> str:
        # YAML reads `layout: null` / `layout: none` loosely
        if value is None or value is False:
            return NO_LAYOUT
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def _title_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("permalink", mode="before")
    @classmethod
    def _permalink_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            raise ValueError("permalink must not be empty")
        if ".." in text.split("/"):
            raise ValueError("permalink must stay inside the output directory")
        return text

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_datetime(cls, value: Any) -> Any:
        # PyYAML yields `date` for bare YYYY-MM-DD values
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time())
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split())
        if isinstance(value, (list, tuple, set)):
            return tuple(str(tag) for tag in value if tag is not None)
        raise ValueError("tags must be a list or a space-separated string")

    @property
    def is_post(self) -> bool:
        return self.kind == ContentKind.POST

    @property
    def source_label(self) -> str:
        """Identifier used in error reports."""
        if self.source_path is not None:
            return str(self.source_path)
        return self.permalink or self.title or "<string>"

    @property
    def metadata(self) -> dict[str, Any]:
        """Front-matter mapping of the item (known fields plus extras)."""
        data: dict[str, Any] = {"layout": self.layout}
        if self.title:
            data["title"] = self.title
        if self.permalink is not None:
            data["permalink"] = self.permalink
        if self.date is not None:
            data["date"] = self.date
        if self.tags:
            data["tags"] = list(self.tags)
        data.update(self.extra)
        return data


# === Build reporting ===

class ItemFailure(BaseModel):
    """One item that could not be built, and why."""
    source: str
    error_code: str
    reason: str

    @classmethod
    def from_error(cls, source: str, error: SiteError) -> ItemFailure:
        return cls(source=source, error_code=error.code, reason=error.reason)

    def __str__(self) -> str:
        return f"{self.source}: [{self.error_code}] {self.reason}"
