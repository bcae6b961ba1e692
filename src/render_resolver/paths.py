"""Permalink resolution.

An explicit ``permalink`` is used verbatim. Otherwise the path is derived
from the item's kind, date and slugified title:

    post  2023-03-14 "Pandas Accessors"  →  /2023/03/14/pandas-accessors.html
    page  "About"                         →  /about/
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable
from pathlib import PurePosixPath

from src.common.errors import MalformedFrontMatter, PermalinkCollision
from src.common.models import ContentItem

# Whitespace, punctuation and underscores all become a single hyphen
_SEPARATOR_RE = re.compile(r"[\W_]+", re.UNICODE)

INDEX_FILE = "index.html"


def slugify(text: str) -> str:
    """Convert a title to a URL-friendly slug.

    Examples:
        "Sending Slack alerts from AWS Lambda" → "sending-slack-alerts-from-aws-lambda"
        "pandas: custom accessors!" → "pandas-custom-accessors"
    """
    text = unicodedata.normalize("NFC", text.strip().lower())
    text = _SEPARATOR_RE.sub("-", text)
    return text.strip("-")


def item_slug(item: ContentItem) -> str:
    """Slug from the title, falling back to the source file name."""
    slug = slugify(item.title)
    if not slug and item.source_path is not None:
        slug = slugify(item.source_path.stem)
    return slug or "untitled"


def resolve_path(item: ContentItem) -> str:
    """Return the permalink an item is published at.

    Raises:
        MalformedFrontMatter: A post has no date to derive its path from.
    """
    if item.permalink is not None:
        return item.permalink

    slug = item_slug(item)
    if item.is_post:
        if item.date is None:
            raise MalformedFrontMatter(item.source_path, "posts require a date")
        return f"/{item.date:%Y}/{item.date:%m}/{item.date:%d}/{slug}.html"
    return f"/{slug}/"


def permalink_to_file(permalink: str) -> PurePosixPath:
    """Map a permalink to a file path relative to the output directory.

    "/about/" → about/index.html, "/feed" → feed/index.html,
    "/2023/03/14/x.html" → 2023/03/14/x.html, "/" → index.html
    """
    relative = permalink.strip().lstrip("/")
    if not relative or relative.endswith("/"):
        return PurePosixPath(relative) / INDEX_FILE
    path = PurePosixPath(relative)
    if not path.suffix:
        return path / INDEX_FILE
    return path


def resolve_paths(
    items: Iterable[ContentItem],
    reserved: Iterable[tuple[str, str]] = (),
) -> dict[str, ContentItem]:
    """Resolve every item's permalink and reject duplicates.

    Two permalinks collide when they map to the same output file, so
    "/about" and "/about/" are the same page.

    Args:
        items: Items to publish
        reserved: (permalink, label) pairs claimed by generated pages

    Returns:
        Mapping of permalink to item, in input order

    Raises:
        PermalinkCollision: Two claimants share an output file.
    """
    claimed: dict[PurePosixPath, tuple[str, str]] = {}
    for permalink, label in reserved:
        _claim(claimed, permalink, label)

    resolved: dict[str, ContentItem] = {}
    for item in items:
        permalink = resolve_path(item)
        _claim(claimed, permalink, item.source_label)
        resolved[permalink] = item
    return resolved


def _claim(
    claimed: dict[PurePosixPath, tuple[str, str]], permalink: str, source: str
) -> None:
    target = permalink_to_file(permalink)
    if target in claimed:
        _, first = claimed[target]
        raise PermalinkCollision(permalink, first, source)
    claimed[target] = (permalink, source)
