"""Front-matter parsing and serialisation.

A content file may open with a YAML block fenced by ``---`` lines::

    ---
    layout: post
    title: Sending Slack alerts from AWS Lambda
    tags: [aws, slack]
    ---
    Body text...

The closing fence may also be ``...``. A file that does not start with a
fence has no front-matter and is rendered without a layout.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.common.errors import MalformedFrontMatter
from src.common.models import (
    KNOWN_KEYS,
    NO_LAYOUT,
    ContentItem,
    ContentKind,
    SourceFormat,
)

FENCE = "---"
CLOSING_FENCES = ("---", "...")

HTML_SUFFIXES = (".html", ".htm")


def split_front_matter(
    raw_text: str, source_path: Path | None = None
) -> tuple[dict[str, Any] | None, str]:
    """Split raw file text into (metadata, body).

    Args:
        raw_text: Full file contents
        source_path: Path used in error messages

    Returns:
        ``(None, raw_text)`` when there is no front-matter block,
        otherwise the parsed mapping and the remaining body.

    Raises:
        MalformedFrontMatter: The block is unterminated, is not valid YAML
            or is not a mapping.
    """
    text = raw_text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FENCE:
        return None, raw_text

    for index in range(1, len(lines)):
        if lines[index].rstrip() in CLOSING_FENCES:
            break
    else:
        raise MalformedFrontMatter(source_path, "front-matter block is not terminated")

    block = "".join(lines[1:index])
    body = "".join(lines[index + 1:])

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatter(source_path, f"invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatter(
            source_path,
            f"front-matter must be a mapping, got {type(data).__name__}",
        )
    return {str(key): value for key, value in data.items()}, body


def parse(
    raw_text: str,
    source_path: Path | None = None,
    kind: ContentKind = ContentKind.PAGE,
    default_layout: str = "default",
) -> ContentItem:
    """Parse a content file into a ContentItem.

    Args:
        raw_text: Full file contents
        source_path: Origin of the text, kept on the item for reporting
        kind: Page or post
        default_layout: Layout applied when the front-matter names none

    Returns:
        Parsed, immutable ContentItem

    Raises:
        MalformedFrontMatter: Front-matter block present but unparsable,
            or its values fail validation.
    """
    metadata, body = split_front_matter(raw_text, source_path)

    if metadata is None:
        fields: dict[str, Any] = {"layout": NO_LAYOUT}
        extra: dict[str, Any] = {}
    else:
        fields = {key: metadata[key] for key in KNOWN_KEYS if key in metadata}
        extra = {key: value for key, value in metadata.items() if key not in KNOWN_KEYS}
        fields.setdefault("layout", default_layout)

    if source_path is not None:
        fields.setdefault("title", title_from_filename(source_path, kind))
        if kind == ContentKind.POST and fields.get("date") is None:
            fields["date"] = date_from_filename(source_path)

    if kind == ContentKind.POST and fields.get("date") is None:
        raise MalformedFrontMatter(source_path, "posts require a date")

    try:
        return ContentItem(
            **fields,
            body=body,
            kind=kind,
            source_path=source_path,
            source_format=source_format_for(source_path),
            extra=extra,
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise MalformedFrontMatter(source_path, problems) from exc


def serialize_front_matter(metadata: dict[str, Any]) -> str:
    """Serialise a metadata mapping as a fenced YAML block."""
    yaml_text = yaml.safe_dump(
        metadata,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=1000,
    )
    return f"{FENCE}\n{yaml_text}{FENCE}\n"


def dump_item(item: ContentItem) -> str:
    """Serialise an item back to file text (front-matter plus body)."""
    return serialize_front_matter(item.metadata) + item.body


def source_format_for(source_path: Path | None) -> SourceFormat:
    if source_path is not None and source_path.suffix.lower() in HTML_SUFFIXES:
        return SourceFormat.HTML
    return SourceFormat.MARKDOWN


def title_from_filename(source_path: Path, kind: ContentKind) -> str:
    """Derive a display title from a file name.

    "2023-03-14-pandas-accessors.md" → "Pandas Accessors" for posts,
    "about.md" → "About" for pages.
    """
    stem = source_path.stem
    if kind == ContentKind.POST and _date_prefix(stem) is not None:
        stem = stem[11:]
    words = stem.replace("_", " ").replace("-", " ").split()
    return " ".join(word.capitalize() for word in words)


def date_from_filename(source_path: Path) -> date | None:
    """Return the ``YYYY-MM-DD`` prefix of a post file name, if any."""
    prefix = _date_prefix(source_path.stem)
    if prefix is None:
        return None
    try:
        return date.fromisoformat(prefix)
    except ValueError:
        return None


def _date_prefix(stem: str) -> str | None:
    prefix = stem[:10]
    if len(stem) >= 10 and prefix[4] == "-" and prefix[7] == "-":
        if prefix.replace("-", "").isdigit():
            return prefix
    return None
