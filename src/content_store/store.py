"""File-backed content store.

Enumerates the content directory and parses each file into a ContentItem.
The store never writes; re-enumerating reads the directory again, so a
pass always reflects the files as they are now.

Usage:
    store = ContentStore(Path("content"))
    for item in store.list_items():
        print(item.title)
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from src.common.errors import MalformedFrontMatter
from src.common.logging import setup_logging
from src.common.models import ContentItem, ContentKind, ItemFailure

from .frontmatter import parse

logger = setup_logging(module_name="content_store.store")

CONTENT_SUFFIXES = (".md", ".markdown", ".html", ".htm")


class ContentStore:
    """Read-only view over a directory of content files.

    Files below ``posts_dir`` are posts; every other content file is a page.
    Hidden files and other underscore-prefixed directories (layouts,
    includes, drafts) are skipped.
    """

    def __init__(
        self,
        content_dir: Path,
        posts_dir: str = "_posts",
        default_layout: str = "default",
    ):
        self.content_dir = Path(content_dir)
        self.posts_dir = posts_dir
        self.default_layout = default_layout

    def iter_sources(self) -> Iterator[Path]:
        """Yield content file paths in sorted order."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory not found: %s", self.content_dir)
            return
        for path in sorted(self.content_dir.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in CONTENT_SUFFIXES:
                continue
            if self._is_skipped(path.relative_to(self.content_dir)):
                continue
            yield path

    def list_items(self) -> Iterator[ContentItem]:
        """Lazily parse every content file.

        Each call starts a fresh enumeration.

        Raises:
            MalformedFrontMatter: On the first file that cannot be parsed.
        """
        for path in self.iter_sources():
            yield self.read(path)

    def read(self, path: Path) -> ContentItem:
        """Parse a single content file.

        Raises:
            MalformedFrontMatter: The file is unreadable, not UTF-8, or its
                front-matter cannot be parsed.
        """
        try:
            raw_text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MalformedFrontMatter(path, f"cannot read file: {exc}") from exc
        return parse(
            raw_text,
            source_path=path,
            kind=self.kind_of(path),
            default_layout=self.default_layout,
        )

    def load(self) -> tuple[list[ContentItem], list[ItemFailure]]:
        """Parse every file, collecting malformed ones instead of stopping.

        Returns:
            (items, failures) in source path order
        """
        items: list[ContentItem] = []
        failures: list[ItemFailure] = []
        for path in self.iter_sources():
            try:
                items.append(self.read(path))
            except MalformedFrontMatter as exc:
                logger.warning("Skipping %s: %s", path, exc.reason)
                failures.append(ItemFailure.from_error(str(path), exc))

        logger.info(
            "Loaded %d content items from %s (%d malformed)",
            len(items), self.content_dir, len(failures),
        )
        return items, failures

    def kind_of(self, path: Path) -> ContentKind:
        relative = path.relative_to(self.content_dir)
        if self.posts_dir in relative.parts[:-1]:
            return ContentKind.POST
        return ContentKind.PAGE

    def _is_skipped(self, relative: Path) -> bool:
        for part in relative.parts[:-1]:
            if part.startswith(".") or (part.startswith("_") and part != self.posts_dir):
                return True
        return relative.name.startswith((".", "_"))
