"""Generated pages built from many items: post listing, tag pages, sitemap.

Ordering never depends on render order: posts are sorted by date
descending, ties broken by title ascending.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timezone

from src.common.models import ContentItem

from .models import ListingEntry, RenderedPage
from .paths import slugify
from .renderer import SiteRenderer

LISTING_LAYOUT = "listing"
TAG_LAYOUT = "tag"
SITEMAP_LAYOUT = "sitemap"

TAGS_ROOT = "/tags/"
SITEMAP_PERMALINK = "/sitemap.xml"


def _timestamp(item: ContentItem) -> float:
    # Naive dates are read as UTC so they compare with zoned ones
    if item.date is None:
        return float("-inf")
    value = item.date
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def sort_posts(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Order posts by date descending, then title ascending."""
    by_title = sorted(items, key=lambda item: item.title)
    return sorted(by_title, key=_timestamp, reverse=True)


def tag_permalink(tag: str) -> str:
    return f"{TAGS_ROOT}{slugify(tag) or 'untagged'}/"


def collect_tags(items: Iterable[ContentItem]) -> dict[str, list[ContentItem]]:
    """Group posts by tag, tags in alphabetical order."""
    groups: dict[str, list[ContentItem]] = {}
    for item in items:
        for tag in item.tags:
            groups.setdefault(tag, []).append(item)
    return {tag: groups[tag] for tag in sorted(groups)}


def generated_permalinks(
    posts: Iterable[ContentItem],
    listing_permalink: str | None,
    tag_pages: bool,
    sitemap: bool,
) -> list[tuple[str, str]]:
    """(permalink, label) pairs claimed by generated pages.

    Computed from parsed items before rendering so collisions with content
    items, or between generated pages, are caught before anything is
    written. Only tags that share a slug share a claim.
    """
    claimed: list[tuple[str, str]] = []
    if listing_permalink:
        claimed.append((listing_permalink, "<post listing>"))
    if tag_pages:
        seen: set[str] = set()
        for tag in collect_tags(posts):
            permalink = tag_permalink(tag)
            if permalink not in seen:
                seen.add(permalink)
                claimed.append((permalink, f"<tag page: {tag}>"))
    if sitemap:
        claimed.append((SITEMAP_PERMALINK, "<sitemap>"))
    return claimed


def listing_entry(item: ContentItem, url: str) -> ListingEntry:
    excerpt = item.extra.get("excerpt") or item.extra.get("description") or ""
    return ListingEntry(
        title=item.title,
        url=url,
        date=item.date.strftime("%Y-%m-%d") if item.date else "",
        tags=item.tags,
        excerpt=str(excerpt),
    )


def _entries(pages: Iterable[RenderedPage]) -> list[dict]:
    return [listing_entry(page.item, page.permalink).to_dict() for page in pages]


def _sorted_post_pages(pages: Iterable[RenderedPage]) -> list[RenderedPage]:
    posts = [page for page in pages if page.item is not None and page.item.is_post]
    by_title = sorted(posts, key=lambda page: page.item.title)
    return sorted(by_title, key=lambda page: _timestamp(page.item), reverse=True)


def build_listing(
    renderer: SiteRenderer,
    pages: Iterable[RenderedPage],
    permalink: str,
    title: str = "Posts",
) -> RenderedPage:
    """Render the chronological post listing."""
    posts = _entries(_sorted_post_pages(pages))
    return renderer.render_generated(LISTING_LAYOUT, permalink, title, posts=posts)


def tag_groups(pages: Iterable[RenderedPage]) -> dict[str, tuple[str, list[RenderedPage]]]:
    """Group post pages by tag page permalink, newest post first.

    Tags that slugify alike ("AWS", "aws") share one page, titled with the
    first spelling seen.
    """
    groups: dict[str, tuple[str, list[RenderedPage]]] = {}
    for page in _sorted_post_pages(pages):
        for tag in page.item.tags:
            _, members = groups.setdefault(tag_permalink(tag), (tag, []))
            if page not in members:
                members.append(page)
    return {permalink: groups[permalink] for permalink in sorted(groups)}


def build_tag_page(
    renderer: SiteRenderer,
    permalink: str,
    tag: str,
    members: Iterable[RenderedPage],
) -> RenderedPage:
    """Render one tag page listing ``members``."""
    return renderer.render_generated(
        TAG_LAYOUT,
        permalink,
        f"Tagged: {tag}",
        tag=tag,
        posts=_entries(members),
    )


def build_tag_pages(
    renderer: SiteRenderer,
    pages: Iterable[RenderedPage],
) -> list[RenderedPage]:
    """Render one page per tag, listing that tag's posts."""
    return [
        build_tag_page(renderer, permalink, tag, members)
        for permalink, (tag, members) in tag_groups(pages).items()
    ]


def build_sitemap(
    renderer: SiteRenderer,
    pages: Iterable[RenderedPage],
) -> RenderedPage:
    """Render sitemap.xml with an absolute URL for every HTML page."""
    urls = []
    for page in sorted(pages, key=lambda p: p.permalink):
        if page.output_path.suffix != ".html":
            continue
        lastmod = ""
        if page.item is not None and page.item.date is not None:
            lastmod = page.item.date.strftime("%Y-%m-%d")
        urls.append({"loc": renderer.absolute_url(page.permalink), "lastmod": lastmod})
    return renderer.render_generated(SITEMAP_LAYOUT, SITEMAP_PERMALINK, "Sitemap", urls=urls)

