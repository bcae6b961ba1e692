"""Tests for slugs, permalink resolution and collision detection."""

from datetime import datetime
from pathlib import Path, PurePosixPath

import pytest

from src.common.errors import MalformedFrontMatter, PermalinkCollision
from src.common.models import ContentItem, ContentKind
from src.render_resolver import permalink_to_file, resolve_path, resolve_paths, slugify


def _post(title: str, day: str, **kwargs) -> ContentItem:
    return ContentItem(
        layout="post",
        title=title,
        date=datetime.fromisoformat(day),
        kind=ContentKind.POST,
        **kwargs,
    )


class TestSlugify:
    @pytest.mark.parametrize("text,expected", [
        ("Sending Slack alerts from AWS Lambda", "sending-slack-alerts-from-aws-lambda"),
        ("pandas: custom accessors!", "pandas-custom-accessors"),
        ("  spaced   out  ", "spaced-out"),
        ("snake_case_title", "snake-case-title"),
        ("C++ & Rust", "c-rust"),
        ("", ""),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestResolvePath:
    def test_explicit_permalink_is_verbatim(self):
        item = ContentItem(layout="page", title="About", permalink="/about/")
        assert resolve_path(item) == "/about/"

    def test_explicit_permalink_on_post_wins(self):
        item = _post("A", "2023-01-14", permalink="/custom/path.html")
        assert resolve_path(item) == "/custom/path.html"

    def test_post_path(self):
        item = _post("Sending Slack alerts from AWS Lambda", "2023-03-14")
        assert resolve_path(item) == "/2023/03/14/sending-slack-alerts-from-aws-lambda.html"

    def test_page_path(self):
        item = ContentItem(layout="page", title="Notes & Snippets")
        assert resolve_path(item) == "/notes-snippets/"

    def test_untitled_page_uses_file_name(self):
        item = ContentItem(layout="page", source_path=Path("content/contact.md"))
        assert resolve_path(item) == "/contact/"

    def test_deterministic(self):
        item = _post("A", "2023-01-14")
        assert resolve_path(item) == resolve_path(item)

    def test_undated_post(self):
        item = ContentItem(layout="post", title="A", kind=ContentKind.POST)
        with pytest.raises(MalformedFrontMatter):
            resolve_path(item)


class TestPermalinkToFile:
    @pytest.mark.parametrize("permalink,expected", [
        ("/about/", "about/index.html"),
        ("/", "index.html"),
        ("/feed", "feed/index.html"),
        ("/2023/03/14/x.html", "2023/03/14/x.html"),
        ("/sitemap.xml", "sitemap.xml"),
    ])
    def test_mapping(self, permalink, expected):
        assert permalink_to_file(permalink) == PurePosixPath(expected)


class TestResolvePaths:
    def test_maps_each_item(self):
        about = ContentItem(layout="page", title="About", permalink="/about/")
        post = _post("A", "2023-01-14")
        resolved = resolve_paths([about, post])
        assert resolved == {"/about/": about, "/2023/01/14/a.html": post}

    def test_duplicate_permalink(self):
        first = ContentItem(layout="page", title="About", permalink="/about/",
                            source_path=Path("about.md"))
        second = ContentItem(layout="page", title="About me", permalink="/about/",
                             source_path=Path("about-me.md"))
        with pytest.raises(PermalinkCollision) as exc_info:
            resolve_paths([first, second])
        assert exc_info.value.permalink == "/about/"
        assert exc_info.value.sources == ("about.md", "about-me.md")

    def test_equivalent_permalinks_collide(self):
        first = ContentItem(layout="page", permalink="/about/", source_path=Path("a.md"))
        second = ContentItem(layout="page", permalink="/about", source_path=Path("b.md"))
        with pytest.raises(PermalinkCollision):
            resolve_paths([first, second])

    def test_derived_paths_collide(self):
        first = ContentItem(layout="page", title="About", source_path=Path("about.md"))
        second = ContentItem(layout="page", title="About!", source_path=Path("about2.md"))
        with pytest.raises(PermalinkCollision):
            resolve_paths([first, second])

    def test_reserved_paths(self):
        page = ContentItem(layout="page", permalink="/blog/", source_path=Path("blog.md"))
        with pytest.raises(PermalinkCollision) as exc_info:
            resolve_paths([page], reserved=[("/blog/", "<post listing>")])
        assert exc_info.value.sources == ("<post listing>", "blog.md")

    def test_reserved_paths_collide_with_each_other(self):
        reserved = [("/tags/aws/", "<post listing>"), ("/tags/aws/", "<tag page: aws>")]
        with pytest.raises(PermalinkCollision) as exc_info:
            resolve_paths([], reserved=reserved)
        assert exc_info.value.sources == ("<post listing>", "<tag page: aws>")
