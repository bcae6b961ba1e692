"""Tests for post ordering and generated pages."""

from datetime import datetime, timedelta, timezone

import pytest

from src.common.models import ContentItem, ContentKind
from src.render_resolver import (
    SiteRenderer,
    build_listing,
    build_sitemap,
    build_tag_page,
    build_tag_pages,
    generated_permalinks,
    sort_posts,
    tag_groups,
    tag_permalink,
)


def _post(title: str, when: datetime, tags=()) -> ContentItem:
    return ContentItem(
        layout="post",
        title=title,
        date=when,
        tags=list(tags),
        kind=ContentKind.POST,
        body=f"Body of {title}",
    )


@pytest.fixture
def renderer(templates, site_settings) -> SiteRenderer:
    return SiteRenderer(templates, site_settings)


@pytest.fixture
def posts() -> list[ContentItem]:
    return [
        _post("A", datetime(2023, 1, 14), tags=["pandas", "python"]),
        _post("B", datetime(2023, 3, 14), tags=["aws", "slack", "python"]),
    ]


class TestSortPosts:
    def test_date_descending(self, posts):
        assert [p.title for p in sort_posts(posts)] == ["B", "A"]

    def test_ties_broken_by_title(self):
        same_day = datetime(2023, 3, 14)
        items = [_post("Zeta", same_day), _post("Alpha", same_day), _post("Mid", same_day)]
        assert [p.title for p in sort_posts(items)] == ["Alpha", "Mid", "Zeta"]

    def test_independent_of_input_order(self, posts):
        assert sort_posts(posts) == sort_posts(list(reversed(posts)))

    def test_mixed_naive_and_zoned_dates(self):
        zoned = _post("Zoned", datetime(2023, 3, 14, 12, tzinfo=timezone(timedelta(hours=2))))
        naive = _post("Naive", datetime(2023, 3, 14, 11))
        assert [p.title for p in sort_posts([zoned, naive])] == ["Naive", "Zoned"]


class TestGeneratedPermalinks:
    def test_all_enabled(self, posts):
        claimed = generated_permalinks(posts, "/blog/", tag_pages=True, sitemap=True)
        assert {permalink for permalink, _ in claimed} == {
            "/blog/",
            "/tags/aws/",
            "/tags/pandas/",
            "/tags/python/",
            "/tags/slack/",
            "/sitemap.xml",
        }

    def test_disabled(self, posts):
        assert generated_permalinks(posts, None, tag_pages=False, sitemap=False) == []

    def test_listing_claim_is_kept_beside_tag_claim(self, posts):
        claimed = generated_permalinks(posts, "/tags/aws/", tag_pages=True, sitemap=False)
        assert [label for permalink, label in claimed if permalink == "/tags/aws/"] == [
            "<post listing>",
            "<tag page: aws>",
        ]

    def test_tags_sharing_a_slug_claim_once(self):
        items = [
            _post("A", datetime(2023, 1, 14), tags=["AWS"]),
            _post("B", datetime(2023, 3, 14), tags=["aws"]),
        ]
        claimed = generated_permalinks(items, None, tag_pages=True, sitemap=False)
        assert [permalink for permalink, _ in claimed] == ["/tags/aws/"]

    def test_tag_permalink(self):
        assert tag_permalink("Machine Learning") == "/tags/machine-learning/"


class TestBuildListing:
    def test_listing_order(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        listing = build_listing(renderer, pages, "/blog/")

        content = listing.content
        assert listing.permalink == "/blog/"
        assert content.index(">B</a>") < content.index(">A</a>")
        assert "2023-03-14" in content
        assert "https://example.com/2023/03/14/b.html" in content

    def test_listing_ignores_pages(self, renderer, posts):
        about = ContentItem(layout="page", title="About", permalink="/about/")
        pages = [renderer.render(item) for item in [about, *posts]]
        listing = build_listing(renderer, pages, "/blog/")
        assert ">About</a>" not in listing.content

    def test_listing_is_independent_of_render_order(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        forward = build_listing(renderer, pages, "/blog/")
        backward = build_listing(renderer, list(reversed(pages)), "/blog/")
        assert forward.content == backward.content


class TestBuildTagPages:
    def test_one_page_per_tag(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        tag_pages = build_tag_pages(renderer, pages)
        assert [p.permalink for p in tag_pages] == [
            "/tags/aws/",
            "/tags/pandas/",
            "/tags/python/",
            "/tags/slack/",
        ]

    def test_shared_tag_lists_both_posts_newest_first(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        python_page = next(
            p for p in build_tag_pages(renderer, pages) if p.permalink == "/tags/python/"
        )
        assert python_page.content.index(">B</a>") < python_page.content.index(">A</a>")

    def test_tags_differing_in_case_share_a_page(self, renderer):
        items = [
            _post("A", datetime(2023, 1, 14), tags=["AWS"]),
            _post("B", datetime(2023, 3, 14), tags=["aws"]),
        ]
        pages = [renderer.render(item) for item in items]
        tag_pages = build_tag_pages(renderer, pages)
        assert len(tag_pages) == 1
        assert ">A</a>" in tag_pages[0].content
        assert ">B</a>" in tag_pages[0].content

    def test_tag_groups_match_tag_pages(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        groups = tag_groups(pages)
        assert list(groups) == [p.permalink for p in build_tag_pages(renderer, pages)]
        tag, members = groups["/tags/python/"]
        assert tag == "python"
        assert [page.item.title for page in members] == ["B", "A"]

    def test_build_tag_page(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        page = build_tag_page(renderer, "/tags/pandas/", "pandas", pages[:1])
        assert page.permalink == "/tags/pandas/"
        assert "Tagged: pandas" in page.content


class TestBuildSitemap:
    def test_lists_absolute_urls(self, renderer, posts):
        pages = [renderer.render(item) for item in posts]
        sitemap = build_sitemap(renderer, pages)
        assert sitemap.permalink == "/sitemap.xml"
        assert "<loc>https://example.com/2023/01/14/a.html</loc>" in sitemap.content
        assert "<lastmod>2023-03-14</lastmod>" in sitemap.content
        assert sitemap.content.startswith('<?xml version="1.0" encoding="UTF-8"?>')
