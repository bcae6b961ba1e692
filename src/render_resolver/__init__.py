# Render Resolver: Jinja2 layouts + permalink resolution
"""
Render resolver for the site publisher.

Maps each item's layout name to a Jinja2 template, renders its body into
that layout and resolves the permalink it is published at. Also builds
the generated pages (post listing, tag pages, sitemap).
"""

from .listing import (
    build_listing,
    build_sitemap,
    build_tag_page,
    build_tag_pages,
    generated_permalinks,
    sort_posts,
    tag_groups,
    tag_permalink,
)
from .models import ListingEntry, RenderedPage
from .paths import permalink_to_file, resolve_path, resolve_paths, slugify
from .renderer import SiteRenderer, render
from .templates import PACKAGED_LAYOUTS_DIR, build_environment, load_templates

__all__ = [
    "build_listing",
    "build_sitemap",
    "build_tag_page",
    "build_tag_pages",
    "generated_permalinks",
    "sort_posts",
    "tag_groups",
    "tag_permalink",
    "ListingEntry",
    "RenderedPage",
    "permalink_to_file",
    "resolve_path",
    "resolve_paths",
    "slugify",
    "SiteRenderer",
    "render",
    "PACKAGED_LAYOUTS_DIR",
    "build_environment",
    "load_templates",
]
