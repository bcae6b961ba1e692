# Publisher: build pipeline + output writer + CLI
"""
Publisher module for building the site.

Composes the content store and render resolver into a full build: parses
content, pre-checks permalinks, renders pages (optionally in parallel),
generates listing/tag/sitemap pages and writes the output tree.
"""

from .models import BuildReport, WrittenPage
from .pipeline import SiteBuilder, build_site
from .writer import OutputWriter

__all__ = [
    "BuildReport",
    "OutputWriter",
    "SiteBuilder",
    "WrittenPage",
    "build_site",
]
