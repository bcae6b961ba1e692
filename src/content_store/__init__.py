# Content Store: front-matter parsing + content directory enumeration
"""
Content store for the site publisher.

Reads markdown/HTML content files, splits their YAML front-matter from the
body and exposes them as immutable ContentItem objects.
"""

from .frontmatter import (
    dump_item,
    parse,
    serialize_front_matter,
    split_front_matter,
)
from .store import ContentStore

__all__ = [
    "ContentStore",
    "dump_item",
    "parse",
    "serialize_front_matter",
    "split_front_matter",
]
