# Common utilities and shared modules
"""
Shared components used by the content store, render resolver and publisher:
- Data models (Pydantic schemas)
- Error taxonomy
- Logging configuration
- Project configuration
"""

from .config import PROJECT_ROOT, BuildSettings, Settings, SiteSettings
from .errors import (
    ConfigurationError,
    MalformedFrontMatter,
    PermalinkCollision,
    SiteError,
    TemplateRenderError,
    UnknownLayout,
)
from .logging import set_level, setup_logging
from .models import ContentItem, ContentKind, SourceFormat

__all__ = [
    "PROJECT_ROOT",
    "BuildSettings",
    "Settings",
    "SiteSettings",
    "ConfigurationError",
    "MalformedFrontMatter",
    "PermalinkCollision",
    "SiteError",
    "TemplateRenderError",
    "UnknownLayout",
    "set_level",
    "setup_logging",
    "ContentItem",
    "ContentKind",
    "SourceFormat",
]
