"""Error taxonomy for site builds.

Per-item errors (malformed front-matter, unknown layout, template failure)
are collected and reported after a full pass. ``PermalinkCollision`` is
structural and halts the build before anything is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping


class SiteError(Exception):
    """Base exception for all site build errors.

    Args:
        code: Stable machine-readable error code
        message: Human-readable message
        context: Optional structured context for logging
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.reason = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(SiteError):
    """Raised for an invalid or unreadable settings file."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("CONFIGURATION_ERROR", message, context=context)


class MalformedFrontMatter(SiteError):
    """A front-matter block is present but cannot be parsed."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = path
        where = str(path) if path is not None else "<string>"
        super().__init__(
            "MALFORMED_FRONT_MATTER",
            f"{where}: {reason}",
            context={"path": where},
        )
        self.reason = reason


class UnknownLayout(SiteError):
    """An item references a layout that is not in the layout mapping."""

    def __init__(self, layout: str, path: Path | str | None = None) -> None:
        self.layout = layout
        self.path = path
        where = str(path) if path is not None else "<string>"
        super().__init__(
            "UNKNOWN_LAYOUT",
            f"{where}: unknown layout {layout!r}",
            context={"path": where, "layout": layout},
        )
        self.reason = f"unknown layout {layout!r}"


class TemplateRenderError(SiteError):
    """A layout raised while rendering an item."""

    def __init__(self, layout: str, path: Path | str | None, reason: str) -> None:
        self.layout = layout
        self.path = path
        where = str(path) if path is not None else "<string>"
        super().__init__(
            "TEMPLATE_RENDER_ERROR",
            f"{where}: layout {layout!r} failed: {reason}",
            context={"path": where, "layout": layout},
        )
        self.reason = f"layout {layout!r} failed: {reason}"


class PermalinkCollision(SiteError):
    """Two items resolve to the same output path."""

    def __init__(self, permalink: str, first: str, second: str) -> None:
        self.permalink = permalink
        self.sources = (first, second)
        super().__init__(
            "PERMALINK_COLLISION",
            f"{permalink} is claimed by both {first} and {second}",
            context={"permalink": permalink, "sources": [first, second]},
        )
