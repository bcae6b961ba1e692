"""
Page renderer.
Binds a ContentItem's metadata and body into its layout.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import markdown as md
from jinja2 import Template, TemplateError
from markupsafe import Markup

from src.common.config import SiteSettings
from src.common.errors import TemplateRenderError, UnknownLayout
from src.common.models import ContentItem, SourceFormat

from .models import RenderedPage
from .paths import permalink_to_file, resolve_path

MARKDOWN_EXTENSIONS = ["tables", "fenced_code"]


class SiteRenderer:
    """
    Renders content items through the layout mapping.

    Rendering is a pure function of (item, layouts, site settings): the
    renderer holds no mutable state and may be shared between threads.

    Usage:
        renderer = SiteRenderer(load_templates(), SiteSettings())
        page = renderer.render(item)
    """

    def __init__(
        self,
        templates: Mapping[str, Template],
        site: Optional[SiteSettings] = None,
    ):
        self.templates = templates
        self.site = site or SiteSettings()

    def render(self, item: ContentItem, permalink: Optional[str] = None) -> RenderedPage:
        """
        Render a single item.

        Args:
            item: Parsed content item
            permalink: Pre-resolved permalink (resolved here if omitted)

        Returns:
            RenderedPage with the final markup

        Raises:
            UnknownLayout: The item's layout is not in the mapping
            TemplateRenderError: The layout failed while rendering
        """
        template = self.templates.get(item.layout)
        if template is None:
            raise UnknownLayout(item.layout, item.source_label)

        permalink = permalink or resolve_path(item)
        context = {
            "content": Markup(self.render_body(item)),
            "page": self.page_context(item, permalink),
        }
        content = self._render_template(template, item.layout, item.source_label, context)
        return RenderedPage(
            permalink=permalink,
            output_path=permalink_to_file(permalink),
            content=content,
            layout=item.layout,
            item=item,
        )

    def render_generated(
        self,
        layout: str,
        permalink: str,
        title: str,
        **context: Any,
    ) -> RenderedPage:
        """
        Render a page that has no source item (listing, tag page, sitemap).

        Args:
            layout: Layout name
            permalink: Output permalink
            title: Page title
            **context: Extra template variables

        Returns:
            RenderedPage without an item
        """
        template = self.templates.get(layout)
        if template is None:
            raise UnknownLayout(layout, permalink)

        page = {
            "title": title,
            "permalink": permalink,
            "url": permalink,
            "absolute_url": self.absolute_url(permalink),
            "kind": "generated",
            "layout": layout,
        }
        variables = {"content": Markup(""), "page": page, **context}
        content = self._render_template(template, layout, permalink, variables)
        return RenderedPage(
            permalink=permalink,
            output_path=permalink_to_file(permalink),
            content=content,
            layout=layout,
        )

    def render_body(self, item: ContentItem) -> str:
        """Convert the item body to HTML. HTML bodies pass through."""
        if item.source_format == SourceFormat.HTML:
            return item.body
        return md.markdown(item.body, extensions=MARKDOWN_EXTENSIONS)

    def page_context(self, item: ContentItem, permalink: str) -> dict[str, Any]:
        """Template variables describing the item (``page`` in layouts)."""
        page = dict(item.extra)
        page.update(
            title=item.title,
            date=item.date,
            tags=list(item.tags),
            permalink=permalink,
            url=permalink,
            absolute_url=self.absolute_url(permalink),
            kind=item.kind.value,
            layout=item.layout,
        )
        return page

    def site_context(self) -> dict[str, Any]:
        return self.site.model_dump()

    def absolute_url(self, permalink: str) -> str:
        return f"{self.site.base_url.rstrip('/')}/{permalink.lstrip('/')}"

    def _render_template(
        self,
        template: Template,
        layout: str,
        source: str,
        context: dict[str, Any],
    ) -> str:
        try:
            return template.render(site=self.site_context(), **context)
        except TemplateError as exc:
            raise TemplateRenderError(layout, source, str(exc)) from exc


def render(
    item: ContentItem,
    templates: Mapping[str, Template],
    site: Optional[SiteSettings] = None,
) -> RenderedPage:
    """
    Convenience function to render one item.

    Args:
        item: Parsed content item
        templates: Layout mapping from load_templates()
        site: Site settings (defaults used if omitted)

    Returns:
        RenderedPage
    """
    return SiteRenderer(templates, site).render(item)
