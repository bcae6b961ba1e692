"""Layout loading.

Layouts are Jinja2 templates. The site's own layouts directory is searched
first, then the layouts packaged with this module, so a site only needs to
ship the layouts it wants to change. The mapping is built once per build
and is read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Any, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateError,
    pass_context,
    select_autoescape,
)

from src.common.errors import ConfigurationError
from src.common.logging import setup_logging
from src.common.models import NO_LAYOUT

logger = setup_logging(module_name="render_resolver.templates")

PACKAGED_LAYOUTS_DIR = Path(__file__).parent / "layouts"
LAYOUT_EXTENSIONS = ["html", "xml"]

# Emits the rendered body as-is
PASSTHROUGH_SOURCE = "{{ content }}"


@pass_context
def absolute_url(context: Any, path: str) -> str:
    """Jinja filter: prefix a site-relative path with ``site.base_url``."""
    site = context.get("site") or {}
    base_url = str(site.get("base_url", "")).rstrip("/")
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url}{path}"


def build_environment(layouts_dir: Optional[Path] = None) -> Environment:
    """Create the Jinja2 environment used for every layout.

    Args:
        layouts_dir: Site layouts directory; packaged layouts fill the gaps.
    """
    loaders = []
    if layouts_dir is not None:
        if not layouts_dir.is_dir():
            logger.warning("Layouts directory not found: %s", layouts_dir)
        else:
            loaders.append(FileSystemLoader(str(layouts_dir)))
    loaders.append(FileSystemLoader(str(PACKAGED_LAYOUTS_DIR)))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(LAYOUT_EXTENSIONS),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["absolute_url"] = absolute_url
    return env


def load_templates(layouts_dir: Optional[Path] = None) -> Mapping[str, Template]:
    """Build the layout-name → template mapping.

    The layout name is the template path without its extension
    ("post.html" → "post"). The ``none`` layout is always available.

    Raises:
        ConfigurationError: A layout file has a syntax error.
    """
    env = build_environment(layouts_dir)
    templates: dict[str, Template] = {}

    for template_name in env.list_templates(extensions=LAYOUT_EXTENSIONS):
        name = str(PurePosixPath(template_name).with_suffix(""))
        if name in templates:
            continue
        try:
            templates[name] = env.get_template(template_name)
        except TemplateError as exc:
            raise ConfigurationError(
                f"Layout {template_name!r} cannot be loaded: {exc}",
                context={"layout": template_name},
            ) from exc

    templates.setdefault(NO_LAYOUT, env.from_string(PASSTHROUGH_SOURCE))

    logger.debug("Loaded %d layouts: %s", len(templates), ", ".join(sorted(templates)))
    return MappingProxyType(templates)
