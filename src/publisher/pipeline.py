"""Full build pipeline: content directory to rendered site.

Orchestrates the complete flow:
Layouts → ContentStore → Permalink pre-check → Render → Generated pages → Write

Usage:
    builder = SiteBuilder(Settings.load())
    report = builder.build()
    print(report.summary())
"""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

from jinja2 import Template

from src.common.config import Settings
from src.common.errors import TemplateRenderError, UnknownLayout
from src.common.logging import setup_logging
from src.common.models import ContentItem, ItemFailure
from src.content_store import ContentStore
from src.render_resolver import (
    RenderedPage,
    SiteRenderer,
    build_listing,
    build_sitemap,
    build_tag_page,
    generated_permalinks,
    load_templates,
    resolve_paths,
    tag_groups,
)

from .models import BuildReport
from .writer import OutputWriter

logger = setup_logging(module_name="publisher.pipeline")

RenderOutcome = tuple[RenderedPage | None, ItemFailure | None]


class SiteBuilder:
    """End-to-end build from content files to an output directory.

    Steps:
    1. Load the layout mapping (once, read-only afterwards)
    2. Parse every content file, collecting malformed ones
    3. Resolve all permalinks; a collision stops the build before any write
    4. Render items, sequentially or on a thread pool
    5. Render the post listing, tag pages and sitemap
    6. Write every page
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: ContentStore | None = None,
        templates: Mapping[str, Template] | None = None,
        writer: OutputWriter | None = None,
    ):
        self.settings = settings or Settings()
        build = self.settings.build
        self.store = store or ContentStore(
            build.content_dir,
            posts_dir=build.posts_dir,
            default_layout=build.default_layout,
        )
        self._templates = templates
        self.writer = writer or OutputWriter(build.output_dir)

    @property
    def templates(self) -> Mapping[str, Template]:
        if self._templates is None:
            self._templates = load_templates(self.settings.build.layouts_dir)
        return self._templates

    def build(self) -> BuildReport:
        """Execute the full build.

        Returns:
            BuildReport with written pages and every per-item failure

        Raises:
            PermalinkCollision: Two items (or an item and a generated page)
                resolve to the same output path. Nothing is written.
        """
        build = self.settings.build
        renderer = SiteRenderer(self.templates, self.settings.site)

        logger.info("Step 1: Reading content from %s...", build.content_dir)
        items, failures = self.store.load()

        logger.info("Step 2: Resolving permalinks for %d items...", len(items))
        reserved = generated_permalinks(
            [item for item in items if item.is_post],
            build.listing_permalink if build.listing else None,
            build.tag_pages,
            build.sitemap,
        )
        resolved = resolve_paths(items, reserved=reserved)

        logger.info("Step 3: Rendering with %d worker(s)...", build.workers)
        pages: list[RenderedPage] = []
        for page, failure in self._render_all(renderer, resolved):
            if failure is not None:
                failures.append(failure)
            else:
                pages.append(page)

        logger.info("Step 4: Rendering generated pages...")
        pages.extend(self._generated_pages(renderer, pages, failures))

        logger.info("Step 5: Writing %d pages to %s...", len(pages), build.output_dir)
        if build.clean:
            self.writer.clean()
        report = BuildReport(output_dir=self.writer.output_dir, failures=failures)
        for page in pages:
            report.pages.append(self.writer.write(page))

        if report.ok:
            logger.info("Build complete: %d pages", report.page_count)
        else:
            logger.warning(report.summary())
        return report

    def _render_all(
        self,
        renderer: SiteRenderer,
        resolved: dict[str, ContentItem],
    ) -> list[RenderOutcome]:
        jobs = list(resolved.items())
        if self.settings.build.workers <= 1 or len(jobs) <= 1:
            return [self._render_one(renderer, item, permalink) for permalink, item in jobs]

        with ThreadPoolExecutor(max_workers=self.settings.build.workers) as pool:
            futures = [
                pool.submit(self._render_one, renderer, item, permalink)
                for permalink, item in jobs
            ]
            return [future.result() for future in futures]

    def _render_one(
        self,
        renderer: SiteRenderer,
        item: ContentItem,
        permalink: str,
    ) -> RenderOutcome:
        try:
            return renderer.render(item, permalink), None
        except (UnknownLayout, TemplateRenderError) as exc:
            logger.warning("Skipping %s: %s", item.source_label, exc.reason)
            return None, ItemFailure.from_error(item.source_label, exc)

    def _generated_pages(
        self,
        renderer: SiteRenderer,
        pages: list[RenderedPage],
        failures: list[ItemFailure],
    ) -> list[RenderedPage]:
        build = self.settings.build
        generated: list[RenderedPage] = []

        def attempt(label: str, produce) -> None:
            try:
                page = produce()
            except (UnknownLayout, TemplateRenderError) as exc:
                logger.warning("Skipping %s: %s", label, exc.reason)
                failures.append(ItemFailure.from_error(label, exc))
                return
            generated.append(page)

        if build.listing:
            attempt(
                build.listing_permalink,
                lambda: build_listing(
                    renderer, pages, build.listing_permalink, build.listing_title
                ),
            )
        if build.tag_pages:
            for permalink, (tag, members) in tag_groups(pages).items():
                attempt(
                    permalink,
                    lambda: build_tag_page(renderer, permalink, tag, members),
                )
        if build.sitemap:
            attempt("/sitemap.xml", lambda: build_sitemap(renderer, pages + generated))
        return generated


def build_site(settings: Settings | None = None) -> BuildReport:
    """Convenience function to build a site with the given settings."""
    return SiteBuilder(settings).build()
