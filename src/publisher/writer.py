"""Output writer: saves rendered pages under the output directory."""

from __future__ import annotations

import shutil
from pathlib import Path

from src.common.logging import setup_logging
from src.render_resolver.models import RenderedPage

from .models import WrittenPage

logger = setup_logging(module_name="publisher.writer")


class OutputWriter:
    """Writes RenderedPage objects to ``output_dir``.

    Paths come from the page's resolved permalink, so every target is
    known (and collision-checked) before the first write.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def clean(self) -> None:
        """Remove the output directory and everything in it."""
        if self.output_dir.exists():
            shutil.rmtree(self.output_dir)
            logger.info("Cleaned output directory %s", self.output_dir)

    def target_for(self, page: RenderedPage) -> Path:
        return self.output_dir.joinpath(*page.output_path.parts)

    def write(self, page: RenderedPage) -> WrittenPage:
        """Save a page.

        Args:
            page: Rendered page

        Returns:
            WrittenPage with the absolute file path
        """
        output_path = self.target_for(page)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(page.content)

        logger.debug("Wrote %s → %s", page.permalink, output_path)
        return WrittenPage(
            permalink=page.permalink,
            file_path=output_path,
            layout=page.layout,
            generated=page.is_generated,
        )
