"""Data models for the publisher module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.common.models import ItemFailure


@dataclass
class WrittenPage:
    """A page saved to the output directory."""
    permalink: str
    file_path: Path
    layout: str
    generated: bool = False


@dataclass
class BuildReport:
    """Outcome of a full build pass."""
    output_dir: Path
    pages: list[WrittenPage] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def permalinks(self) -> list[str]:
        return [page.permalink for page in self.pages]

    def summary(self) -> str:
        """Human-readable summary listing every failing item and its reason."""
        lines = [f"Wrote {self.page_count} pages to {self.output_dir}"]
        if self.failures:
            lines.append(f"{len(self.failures)} items failed:")
            lines.extend(f"  - {failure}" for failure in self.failures)
        return "\n".join(lines)
