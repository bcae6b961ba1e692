"""Shared test fixtures for the site publisher."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import BuildSettings, Settings, SiteSettings
from src.render_resolver import load_templates


def _write(root: Path, files: dict[str, str]) -> Path:
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def write_files():
    """Write a {relative path: text} mapping below a root directory."""
    return _write


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """A small content tree: two pages and two posts."""
    return _write(tmp_path / "content", {
        "about.md": (
            "---\nlayout: page\ntitle: About\npermalink: /about/\n---\n"
            "Hello, I write about data tooling.\n"
        ),
        "notes.md": "---\nlayout: page\ntitle: Notes\n---\nSnippets.\n",
        "_posts/2023-03-14-b.md": (
            "---\nlayout: post\ntitle: B\ndate: 2023-03-14\ntags: [aws, slack]\n---\n"
            "Slack alerts from AWS Lambda.\n"
        ),
        "_posts/2023-01-14-a.md": (
            "---\nlayout: post\ntitle: A\ndate: 2023-01-14\ntags: [pandas]\n---\n"
            "Custom accessors.\n"
        ),
    })


@pytest.fixture
def site_settings() -> SiteSettings:
    return SiteSettings(title="Test Site", base_url="https://example.com")


@pytest.fixture
def settings(tmp_path, content_dir, site_settings) -> Settings:
    """Settings pointing at the temporary content tree."""
    return Settings(
        site=site_settings,
        build=BuildSettings(
            content_dir=content_dir,
            output_dir=tmp_path / "_site",
        ),
    )


@pytest.fixture
def templates():
    """Packaged layouts only."""
    return load_templates()
