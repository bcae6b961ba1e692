"""Project configuration and paths.

Loads settings from config/site.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "site.yaml"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class SiteSettings(BaseModel):
    """Site-wide values exposed to every layout as ``site``."""
    title: str = "My Site"
    base_url: str = "http://localhost:4000"
    author: str = ""
    description: str = ""


class BuildSettings(BaseModel):
    """Where content is read from and where pages are written."""
    content_dir: Path = PROJECT_ROOT / "content"
    layouts_dir: Path | None = None  # None → packaged layouts only
    output_dir: Path = PROJECT_ROOT / "_site"
    posts_dir: str = "_posts"
    default_layout: str = "default"
    workers: int = Field(default=1, ge=1)
    clean: bool = False

    # Generated pages
    listing: bool = True
    listing_permalink: str = "/blog/"
    listing_title: str = "Posts"
    tag_pages: bool = True
    sitemap: bool = True


class Settings(BaseModel):
    """Top-level application settings."""
    site: SiteSettings = Field(default_factory=SiteSettings)
    build: BuildSettings = Field(default_factory=BuildSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from a YAML file, then apply environment overrides.

        Relative directories in the file are resolved against the file's
        own directory.
        """
        path = path or DEFAULT_CONFIG_PATH
        data: dict = {}
        if path.exists():
            with open(path, encoding="utf-8") as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise ConfigurationError(
                        f"Cannot parse settings file: {exc}",
                        context={"path": str(path)},
                    ) from exc
            if not isinstance(data, dict):
                raise ConfigurationError(
                    "Settings file must contain a mapping",
                    context={"path": str(path)},
                )
            _resolve_dirs(data.get("build"), path.parent)

        try:
            settings = cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid settings: {exc}", context={"path": str(path)}
            ) from exc
        settings.apply_env()
        return settings

    def apply_env(self) -> None:
        """Apply overrides from environment variables."""
        if url := os.getenv("SITE_BASE_URL"):
            self.site.base_url = url
        if title := os.getenv("SITE_TITLE"):
            self.site.title = title
        if output := os.getenv("SITE_OUTPUT_DIR"):
            self.build.output_dir = Path(output)
        if workers := os.getenv("SITE_WORKERS"):
            try:
                self.build.workers = max(1, int(workers))
            except ValueError as exc:
                raise ConfigurationError(
                    f"SITE_WORKERS must be an integer, got {workers!r}"
                ) from exc


def _resolve_dirs(build: dict | None, base: Path) -> None:
    if not isinstance(build, dict):
        return
    for key in ("content_dir", "layouts_dir", "output_dir"):
        value = build.get(key)
        if value and not Path(value).is_absolute():
            build[key] = base / value
