"""CLI entry point for building the site.

Usage:
    python -m src.publisher.main
    python -m src.publisher.main --content content --output _site --base-url https://example.com
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.common.config import DEFAULT_CONFIG_PATH, Settings
from src.common.errors import ConfigurationError, PermalinkCollision
from src.common.logging import set_level, setup_logging

from .pipeline import SiteBuilder

logger = setup_logging(module_name="publisher.main")

EXIT_OK = 0
EXIT_ITEM_FAILURES = 1
EXIT_BUILD_HALTED = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the site")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Settings file (default: config/site.yaml)",
    )
    parser.add_argument("--content", type=Path, help="Content directory")
    parser.add_argument("--layouts", type=Path, help="Site layouts directory")
    parser.add_argument("--output", type=Path, help="Output directory")
    parser.add_argument("--base-url", help="Absolute site URL used in links")
    parser.add_argument("--workers", type=int, help="Render worker threads")
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove the output directory before writing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI flags on top of file and environment settings."""
    if args.content:
        settings.build.content_dir = args.content
    if args.layouts:
        settings.build.layouts_dir = args.layouts
    if args.output:
        settings.build.output_dir = args.output
    if args.base_url:
        settings.site.base_url = args.base_url
    if args.workers is not None:
        settings.build.workers = max(1, args.workers)
    if args.clean:
        settings.build.clean = True
    return settings


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        settings = apply_args(Settings.load(args.config), args)
        report = SiteBuilder(settings).build()
    except PermalinkCollision as exc:
        logger.error("Build halted: %s", exc.message)
        print(f"\nBuild failed: {exc.message}", file=sys.stderr)
        return EXIT_BUILD_HALTED
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc.message)
        print(f"\nBuild failed: {exc.message}", file=sys.stderr)
        return EXIT_BUILD_HALTED

    print(f"\n{report.summary()}")
    return EXIT_OK if report.ok else EXIT_ITEM_FAILURES


if __name__ == "__main__":
    sys.exit(main())
