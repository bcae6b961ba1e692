"""Logging configuration for the site publisher.

Every module logs under the ``site`` logger namespace, so one handler and
one level switch cover the whole build.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "site"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _root_logger(level: int) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    return root


def setup_logging(
    level: int = logging.INFO,
    module_name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """Return a logger under the ``site`` namespace.

    The stdout handler is attached to the namespace root the first time
    any module asks for a logger.

    Args:
        level: Initial level for the namespace root (default INFO).
        module_name: Dotted name below ``site`` (e.g. "publisher.pipeline").

    Returns:
        Configured logger.
    """
    root = _root_logger(level)
    if module_name == ROOT_LOGGER_NAME:
        return root
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


def set_level(level: int) -> None:
    """Change the level of every ``site`` logger at once."""
    _root_logger(level).setLevel(level)
