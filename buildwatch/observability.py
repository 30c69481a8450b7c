"""Logging setup for the buildwatch command line.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are installed here, by the CLI, and nowhere else.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO") -> logging.Handler:
    """Route buildwatch log records to stderr through a ``RichHandler``.

    Build output goes to stdout, so diagnostics are kept on stderr where
    they cannot interleave with the per-unit log streams.  Calling this
    again replaces the previously installed handler.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name("buildwatch")

    package_logger = logging.getLogger("buildwatch")
    for existing in list(package_logger.handlers):
        if existing.get_name() == "buildwatch":
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)
    return handler
