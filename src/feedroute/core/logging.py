"""Logging setup for command-line use.

Library modules only create module loggers; handlers are installed by the
application. The CLI calls ``configure_logging`` once at start-up.

Example:
    >>> from feedroute.core.logging import configure_logging
    >>> configure_logging("WARNING")
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", console: Console | None = None) -> None:
    """Route the ``feedroute`` logger hierarchy through a rich handler.

    Args:
        level: Logging level name or number.
        console: Console to write to (defaults to stderr).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("feedroute")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
