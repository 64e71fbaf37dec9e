"""Logging setup for the finsight command line."""

import logging

from rich.logging import RichHandler


def setup_logging(level: str | int = "WARNING") -> None:
    """Route log records through rich.

    Args:
        level: Root log level name or number.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
