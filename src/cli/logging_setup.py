"""Logging configuration for the CLI.

Library modules only use named loggers under `userdeck`; handlers are
installed here, once, so Rich output stays on stderr and never mixes
with rendered tables on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("userdeck")
    if verbose:
        level = logging.DEBUG
    logger.setLevel(level if isinstance(level, int) else level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
