from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_rich_logging(log_level: str = "info", *, console: Console | None = None) -> None:
    """Route all Python loggers through a single :class:`RichHandler`.

    Args:
        log_level: Logging level (debug, info, warning, error).
        console: Optional Rich console to use (creates new one if not provided).

    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
