"""Logging setup for catalog-admin.

Modules obtain loggers with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to install a rich console handler.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_CONFIGURED = False


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root ``catalog_admin`` logger.

    Args:
        level: Log level name or number. Repeated calls only update the level.
    """
    global _CONFIGURED
    root = logging.getLogger("catalog_admin")
    root.setLevel(level if isinstance(level, int) else level.upper())
    if _CONFIGURED:
        return
    handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the catalog_admin namespace."""
    return logging.getLogger(name)
