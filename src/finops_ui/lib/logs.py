"""
Logging helpers for the finops UI.

Every module grabs its logger with ``LOG = logs.logger(__file__)``. The level is
read once from ``LOG_LEVEL`` and a single stream handler is attached per logger.
"""

import logging
import os
from pathlib import Path

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_PACKAGE = "finops_ui"


def logger(name: str) -> logging.Logger:
    """
    Return a configured logger.

    File paths (``__file__``) are turned into dotted module names rooted at the
    package, so ``.../finops_ui/store/actions.py`` logs as ``finops_ui.store.actions``.

    Args:
        name: Logger name or a module's ``__file__``.

    Returns:
        Logger with a stream handler and the configured level.
    """
    if "/" in name or "\\" in name:
        name = _module_name(Path(name))

    log = logging.getLogger(name)
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)
        log.propagate = False
    return log


def _module_name(path: Path) -> str:
    parts = list(path.with_suffix("").parts)
    if _PACKAGE in parts:
        parts = parts[parts.index(_PACKAGE) :]
    else:
        parts = parts[-1:]
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)
