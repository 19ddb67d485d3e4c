# docingest/utils/logger.py
# ============================================================
# Structured Logging Setup
# ============================================================
# Every docingest module logs through a Rich console handler
# attached under the "docingest" namespace. The level comes
# from settings (LOG_LEVEL) and can be changed at runtime, e.g.
# by the CLI's --verbose flag.
#
# Usage:
#   from docingest.utils.logger import get_logger
#   logger = get_logger(__name__)
#   logger.info("Rendering page 1 of 10")
# ============================================================

import logging

from rich.logging import RichHandler

from config.settings import settings

_loggers: dict[str, logging.Logger] = {}


def _parse_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger with a Rich console handler attached.

    Args:
        name: Logger name, typically __name__ from the calling module.

    Example:
        >>> logger = get_logger("docingest.pdf.extractor")
        >>> logger.info("Rasterized 12/12 pages")
        [10:30:45] INFO     docingest.pdf.extractor — Rasterized 12/12 pages
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        level = _parse_level(settings.log_level)
        logger.setLevel(level)

        handler = RichHandler(
            level=level,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
            markup=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s — %(message)s"))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: str) -> None:
    """Change the level of every logger handed out by get_logger()."""
    numeric = _parse_level(level)
    for logger in _loggers.values():
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)
