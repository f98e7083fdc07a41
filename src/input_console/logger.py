"""
Logging setup for the input console.

Log records go to a file only. Anything written to the terminal would land in
the middle of the prompt line the console keeps redrawing.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "input_console"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set on handlers installed here so handlers added by the host are left alone.
HANDLER_MARKER = "_input_console_handler"


def owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    """Handlers previously installed by setup_logging."""
    return [h for h in logger.handlers if getattr(h, HANDLER_MARKER, False)]


def _handler_target(handler: logging.Handler) -> Optional[str]:
    if isinstance(handler, logging.FileHandler):
        return handler.baseFilename
    return None


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the package logger to write to ``log_file``.

    Repeated calls for the same file update the level but never add a second
    handler; a call for a different file replaces the previous one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    target = os.path.abspath(log_file) if log_file is not None else None
    for existing in owned_handlers(logger):
        if _handler_target(existing) == target:
            return logger
        logger.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, HANDLER_MARKER, True)
    logger.addHandler(handler)
    return logger
