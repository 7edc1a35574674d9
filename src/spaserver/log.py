"""
=============================================================================
LOGGING SETUP
=============================================================================

Every module logs through a namespaced logger:

    logger = logging.getLogger(__name__)     # e.g. "spaserver.server"

This module attaches handlers to the "spaserver" parent logger so that all
of them share one line format:

    2026-01-15 12:30:45 > [spaserver]: HTTP GET /index.html

Lines go to stdout and, when LOG_TO_FILE is enabled, are also appended to
LOG_FILE_PATH.

=============================================================================
"""

import logging
import sys

from .config import ServerConfig


LOGGER_NAME = "spaserver"
LOG_FORMAT = "%(asctime)s > [spaserver]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so repeated setup replaces them
_HANDLER_FLAG = "_spaserver_handler"


def setup_logging(config: ServerConfig) -> logging.Logger:
    """
    Configure the "spaserver" logger from the server configuration.

    Calling this more than once (tests, embedding) replaces the handlers
    installed by the previous call instead of stacking duplicates.

    Args:
        config: Server configuration (log_level, log_to_file, log_file_path).

    Returns:
        The configured "spaserver" logger.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _HANDLER_FLAG, True)
    logger.addHandler(console_handler)

    # ─────────────────────────────────────────────────────────────────────
    # OPTIONAL FILE MIRROR
    # ─────────────────────────────────────────────────────────────────────
    if config.log_to_file:
        file_handler = logging.FileHandler(config.log_file_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_FLAG, True)
        logger.addHandler(file_handler)

    return logger
