# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging setup for the command line."""

import logging
import sys
from enum import Enum

import errorhandler

_HANDLER_NAME = "patrol_finder"


class VerbosityLevel(str, Enum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


_LEVELS = {
    VerbosityLevel.CRITICAL: logging.CRITICAL,
    VerbosityLevel.ERROR: logging.ERROR,
    VerbosityLevel.WARNING: logging.WARNING,
    VerbosityLevel.INFO: logging.INFO,
    VerbosityLevel.DEBUG: logging.DEBUG,
}


def configure_logging(
    level: VerbosityLevel | str, error_handler: errorhandler.ErrorHandler
) -> None:
    """Route log records to stderr at the requested level.

    Discovered test paths are written to stdout, so log output goes to
    stderr to keep that stream machine-readable. Calling this again
    replaces the handler installed by the previous call. The error handler
    is reset so that only errors logged after this call count as fired.

    Args:
        level: Verbosity level name, e.g. "DEBUG"
        error_handler: Handler tracking whether an error was logged
    """
    log_level = _LEVELS[VerbosityLevel(level)]

    logger = logging.getLogger()
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(log_level)
    error_handler.reset()
