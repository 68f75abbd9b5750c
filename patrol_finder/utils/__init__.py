# -*- coding: utf-8 -*-

"""Utility modules for patrol-finder."""

from patrol_finder.utils.logging import VerbosityLevel, configure_logging
from patrol_finder.utils.terminal import terminal

__all__ = [
    "terminal",
    "VerbosityLevel",
    "configure_logging",
]
