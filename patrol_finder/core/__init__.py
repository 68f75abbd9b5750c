# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core components shared across patrol-finder."""

from patrol_finder.core.constants import (
    DEFAULT_TEST_DIRECTORY,
    DEFAULT_TEST_FILE_SUFFIX,
    # Exit codes
    EXIT_ERROR,
    EXIT_INVALID_ARGS,
    EXIT_SUCCESS,
    TAG_ANNOTATION_NAME,
)
from patrol_finder.core.exceptions import (
    AmbiguousTargetError,
    DirectoryNotFoundError,
    DiscoveryError,
    EmptyDirectoryTargetError,
    InvalidTargetError,
    NoMatchError,
    TargetNotFoundError,
)

__all__ = [
    # Constants
    "DEFAULT_TEST_DIRECTORY",
    "DEFAULT_TEST_FILE_SUFFIX",
    "TAG_ANNOTATION_NAME",
    "EXIT_SUCCESS",
    "EXIT_ERROR",
    "EXIT_INVALID_ARGS",
    # Errors
    "DiscoveryError",
    "InvalidTargetError",
    "TargetNotFoundError",
    "EmptyDirectoryTargetError",
    "DirectoryNotFoundError",
    "AmbiguousTargetError",
    "NoMatchError",
]
