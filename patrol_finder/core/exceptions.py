# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Errors raised while resolving test targets.

All of these are terminal, user-facing conditions: they describe a problem
with the targets or the directory tree, not a transient failure, so callers
report them and stop rather than retry.
"""

from collections.abc import Sequence


class DiscoveryError(Exception):
    """Base class for all test discovery failures."""


class InvalidTargetError(DiscoveryError):
    """Target is neither a test file path nor an existing directory."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"target {target} is invalid")


class TargetNotFoundError(DiscoveryError):
    """Target looks like a test file (by suffix) but does not exist."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"target file {target} does not exist")


class EmptyDirectoryTargetError(DiscoveryError):
    """Explicitly named directory target contains no test files."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"target directory {target} does not contain any tests")


class DirectoryNotFoundError(DiscoveryError):
    """Scan root does not exist or is not a directory."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        super().__init__(f"Directory {directory} doesn't exist")


class AmbiguousTargetError(DiscoveryError):
    """Single-target resolution matched more than one test file.

    Attributes:
        target: The target that was resolved
        matches: Every test file the target resolved to
    """

    def __init__(self, target: str, matches: Sequence[str]) -> None:
        self.target = target
        self.matches = list(matches)
        super().__init__(
            f"target {target} is ambiguous, "
            f"it matches multiple test targets: {', '.join(self.matches)}"
        )


class NoMatchError(DiscoveryError):
    """Single-target resolution matched no test file at all."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(
            f"target {target} was expected to match exactly one test, found none"
        )
