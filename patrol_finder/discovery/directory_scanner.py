# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Recursive test file scanning.

The scanner walks a directory tree without following symbolic links,
sorts every entry it saw by path and only then filters down to test
files. Sorting before filtering keeps the output independent of the
order in which the operating system enumerates directory entries.

Exclusions are matched as exact strings against the absolute path of
each entry. Paths are made absolute against the working directory but
are not normalized or symlink-resolved, so an exclusion written in a
different form (relative, containing ``..``, through a symlink) will
not match.
"""

import logging
import os
from pathlib import Path
from typing import AbstractSet

from patrol_finder.core.exceptions import DirectoryNotFoundError

from .path_classifier import PathClassifier, StrPath

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists test files below a scan root in deterministic order."""

    def __init__(self, classifier: PathClassifier | None = None) -> None:
        self.classifier = classifier or PathClassifier()

    def _walk(self, root: Path) -> list[str]:
        """Return every entry below root, directories included.

        Symlinked directories are reported as entries but never descended
        into, which keeps the walk free of cycles.
        """
        entries: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
            for name in dirnames:
                entries.append(os.path.join(dirpath, name))
            for name in filenames:
                entries.append(os.path.join(dirpath, name))
        return entries

    def scan(
        self,
        root: StrPath,
        suffix: str,
        excludes: AbstractSet[str] = frozenset(),
    ) -> list[str]:
        """Recursively find test files below root.

        Args:
            root: Directory to scan. Must exist.
            suffix: Path ending that marks a test file, e.g. ``_test.dart``
            excludes: Absolute paths to leave out of the result

        Returns:
            Sorted list of absolute paths. May be empty.

        Raises:
            DirectoryNotFoundError: If root is not an existing directory
            ValueError: If suffix is empty
            TypeError: If excludes is a single string instead of a set
        """
        if not suffix:
            raise ValueError("test file suffix must not be empty")
        if isinstance(excludes, str):
            raise TypeError("excludes must be a set of paths, not a string")
        if not self.classifier.is_directory(root):
            raise DirectoryNotFoundError(os.fspath(root))

        excluded = set(excludes)
        root_path = Path(root).absolute()

        entries = sorted(self._walk(root_path))
        test_files = [
            entry
            for entry in entries
            if entry.endswith(suffix) and self.classifier.is_file(entry)
        ]
        result = [path for path in test_files if path not in excluded]

        logger.debug(
            f"Scanned {root_path}: {len(entries)} entries, "
            f"{len(test_files)} test files, {len(test_files) - len(result)} excluded"
        )
        return result
