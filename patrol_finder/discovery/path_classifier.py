# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Filesystem classification of target paths."""

import os
from enum import Enum

StrPath = str | os.PathLike[str]


class PathKind(str, Enum):
    """What a path refers to on disk.

    FILE and DIRECTORY follow symbolic links, so a link to a regular file
    is a FILE and a dangling link is MISSING.
    """

    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


class PathClassifier:
    """Answers existence and type questions about paths. Read-only."""

    def classify(self, path: StrPath) -> PathKind:
        if os.path.isfile(path):
            return PathKind.FILE
        if os.path.isdir(path):
            return PathKind.DIRECTORY
        return PathKind.MISSING

    def is_file(self, path: StrPath) -> bool:
        return self.classify(path) is PathKind.FILE

    def is_directory(self, path: StrPath) -> bool:
        return self.classify(path) is PathKind.DIRECTORY

    def exists(self, path: StrPath) -> bool:
        return self.classify(path) is not PathKind.MISSING
