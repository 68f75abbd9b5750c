# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Test discovery components."""

from .directory_scanner import DirectoryScanner
from .path_classifier import PathClassifier, PathKind
from .tag_matcher import TagMatcher
from .test_finder import TestFinder

__all__ = [
    "DirectoryScanner",
    "PathClassifier",
    "PathKind",
    "TagMatcher",
    "TestFinder",
]
