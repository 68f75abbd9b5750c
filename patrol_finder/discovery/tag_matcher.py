# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Tag matching for Dart integration tests.

Tags are declared with an annotation on the first import directive of a
test file:

    @Tags(['smoke', 'slow'])
    import 'package:patrol/patrol.dart';

Only that one location is inspected: the first top-level node must be an
import, its first annotation must be named ``Tags`` and that annotation's
first argument must be a list literal. Simple string elements of the list
are the declared tags; every other element is ignored.

Matching never fails. A file that cannot be read or whose leading node
cannot be parsed has no tags, so a single malformed file never blocks
discovery of the rest of a tree.

Usage:
    >>> matcher = TagMatcher()
    >>> matcher.matches("integration_test/login_test.dart", ["smoke"])
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from patrol_finder.core.constants import TAG_ANNOTATION_NAME

from .dart_syntax import (
    DartSyntaxError,
    LeadingNode,
    ListLiteral,
    NodeKind,
    StringLiteral,
    parse_leading_node,
)
from .path_classifier import StrPath

logger = logging.getLogger(__name__)


class TagMatcher:
    """Reads declared tags from Dart test files and matches requested tags.

    Attributes:
        annotation_name: Name of the annotation carrying the tag list.
    """

    def __init__(self, annotation_name: str = TAG_ANNOTATION_NAME) -> None:
        self.annotation_name = annotation_name

    def tags_from_node(self, node: LeadingNode | None) -> list[str]:
        """Extract declared tags from an already parsed leading node.

        Args:
            node: Leading node of a compilation unit, or None for empty sources

        Returns:
            Declared tags in declaration order; empty if there is no
            tag declaration of the expected shape.
        """
        if node is None or node.kind is not NodeKind.IMPORT:
            return []
        if not node.annotations:
            return []

        annotation = node.annotations[0]
        if annotation.name != self.annotation_name:
            return []
        if not annotation.arguments:
            return []

        argument = annotation.arguments[0]
        if not isinstance(argument, ListLiteral):
            return []

        return [
            element.value
            for element in argument.elements
            if isinstance(element, StringLiteral) and element.is_simple
        ]

    def extract_tags(self, path: StrPath) -> list[str]:
        """Read the tag declaration of a test file.

        Args:
            path: Path to the Dart test file

        Returns:
            Declared tags, or an empty list if the file declares none, cannot
            be read or cannot be parsed.
        """
        try:
            source = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Skipping tag lookup for {path}: {type(e).__name__}: {e}")
            return []

        try:
            node = parse_leading_node(source)
        except DartSyntaxError as e:
            logger.debug(f"No tag declaration in {path}: {e}")
            return []

        return self.tags_from_node(node)

    def matches(self, path: StrPath, requested_tags: Iterable[str]) -> bool:
        """Determine if a test file declares any of the requested tags.

        Args:
            path: Path to the Dart test file
            requested_tags: Tags to look for. Compared as exact strings.

        Returns:
            True if at least one declared tag is among the requested tags.
        """
        requested = set(requested_tags)
        if not requested:
            return False

        declared = self.extract_tags(path)
        is_match = not requested.isdisjoint(declared)
        logger.debug(f"Tags of {path}: {declared} (match={is_match})")
        return is_match

    def __repr__(self) -> str:
        """Return a string representation of the TagMatcher."""
        return f"TagMatcher(annotation_name={self.annotation_name!r})"
