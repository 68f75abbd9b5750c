# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Unit tests for TagMatcher.

This module tests the TagMatcher class which reads the tag declaration on
the leading import directive of a Dart test file and matches it against
requested tags.

Test Structure:
    - TestBasicMatching: Declared tags intersect requested tags
    - TestDeclarationShape: Only the exact declaration shape counts
    - TestPermissiveParsing: Malformed or unreadable files never raise
    - TestEdgeCases: Empty requests, custom annotation names, repr
"""

import logging
from pathlib import Path

import pytest

from patrol_finder.discovery.dart_syntax import LeadingNode, NodeKind
from patrol_finder.discovery.tag_matcher import TagMatcher

from ...conftest import TAGGED_SMOKE_SLOW, UNTAGGED


def _write(tmp_path: Path, source: str, name: str = "login_test.dart") -> Path:
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return path


class TestBasicMatching:
    """Test matching declared tags against requested tags."""

    def test_matching_tag(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert TagMatcher().matches(path, ["slow"])

    def test_any_requested_tag_matches(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert TagMatcher().matches(path, ["nightly", "smoke"])

    def test_non_matching_tag(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert not TagMatcher().matches(path, ["nightly"])

    def test_matching_is_exact(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert not TagMatcher().matches(path, ["Smoke"])
        assert not TagMatcher().matches(path, ["smok"])

    def test_untagged_file_never_matches(self, tmp_path: Path) -> None:
        path = _write(tmp_path, UNTAGGED)

        assert not TagMatcher().matches(path, ["smoke", "slow", "nightly"])

    def test_extract_tags(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert TagMatcher().extract_tags(path) == ["smoke", "slow"]

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert TagMatcher().matches(str(path), {"smoke"})


class TestDeclarationShape:
    """Test that only the first annotation of a leading import counts."""

    @pytest.mark.parametrize(
        "source",
        [
            # Annotation on a library directive
            "@Tags(['smoke'])\nlibrary;\nimport 'a.dart';",
            # Tags declared further down the file
            "import 'a.dart';\n@Tags(['smoke'])\nimport 'b.dart';",
            # Tags is not the first annotation
            "@Timeout(Duration(seconds: 5))\n@Tags(['smoke'])\nimport 'a.dart';",
            # Prefixed annotation name
            "@test.Tags(['smoke'])\nimport 'a.dart';",
            # Named instead of positional argument
            "@Tags(tags: ['smoke'])\nimport 'a.dart';",
            # Single string instead of a list
            "@Tags('smoke')\nimport 'a.dart';",
            # Annotation without arguments
            "@Tags\nimport 'a.dart';",
            # Empty argument list
            "@Tags()\nimport 'a.dart';",
            # Empty tag list
            "@Tags([])\nimport 'a.dart';",
            # Script tag comes first
            "#!/usr/bin/env dart\n@Tags(['smoke'])\nimport 'a.dart';",
            # Declaration instead of a directive
            "@Tags(['smoke'])\nvoid main() {}",
        ],
    )
    def test_not_a_tag_declaration(self, tmp_path: Path, source: str) -> None:
        path = _write(tmp_path, source)

        assert TagMatcher().extract_tags(path) == []
        assert not TagMatcher().matches(path, ["smoke"])

    def test_leading_comments_are_allowed(self, tmp_path: Path) -> None:
        source = "// Copyright\n/// Login flow\n@Tags(['smoke'])\nimport 'a.dart';"
        path = _write(tmp_path, source)

        assert TagMatcher().matches(path, ["smoke"])

    def test_non_string_elements_are_ignored(self, tmp_path: Path) -> None:
        source = "@Tags(['smoke', 42, kNightly, 'fl$avor', 'slow'])\nimport 'a.dart';"
        path = _write(tmp_path, source)

        assert TagMatcher().extract_tags(path) == ["smoke", "slow"]
        assert not TagMatcher().matches(path, ["kNightly"])

    def test_const_typed_list(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "@Tags(const <String>['smoke'])\nimport 'a.dart';")

        assert TagMatcher().matches(path, ["smoke"])

    def test_double_quoted_tags(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '@Tags(["smoke"])\nimport "a.dart";')

        assert TagMatcher().matches(path, ["smoke"])

    def test_multiline_tag_with_blank_first_line(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "@Tags(['''  \nsmoke'''])\nimport 'a.dart';")

        assert TagMatcher().extract_tags(path) == ["smoke"]

    def test_tags_from_node_without_node(self) -> None:
        assert TagMatcher().tags_from_node(None) == []

    def test_tags_from_node_without_annotations(self) -> None:
        assert TagMatcher().tags_from_node(LeadingNode(NodeKind.IMPORT)) == []


class TestPermissiveParsing:
    """Test that problems inside a file resolve to 'no match'."""

    @pytest.mark.parametrize(
        "source",
        [
            "@Tags(['smoke'",
            "@Tags(['smoke'])",
            "@(['smoke'])\nimport 'a.dart';",
            "@Tags(foo(]))\nimport 'a.dart';",
        ],
    )
    def test_malformed_declaration(self, tmp_path: Path, source: str) -> None:
        path = _write(tmp_path, source)

        assert not TagMatcher().matches(path, ["smoke"])

    def test_deeply_nested_list(self, tmp_path: Path) -> None:
        source = "@Tags([" + "[" * 3000 + "]" * 3000 + "])\nimport 'a.dart';"
        path = _write(tmp_path, source)

        assert TagMatcher().extract_tags(path) == []
        assert not TagMatcher().matches(path, ["smoke"])

    def test_deeply_nested_interpolation(self, tmp_path: Path) -> None:
        source = "@Tags(['" + "${'" * 3000 + "'}" * 3000 + "'])\nimport 'a.dart';"
        path = _write(tmp_path, source)

        assert not TagMatcher().matches(path, ["smoke"])

    def test_errors_in_body_do_not_matter(self, tmp_path: Path) -> None:
        source = TAGGED_SMOKE_SLOW + "\nvoid broken( {{{ 'unterminated\n"
        path = _write(tmp_path, source)

        assert TagMatcher().matches(path, ["smoke"])

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "")

        assert not TagMatcher().matches(path, ["smoke"])

    def test_binary_file(self, tmp_path: Path) -> None:
        path = tmp_path / "binary_test.dart"
        path.write_bytes(b"\xff\xfe\x00\x81garbage\x00")

        assert not TagMatcher().matches(path, ["smoke"])

    def test_missing_file_logs_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        missing = tmp_path / "gone_test.dart"

        with caplog.at_level(logging.WARNING):
            assert not TagMatcher().matches(missing, ["smoke"])

        assert "gone_test.dart" in caplog.text

    def test_directory_instead_of_file(self, tmp_path: Path) -> None:
        assert TagMatcher().extract_tags(tmp_path) == []


class TestEdgeCases:
    """Test edge cases."""

    def test_empty_request_never_matches(self, tmp_path: Path) -> None:
        path = _write(tmp_path, TAGGED_SMOKE_SLOW)

        assert not TagMatcher().matches(path, [])

    def test_empty_request_does_not_read_file(self, tmp_path: Path) -> None:
        assert not TagMatcher().matches(tmp_path / "missing_test.dart", [])

    def test_custom_annotation_name(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "@Labels(['smoke'])\nimport 'a.dart';")

        assert TagMatcher(annotation_name="Labels").matches(path, ["smoke"])
        assert not TagMatcher().matches(path, ["smoke"])

    def test_repr(self) -> None:
        assert repr(TagMatcher()) == "TagMatcher(annotation_name='Tags')"
