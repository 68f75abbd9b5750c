# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules.

Most tests build a small Dart project on disk with ``make_tree`` and run
discovery against it, so no fixture files are checked in.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeFactory = Callable[[dict[str, str]], Path]

# Typical Patrol test files
TAGGED_SMOKE_SLOW = """\
@Tags(['smoke', 'slow'])
import 'package:patrol/patrol.dart';

void main() {
  patrolTest('logs in', ($) async {});
}
"""

UNTAGGED = """\
import 'package:patrol/patrol.dart';

void main() {
  patrolTest('opens settings', ($) async {});
}
"""

HELPER = """\
import 'package:flutter_test/flutter_test.dart';

Future<void> pumpApp() async {}
"""


@pytest.fixture()
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory writing ``{relative path: content}`` below tmp_path.

    The factory returns the tree root. Calling it repeatedly adds files to
    the same root.
    """

    def _make(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture()
def example_tree(make_tree: TreeFactory) -> Path:
    """Tree with two test directories and a non-test helper file."""
    return make_tree(
        {
            "a/x_test.dart": TAGGED_SMOKE_SLOW,
            "a/y_test.dart": UNTAGGED,
            "a/helper.dart": HELPER,
            "b/z_test.dart": UNTAGGED,
        }
    )
