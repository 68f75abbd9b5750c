# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core constants shared across patrol-finder."""

# Discovery defaults
DEFAULT_TEST_FILE_SUFFIX = "_test.dart"
DEFAULT_TEST_DIRECTORY = "integration_test"

# Annotation carrying the tag list, e.g. @Tags(['smoke'])
TAG_ANNOTATION_NAME = "Tags"

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INVALID_ARGS = 2
