# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Daniel Schmidt <danischm@cisco.com>

import logging
from pathlib import Path
from typing import Optional

import errorhandler

import typer
from typing_extensions import Annotated

import patrol_finder
from patrol_finder.core.constants import (
    DEFAULT_TEST_DIRECTORY,
    DEFAULT_TEST_FILE_SUFFIX,
    EXIT_ERROR,
    EXIT_SUCCESS,
)
from patrol_finder.core.exceptions import DiscoveryError
from patrol_finder.discovery.test_finder import TestFinder
from patrol_finder.utils.logging import configure_logging, VerbosityLevel
from patrol_finder.utils.terminal import terminal


app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"patrol-finder, version {patrol_finder.__version__}")
        raise typer.Exit()


Verbosity = Annotated[
    VerbosityLevel,
    typer.Option(
        "-v",
        "--verbosity",
        help="Verbosity level.",
        envvar="PATROL_FINDER_VERBOSITY",
        is_eager=True,
    ),
]


Targets = Annotated[
    Optional[list[str]],
    typer.Argument(
        help="Test files or directories to resolve. Defaults to the test directory.",
        show_default=False,
    ),
]


TestDir = Annotated[
    Path,
    typer.Option(
        "-t",
        "--test-dir",
        dir_okay=True,
        file_okay=False,
        help="Directory scanned when no targets are given.",
        envvar="PATROL_FINDER_TEST_DIR",
    ),
]


Suffix = Annotated[
    str,
    typer.Option(
        "-s",
        "--suffix",
        help="Path ending that marks a test file.",
        envvar="PATROL_FINDER_SUFFIX",
    ),
]


Tags = Annotated[
    list[str],
    typer.Option(
        "--tags",
        help="Selects the tests in the test directory by declared tag.",
        envvar="PATROL_FINDER_TAGS",
    ),
]


Exclude = Annotated[
    list[str],
    typer.Option(
        "-e",
        "--exclude",
        help="Absolute path of a test file to leave out of a full scan.",
        envvar="PATROL_FINDER_EXCLUDE",
    ),
]


Single = Annotated[
    bool,
    typer.Option(
        "--single",
        help="Require the target to resolve to exactly one test file.",
    ),
]


Summary = Annotated[
    bool,
    typer.Option(
        "--summary",
        help="Print the number of discovered tests to stderr.",
        envvar="PATROL_FINDER_SUMMARY",
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


def discover(
    finder: TestFinder,
    targets: list[str],
    suffix: str,
    tags: list[str],
    exclude: list[str],
    single: bool,
) -> tuple[list[str], str]:
    """Run the discovery operation selected by the options.

    Returns:
        Tuple of (test files, description of what was searched)
    """
    if tags:
        if targets:
            raise typer.BadParameter("--tags cannot be combined with targets")
        # Tag lookup always scans with the default suffix, like a full scan
        return finder.find_tests_for_tags(tags), str(finder.test_dir)

    if single:
        if len(targets) != 1:
            raise typer.BadParameter("--single requires exactly one target")
        return [finder.find_test(targets[0], suffix)], targets[0]

    if targets:
        noun = "target" if len(targets) == 1 else "targets"
        return finder.find_tests(targets, suffix), f"{len(targets)} {noun}"

    return (
        finder.find_all_tests(excludes=set(exclude), test_file_suffix=suffix),
        str(finder.test_dir),
    )


@app.command()
def main(
    targets: Targets = None,
    test_dir: TestDir = Path(DEFAULT_TEST_DIRECTORY),
    suffix: Suffix = DEFAULT_TEST_FILE_SUFFIX,
    tags: Tags = [],
    exclude: Exclude = [],
    single: Single = False,
    summary: Summary = False,
    verbosity: Verbosity = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """A CLI tool to discover Patrol integration tests, one absolute path per line."""
    configure_logging(verbosity, error_handler)

    finder = TestFinder(test_dir=test_dir)
    try:
        test_files, source = discover(
            finder, targets or [], suffix, tags, exclude, single
        )
    except DiscoveryError as e:
        logger.debug(f"Discovery failed: {type(e).__name__}")
        typer.echo(terminal.format_discovery_error(str(e)), err=True)
        raise typer.Exit(EXIT_ERROR)

    for test_file in test_files:
        typer.echo(test_file)

    if summary:
        typer.echo(terminal.format_discovery_summary(len(test_files), source), err=True)
    exit()


def exit() -> None:
    if error_handler.fired:
        raise typer.Exit(EXIT_ERROR)
    else:
        raise typer.Exit(EXIT_SUCCESS)
