# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt
import pytest
from click.testing import Result
from typer.testing import CliRunner

from patrol_finder.cli.main import app, error_handler

runner = CliRunner()


def run_cli(args: list[str], env: dict[str, str] | None = None) -> Result:
    """Run the CLI with the given arguments."""
    return runner.invoke(app, args, env=env)


@pytest.fixture(autouse=True)
def reset_error_handler() -> None:
    """Start every CLI test with a clean error handler."""
    error_handler.reset()
