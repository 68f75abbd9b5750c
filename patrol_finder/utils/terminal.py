"""Centralized terminal formatting utilities for patrol-finder."""

from colorama import Fore, Style, init
import os
import re

# autoreset=True means colors reset after each print
init(autoreset=True)


class TerminalColors:
    """Centralized color scheme for consistent terminal output.

    Colors are only ever applied to messages written to stderr; the list
    of discovered test files on stdout is always plain text.
    """

    # Semantic color mapping for different message types
    ERROR = Fore.RED
    WARNING = Fore.YELLOW
    SUCCESS = Fore.GREEN
    RESET = Style.RESET_ALL

    BOLD = Style.BRIGHT

    # Check if colors should be disabled (for CI/CD environments)
    NO_COLOR = os.environ.get("NO_COLOR") is not None

    # Regex pattern to match ANSI escape sequences
    ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    @classmethod
    def strip_ansi(cls, text: str) -> str:
        """Remove all ANSI escape sequences from text.

        Args:
            text: Text potentially containing ANSI color codes

        Returns:
            Clean text without any ANSI escape sequences
        """
        return cls.ANSI_ESCAPE_PATTERN.sub("", text)

    @classmethod
    def error(cls, text: str) -> str:
        """Format error text in red."""
        if cls.NO_COLOR:
            return text
        return f"{cls.ERROR}{text}{cls.RESET}"

    @classmethod
    def warning(cls, text: str) -> str:
        """Format warning text in yellow."""
        if cls.NO_COLOR:
            return text
        return f"{cls.WARNING}{text}{cls.RESET}"

    @classmethod
    def success(cls, text: str) -> str:
        """Format success text in green."""
        if cls.NO_COLOR:
            return text
        return f"{cls.SUCCESS}{text}{cls.RESET}"

    @classmethod
    def bold(cls, text: str) -> str:
        """Format text in bold."""
        if cls.NO_COLOR:
            return text
        return f"{cls.BOLD}{text}{cls.RESET}"

    @classmethod
    def format_discovery_error(cls, message: str) -> str:
        """Format a discovery failure for display.

        Args:
            message: Human-readable error naming the offending target

        Returns:
            "Error: <message>" with the label in bold red
        """
        return f"{cls.bold(cls.error('Error:'))} {message}"

    @classmethod
    def format_discovery_summary(cls, count: int, source: str) -> str:
        """Format the number of discovered tests.

        The count is green when tests were found and yellow when none were.

        Args:
            count: Number of discovered test files
            source: What was searched, e.g. a directory or "3 targets"

        Returns:
            Summary line such as "Found 4 tests in integration_test."
        """
        noun = "test" if count == 1 else "tests"
        colored = cls.success(str(count)) if count else cls.warning(str(count))
        return f"Found {colored} {noun} in {source}."


# Single instance for use across the codebase
terminal = TerminalColors()
