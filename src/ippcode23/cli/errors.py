"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the command-line
tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from ippcode23.errors import (
    EXIT_BAD_HEADER,
    EXIT_BAD_OPCODE,
    EXIT_LEXICAL_OR_SYNTAX,
    ConfigError,
    TranslationError,
)


class ExitCode(IntEnum):
    """Exit codes of the IPPcode23 tools."""
    SUCCESS = 0
    INVALID_ARGS = 10     # Missing or forbidden parameter combination
    INPUT_ERROR = 11      # Input file cannot be opened or read
    OUTPUT_ERROR = 12     # Output file cannot be opened or written
    BAD_HEADER = EXIT_BAD_HEADER
    BAD_OPCODE = EXIT_BAD_OPCODE
    LEXICAL_OR_SYNTAX = EXIT_LEXICAL_OR_SYNTAX
    INTERNAL_ERROR = 99   # Unexpected internal error


class InputFileError(click.ClickException):
    """Input file cannot be opened or read."""
    exit_code = ExitCode.INPUT_ERROR


class OutputFileError(click.ClickException):
    """Output file cannot be opened or written."""
    exit_code = ExitCode.OUTPUT_ERROR


class IPPCommand(click.Command):
    """Click command whose usage errors exit with ExitCode.INVALID_ARGS."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = ExitCode.INVALID_ARGS
            raise


def _printable(text: str) -> str:
    """Replace undecodable source bytes (surrogate escapes) with \\x.. text."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, TranslationError):
        # Translation errors already carry location and "error:" prefix
        click.echo(_printable(str(error)), err=True)
        sys.exit(error.exit_code)

    elif isinstance(error, (InputFileError, OutputFileError)):
        click.echo(f"Error: {error.format_message()}", err=True)
        sys.exit(error.exit_code)

    elif isinstance(error, (ConfigError, click.BadParameter)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
