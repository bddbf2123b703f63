"""
ippparse - IPPcode23 Parser Command-Line Interface
==================================================

This module implements the command-line interface of the IPPcode23 to XML
translator.

Usage Examples
--------------
Read standard input, write standard output:
    $ ippparse < prog.src > prog.xml

With input and output files:
    $ ippparse prog.src -o prog.xml

Legacy octal string escapes:
    $ ippparse --escape-base octal prog.src

Show the instruction table:
    $ ippparse --list-opcodes

Exit Codes
----------
0 success, 10 bad parameters, 11 input error, 12 output error,
21 bad header, 22 unknown opcode, 23 operand count or syntax error,
99 internal error.
"""

from pathlib import Path
from typing import Optional
import logging

import click

from ippcode23 import __version__
from ippcode23.cli.errors import (
    InputFileError,
    IPPCommand,
    OutputFileError,
    handle_cli_exception,
)
from ippcode23.config import EscapeBase, TranslatorConfig
from ippcode23.isa import OPCODE_TABLE, OPCODES_BY_CATEGORY
from ippcode23.parser import Translator, decode_source


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _read_source(input_file: Path) -> tuple[str, str]:
    """Read the source text; returns (text, display name)."""
    if str(input_file) == "-":
        data = click.get_binary_stream("stdin").read()
        return decode_source(data), "<stdin>"

    try:
        data = input_file.read_bytes()
    except OSError as e:
        raise InputFileError(f"cannot read '{input_file}': {e.strerror or e}") from e
    return decode_source(data), str(input_file)


def _write_output(xml_text: str, output: Optional[Path]) -> None:
    if output is None:
        click.echo(xml_text)
        return

    try:
        output.write_text(xml_text + "\n", encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise OutputFileError(f"cannot write '{output}': {e.strerror or e}") from e


def _echo_opcode_table() -> None:
    for category, names in OPCODES_BY_CATEGORY.items():
        click.echo(f"{category}:")
        for name in names:
            click.echo(f"  {OPCODE_TABLE[name].signature}")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=IPPCommand)
@click.argument(
    "input_file",
    required=False,
    default="-",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output XML file (default: standard output)",
)
@click.option(
    "--escape-base",
    type=click.Choice([base.value for base in EscapeBase], case_sensitive=False),
    default=None,
    help="Digit base of string escapes. Default: decimal (\\032 for space); "
         "octal reproduces legacy output (\\040). "
         "Overrides IPPCODE23_ESCAPE_BASE.",
)
@click.option(
    "--compact",
    is_flag=True,
    help="Do not pretty-print the XML",
)
@click.option(
    "--list-opcodes",
    is_flag=True,
    help="Print the instruction table and exit",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ippparse")
def main(
    input_file: Path,
    output: Optional[Path],
    escape_base: Optional[str],
    compact: bool,
    list_opcodes: bool,
    verbose: bool,
) -> None:
    """
    Translate IPPcode23 source code to XML.

    INPUT_FILE is the IPPcode23 source to translate; omit it or pass "-"
    to read standard input.

    \b
    Examples:
        ippparse prog.src              # XML on standard output
        ippparse prog.src -o prog.xml  # Specify output file
        ippparse < prog.src            # Read standard input
    """
    if list_opcodes:
        _echo_opcode_table()
        return

    setup_logging(verbose)

    try:
        config = TranslatorConfig.from_env()
        if escape_base is not None:
            config.escape_base = EscapeBase.parse(escape_base)
        if compact:
            config.indent = ""

        source, name = _read_source(input_file)

        if verbose:
            click.echo(f"Translating {name}...", err=True)
            click.echo(f"String escapes: {config.escape_base.value}", err=True)

        translator = Translator(config)
        xml_text = translator.translate_string(source, name)

        _write_output(xml_text, output)

        if verbose:
            count = translator.instruction_count()
            target = output if output is not None else "<stdout>"
            click.echo(f"Wrote {count} instructions to {target}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
