"""
IPPcode23 Error Hierarchy
=========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from IPPError, allowing callers to catch every
package-related error with a single except clause if desired.

Exception Hierarchy
-------------------
IPPError (base)
├── ConfigError - invalid configuration value
└── TranslationError (source-related, carries an exit code)
    ├── HeaderError - missing or incorrect .IPPcode23 header (21)
    ├── UnknownOpcodeError - opcode not in the instruction table (22)
    ├── ArityError - wrong number of operands or empty operand (23)
    └── OperandSyntaxError - operand violates its grammar (23)

Design Philosophy
-----------------
The translation core never terminates the process. Each exception knows
the process exit status it stands for (``exit_code``); only the
command-line tool turns that into ``sys.exit``.

Each exception captures source location information (filename, line,
column) when applicable. Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Exit Statuses
# =============================================================================

EXIT_BAD_HEADER = 21
EXIT_BAD_OPCODE = 22
EXIT_LEXICAL_OR_SYNTAX = 23


# =============================================================================
# Base Exception Class
# =============================================================================

class IPPError(Exception):
    """
    Base exception for all IPPcode23 errors.

        try:
            translate(source)
        except IPPError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigError(IPPError):
    """Invalid configuration value (bad escape base, bad environment value)."""
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Physical line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Translation Exceptions
# =============================================================================

class TranslationError(IPPError):
    """
    Base exception for all source translation errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The original source text at the error location (optional)
        exit_code: Process exit status the command-line tool reports
    """

    exit_code: int = EXIT_LEXICAL_OR_SYNTAX

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.src:3:1: error: unknown opcode 'MOOVE'
                MOOVE GF@a int@1
                ^
            hint: did you mean 'MOVE'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class HeaderError(TranslationError):
    """
    Missing or incorrect header line.

    The first non-blank, non-comment line of every program must be
    exactly ``.IPPcode23`` (case-sensitive).
    """

    exit_code = EXIT_BAD_HEADER

    def __init__(
        self,
        found: Optional[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found

        if found is None:
            message = "missing header '.IPPcode23' (program is empty)"
        else:
            message = f"wrong header '{found}', expected '.IPPcode23'"

        hint = None
        if found is not None and found.lower() == ".ippcode23":
            hint = "the header is case-sensitive"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnknownOpcodeError(TranslationError):
    """
    Opcode not present in the instruction table.

    The lookup is case-insensitive, so this is raised only for mnemonics
    that match no opcode in any letter case. Similarly-named opcodes are
    suggested to help catch typos.
    """

    exit_code = EXIT_BAD_OPCODE

    def __init__(
        self,
        opcode: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_opcodes: Optional[list[str]] = None,
    ):
        self.opcode = opcode
        self.similar_opcodes = similar_opcodes or []

        hint = None
        if self.similar_opcodes:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_opcodes[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown opcode '{opcode}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class ArityError(TranslationError):
    """
    Wrong number of operands for an opcode.

    Raised when a line carries fewer or more space-separated operands
    than the opcode declares, or when one of the operands is empty.
    """

    def __init__(
        self,
        opcode: str,
        expected: int,
        found: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        signature: Optional[str] = None,
    ):
        self.opcode = opcode
        self.expected = expected
        self.found = found

        noun = "operand" if expected == 1 else "operands"
        hint = f"usage: {signature}" if signature else None

        super().__init__(
            f"'{opcode}' takes {expected} {noun}, got {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandSyntaxError(TranslationError):
    """
    Operand violates the grammar of its declared kind.

    Covers every operand-level rejection: bad identifier, bad frame tag,
    malformed int/bool/nil literal, unknown symbol prefix, unknown type
    name.

    Examples:
        DEFVAR XF@a        ; Error: invalid frame 'XF'
        WRITE int@12a      ; Error: invalid int literal '12a'
        LABEL 1loop        ; Error: invalid identifier '1loop'
    """

    def __init__(
        self,
        message: str,
        token: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )
