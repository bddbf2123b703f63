"""
IPPcode23 Source Normalizer and Line Splitter
=============================================

This module turns raw IPPcode23 source text into the logical lines the
parser consumes, and splits each logical line into an opcode token and
its operand fields.

Normalization
-------------
The normalizer applies these rules to every physical line:

1. Everything from ``#`` to the end of the line is a comment and removed
2. Runs of horizontal whitespace collapse to a single space
3. Leading and trailing horizontal whitespace is removed
4. Lines left empty are dropped

Line breaks ``\\r\\n``, ``\\n``, ``\\r``, ``\\v``, ``\\f``, ``\\x85``,
``\\u2028`` and ``\\u2029`` are all accepted. Each surviving line remembers
its physical line number and original text for error reporting.

Line Splitting
--------------
A logical line is ``OPCODE`` or ``OPCODE rest``. The operand part is split
on single spaces into exactly as many fields as the opcode declares:

| Line                  | Arity | Fields                        |
|-----------------------|-------|-------------------------------|
| ``CREATEFRAME``       | 0     | ()                            |
| ``WRITE GF@a``        | 1     | ("GF@a",)                     |
| ``ADD GF@a int@1 GF@b``| 3    | ("GF@a", "int@1", "GF@b")     |

Example
-------
>>> from ippcode23.parser.lexer import normalize_source
>>> for line in normalize_source(".IPPcode23  # header\\n\\n  WRITE   int@1"):
...     print(line)
SourceLine(1, '.IPPcode23')
SourceLine(3, 'WRITE int@1')
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import logging
import re

from ippcode23.errors import ArityError, SourceLocation
from ippcode23.isa import OpcodeSpec


logger = logging.getLogger(__name__)


# =============================================================================
# Character Classes
# =============================================================================

COMMENT_CHAR = "#"

# Horizontal whitespace (same set as the PCRE \h class)
HORIZONTAL_WHITESPACE = (
    "\t \xa0\u1680\u180e\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u202f\u205f\u3000"
)

_LINE_BREAK_RE = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")
_HSPACE_RUN_RE = re.compile(f"[{re.escape(HORIZONTAL_WHITESPACE)}]+")


# =============================================================================
# Source Line Data Class
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    One logical line of normalized source.

    Attributes:
        text: Normalized line text (no comment, single spaces, no padding)
        line: Physical line number in the original source (1-indexed)
        raw: The original physical line, untouched
    """
    text: str
    line: int
    raw: str = ""

    def __repr__(self) -> str:
        return f"SourceLine({self.line}, {self.text!r})"

    def column_of(self, token: str) -> int:
        """
        Column (1-indexed) where ``token`` starts in the original line.

        Falls back to the first non-blank column when the token cannot be
        found verbatim (e.g. it spanned collapsed whitespace).
        """
        if token:
            index = self.raw.find(token)
            if index >= 0:
                return index + 1
        stripped = self.raw.lstrip(HORIZONTAL_WHITESPACE)
        return len(self.raw) - len(stripped) + 1

    def location(self, filename: str, token: str = "") -> SourceLocation:
        """Return a SourceLocation pointing at ``token`` on this line."""
        return SourceLocation(filename, self.line, self.column_of(token))


# =============================================================================
# Normalizer
# =============================================================================

def normalize_text(line: str) -> str:
    """
    Normalize a single physical line.

    Removes the comment, collapses horizontal whitespace runs to one space
    and trims the ends. Returns an empty string for lines with no content.
    """
    line = line.split(COMMENT_CHAR, 1)[0]
    line = _HSPACE_RUN_RE.sub(" ", line)
    return line.strip(" ")


class Normalizer:
    """
    Splits IPPcode23 source into normalized logical lines.

    The normalizer never fails: source with no content simply produces no
    lines, which the parser then reports as a missing header.

    Usage:
        normalizer = Normalizer(source_text)
        lines = list(normalizer.lines())
    """

    def __init__(self, source: str):
        self.source = source

    def lines(self) -> Iterator[SourceLine]:
        """
        Generate the non-empty logical lines in source order.

        Yields:
            SourceLine objects with normalized text
        """
        physical = _LINE_BREAK_RE.split(self.source)

        for number, raw in enumerate(physical, start=1):
            text = normalize_text(raw)
            if text:
                yield SourceLine(text, number, raw)


def normalize_source(source: str) -> list[SourceLine]:
    """
    Convenience function to normalize a whole source text.

    Args:
        source: Raw IPPcode23 source text

    Returns:
        List of non-empty SourceLine objects
    """
    lines = list(Normalizer(source).lines())
    logger.debug(f"Normalized source into {len(lines)} logical lines")
    return lines


def normalize_lines(lines: Iterable[str]) -> list[str]:
    """
    Normalize a sequence of line texts, dropping the empty ones.

    Applying this to its own output returns the same list.
    """
    result = []
    for line in lines:
        for part in _LINE_BREAK_RE.split(line):
            text = normalize_text(part)
            if text:
                result.append(text)
    return result


# =============================================================================
# Line Splitting
# =============================================================================

def split_line(text: str) -> tuple[str, str]:
    """
    Split a logical line at its first space.

    Args:
        text: Normalized line text

    Returns:
        Tuple of (opcode_token, rest); rest is "" when the line has no space
    """
    opcode, _, rest = text.partition(" ")
    return opcode, rest


def split_operands(
    spec: OpcodeSpec,
    rest: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> tuple[str, ...]:
    """
    Split the operand part of a line into exactly ``spec.arity`` fields.

    Splitting stops after ``arity - 1`` spaces, so any extra space ends up
    in the last field; a last field containing a space therefore means the
    line carries too many operands.

    Args:
        spec: Signature of the line's opcode
        rest: Operand part of the line (after the opcode and its space)
        location: Source location for errors
        source_line: Original source line for errors

    Returns:
        Tuple of operand fields

    Raises:
        ArityError: If the field count is wrong or a field is empty
    """
    arity = spec.arity

    if arity == 0:
        if rest:
            raise _arity_error(spec, rest, location, source_line)
        return ()

    fields = rest.split(" ", arity - 1)

    if (
        len(fields) != arity
        or any(not field for field in fields)
        or " " in fields[-1]
    ):
        raise _arity_error(spec, rest, location, source_line)

    return tuple(fields)


def _arity_error(
    spec: OpcodeSpec,
    rest: str,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> ArityError:
    found = len([field for field in rest.split(" ") if field])
    return ArityError(
        spec.name,
        expected=spec.arity,
        found=found,
        location=location,
        source_line=source_line,
        signature=spec.signature,
    )
