"""
IPPcode23 Program Parser
========================

This module implements the parser that turns normalized IPPcode23 lines
into a Program: the ordered list of validated instructions with classified
operands.

Parsing Steps
-------------
1. **Header**: the first logical line must be exactly ``.IPPcode23``
2. **Opcode**: each following line starts with an opcode, looked up
   case-insensitively in the instruction table
3. **Arity**: the rest of the line is split into the opcode's operand count
4. **Operands**: each field is validated and classified by its declared kind

Parsing is fail-fast: the first violation in source order raises, and no
partial Program is returned.

| Violation                         | Exception           | Exit |
|-----------------------------------|---------------------|------|
| Missing or wrong header           | HeaderError         | 21   |
| Opcode not in the table           | UnknownOpcodeError  | 22   |
| Wrong operand count / empty field | ArityError          | 23   |
| Operand grammar violation         | OperandSyntaxError  | 23   |

Example
-------
>>> from ippcode23.parser.parser import parse_program
>>> program = parse_program(".IPPcode23\\nDEFVAR GF@a\\nWRITE GF@a")
>>> [(i.order, i.opcode) for i in program.instructions]
[(1, 'DEFVAR'), (2, 'WRITE')]
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from ippcode23.config import HEADER, LANGUAGE, EscapeBase
from ippcode23.errors import (
    HeaderError,
    SourceLocation,
    UnknownOpcodeError,
)
from ippcode23.isa import MNEMONICS, get_opcode_spec
from ippcode23.parser.lexer import (
    SourceLine,
    normalize_source,
    split_line,
    split_operands,
)
from ippcode23.parser.operands import Operand, OperandClassifier


logger = logging.getLogger(__name__)


# =============================================================================
# Program Data Classes
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    One validated instruction.

    Attributes:
        order: 1-based position among the non-header lines
        opcode: Opcode mnemonic (uppercase)
        operands: Classified operands in declared order
        location: Where the instruction starts in the source
    """
    order: int
    opcode: str
    operands: tuple[Operand, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True)
class Program:
    """
    A fully validated IPPcode23 program.

    A Program only exists once its header has been validated; it is never
    modified after the parser builds it.
    """
    instructions: tuple[Instruction, ...] = ()
    language: str = LANGUAGE

    @property
    def header_ok(self) -> bool:
        """Always True: the parser raises HeaderError instead of building."""
        return True

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)


# =============================================================================
# Parser Implementation
# =============================================================================

class Parser:
    """
    Parses normalized IPPcode23 lines into a Program.

    Usage:
        lines = normalize_source(source)
        parser = Parser(lines, filename)
        program = parser.parse()
    """

    def __init__(
        self,
        lines: list[SourceLine],
        filename: str = "<input>",
        escape_base: EscapeBase = EscapeBase.DECIMAL,
    ):
        """
        Initialize the parser.

        Args:
            lines: Normalized logical lines (header included)
            filename: Source filename for error reporting
            escape_base: Digit base for string literal escapes
        """
        self._lines = lines
        self._filename = filename
        self._classifier = OperandClassifier(escape_base)

    def parse(self) -> Program:
        """
        Parse all lines into a Program.

        Returns:
            The validated Program

        Raises:
            TranslationError: On the first header, opcode, arity or
                operand violation
        """
        self._parse_header()

        instructions = tuple(
            self._parse_instruction(line, order)
            for order, line in enumerate(self._lines[1:], start=1)
        )

        logger.debug(f"Parsed {len(instructions)} instructions from {self._filename}")
        return Program(instructions)

    # =========================================================================
    # Line Parsing
    # =========================================================================

    def _parse_header(self) -> None:
        """Validate and consume the header line."""
        if not self._lines:
            raise HeaderError(None, location=SourceLocation(self._filename, 1, 1))

        first = self._lines[0]
        if first.text != HEADER:
            raise HeaderError(
                first.text,
                location=first.location(self._filename, first.text),
                source_line=first.raw,
            )

    def _parse_instruction(self, line: SourceLine, order: int) -> Instruction:
        """Parse one non-header line."""
        opcode_token, rest = split_line(line.text)
        location = line.location(self._filename, opcode_token)

        spec = get_opcode_spec(opcode_token)
        if spec is None:
            raise UnknownOpcodeError(
                opcode_token,
                location=location,
                source_line=line.raw,
                similar_opcodes=_find_similar_opcodes(opcode_token),
            )

        fields = split_operands(
            spec,
            rest,
            location=line.location(self._filename, rest) if rest else location,
            source_line=line.raw,
        )

        operands = tuple(
            self._classifier.classify(
                kind,
                token,
                location=line.location(self._filename, token),
                source_line=line.raw,
            )
            for kind, token in zip(spec.operand_kinds, fields)
        )

        return Instruction(order, spec.name, operands, location)


# =============================================================================
# Opcode Suggestions
# =============================================================================

def _find_similar_opcodes(name: str) -> list[str]:
    """
    Find opcodes with similar names for error hints.

    Uses simple edit distance heuristic.
    """
    name_upper = name.upper()
    similar = [
        mnemonic for mnemonic in sorted(MNEMONICS)
        if abs(len(mnemonic) - len(name_upper)) <= 1
        and _edit_distance(name_upper, mnemonic) <= 2
    ]
    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j],
                    distances[j + 1],
                    new_distances[-1]
                )))
        distances = new_distances

    return distances[-1]


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_program(
    source: str,
    filename: str = "<input>",
    escape_base: EscapeBase = EscapeBase.DECIMAL,
) -> Program:
    """
    Convenience function to normalize and parse IPPcode23 source.

    Args:
        source: IPPcode23 source text
        filename: Source filename for error messages
        escape_base: Digit base for string literal escapes

    Returns:
        The validated Program
    """
    lines = normalize_source(source)
    parser = Parser(lines, filename, escape_base=escape_base)
    return parser.parse()
