"""
IPPcode23 Operand Classification
================================

This module validates each operand field against the grammar of its
declared kind and turns it into a typed operand value.

Operand Values
--------------
| Class      | Produced from           | XML type  | XML text      |
|------------|-------------------------|-----------|---------------|
| Label      | <label>                 | label     | name          |
| TypeName   | <type>                  | type      | int/bool/...  |
| Variable   | <var>, <symb> with GF@… | var       | GF@name       |
| Literal    | <symb> with int@… etc.  | int/bool/string/nil | value |

A ``<symb>`` operand is classified by its prefix: a frame prefix (``GF``,
``LF``, ``TF``) yields a Variable, a type prefix yields a Literal.

Identifiers
-----------
Variable and label names start with an ASCII letter or one of
``_ - $ & % * ! ?`` and continue with those characters or ASCII digits.

String Escaping
---------------
String literal payloads are re-encoded byte by byte over their UTF-8
encoding. Bytes 0-32, 35 (``#``) and 92 (``\\``) become ``\\`` followed by
three zero-padded digits in the configured base (decimal by default):

    string@a#b c   ->   a\\035b\\032c

Source bytes that are not valid UTF-8 are escaped the same way, so a raw
0xFF byte in ``string@a?b`` becomes ``a\\255b``.

Example
-------
>>> from ippcode23.isa import OperandKind
>>> from ippcode23.parser.operands import classify_operand
>>> classify_operand(OperandKind.SYMBOL, "GF@counter")
Variable(frame='GF', name='counter')
>>> classify_operand(OperandKind.SYMBOL, "int@-42")
Literal(kind='int', value='-42')
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import logging
import re
import string

from ippcode23.config import EscapeBase
from ippcode23.errors import OperandSyntaxError, SourceLocation
from ippcode23.isa import OperandKind


logger = logging.getLogger(__name__)


# =============================================================================
# Grammar Constants
# =============================================================================

FRAMES = ("GF", "LF", "TF")
TYPE_NAMES = ("int", "bool", "string", "nil")
SYMBOL_PREFIXES = FRAMES + TYPE_NAMES

# Characters that can start an identifier
IDENT_SPECIAL = "_-$&%*!?"
IDENT_START = frozenset(string.ascii_letters + IDENT_SPECIAL)

# Characters that can continue an identifier
IDENT_CHARS = IDENT_START | frozenset(string.digits)

BOOL_VALUES = ("true", "false")
NIL_VALUE = "nil"

_INT_RE = re.compile(r"[-+]?[0-9]+")
_ESCAPE_RE = re.compile(rb"\\([0-9]{3})")

# Bytes that must be escaped inside string literals
_HASH_BYTE = ord("#")
_BACKSLASH_BYTE = ord("\\")

# Surrogate code points; undecodable source bytes arrive as U+DC80..U+DCFF
_SURROGATE_FIRST = 0xD800
_SURROGATE_LAST = 0xDFFF


# =============================================================================
# Operand Data Classes
# =============================================================================

@dataclass(frozen=True)
class Operand(ABC):
    """
    Abstract base class for classified operands.

    Subclasses provide ``type_tag`` (the XML ``type`` attribute) and
    ``text`` (the XML element text).
    """

    @property
    @abstractmethod
    def type_tag(self) -> str:
        pass

    @property
    @abstractmethod
    def text(self) -> str:
        pass


@dataclass(frozen=True)
class Label(Operand):
    """Jump or call target name."""
    name: str

    @property
    def type_tag(self) -> str:
        return "label"

    @property
    def text(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeName(Operand):
    """Type name operand of READ (int, bool, string or nil)."""
    name: str

    @property
    def type_tag(self) -> str:
        return "type"

    @property
    def text(self) -> str:
        return self.name


@dataclass(frozen=True)
class Variable(Operand):
    """
    Frame-qualified variable reference.

    Attributes:
        frame: GF (global), LF (local) or TF (temporary)
        name: Variable name
    """
    frame: str
    name: str

    @property
    def type_tag(self) -> str:
        return "var"

    @property
    def text(self) -> str:
        return f"{self.frame}@{self.name}"


@dataclass(frozen=True)
class Literal(Operand):
    """
    Typed constant.

    Attributes:
        kind: int, bool, string or nil
        value: Literal text; already escaped for strings
    """
    kind: str
    value: str

    @property
    def type_tag(self) -> str:
        return self.kind

    @property
    def text(self) -> str:
        return self.value


# =============================================================================
# Grammar Predicates
# =============================================================================

def is_identifier(name: str) -> bool:
    """
    Check whether ``name`` is a valid variable or label name.

    >>> is_identifier("_tmp1"), is_identifier("1tmp"), is_identifier("")
    (True, False, False)
    """
    if not name or name[0] not in IDENT_START:
        return False
    return all(char in IDENT_CHARS for char in name[1:])


def is_int_literal(value: str) -> bool:
    return _INT_RE.fullmatch(value) is not None


# =============================================================================
# String Escaping
# =============================================================================

def _must_escape(byte: int) -> bool:
    return byte <= 32 or byte == _HASH_BYTE or byte == _BACKSLASH_BYTE


def _is_surrogate(char: str) -> bool:
    return _SURROGATE_FIRST <= ord(char) <= _SURROGATE_LAST


def _surrogate_bytes(char: str) -> bytes:
    """Bytes a surrogate stands for: the undecodable source byte, if any."""
    try:
        return char.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return char.encode("utf-8", "surrogatepass")


def escape_string(value: str, base: EscapeBase = EscapeBase.DECIMAL) -> str:
    """
    Escape a string literal payload byte by byte.

    Every byte of the UTF-8 encoding that is <= 32, ``#`` or ``\\`` is
    replaced with ``\\`` and three zero-padded digits in ``base``. All other
    bytes pass through unchanged, so multi-byte characters survive intact.

    Source bytes that are not valid UTF-8 reach this function as surrogate
    escapes (see ``Translator.translate_file``); each of them is escaped as
    well, so the result never holds a character XML cannot represent.

    Args:
        value: Raw payload (text after ``string@``)
        base: Digit base of the escape codes

    Returns:
        Escaped payload
    """
    code_format = "\\{:03d}" if base is EscapeBase.DECIMAL else "\\{:03o}"
    out = []

    for char in value:
        if _is_surrogate(char):
            out.extend(code_format.format(byte) for byte in _surrogate_bytes(char))
        elif ord(char) < 0x80 and _must_escape(ord(char)):
            out.append(code_format.format(ord(char)))
        else:
            # Bytes of multi-byte characters are all >= 0x80
            out.append(char)

    return "".join(out)


def unescape_string(value: str, base: EscapeBase = EscapeBase.DECIMAL) -> str:
    """
    Reverse ``escape_string``.

    Each ``\\ddd`` sequence is replaced with the byte it encodes; the
    resulting bytes are decoded as UTF-8.
    """
    radix = 10 if base is EscapeBase.DECIMAL else 8
    raw = value.encode("utf-8", "surrogateescape")

    def _replace(match: "re.Match[bytes]") -> bytes:
        try:
            code = int(match.group(1), radix)
        except ValueError:
            return match.group(0)
        if code > 0xFF:
            return match.group(0)
        return bytes([code])

    decoded = _ESCAPE_RE.sub(_replace, raw)
    return decoded.decode("utf-8", "surrogateescape")


# =============================================================================
# Classifier
# =============================================================================

class OperandClassifier:
    """
    Validates operand fields and converts them to Operand values.

    One classifier can be reused for any number of operands; the location
    passed to ``classify`` is only used for error reporting.

    Usage:
        classifier = OperandClassifier(escape_base=EscapeBase.DECIMAL)
        operand = classifier.classify(OperandKind.SYMBOL, "string@hi")
    """

    def __init__(self, escape_base: EscapeBase = EscapeBase.DECIMAL):
        self.escape_base = escape_base
        self._location: Optional[SourceLocation] = None
        self._source_line: Optional[str] = None

    def classify(
        self,
        kind: OperandKind,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> Operand:
        """
        Classify one operand field.

        Args:
            kind: Declared operand kind of the slot
            token: Raw operand field
            location: Source location for errors
            source_line: Original source line for errors

        Returns:
            Label, TypeName, Variable or Literal

        Raises:
            OperandSyntaxError: If the field violates the grammar of ``kind``
        """
        self._location = location
        self._source_line = source_line

        if kind is OperandKind.LABEL:
            return self._parse_label(token)
        if kind is OperandKind.TYPE:
            return self._parse_type(token)
        if kind is OperandKind.VAR:
            return self._parse_var(token)
        return self._parse_symbol(token)

    # =========================================================================
    # Per-kind Parsers
    # =========================================================================

    def _parse_label(self, token: str) -> Label:
        self._check_identifier(token, token)
        return Label(token)

    def _parse_type(self, token: str) -> TypeName:
        if token not in TYPE_NAMES:
            raise self._error(
                f"invalid type '{token}'",
                token,
                hint=f"expected one of: {', '.join(TYPE_NAMES)}",
            )
        return TypeName(token)

    def _parse_var(self, token: str) -> Variable:
        parts = token.split("@")
        if len(parts) != 2:
            raise self._error(
                f"invalid variable '{token}'",
                token,
                hint="a variable is written FRAME@name, e.g. GF@counter",
            )

        frame, name = parts
        self._check_frame(frame, token)
        self._check_identifier(name, token)
        return Variable(frame, name)

    def _parse_symbol(self, token: str) -> Operand:
        prefix, sep, value = token.partition("@")
        if not sep:
            raise self._error(
                f"invalid symbol '{token}'",
                token,
                hint="a symbol is a variable (GF@x) or a literal (int@1, string@abc)",
            )

        if prefix not in SYMBOL_PREFIXES:
            raise self._error(
                f"invalid symbol prefix '{prefix}'",
                token,
                hint=f"expected one of: {', '.join(SYMBOL_PREFIXES)}",
            )

        if prefix in FRAMES:
            self._check_identifier(value, token)
            logger.debug(f"Symbol '{token}' resolved to a variable")
            return Variable(prefix, value)

        if prefix == "int":
            if not is_int_literal(value):
                raise self._error(
                    f"invalid int literal '{value}'",
                    token,
                    hint="an int is an optional sign followed by decimal digits",
                )
        elif prefix == "bool":
            if value not in BOOL_VALUES:
                raise self._error(
                    f"invalid bool literal '{value}'",
                    token,
                    hint="a bool is either 'true' or 'false'",
                )
        elif prefix == "nil":
            if value != NIL_VALUE:
                raise self._error(
                    f"invalid nil literal '{value}'",
                    token,
                    hint="the only nil literal is nil@nil",
                )
        else:
            value = escape_string(value, self.escape_base)

        return Literal(prefix, value)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_frame(self, frame: str, token: str) -> None:
        if frame not in FRAMES:
            raise self._error(
                f"invalid frame '{frame}'",
                token,
                hint=f"expected one of: {', '.join(FRAMES)}",
            )

    def _check_identifier(self, name: str, token: str) -> None:
        if not is_identifier(name):
            raise self._error(f"invalid identifier '{name}'", token)

    def _error(
        self,
        message: str,
        token: str,
        hint: Optional[str] = None,
    ) -> OperandSyntaxError:
        return OperandSyntaxError(
            message,
            token,
            location=self._location,
            hint=hint,
            source_line=self._source_line,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def classify_operand(
    kind: OperandKind,
    token: str,
    escape_base: EscapeBase = EscapeBase.DECIMAL,
) -> Operand:
    """
    Convenience function to classify a single operand field.

    Raises:
        OperandSyntaxError: If the field violates the grammar of ``kind``
    """
    return OperandClassifier(escape_base).classify(kind, token)
