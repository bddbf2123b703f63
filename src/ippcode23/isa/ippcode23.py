"""
IPPcode23 Instruction Set Definition
====================================

This module defines the complete IPPcode23 instruction set: every opcode
with the ordered list of operand kinds it requires. The table is built once
at import time and exposed read-only.

Operand Kinds
-------------
1. **VAR**: frame-qualified variable reference (e.g. ``GF@counter``)
2. **SYMBOL**: either a typed literal (``int@5``, ``string@hi``) or a
   variable reference; the prefix decides which
3. **LABEL**: jump/call target name (e.g. ``loop``)
4. **TYPE**: one of ``int``, ``bool``, ``string``, ``nil``

Opcode Groups
-------------
- frame:      MOVE, CREATEFRAME, PUSHFRAME, POPFRAME, DEFVAR, CALL, RETURN
- stack:      PUSHS, POPS
- arithmetic: ADD, SUB, MUL, IDIV, LT, GT, EQ, AND, OR, NOT,
              INT2CHAR, STRI2INT
- io:         READ, WRITE
- string:     CONCAT, STRLEN, GETCHAR, SETCHAR
- type:       TYPE
- flow:       LABEL, JUMP, JUMPIFEQ, JUMPIFNEQ, EXIT
- debug:      DPRINT, BREAK
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# Operand Kind Enumeration
# =============================================================================

class OperandKind(Enum):
    """
    Declared category of an instruction's operand slot.
    """
    VAR = auto()      # <var>
    SYMBOL = auto()   # <symb>: literal or variable
    LABEL = auto()    # <label>
    TYPE = auto()     # <type>

    def __str__(self) -> str:
        """Return the grammar name used in usage strings."""
        return {
            OperandKind.VAR: "var",
            OperandKind.SYMBOL: "symb",
            OperandKind.LABEL: "label",
            OperandKind.TYPE: "type",
        }[self]


# =============================================================================
# Opcode Signatures
# =============================================================================

@dataclass(frozen=True)
class OpcodeSpec:
    """
    Signature of a single opcode.

    Frozen so the table cannot be modified at runtime.

    Attributes:
        name: The opcode mnemonic (uppercase)
        operand_kinds: Ordered operand kinds; its length is the arity
        category: Opcode group, used for listings
    """
    name: str
    operand_kinds: tuple[OperandKind, ...]
    category: str

    @property
    def arity(self) -> int:
        return len(self.operand_kinds)

    @property
    def signature(self) -> str:
        """Usage string such as ``MOVE <var> <symb>``."""
        if not self.operand_kinds:
            return self.name
        kinds = " ".join(f"<{kind}>" for kind in self.operand_kinds)
        return f"{self.name} {kinds}"

    def __repr__(self) -> str:
        return f"OpcodeSpec({self.signature!r})"


# =============================================================================
# Opcode Table
# =============================================================================

_V = OperandKind.VAR
_S = OperandKind.SYMBOL
_L = OperandKind.LABEL
_T = OperandKind.TYPE

_SPECS: list[OpcodeSpec] = [
    # Frames, function calls and returns
    OpcodeSpec("MOVE", (_V, _S), "frame"),
    OpcodeSpec("CREATEFRAME", (), "frame"),
    OpcodeSpec("PUSHFRAME", (), "frame"),
    OpcodeSpec("POPFRAME", (), "frame"),
    OpcodeSpec("DEFVAR", (_V,), "frame"),
    OpcodeSpec("CALL", (_L,), "frame"),
    OpcodeSpec("RETURN", (), "frame"),

    # Data stack
    OpcodeSpec("PUSHS", (_S,), "stack"),
    OpcodeSpec("POPS", (_V,), "stack"),

    # Arithmetic, relational, boolean and conversion
    OpcodeSpec("ADD", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("SUB", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("MUL", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("IDIV", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("LT", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("GT", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("EQ", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("AND", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("OR", (_V, _S, _S), "arithmetic"),
    OpcodeSpec("NOT", (_V, _S), "arithmetic"),
    OpcodeSpec("INT2CHAR", (_V, _S), "arithmetic"),
    OpcodeSpec("STRI2INT", (_V, _S, _S), "arithmetic"),

    # Input/output
    OpcodeSpec("READ", (_V, _T), "io"),
    OpcodeSpec("WRITE", (_S,), "io"),

    # Strings
    OpcodeSpec("CONCAT", (_V, _S, _S), "string"),
    OpcodeSpec("STRLEN", (_V, _S), "string"),
    OpcodeSpec("GETCHAR", (_V, _S, _S), "string"),
    OpcodeSpec("SETCHAR", (_V, _S, _S), "string"),

    # Type introspection
    OpcodeSpec("TYPE", (_V, _S), "type"),

    # Control flow
    OpcodeSpec("LABEL", (_L,), "flow"),
    OpcodeSpec("JUMP", (_L,), "flow"),
    OpcodeSpec("JUMPIFEQ", (_L, _S, _S), "flow"),
    OpcodeSpec("JUMPIFNEQ", (_L, _S, _S), "flow"),
    OpcodeSpec("EXIT", (_S,), "flow"),

    # Debugging
    OpcodeSpec("DPRINT", (_S,), "debug"),
    OpcodeSpec("BREAK", (), "debug"),
]

# Master table: uppercase mnemonic -> OpcodeSpec
OPCODE_TABLE: Mapping[str, OpcodeSpec] = MappingProxyType(
    {spec.name: spec for spec in _SPECS}
)

# All valid mnemonics
MNEMONICS = frozenset(OPCODE_TABLE)

# Opcodes grouped by category, in table order
OPCODES_BY_CATEGORY: Mapping[str, tuple[str, ...]] = MappingProxyType({
    category: tuple(s.name for s in _SPECS if s.category == category)
    for category in dict.fromkeys(s.category for s in _SPECS)
})

del _V, _S, _L, _T


# =============================================================================
# Lookup Functions
# =============================================================================

def get_opcode_spec(mnemonic: str) -> Optional[OpcodeSpec]:
    """
    Look up an opcode by mnemonic, ignoring letter case.

    Args:
        mnemonic: The opcode mnemonic (e.g., "move")

    Returns:
        OpcodeSpec if found, None otherwise
    """
    return OPCODE_TABLE.get(mnemonic.upper())


def is_valid_opcode(mnemonic: str) -> bool:
    """
    Check if a mnemonic is a valid IPPcode23 opcode (case-insensitive).
    """
    return mnemonic.upper() in MNEMONICS


def get_arity(mnemonic: str) -> int:
    """
    Get the number of operands an opcode requires.

    Raises:
        KeyError: If the mnemonic is not an opcode
    """
    return OPCODE_TABLE[mnemonic.upper()].arity
