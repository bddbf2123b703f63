"""
IPPcode23 Instruction Set Package
=================================

This package contains the IPPcode23 instruction table used by the parser,
the XML builder and the command-line tool.

Modules:
    ippcode23: Opcode signatures, operand kinds, and lookup helpers.

Usage:
    from ippcode23.isa import (
        OperandKind,
        OpcodeSpec,
        OPCODE_TABLE,
        get_opcode_spec,
    )
"""

from ippcode23.isa.ippcode23 import (
    # Core types
    OperandKind,
    OpcodeSpec,
    # Master instruction database
    OPCODE_TABLE,
    MNEMONICS,
    OPCODES_BY_CATEGORY,
    # Lookup functions
    get_opcode_spec,
    is_valid_opcode,
    get_arity,
)

__all__ = [
    "OperandKind",
    "OpcodeSpec",
    "OPCODE_TABLE",
    "MNEMONICS",
    "OPCODES_BY_CATEGORY",
    "get_opcode_spec",
    "is_valid_opcode",
    "get_arity",
]
