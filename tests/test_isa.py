# =============================================================================
# test_isa.py - Instruction Table Unit Tests
# =============================================================================
# Tests for the IPPcode23 instruction table.
#
# Test coverage includes:
#   - Table completeness and arity of every opcode group
#   - Case-insensitive lookup helpers
#   - Immutability of the table
#   - Usage signatures
# =============================================================================

import pytest

from ippcode23.isa import (
    MNEMONICS,
    OPCODE_TABLE,
    OPCODES_BY_CATEGORY,
    OperandKind,
    OpcodeSpec,
    get_arity,
    get_opcode_spec,
    is_valid_opcode,
)


V = OperandKind.VAR
S = OperandKind.SYMBOL
L = OperandKind.LABEL
T = OperandKind.TYPE


# =============================================================================
# Table Content Tests
# =============================================================================

class TestTableContent:
    """Test the opcode signatures."""

    def test_opcode_count(self):
        """IPPcode23 has 35 opcodes."""
        assert len(OPCODE_TABLE) == 35
        assert len(MNEMONICS) == 35

    @pytest.mark.parametrize("name,kinds", [
        ("MOVE", (V, S)),
        ("CREATEFRAME", ()),
        ("PUSHFRAME", ()),
        ("POPFRAME", ()),
        ("DEFVAR", (V,)),
        ("CALL", (L,)),
        ("RETURN", ()),
        ("PUSHS", (S,)),
        ("POPS", (V,)),
        ("ADD", (V, S, S)),
        ("IDIV", (V, S, S)),
        ("NOT", (V, S)),
        ("INT2CHAR", (V, S)),
        ("STRI2INT", (V, S, S)),
        ("READ", (V, T)),
        ("WRITE", (S,)),
        ("CONCAT", (V, S, S)),
        ("STRLEN", (V, S)),
        ("GETCHAR", (V, S, S)),
        ("SETCHAR", (V, S, S)),
        ("TYPE", (V, S)),
        ("LABEL", (L,)),
        ("JUMP", (L,)),
        ("JUMPIFEQ", (L, S, S)),
        ("JUMPIFNEQ", (L, S, S)),
        ("EXIT", (S,)),
        ("DPRINT", (S,)),
        ("BREAK", ()),
    ])
    def test_signature(self, name, kinds):
        """Each opcode declares its operand kinds in order."""
        spec = OPCODE_TABLE[name]
        assert spec.name == name
        assert spec.operand_kinds == kinds
        assert spec.arity == len(kinds)

    def test_arithmetic_group_is_three_address(self):
        """Binary arithmetic and relational opcodes take var, symb, symb."""
        for name in ("ADD", "SUB", "MUL", "IDIV", "LT", "GT", "EQ", "AND", "OR"):
            assert OPCODE_TABLE[name].operand_kinds == (V, S, S)

    def test_categories_cover_table(self):
        """Every opcode appears in exactly one category."""
        listed = [name for names in OPCODES_BY_CATEGORY.values() for name in names]
        assert sorted(listed) == sorted(OPCODE_TABLE)
        assert len(listed) == len(set(listed))

    def test_category_order(self):
        """Categories keep table order."""
        assert list(OPCODES_BY_CATEGORY) == [
            "frame", "stack", "arithmetic", "io", "string", "type", "flow", "debug",
        ]


# =============================================================================
# Lookup Tests
# =============================================================================

class TestLookup:
    """Test the lookup helpers."""

    def test_lookup_uppercase(self):
        assert get_opcode_spec("MOVE") is OPCODE_TABLE["MOVE"]

    def test_lookup_is_case_insensitive(self):
        """Opcode lookup ignores letter case."""
        assert get_opcode_spec("move") is OPCODE_TABLE["MOVE"]
        assert get_opcode_spec("CreateFrame") is OPCODE_TABLE["CREATEFRAME"]

    def test_lookup_unknown(self):
        assert get_opcode_spec("MOOVE") is None
        assert get_opcode_spec("") is None

    def test_is_valid_opcode(self):
        assert is_valid_opcode("jumpifeq")
        assert not is_valid_opcode("JMP")

    def test_get_arity(self):
        assert get_arity("write") == 1
        assert get_arity("BREAK") == 0

    def test_get_arity_unknown(self):
        with pytest.raises(KeyError):
            get_arity("NOPE")


# =============================================================================
# Immutability and Formatting Tests
# =============================================================================

class TestOpcodeSpec:
    """Test OpcodeSpec behavior."""

    def test_table_is_read_only(self):
        """The table cannot be modified at runtime."""
        with pytest.raises(TypeError):
            OPCODE_TABLE["NOP"] = OpcodeSpec("NOP", (), "debug")

    def test_spec_is_frozen(self):
        spec = OPCODE_TABLE["MOVE"]
        with pytest.raises(AttributeError):
            spec.name = "COPY"

    def test_signature_string(self):
        assert OPCODE_TABLE["MOVE"].signature == "MOVE <var> <symb>"
        assert OPCODE_TABLE["READ"].signature == "READ <var> <type>"
        assert OPCODE_TABLE["JUMP"].signature == "JUMP <label>"
        assert OPCODE_TABLE["BREAK"].signature == "BREAK"

    def test_operand_kind_str(self):
        assert str(OperandKind.SYMBOL) == "symb"
