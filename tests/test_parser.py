# =============================================================================
# test_parser.py - Program Parser Unit Tests
# =============================================================================
# Tests for header validation, opcode lookup and instruction building.
#
# Test coverage includes:
#   - Header detection after comments and blank lines
#   - Case-insensitive opcodes and uppercase output
#   - Instruction order numbering
#   - Exit codes 21, 22 and 23
#   - Fail-fast error ordering
#   - Source locations in errors
# =============================================================================

import pytest

from ippcode23.config import EscapeBase
from ippcode23.errors import (
    ArityError,
    HeaderError,
    OperandSyntaxError,
    TranslationError,
    UnknownOpcodeError,
)
from ippcode23.isa import OPCODE_TABLE, OperandKind
from ippcode23.parser.lexer import normalize_source
from ippcode23.parser.operands import Label, Literal, TypeName, Variable
from ippcode23.parser.parser import (
    Instruction,
    Parser,
    Program,
    _edit_distance,
    _find_similar_opcodes,
    parse_program,
)


# =============================================================================
# Helper Functions
# =============================================================================

def parse(body: str, **kwargs) -> Program:
    """Parse a program body with the header prepended."""
    return parse_program(".IPPcode23\n" + body, **kwargs)


SAMPLE_OPERANDS = {
    OperandKind.VAR: "GF@x",
    OperandKind.SYMBOL: "int@1",
    OperandKind.LABEL: "end",
    OperandKind.TYPE: "int",
}


# =============================================================================
# Basic Parsing Tests
# =============================================================================

class TestBasicParsing:
    """Test parsing of valid programs."""

    def test_header_only(self):
        program = parse_program(".IPPcode23")
        assert len(program) == 0
        assert program.instructions == ()
        assert program.language == "IPPcode23"
        assert program.header_ok

    def test_read_write_program(self):
        program = parse("DEFVAR GF@a\nREAD GF@a int\nWRITE GF@a\n")
        assert program.instructions == (
            Instruction(1, "DEFVAR", (Variable("GF", "a"),)),
            Instruction(2, "READ", (Variable("GF", "a"), TypeName("int"))),
            Instruction(3, "WRITE", (Variable("GF", "a"),)),
        )

    def test_all_operand_kinds(self):
        program = parse("JUMPIFEQ end GF@x string@a#b c\nLABEL end")
        first = program.instructions[0]
        assert first.operands == (
            Label("end"),
            Variable("GF", "x"),
            Literal("string", "a"),
        )

    def test_escaped_string(self):
        program = parse("WRITE string@a\\032b")
        assert program.instructions[0].operands == (Literal("string", "a\\092032b"),)

    def test_octal_escape_base(self):
        program = parse("WRITE string@x", escape_base=EscapeBase.OCTAL)
        assert program.instructions[0].operands[0].text == "x"
        program = parse("CONCAT GF@s string@\\ string@x", escape_base=EscapeBase.OCTAL)
        assert program.instructions[0].operands[1].text == "\\134"

    def test_program_is_iterable(self):
        program = parse("CREATEFRAME\nPUSHFRAME")
        assert [i.opcode for i in program] == ["CREATEFRAME", "PUSHFRAME"]

    def test_instruction_location(self):
        program = parse_program("# c\n.IPPcode23\n\n  DEFVAR GF@a", filename="p.src")
        location = program.instructions[0].location
        assert (location.filename, location.line, location.column) == ("p.src", 4, 3)

    @pytest.mark.parametrize("name", sorted(OPCODE_TABLE))
    def test_every_opcode(self, name):
        """Every opcode parses with operands of its declared kinds."""
        spec = OPCODE_TABLE[name]
        fields = [SAMPLE_OPERANDS[kind] for kind in spec.operand_kinds]
        line = " ".join([name.lower()] + fields)

        program = parse(line)

        instruction = program.instructions[0]
        assert instruction.opcode == name
        assert len(instruction.operands) == spec.arity


# =============================================================================
# Header Tests
# =============================================================================

class TestHeader:
    """Test header validation (exit code 21)."""

    def test_empty_source(self):
        with pytest.raises(HeaderError) as exc_info:
            parse_program("")
        assert exc_info.value.exit_code == 21
        assert exc_info.value.found is None

    def test_comments_only(self):
        with pytest.raises(HeaderError):
            parse_program("# nothing here\n\n   # still nothing\n")

    def test_header_after_comments_and_blank_lines(self):
        program = parse_program("\n# leading comment\n\n  .IPPcode23  # header\nBREAK")
        assert len(program) == 1

    def test_header_is_case_sensitive(self):
        with pytest.raises(HeaderError) as exc_info:
            parse_program(".ippcode23\nBREAK")
        assert exc_info.value.found == ".ippcode23"
        assert "case-sensitive" in str(exc_info.value)

    def test_wrong_version(self):
        with pytest.raises(HeaderError):
            parse_program(".IPPcode22\nBREAK")

    def test_header_with_trailing_text(self):
        with pytest.raises(HeaderError):
            parse_program(".IPPcode23 extra\nBREAK")

    def test_instruction_before_header(self):
        with pytest.raises(HeaderError):
            parse_program("BREAK\n.IPPcode23")

    def test_second_header_is_unknown_opcode(self):
        """A repeated header line is treated as an instruction."""
        with pytest.raises(UnknownOpcodeError):
            parse_program(".IPPcode23\n.IPPcode23")

    def test_header_error_location(self):
        with pytest.raises(HeaderError) as exc_info:
            parse_program("\n\n  .IPP", filename="p.src")
        assert str(exc_info.value).startswith("p.src:3:3: error:")


# =============================================================================
# Opcode Tests
# =============================================================================

class TestOpcodes:
    """Test opcode lookup (exit code 22)."""

    def test_lowercase_opcode(self):
        program = parse("createframe\nPushFrame")
        assert [i.opcode for i in program] == ["CREATEFRAME", "PUSHFRAME"]

    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcodeError) as exc_info:
            parse("MOOVE GF@a int@1")
        error = exc_info.value
        assert error.exit_code == 22
        assert error.opcode == "MOOVE"
        assert "MOVE" in error.similar_opcodes
        assert "hint: did you mean" in str(error)
        assert "'MOVE'" in str(error)

    def test_unknown_opcode_without_suggestion(self):
        with pytest.raises(UnknownOpcodeError) as exc_info:
            parse("XYZZYQUUX")
        assert exc_info.value.similar_opcodes == []
        assert "hint:" not in str(exc_info.value)

    def test_opcode_error_wins_over_operand_error(self):
        """The opcode is checked before its operands."""
        with pytest.raises(UnknownOpcodeError):
            parse("NOPE bad@@operand")

    def test_edit_distance(self):
        assert _edit_distance("MOVE", "MOVE") == 0
        assert _edit_distance("MOOVE", "MOVE") == 1
        assert _edit_distance("ADD", "SUB") == 3

    def test_similar_opcodes(self):
        assert "PUSHS" in _find_similar_opcodes("pushs")
        assert len(_find_similar_opcodes("XX")) <= 3


# =============================================================================
# Order Numbering Tests
# =============================================================================

class TestOrder:
    """Test instruction order numbering."""

    def test_orders_are_contiguous(self):
        source = "\n".join([
            ".IPPcode23",
            "# comment",
            "DEFVAR GF@a",
            "",
            "   ",
            "MOVE GF@a int@1  # inline",
            "WRITE GF@a",
        ])
        program = parse_program(source)
        assert [i.order for i in program] == [1, 2, 3]

    def test_order_starts_at_one(self):
        program = parse("BREAK")
        assert program.instructions[0].order == 1


# =============================================================================
# Operand Error Tests
# =============================================================================

class TestOperandErrors:
    """Test arity and operand errors (exit code 23)."""

    def test_write_without_operand(self):
        with pytest.raises(ArityError) as exc_info:
            parse("WRITE")
        assert exc_info.value.exit_code == 23

    def test_write_with_two_operands(self):
        with pytest.raises(ArityError):
            parse("WRITE string@a string@b")

    def test_write_with_one_operand(self):
        program = parse("WRITE string@a")
        assert len(program) == 1

    def test_break_with_operand(self):
        with pytest.raises(ArityError):
            parse("BREAK GF@a")

    def test_bad_operand(self):
        with pytest.raises(OperandSyntaxError) as exc_info:
            parse("DEFVAR XF@a")
        assert exc_info.value.exit_code == 23

    def test_operand_location(self):
        with pytest.raises(OperandSyntaxError) as exc_info:
            parse_program(".IPPcode23\nMOVE GF@a int@x", filename="p.src")
        location = exc_info.value.location
        assert (location.line, location.column) == (2, 11)

    def test_first_error_wins(self):
        """Errors are reported in source order."""
        source = ".IPPcode23\nDEFVAR XF@a\nMOOVE GF@a int@1"
        with pytest.raises(OperandSyntaxError):
            parse_program(source)

    def test_earlier_opcode_error_wins(self):
        source = ".IPPcode23\nMOOVE GF@a int@1\nDEFVAR XF@a"
        with pytest.raises(UnknownOpcodeError):
            parse_program(source)

    def test_errors_share_base_class(self):
        with pytest.raises(TranslationError):
            parse("LABEL 9")


# =============================================================================
# Parser Class Tests
# =============================================================================

class TestParserClass:
    """Test the Parser class directly."""

    def test_parse_normalized_lines(self):
        lines = normalize_source(".IPPcode23\nPOPS GF@a")
        program = Parser(lines, "x.src").parse()
        assert program.instructions[0] == Instruction(1, "POPS", (Variable("GF", "a"),))

    def test_location_not_compared(self):
        """Instruction equality ignores the source location."""
        a = parse_program(".IPPcode23\nBREAK").instructions[0]
        b = parse_program("\n\n.IPPcode23\n   BREAK").instructions[0]
        assert a == b
        assert a.location != b.location
