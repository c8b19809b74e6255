# =============================================================================
# test_parser.py - Line Classification Unit Tests
# =============================================================================
# Tests for the Hack assembly line classifier.
#
# Test coverage includes:
#   - The five line forms and their priority order
#   - Address operands: immediates, identifiers, range and identifier errors
#   - Compute instructions: every field combination shape, trailing comments
#   - Label definitions
#   - Rejection of malformed lines with location information
# =============================================================================

import pytest

from hack_sdk.assembler.parser import (
    AddressInstruction,
    Blank,
    Comment,
    ComputeInstruction,
    Immediate,
    LabelDefinition,
    Symbol,
    parse_address_target,
    parse_line,
    parse_source,
)
from hack_sdk.cpu import Destination, JumpCondition, Operation
from hack_sdk.errors import (
    AddressRangeError,
    AssemblySyntaxError,
    IdentifierError,
    SourceLocation,
)


# =============================================================================
# Blank and Comment Lines
# =============================================================================

class TestBlankAndComment:
    """Test lines that produce no instruction."""

    def test_empty_line(self):
        assert isinstance(parse_line(""), Blank)

    def test_whitespace_only(self):
        """Whitespace-only text is blank even if not stripped."""
        assert isinstance(parse_line("   \t "), Blank)

    def test_comment(self):
        assert isinstance(parse_line("// Computes R2 = max(R0, R1)"), Comment)

    def test_bare_comment_marker(self):
        assert isinstance(parse_line("//"), Comment)

    def test_single_slash_is_error(self):
        with pytest.raises(AssemblySyntaxError):
            parse_line("/ not a comment")


# =============================================================================
# Address Instructions
# =============================================================================

class TestAddressInstruction:
    """Test @value and @symbol lines."""

    def test_immediate(self):
        line = parse_line("@21")
        assert line == AddressInstruction(Immediate(21))

    def test_immediate_zero(self):
        assert parse_line("@0") == AddressInstruction(Immediate(0))

    def test_immediate_max(self):
        assert parse_line("@32767") == AddressInstruction(Immediate(32767))

    def test_immediate_leading_zeros(self):
        assert parse_line("@007") == AddressInstruction(Immediate(7))

    def test_immediate_out_of_range(self):
        with pytest.raises(AddressRangeError) as exc_info:
            parse_line("@32768")
        assert exc_info.value.value == 32768
        assert "out of range" in str(exc_info.value)

    def test_immediate_far_out_of_range(self):
        """Thousands of digits are a range error, not a conversion failure."""
        with pytest.raises(AddressRangeError) as exc_info:
            parse_line("@" + "9" * 5000)
        assert "5000 digits" in str(exc_info.value)

    def test_immediate_many_leading_zeros(self):
        assert parse_line("@" + "0" * 5000 + "7") == AddressInstruction(Immediate(7))

    def test_symbol(self):
        assert parse_line("@LOOP") == AddressInstruction(Symbol("LOOP"))

    def test_symbol_with_punctuation(self):
        """Identifiers may use _ . & : $ anywhere and digits after the first."""
        for name in ("_tmp", ".hidden", "Main.fib$ret.1", "&x", ":a:b", "$0", "sys.init"):
            assert parse_line(f"@{name}") == AddressInstruction(Symbol(name))

    def test_predefined_symbol_is_just_a_symbol(self):
        """The parser does not resolve symbols."""
        assert parse_line("@SCREEN") == AddressInstruction(Symbol("SCREEN"))

    def test_symbol_starting_with_digit(self):
        with pytest.raises(IdentifierError) as exc_info:
            parse_line("@1abc")
        assert exc_info.value.identifier == "1abc"

    def test_negative_number(self):
        with pytest.raises(IdentifierError):
            parse_line("@-1")

    def test_trailing_comment_not_allowed(self):
        with pytest.raises(IdentifierError):
            parse_line("@5 // five")

    def test_lone_at_sign(self):
        """'@' with nothing after it matches no line form."""
        with pytest.raises(AssemblySyntaxError):
            parse_line("@")

    def test_operand_error_location_points_after_at(self):
        with pytest.raises(IdentifierError) as exc_info:
            parse_line("@9x", SourceLocation("Prog.asm", 4))
        assert exc_info.value.location == SourceLocation("Prog.asm", 4, 2)

    def test_parse_address_target_directly(self):
        assert parse_address_target("100") == Immediate(100)
        assert parse_address_target("i") == Symbol("i")


# =============================================================================
# Compute Instructions
# =============================================================================

class TestComputeInstruction:
    """Test dest=comp;jump lines."""

    def test_dest_and_comp(self):
        assert parse_line("D=A") == ComputeInstruction(
            Destination.D, Operation.A, JumpCondition.NONE
        )

    def test_comp_and_jump(self):
        assert parse_line("0;JMP") == ComputeInstruction(
            Destination.NONE, Operation.ZERO, JumpCondition.JMP
        )

    def test_all_three_fields(self):
        assert parse_line("AMD=M+1;JNE") == ComputeInstruction(
            Destination.AMD, Operation.M_PLUS_ONE, JumpCondition.JNE
        )

    def test_comp_only(self):
        assert parse_line("D") == ComputeInstruction(
            Destination.NONE, Operation.D, JumpCondition.NONE
        )

    def test_every_destination(self):
        for dest in Destination:
            if dest is Destination.NONE:
                continue
            line = parse_line(f"{dest.value}=D+1")
            assert line.destination is dest

    def test_every_operation(self):
        for op in Operation:
            line = parse_line(f"D={op.value}")
            assert line.operation is op

    def test_every_jump(self):
        for jump in JumpCondition:
            if jump is JumpCondition.NONE:
                continue
            line = parse_line(f"D;{jump.value}")
            assert line.jump is jump

    def test_trailing_comment(self):
        line = parse_line("M=D // store result")
        assert line == ComputeInstruction(Destination.M, Operation.D, JumpCondition.NONE)

    def test_trailing_comment_without_space(self):
        line = parse_line("D;JGT//positive")
        assert line.jump is JumpCondition.JGT

    def test_keeps_source_text(self):
        line = parse_line("D=D-M", SourceLocation("Max.asm", 4))
        assert line.text == "D=D-M"
        assert line.location.line == 4

    @pytest.mark.parametrize("text", [
        "X=Y+Z",      # unknown registers
        "D=A+D+1",    # not an ALU operation
        "DM=A",       # destinations must be in canonical order
        "D=",         # missing operation
        "=D",         # missing destination
        "D=M;",       # missing jump
        "D;JXX",      # unknown jump
        "D = A",      # no spaces inside an instruction
        "M+D",        # only D+M is legal
        "d=a",        # mnemonics are case-sensitive
    ])
    def test_malformed_compute(self, text):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            parse_line(text)
        assert text in str(exc_info.value)


# =============================================================================
# Label Definitions
# =============================================================================

class TestLabelDefinition:
    """Test (LABEL) lines."""

    def test_label(self):
        assert parse_line("(LOOP)") == LabelDefinition("LOOP")

    def test_label_with_punctuation(self):
        assert parse_line("(Main.main$if.0)") == LabelDefinition("Main.main$if.0")

    def test_label_invalid_identifier(self):
        with pytest.raises(AssemblySyntaxError):
            parse_line("(1LOOP)")

    def test_label_with_trailing_text(self):
        with pytest.raises(AssemblySyntaxError):
            parse_line("(LOOP) // top of loop")

    def test_empty_label(self):
        with pytest.raises(AssemblySyntaxError):
            parse_line("()")


# =============================================================================
# Whole-Source Parsing
# =============================================================================

class TestParseSource:
    """Test classification of complete programs."""

    def test_one_statement_per_line(self):
        source = "// add\n@2\nD=A\n\n(END)\n@END\n0;JMP\n"
        lines = parse_source(source)
        assert [type(line) for line in lines] == [
            Comment, AddressInstruction, ComputeInstruction, Blank,
            LabelDefinition, AddressInstruction, ComputeInstruction, Blank,
        ]

    def test_indentation_and_crlf(self):
        lines = parse_source("   @2\r\n\tD=A  \r\n")
        assert lines[0] == AddressInstruction(Immediate(2))
        assert lines[1] == ComputeInstruction(Destination.D, Operation.A, JumpCondition.NONE)

    def test_line_numbers(self):
        lines = parse_source("@1\n\n@3", "Prog.asm")
        assert [line.location.line for line in lines] == [1, 2, 3]
        assert lines[0].location.filename == "Prog.asm"

    def test_error_reports_line_number(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            parse_source("@2\nD=A\nX=Y+Z\nM=D", "Bad.asm")
        assert exc_info.value.location.line == 3
        assert "Bad.asm:3:1" in str(exc_info.value)
        assert "X=Y+Z" in str(exc_info.value)
