# =============================================================================
# test_cpu.py - Instruction Set Table Tests
# =============================================================================
# Tests for the Hack instruction field enumerations and code tables.
#
# Test coverage includes:
#   - Table completeness and code uniqueness
#   - Published encodings for every destination, jump and ALU operation
#   - A/M operation pairing (a bit)
#   - Address encoding boundaries
#   - Field composition of C-instructions
#   - Inverse lookups used by the disassembler
# =============================================================================

import pytest

from hack_sdk.cpu import (
    DESTINATION_CODES,
    JUMP_CODES,
    MAX_ADDRESS,
    OPERATION_CODES,
    PREDEFINED_SYMBOLS,
    Destination,
    JumpCondition,
    Operation,
    decode_destination,
    decode_jump,
    decode_operation,
    encode_address,
    encode_compute,
    encode_destination,
    encode_jump,
    encode_operation,
)


# =============================================================================
# Table Completeness
# =============================================================================

class TestTables:
    """Every enum member has exactly one code and codes never collide."""

    def test_destination_table_complete(self):
        assert set(DESTINATION_CODES) == set(Destination)
        assert sorted(DESTINATION_CODES.values()) == list(range(8))

    def test_jump_table_complete(self):
        assert set(JUMP_CODES) == set(JumpCondition)
        assert sorted(JUMP_CODES.values()) == list(range(8))

    def test_operation_table_complete(self):
        assert set(OPERATION_CODES) == set(Operation)
        assert len(Operation) == 28
        assert len(set(OPERATION_CODES.values())) == 28

    def test_enum_values_are_mnemonics(self):
        assert Destination("AMD") is Destination.AMD
        assert Destination("") is Destination.NONE
        assert JumpCondition("JLE") is JumpCondition.JLE
        assert Operation("D|M") is Operation.D_OR_M

    def test_predefined_symbols(self):
        assert PREDEFINED_SYMBOLS["SP"] == 0
        assert PREDEFINED_SYMBOLS["LCL"] == 1
        assert PREDEFINED_SYMBOLS["ARG"] == 2
        assert PREDEFINED_SYMBOLS["THIS"] == 3
        assert PREDEFINED_SYMBOLS["THAT"] == 4
        assert PREDEFINED_SYMBOLS["SCREEN"] == 16384
        assert PREDEFINED_SYMBOLS["KBD"] == 24576
        for i in range(16):
            assert PREDEFINED_SYMBOLS[f"R{i}"] == i
        assert len(PREDEFINED_SYMBOLS) == 23


# =============================================================================
# Field Encodings
# =============================================================================

class TestFieldEncoding:
    """Test the published bit patterns."""

    @pytest.mark.parametrize("mnemonic,bits", [
        ("", "000"), ("M", "001"), ("D", "010"), ("MD", "011"),
        ("A", "100"), ("AM", "101"), ("AD", "110"), ("AMD", "111"),
    ])
    def test_destination(self, mnemonic, bits):
        assert encode_destination(Destination(mnemonic)) == bits

    @pytest.mark.parametrize("mnemonic,bits", [
        ("", "000"), ("JGT", "001"), ("JEQ", "010"), ("JGE", "011"),
        ("JLT", "100"), ("JNE", "101"), ("JLE", "110"), ("JMP", "111"),
    ])
    def test_jump(self, mnemonic, bits):
        assert encode_jump(JumpCondition(mnemonic)) == bits

    @pytest.mark.parametrize("mnemonic,bits", [
        ("0", "0101010"), ("1", "0111111"), ("-1", "0111010"),
        ("D", "0001100"), ("A", "0110000"), ("!D", "0001101"),
        ("!A", "0110001"), ("-D", "0001111"), ("-A", "0110011"),
        ("D+1", "0011111"), ("A+1", "0110111"), ("D-1", "0001110"),
        ("A-1", "0110010"), ("D+A", "0000010"), ("D-A", "0010011"),
        ("A-D", "0000111"), ("D&A", "0000000"), ("D|A", "0010101"),
        ("M", "1110000"), ("!M", "1110001"), ("-M", "1110011"),
        ("M+1", "1110111"), ("M-1", "1110010"), ("D+M", "1000010"),
        ("D-M", "1010011"), ("M-D", "1000111"), ("D&M", "1000000"),
        ("D|M", "1010101"),
    ])
    def test_operation(self, mnemonic, bits):
        assert encode_operation(Operation(mnemonic)) == bits

    def test_memory_forms_mirror_register_forms(self):
        """Each M operation is its A twin with the a bit set."""
        for op in Operation:
            if "A" in op.value:
                twin = Operation(op.value.replace("A", "M"))
                assert OPERATION_CODES[twin] == OPERATION_CODES[op] | 0b1000000
                assert twin.uses_memory
                assert not op.uses_memory


# =============================================================================
# Instruction Encoding
# =============================================================================

class TestInstructionEncoding:
    """Test complete 16-bit words."""

    def test_address_zero(self):
        assert encode_address(0) == "0000000000000000"

    def test_address_max(self):
        assert encode_address(MAX_ADDRESS) == "0111111111111111"

    def test_address_too_large(self):
        with pytest.raises(ValueError):
            encode_address(32768)

    def test_address_negative(self):
        with pytest.raises(ValueError):
            encode_address(-1)

    def test_compute_example(self):
        word = encode_compute(Destination.D, Operation.D_PLUS_A, JumpCondition.NONE)
        assert word == "1110000010010000"

    def test_compute_fields_do_not_overlap(self):
        """Every field combination lands in its own bit range."""
        for dest in Destination:
            for op in Operation:
                for jump in JumpCondition:
                    word = encode_compute(dest, op, jump)
                    assert len(word) == 16
                    assert word[:3] == "111"
                    assert word[3:10] == encode_operation(op)
                    assert word[10:13] == encode_destination(dest)
                    assert word[13:] == encode_jump(jump)


# =============================================================================
# Inverse Lookups
# =============================================================================

class TestDecoding:
    """Decoding an encoded field recovers the original member."""

    def test_destination_round_trip(self):
        for dest in Destination:
            assert decode_destination(int(encode_destination(dest), 2)) is dest

    def test_jump_round_trip(self):
        for jump in JumpCondition:
            assert decode_jump(int(encode_jump(jump), 2)) is jump

    def test_operation_round_trip(self):
        for op in Operation:
            assert decode_operation(int(encode_operation(op), 2)) is op

    def test_unknown_operation_code(self):
        assert decode_operation(0b0000001) is None

    def test_out_of_range_codes(self):
        assert decode_destination(8) is None
        assert decode_jump(-1) is None
