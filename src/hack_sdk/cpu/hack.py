"""
Hack Instruction Set Definition
===============================

This module defines the Hack computer's instruction encodings. The Hack CPU
executes 16-bit instructions of exactly two kinds:

A-instruction (address)
-----------------------
```
 15  14 ............................ 0
 0   v  v  v  v  v  v  v  v  v  v  v  v  v  v  v
```
Loads the 15-bit value v into the A register.

C-instruction (compute)
-----------------------
```
 15 14 13  12  11 10 9  8  7  6   5  4  3   2  1  0
 1  1  1   a   c1 c2 c3 c4 c5 c6  d1 d2 d3  j1 j2 j3
```
- a + c1..c6: ALU operation (a selects M instead of A as the second operand)
- d1..d3: destination registers (A, D, M)
- j1..j3: jump condition (<0, =0, >0)

The three enumerations below are closed sets: the assembler's grammar only
accepts their mnemonics, so every member always has an encoding. The code
tables are plain dictionaries keyed by enum member, and the reverse tables
used by the disassembler are derived from them so the two directions can
never drift apart.

Predefined Symbols
------------------
| Symbol        | Address |
|---------------|---------|
| SP, LCL, ARG  | 0, 1, 2 |
| THIS, THAT    | 3, 4    |
| R0 .. R15     | 0 .. 15 |
| SCREEN        | 16384   |
| KBD           | 24576   |

Variables are allocated from address 16 upward.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# Architecture Constants
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1  # 32767

# First RAM address handed out to variable symbols
VARIABLE_BASE = 16

# Prefix of every C-instruction (opcode bit + two unused bits set to 1)
COMPUTE_PREFIX = "111"

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": 16384,
    "KBD": 24576,
    **{f"R{i}": i for i in range(16)},
}


# =============================================================================
# Instruction Field Enumerations
# =============================================================================

class Destination(Enum):
    """Destination register set of a C-instruction."""
    NONE = ""
    M = "M"
    D = "D"
    MD = "MD"
    A = "A"
    AM = "AM"
    AD = "AD"
    AMD = "AMD"

    def __str__(self) -> str:
        return self.value


class JumpCondition(Enum):
    """Jump condition of a C-instruction."""
    NONE = ""
    JGT = "JGT"
    JEQ = "JEQ"
    JGE = "JGE"
    JLT = "JLT"
    JNE = "JNE"
    JLE = "JLE"
    JMP = "JMP"

    def __str__(self) -> str:
        return self.value


class Operation(Enum):
    """ALU operation (the 'comp' field) of a C-instruction."""
    # a = 0: second operand is the A register
    ZERO = "0"
    ONE = "1"
    NEG_ONE = "-1"
    D = "D"
    A = "A"
    NOT_D = "!D"
    NOT_A = "!A"
    NEG_D = "-D"
    NEG_A = "-A"
    D_PLUS_ONE = "D+1"
    A_PLUS_ONE = "A+1"
    D_MINUS_ONE = "D-1"
    A_MINUS_ONE = "A-1"
    D_PLUS_A = "D+A"
    D_MINUS_A = "D-A"
    A_MINUS_D = "A-D"
    D_AND_A = "D&A"
    D_OR_A = "D|A"
    # a = 1: second operand is memory at address A
    M = "M"
    NOT_M = "!M"
    NEG_M = "-M"
    M_PLUS_ONE = "M+1"
    M_MINUS_ONE = "M-1"
    D_PLUS_M = "D+M"
    D_MINUS_M = "D-M"
    M_MINUS_D = "M-D"
    D_AND_M = "D&M"
    D_OR_M = "D|M"

    def __str__(self) -> str:
        return self.value

    @property
    def uses_memory(self) -> bool:
        """True if the operation reads M (the 'a' bit is set)."""
        return bool(OPERATION_CODES[self] & 0b1000000)


# =============================================================================
# Code Tables
# =============================================================================

DESTINATION_CODES: dict[Destination, int] = {
    Destination.NONE: 0b000,
    Destination.M: 0b001,
    Destination.D: 0b010,
    Destination.MD: 0b011,
    Destination.A: 0b100,
    Destination.AM: 0b101,
    Destination.AD: 0b110,
    Destination.AMD: 0b111,
}

JUMP_CODES: dict[JumpCondition, int] = {
    JumpCondition.NONE: 0b000,
    JumpCondition.JGT: 0b001,
    JumpCondition.JEQ: 0b010,
    JumpCondition.JGE: 0b011,
    JumpCondition.JLT: 0b100,
    JumpCondition.JNE: 0b101,
    JumpCondition.JLE: 0b110,
    JumpCondition.JMP: 0b111,
}

# a c1 c2 c3 c4 c5 c6
OPERATION_CODES: dict[Operation, int] = {
    Operation.ZERO: 0b0101010,
    Operation.ONE: 0b0111111,
    Operation.NEG_ONE: 0b0111010,
    Operation.D: 0b0001100,
    Operation.A: 0b0110000,
    Operation.NOT_D: 0b0001101,
    Operation.NOT_A: 0b0110001,
    Operation.NEG_D: 0b0001111,
    Operation.NEG_A: 0b0110011,
    Operation.D_PLUS_ONE: 0b0011111,
    Operation.A_PLUS_ONE: 0b0110111,
    Operation.D_MINUS_ONE: 0b0001110,
    Operation.A_MINUS_ONE: 0b0110010,
    Operation.D_PLUS_A: 0b0000010,
    Operation.D_MINUS_A: 0b0010011,
    Operation.A_MINUS_D: 0b0000111,
    Operation.D_AND_A: 0b0000000,
    Operation.D_OR_A: 0b0010101,
    Operation.M: 0b1110000,
    Operation.NOT_M: 0b1110001,
    Operation.NEG_M: 0b1110011,
    Operation.M_PLUS_ONE: 0b1110111,
    Operation.M_MINUS_ONE: 0b1110010,
    Operation.D_PLUS_M: 0b1000010,
    Operation.D_MINUS_M: 0b1010011,
    Operation.M_MINUS_D: 0b1000111,
    Operation.D_AND_M: 0b1000000,
    Operation.D_OR_M: 0b1010101,
}

_DESTINATION_BY_CODE = {code: dest for dest, code in DESTINATION_CODES.items()}
_JUMP_BY_CODE = {code: jump for jump, code in JUMP_CODES.items()}
_OPERATION_BY_CODE = {code: op for op, code in OPERATION_CODES.items()}


# =============================================================================
# Encoding
# =============================================================================

def encode_destination(dest: Destination) -> str:
    """Return the 3-bit destination field."""
    return f"{DESTINATION_CODES[dest]:03b}"


def encode_jump(jump: JumpCondition) -> str:
    """Return the 3-bit jump field."""
    return f"{JUMP_CODES[jump]:03b}"


def encode_operation(op: Operation) -> str:
    """Return the 7-bit a+comp field."""
    return f"{OPERATION_CODES[op]:07b}"


def encode_address(value: int) -> str:
    """
    Encode an A-instruction.

    Args:
        value: Address or constant, 0 to MAX_ADDRESS

    Returns:
        16-character binary string starting with '0'

    Raises:
        ValueError: If value does not fit in 15 bits
    """
    if not 0 <= value <= MAX_ADDRESS:
        raise ValueError(f"address {value} does not fit in {ADDRESS_BITS} bits")
    return f"0{value:0{ADDRESS_BITS}b}"


def encode_compute(dest: Destination, op: Operation, jump: JumpCondition) -> str:
    """
    Encode a C-instruction as '111' + op(7) + dest(3) + jump(3).

    >>> encode_compute(Destination.D, Operation.D_PLUS_A, JumpCondition.NONE)
    '1110000010010000'
    """
    return COMPUTE_PREFIX + encode_operation(op) + encode_destination(dest) + encode_jump(jump)


# =============================================================================
# Decoding (inverse lookups)
# =============================================================================

def decode_destination(code: int) -> Optional[Destination]:
    """Return the destination for a 3-bit code, or None if unknown."""
    return _DESTINATION_BY_CODE.get(code)


def decode_jump(code: int) -> Optional[JumpCondition]:
    """Return the jump condition for a 3-bit code, or None if unknown."""
    return _JUMP_BY_CODE.get(code)


def decode_operation(code: int) -> Optional[Operation]:
    """
    Return the operation for a 7-bit code, or None if unknown.

    Only 28 of the 128 possible codes have a mnemonic.
    """
    return _OPERATION_BY_CODE.get(code)
