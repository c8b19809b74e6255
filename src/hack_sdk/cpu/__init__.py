"""
Hack SDK CPU Package
====================

Architecture definitions shared by the assembler (which encodes
instructions) and the disassembler (which decodes them).

Usage:
    from hack_sdk.cpu import (
        Destination,
        Operation,
        JumpCondition,
        encode_compute,
    )
"""

from hack_sdk.cpu.hack import (
    # Architecture constants
    WORD_BITS,
    ADDRESS_BITS,
    MAX_ADDRESS,
    VARIABLE_BASE,
    COMPUTE_PREFIX,
    PREDEFINED_SYMBOLS,
    # Instruction fields
    Destination,
    Operation,
    JumpCondition,
    # Code tables
    DESTINATION_CODES,
    OPERATION_CODES,
    JUMP_CODES,
    # Encoding
    encode_address,
    encode_compute,
    encode_destination,
    encode_operation,
    encode_jump,
    # Decoding
    decode_destination,
    decode_operation,
    decode_jump,
)

__all__ = [
    "WORD_BITS",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "VARIABLE_BASE",
    "COMPUTE_PREFIX",
    "PREDEFINED_SYMBOLS",
    "Destination",
    "Operation",
    "JumpCondition",
    "DESTINATION_CODES",
    "OPERATION_CODES",
    "JUMP_CODES",
    "encode_address",
    "encode_compute",
    "encode_destination",
    "encode_operation",
    "encode_jump",
    "decode_destination",
    "decode_operation",
    "decode_jump",
]
