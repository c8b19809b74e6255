"""
Hack SDK Disassembler Module
============================

Disassembly of Hack machine code (.hack text files) back to assembly.

Usage:
    from hack_sdk.disassembler import HackDisassembler

    disasm = HackDisassembler()
    print(disasm.disassemble_to_text(["0000000000000010", "1110110000010000"]))
"""

from .hack import HackDisassembler, DisassembledInstruction, parse_hack

__all__ = [
    "HackDisassembler",
    "DisassembledInstruction",
    "parse_hack",
]
