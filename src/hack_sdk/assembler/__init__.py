"""
Hack Assembler
==============

This package translates Hack assembly language into Hack machine code:
one 16-character binary word per instruction, one word per output line.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **parse_source / parse_line**: Classify source lines into statements
- **CodeGenerator**: Two-pass label resolution and encoding
- **SymbolTable**: Predefined symbols, labels and variables

Assembly Process
----------------
1. **Classification (parser)**:
   - Every line becomes one of Blank, Comment, AddressInstruction,
     ComputeInstruction or LabelDefinition
   - The first malformed line aborts assembly

2. **Pass 1 (codegen)**:
   - Labels bind to the address of the next real instruction
   - Real instructions are collected in program order

3. **Pass 2 (codegen)**:
   - Symbolic addresses resolve to labels, predefined symbols or newly
     allocated variables (16, 17, ...)
   - Every instruction is encoded to a 16-bit word

Example Usage
-------------
>>> from hack_sdk.assembler import assemble
>>> assemble("(LOOP)\\n@LOOP\\n0;JMP")
['0000000000000000', '1110101010000111']
"""

from hack_sdk.assembler.assembler import Assembler, assemble, assemble_file
from hack_sdk.assembler.parser import (
    AddressInstruction,
    AddressTarget,
    Blank,
    Comment,
    ComputeInstruction,
    Immediate,
    Instruction,
    LabelDefinition,
    SourceLine,
    Symbol,
    parse_address_target,
    parse_line,
    parse_source,
)
from hack_sdk.assembler.symbols import SymbolEntry, SymbolKind, SymbolTable
from hack_sdk.assembler.codegen import (
    CodeGenerator,
    FirstPassResult,
    ListingEntry,
    first_pass,
    second_pass,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Parser
    "AddressInstruction",
    "AddressTarget",
    "Blank",
    "Comment",
    "ComputeInstruction",
    "Immediate",
    "Instruction",
    "LabelDefinition",
    "SourceLine",
    "Symbol",
    "parse_address_target",
    "parse_line",
    "parse_source",
    # Symbols
    "SymbolEntry",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "FirstPassResult",
    "ListingEntry",
    "first_pass",
    "second_pass",
]
